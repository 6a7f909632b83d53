"""Color quantization by k-means clustering.

Samples are RGBA pixels stored as an ``(N, 4)`` uint8 array in pixel
traversal order. Clustering runs a fixed number of iterations of
nearest-center assignment followed by mean recomputation, then labels
every sample with its final center.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .rng import Lcg, unix_timestamp
from .types import (
    CHANNELS,
    EmptyClusterError,
    EmptyInputError,
    InvalidPaletteSizeError,
    Pixel,
    Pixels,
    QuantizationError,
)

logger = logging.getLogger(__name__)

# Upper bound on sample-center pairs held in memory during assignment
_BLOCK_PAIRS = 1 << 18


@dataclass
class KMeansResult:
    """Outcome of a clustering run.

    Attributes:
        centers: Final center set, shape (k, 4) uint8
        labels: Index of the final center for every sample, shape (N,)
        iterations: Number of update iterations actually performed
    """

    centers: np.ndarray
    labels: np.ndarray
    iterations: int

    @property
    def palette(self) -> np.ndarray:
        """Distinct colors present in the output, in first-seen center order."""
        used = np.unique(self.labels)
        _, first = np.unique(self.centers[used], axis=0, return_index=True)
        return self.centers[used][np.sort(first)]


def as_samples(samples) -> Pixels:
    """Coerce ``samples`` to an (N, 4) uint8 array.

    Raises:
        EmptyInputError: If there are no samples
        ValueError: If the array does not hold 4-channel 8-bit values
    """
    arr = np.asarray(samples)
    if arr.size == 0:
        raise EmptyInputError("Cannot quantize an empty sample collection")

    if arr.ndim != 2 or arr.shape[1] != CHANNELS:
        raise ValueError(f"Samples must have shape (N, {CHANNELS}), got {arr.shape}")

    if not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"Sample channels must be integers, got dtype {arr.dtype}")

    if arr.dtype != np.uint8:
        if arr.min() < 0 or arr.max() > 255:
            raise ValueError("Sample channels must be in range 0-255")
        arr = arr.astype(np.uint8)

    return arr


def distance(a: Pixel, b: Pixel) -> int:
    """Integer Euclidean distance between two samples over red, green and blue.

    Alpha is ignored.
    """
    dr = abs(int(a[0]) - int(b[0]))
    dg = abs(int(a[1]) - int(b[1]))
    db = abs(int(a[2]) - int(b[2]))
    return math.isqrt(dr * dr + dg * dg + db * db)


def pairwise_distances(samples: Pixels, centers: np.ndarray) -> np.ndarray:
    """Vectorized :func:`distance` between every sample and every center.

    Allocates an (N, k) matrix; :func:`assign_clusters` calls it one block
    of samples at a time.

    Returns:
        Array of shape (N, k) with int64 distances
    """
    center_rgb = np.asarray(centers)[:, :3].astype(np.int64)

    squared = np.zeros((len(samples), len(center_rgb)), dtype=np.int64)
    for channel in range(3):
        diff = samples[:, channel].astype(np.int64)[:, None] - center_rgb[None, :, channel]
        squared += diff * diff
    # Squared distances are at most 3 * 255**2, so float64 sqrt floors exactly
    return np.floor(np.sqrt(squared)).astype(np.int64)


def select_centers(samples: Pixels, k: int, rng) -> np.ndarray:
    """Pick k initial centers by drawing sample indices from ``rng``.

    Each slot draws ``rng.next() % len(samples)`` independently, so the same
    sample can be chosen more than once.

    Args:
        samples: Sample collection (N, 4)
        k: Number of centers
        rng: Generator exposing ``next() -> int``

    Returns:
        Center set, shape (k, 4) uint8
    """
    samples = as_samples(samples)
    if k < 1:
        raise InvalidPaletteSizeError(f"k must be >= 1, got {k}")

    n = len(samples)
    indices = [rng.next() % n for _ in range(k)]
    return samples[indices].copy()


def select_closest_center(centers: np.ndarray, sample: Pixel) -> int:
    """Index of the center nearest to ``sample``; the lowest index wins ties."""
    if len(centers) == 0:
        raise QuantizationError("centers should not be empty")
    return min(range(len(centers)), key=lambda i: distance(sample, centers[i]))


def assign_clusters(samples: Pixels, centers: np.ndarray) -> np.ndarray:
    """Label every sample with its nearest center.

    Same result as calling :func:`select_closest_center` per sample.
    """
    if len(centers) == 0:
        raise QuantizationError("centers should not be empty")
    rows = max(1, _BLOCK_PAIRS // len(centers))
    labels = np.empty(len(samples), dtype=np.intp)
    for start in range(0, len(samples), rows):
        block = samples[start:start + rows]
        # argmin returns the first minimum, matching the lowest-index tie-break
        labels[start:start + rows] = np.argmin(pairwise_distances(block, centers), axis=1)
    return labels


def cluster_mean(cluster) -> np.ndarray:
    """Per-channel floor mean of a cluster, alpha included.

    Raises:
        EmptyClusterError: If the cluster has no samples
    """
    if len(cluster) == 0:
        raise EmptyClusterError("Cannot compute the mean of an empty cluster")

    arr = as_samples(cluster)
    sums = arr.astype(np.int64).sum(axis=0)
    return (sums // len(arr)).astype(np.uint8)


def update_centers(samples: Pixels, labels: np.ndarray, centers: np.ndarray) -> np.ndarray:
    """Recompute every center as the mean of the samples labelled with it.

    A center whose cluster received no samples keeps its previous value.
    """
    k = len(centers)
    counts = np.bincount(labels, minlength=k)
    sums = np.zeros((k, CHANNELS), dtype=np.int64)
    np.add.at(sums, labels, samples.astype(np.int64))

    new_centers = np.array(centers, dtype=np.uint8, copy=True)
    filled = counts > 0
    new_centers[filled] = (sums[filled] // counts[filled][:, None]).astype(np.uint8)

    for index in np.flatnonzero(~filled):
        logger.warning(f"Cluster {index} is empty, keeping its previous center")

    return new_centers


def kmeans(
    samples,
    k: int,
    max_iterations: int = 10,
    rng: Optional[Lcg] = None,
    tolerance: Optional[float] = None,
) -> KMeansResult:
    """Cluster samples into k groups.

    Runs exactly ``max_iterations`` assign/update rounds unless
    ``tolerance`` is given, in which case it stops after the first round
    where no center channel moved by more than ``tolerance``.

    Args:
        samples: Sample collection, shape (N, 4), values 0-255
        k: Palette size, 1 <= k <= N
        max_iterations: Number of assign/update rounds
        rng: Generator for initial centers; seeded from the clock if None
        tolerance: Optional early-stopping threshold in channel units

    Returns:
        KMeansResult with the final centers and per-sample labels

    Raises:
        EmptyInputError: If there are no samples
        InvalidPaletteSizeError: If k < 1 or k > N
        ValueError: If max_iterations or tolerance is negative
    """
    samples = as_samples(samples)
    n = len(samples)

    if k < 1 or k > n:
        raise InvalidPaletteSizeError(f"k must be between 1 and {n}, got {k}")
    if max_iterations < 0:
        raise ValueError(f"max_iterations must be >= 0, got {max_iterations}")
    if tolerance is not None and tolerance < 0:
        raise ValueError(f"tolerance must be >= 0, got {tolerance}")

    if rng is None:
        seed = unix_timestamp()
        logger.debug(f"Seeding generator from clock: {seed}")
        rng = Lcg(seed)

    centers = select_centers(samples, k, rng)

    iterations = 0
    for iteration in range(max_iterations):
        logger.info(f"Iteration {iteration + 1}/{max_iterations}")
        labels = assign_clusters(samples, centers)
        new_centers = update_centers(samples, labels, centers)
        iterations += 1

        if tolerance is not None:
            shift = np.abs(new_centers.astype(np.int16) - centers.astype(np.int16)).max()
            centers = new_centers
            if shift <= tolerance:
                logger.info(f"Centers settled after {iterations} iterations (shift {shift})")
                break
        else:
            centers = new_centers

    labels = assign_clusters(samples, centers)
    return KMeansResult(centers=centers, labels=labels, iterations=iterations)


def reduce_colors(
    samples,
    k: int,
    max_iterations: int = 10,
    rng: Optional[Lcg] = None,
    tolerance: Optional[float] = None,
) -> Pixels:
    """Replace every sample with the center of its cluster.

    Returns:
        Array of shape (N, 4) uint8, same order as ``samples``
    """
    result = kmeans(samples, k, max_iterations=max_iterations, rng=rng, tolerance=tolerance)
    return result.centers[result.labels]
