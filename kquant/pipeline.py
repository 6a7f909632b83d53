"""Load, quantize and save pipeline for kquant."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import numpy as np

from .image_io import load_samples, samples_to_image, save_samples
from .kmeans import KMeansResult, kmeans
from .rng import Lcg
from .types import InvalidPaletteSizeError

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "output.png"


@dataclass
class QuantizeConfig:
    """Configuration for the quantization pipeline."""

    # Palette size (k)
    n_colors: int = 8

    # Fixed number of assign/update rounds
    max_iterations: int = 10

    # Generator seed; None means current Unix time
    seed: Optional[int] = None

    # Opt-in early stopping on maximum center movement
    tolerance: Optional[float] = None

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.n_colors < 1:
            raise InvalidPaletteSizeError(f"n_colors must be >= 1, got {self.n_colors}")
        if self.max_iterations < 0:
            raise ValueError(f"max_iterations must be >= 0, got {self.max_iterations}")
        if self.tolerance is not None and self.tolerance < 0:
            raise ValueError(f"tolerance must be >= 0, got {self.tolerance}")


class Pipeline:
    """Quantize an image file to a k-color palette."""

    def __init__(self, config: Optional[QuantizeConfig] = None):
        """Initialize pipeline with configuration.

        Args:
            config: Pipeline configuration. Uses defaults if None.
        """
        self.config = config or QuantizeConfig()
        self.last_result: Optional[KMeansResult] = None

    def process(
        self,
        image_path: Union[str, Path],
        output_path: Optional[Union[str, Path]] = DEFAULT_OUTPUT,
    ) -> np.ndarray:
        """Quantize an image and optionally write the result.

        Args:
            image_path: Path to input image
            output_path: Where to save the recolored image; skipped if None

        Returns:
            Quantized image as (H, W, 4) uint8 array

        Raises:
            FileNotFoundError: If input file doesn't exist
            QuantizationError: If decoding, clustering or encoding fails
        """
        samples, width, height = load_samples(image_path)
        logger.info(f"Loaded {image_path}: {width}x{height} ({len(samples)} pixels)")

        result = kmeans(
            samples,
            self.config.n_colors,
            max_iterations=self.config.max_iterations,
            rng=Lcg(self.config.seed) if self.config.seed is not None else None,
            tolerance=self.config.tolerance,
        )
        self.last_result = result

        reduced = result.centers[result.labels]
        logger.info(f"Reduced to {len(result.palette)} colors in {result.iterations} iterations")

        if output_path is not None:
            save_samples(reduced, width, height, output_path)
            logger.info(f"Saved {output_path}")

        return samples_to_image(reduced, width, height)


def quantize_image(
    image_path: Union[str, Path],
    output_path: Optional[Union[str, Path]] = DEFAULT_OUTPUT,
    config: Optional[QuantizeConfig] = None,
) -> np.ndarray:
    """Quantize an image file in one call.

    Example:
        >>> image = quantize_image("input.png", "output.png")
        >>> image = quantize_image("input.png", config=QuantizeConfig(n_colors=4, seed=7))
    """
    pipeline = Pipeline(config)
    return pipeline.process(image_path, output_path)
