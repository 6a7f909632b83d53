"""Raster image loading and saving as flat RGBA sample collections."""

from pathlib import Path
from typing import Tuple, Union

import numpy as np
from PIL import Image

from .types import CHANNELS, ImageArray, ImageLoadError, Pixels


def load_samples(path: Union[str, Path]) -> Tuple[Pixels, int, int]:
    """
    Decode an image file into RGBA samples.

    Pixels are listed row by row, left to right, which is the order
    :func:`save_samples` writes them back in.

    Args:
        path: Path to image file

    Returns:
        Tuple of (samples, width, height) where samples has shape
        (width * height, 4) and dtype uint8

    Raises:
        FileNotFoundError: If file doesn't exist
        ImageLoadError: If file cannot be decoded
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")

    if not path.is_file():
        raise ImageLoadError(f"Path is not a file: {path}")

    try:
        with Image.open(path) as img:
            rgba = img.convert("RGBA")
            width, height = rgba.size
            samples = np.asarray(rgba, dtype=np.uint8).reshape(-1, CHANNELS)
    except (IOError, OSError) as e:
        raise ImageLoadError(f"Failed to load image {path}: {e}") from e

    return samples, width, height


def samples_to_image(samples: Pixels, width: int, height: int) -> ImageArray:
    """Reshape a flat sample collection into an (H, W, 4) image array."""
    samples = np.asarray(samples, dtype=np.uint8)
    if samples.shape != (width * height, CHANNELS):
        raise ValueError(
            f"Expected {width * height} samples of {CHANNELS} channels for a "
            f"{width}x{height} image, got shape {samples.shape}"
        )
    return samples.reshape(height, width, CHANNELS)


def save_samples(samples: Pixels, width: int, height: int, path: Union[str, Path]) -> Path:
    """
    Encode RGBA samples as an image file.

    The format follows the file extension.

    Returns:
        The path written

    Raises:
        ImageLoadError: If the image cannot be encoded or written
    """
    path = Path(path)
    image = Image.fromarray(samples_to_image(samples, width, height))

    try:
        if path.parent != Path(""):
            path.parent.mkdir(parents=True, exist_ok=True)
        image.save(path)
    except (IOError, OSError, ValueError, KeyError) as e:
        raise ImageLoadError(f"Failed to save image {path}: {e}") from e

    return path
