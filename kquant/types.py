"""Common types and exceptions for kquant."""

from typing import Sequence, Union

import numpy as np

# Type aliases
ImageArray = np.ndarray
Pixels = np.ndarray  # (N, 4) uint8, RGBA, row-major pixel order
Pixel = Union[Sequence[int], np.ndarray]  # single RGBA sample

CHANNELS = 4


class QuantizationError(Exception):
    """Base exception for color quantization errors."""

    pass


class InvalidPaletteSizeError(QuantizationError, ValueError):
    """Raised when k is zero or larger than the number of samples."""

    pass


class EmptyInputError(QuantizationError):
    """Raised when there are no samples to cluster."""

    pass


class EmptyClusterError(QuantizationError):
    """Raised when a mean is requested for a cluster with no samples."""

    pass


class ImageLoadError(QuantizationError):
    """Exception raised while decoding or encoding an image file."""

    pass
