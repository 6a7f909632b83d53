"""kquant: color quantization of raster images by k-means clustering.

Reduces an image to a palette of k representative colors and writes the
recolored image back to disk.
"""

from kquant.kmeans import KMeansResult, kmeans, reduce_colors
from kquant.pipeline import Pipeline, QuantizeConfig, quantize_image
from kquant.rng import Lcg
from kquant.types import (
    EmptyClusterError,
    EmptyInputError,
    ImageLoadError,
    InvalidPaletteSizeError,
    QuantizationError,
)

__version__ = "0.1.0"
__all__ = [
    "KMeansResult",
    "kmeans",
    "reduce_colors",
    "Pipeline",
    "QuantizeConfig",
    "quantize_image",
    "Lcg",
    "QuantizationError",
    "InvalidPaletteSizeError",
    "EmptyInputError",
    "EmptyClusterError",
    "ImageLoadError",
]
