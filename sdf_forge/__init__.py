"""
SDF Forge - Signed distance field textures from thresholded bitmaps
"""

from pathlib import Path

from .core import (
    ImageParser, SourceImage, Bitmap, SdfExporter, SdfConfig,
    extract_bitmap, generate_sdf, sdf_pixel, load_config,
    DEFAULT_SPREAD, DEFAULT_THRESHOLD, DEFAULT_OUTPUT,
)
from .errors import (
    SdfError, MissingInputPath, InvalidSpreadArgument,
    ImageLoadError, ImageSaveError, ConfigError,
)

__version__ = "0.1.0"
__all__ = [
    'ImageParser',
    'SourceImage',
    'Bitmap',
    'SdfExporter',
    'SdfConfig',
    'extract_bitmap',
    'generate_sdf',
    'sdf_pixel',
    'load_config',
    'generate',
    'SdfError',
    'MissingInputPath',
    'InvalidSpreadArgument',
    'ImageLoadError',
    'ImageSaveError',
    'ConfigError',
]


def generate(
    image_path: str,
    output_path: str = DEFAULT_OUTPUT,
    spread: int = DEFAULT_SPREAD,
    threshold: int = DEFAULT_THRESHOLD,
    workers: int = 1
) -> Path:
    """
    Load an image, build its signed distance field and save it.
    
    Args:
        image_path: Path to the source image
        output_path: Where to write the grayscale PNG (default: sdf.png)
        spread: Search radius in pixels, 0-255
        threshold: Luma cutoff, pixels brighter than this are inside
        workers: Number of threads for the distance search
        
    Returns:
        Path to the written file
    """
    if not image_path:
        raise MissingInputPath()
    
    image = ImageParser.parse(image_path)
    bitmap = extract_bitmap(image, threshold=threshold)
    sdf = generate_sdf(bitmap, spread=spread, workers=workers)
    return SdfExporter.to_png(sdf, output_path)
