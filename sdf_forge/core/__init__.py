"""
SDF Forge - Core
"""

from .parser import ImageParser, SourceImage
from .bitmap import Bitmap, extract_bitmap, is_on, DEFAULT_THRESHOLD
from .sdf import (
    # Generation
    generate_sdf, generate_sdf_reference,
    # Per-pixel
    sdf_pixel, min_sq_distance, normalize_distance, search_window,
    # Parameters
    validate_spread, DEFAULT_SPREAD,
)
from .exporter import SdfExporter, DEFAULT_OUTPUT
from .config import SdfConfig, load_config, save_config

__all__ = [
    'ImageParser', 'SourceImage',
    'Bitmap', 'extract_bitmap', 'is_on', 'DEFAULT_THRESHOLD',
    'generate_sdf', 'generate_sdf_reference',
    'sdf_pixel', 'min_sq_distance', 'normalize_distance', 'search_window',
    'validate_spread', 'DEFAULT_SPREAD',
    'SdfExporter', 'DEFAULT_OUTPUT',
    'SdfConfig', 'load_config', 'save_config',
]
