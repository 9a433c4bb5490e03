"""
SDF Exporter - Writes distance field buffers as 8-bit grayscale images
"""

from PIL import Image
import numpy as np
from pathlib import Path
import logging

from ..errors import ImageSaveError

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "sdf.png"


class SdfExporter:
    """Exports distance field buffers to image files"""

    @classmethod
    def to_image(cls, sdf: np.ndarray) -> Image.Image:
        """Wrap an (H, W) uint8 buffer in a single-channel PIL image"""
        if sdf.ndim != 2:
            raise ValueError(f"SDF buffer must be 2D, got shape {sdf.shape}")
        if sdf.dtype != np.uint8:
            raise ValueError(f"SDF buffer must be uint8, got {sdf.dtype}")
        return Image.fromarray(sdf, 'L')

    @classmethod
    def to_png(cls, sdf: np.ndarray, path: str | Path = DEFAULT_OUTPUT) -> Path:
        """Export an SDF buffer to a grayscale PNG

        Raises:
            ImageSaveError: if the file cannot be written
        """
        path = Path(path)
        img = cls.to_image(sdf)

        try:
            if path.parent != Path('.'):
                path.parent.mkdir(parents=True, exist_ok=True)
            img.save(path, 'PNG')
        except (OSError, ValueError) as e:
            raise ImageSaveError(path, e) from e

        logger.debug("Wrote %s (%dx%d)", path, img.width, img.height)
        return path
