"""
Image Parser - Reads image files into grayscale pixel grids
Supports every format Pillow can decode (PNG, GIF, JPEG, BMP, WebP, ...)
"""

from PIL import Image, UnidentifiedImageError
import numpy as np
from pathlib import Path
from dataclasses import dataclass
from typing import Optional
import logging

from ..errors import ImageLoadError

logger = logging.getLogger(__name__)

LUMA_WEIGHTS = np.array([0.2125, 0.7154, 0.0721], dtype=np.float32)


@dataclass
class SourceImage:
    """A decoded source image reduced to one luma sample per pixel"""
    width: int
    height: int
    luma: np.ndarray  # (H, W) uint8, row-major
    name: str = "image"
    source_path: Optional[Path] = None

    def pixels(self):
        """Iterate (x, y, luma) in row-major order"""
        for y in range(self.height):
            row = self.luma[y]
            for x in range(self.width):
                yield x, y, int(row[x])


class ImageParser:
    """Decodes image files and arrays into SourceImage objects"""

    @classmethod
    def parse(cls, path: str | Path) -> SourceImage:
        """Parse an image file into a SourceImage

        Args:
            path: Path to the image file

        Raises:
            ImageLoadError: if the file is missing or cannot be decoded
        """
        path = Path(path)

        if not path.exists():
            raise ImageLoadError(path, "file not found")

        try:
            with Image.open(path) as img:
                img.load()
                gray = cls._to_luma(img)
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            raise ImageLoadError(path, e) from e

        logger.debug("Decoded %s (%dx%d)", path, gray.shape[1], gray.shape[0])

        return SourceImage(
            width=gray.shape[1],
            height=gray.shape[0],
            luma=gray,
            name=path.stem,
            source_path=path
        )

    @classmethod
    def from_array(cls, pixels: np.ndarray, name: str = "image") -> SourceImage:
        """Create a SourceImage from a numpy array (HxW, HxWx3 or HxWx4)"""
        pixels = np.asarray(pixels)
        if pixels.ndim == 2:
            img = Image.fromarray(pixels.astype(np.uint8), 'L')
        elif pixels.ndim == 3 and pixels.shape[2] == 3:
            img = Image.fromarray(pixels.astype(np.uint8), 'RGB')
        elif pixels.ndim == 3 and pixels.shape[2] == 4:
            img = Image.fromarray(pixels.astype(np.uint8), 'RGBA')
        else:
            raise ValueError("Pixels must be HxW, HxWx3 or HxWx4 array")

        gray = cls._to_luma(img)
        return SourceImage(
            width=gray.shape[1],
            height=gray.shape[0],
            luma=gray,
            name=name
        )

    @staticmethod
    def _to_luma(img: Image.Image) -> np.ndarray:
        # Alpha is dropped; palette and other colour modes go through RGB first
        if img.mode in ('L', 'LA', '1'):
            return np.array(img.convert('L'), dtype=np.uint8)
        if img.mode == 'I' or img.mode.startswith('I;16'):
            wide = np.array(img).astype(np.int64) >> 8
            return np.clip(wide, 0, 255).astype(np.uint8)
        if img.mode == 'F':
            raise ValueError("Floating point images are not supported")

        rgb = np.array(img.convert('RGB'), dtype=np.uint8)
        return rgb_to_luma(rgb)


def rgb_to_luma(rgb: np.ndarray) -> np.ndarray:
    """
    sRGB luma of an (H, W, 3) uint8 array, truncated to uint8.

    Uses 0.2125 R + 0.7154 G + 0.0721 B, summed left to right in float32.
    """
    channels = rgb.astype(np.float32)
    luma = (
        LUMA_WEIGHTS[0] * channels[..., 0]
        + LUMA_WEIGHTS[1] * channels[..., 1]
        + LUMA_WEIGHTS[2] * channels[..., 2]
    )
    return np.clip(np.trunc(luma), 0, 255).astype(np.uint8)
