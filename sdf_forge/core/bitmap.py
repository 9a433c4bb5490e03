"""
Occupancy Bitmap - thresholds a source image into on/off cells

A pixel is "on" (inside the shape) when its luma is strictly above the
threshold. The default cutoff of 250 keeps only near-white pixels.
"""

import numpy as np
from dataclasses import dataclass
import logging

from .parser import SourceImage

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 250


def is_on(luma: int, threshold: int = DEFAULT_THRESHOLD) -> bool:
    """Check if a single luma sample counts as shape interior"""
    return luma > threshold


@dataclass(frozen=True)
class Bitmap:
    """Row-major boolean occupancy grid, index = y * width + x"""
    width: int
    height: int
    cells: np.ndarray  # flat bool, length width * height

    def __post_init__(self):
        if self.cells.shape != (self.width * self.height,):
            raise ValueError(
                f"Bitmap needs {self.width * self.height} cells, got {self.cells.size}"
            )

    def __len__(self) -> int:
        return self.cells.size

    def __getitem__(self, index: int) -> bool:
        return bool(self.cells[index])

    def at(self, x: int, y: int) -> bool:
        return bool(self.cells[y * self.width + x])

    def grid(self) -> np.ndarray:
        """(H, W) read-only view of the cells"""
        return self.cells.reshape(self.height, self.width)

    def count_on(self) -> int:
        return int(np.count_nonzero(self.cells))

    @classmethod
    def from_grid(cls, grid) -> 'Bitmap':
        """Build a bitmap from a 2D array-like of truthy values"""
        grid = np.asarray(grid, dtype=bool)
        if grid.ndim != 2:
            raise ValueError("Grid must be a 2D array")
        cells = grid.reshape(-1).copy()
        cells.setflags(write=False)
        return cls(width=grid.shape[1], height=grid.shape[0], cells=cells)


def extract_bitmap(image: SourceImage, threshold: int = DEFAULT_THRESHOLD) -> Bitmap:
    """
    Threshold an image into an occupancy bitmap.

    Args:
        image: Decoded source image
        threshold: Luma cutoff 0-255, pixel is on iff luma > threshold

    Returns:
        Bitmap with width * height cells in row-major order
    """
    if (isinstance(threshold, bool) or not isinstance(threshold, (int, np.integer))
            or not 0 <= threshold <= 255):
        raise ValueError(f"Threshold must be 0-255, got {threshold}")

    cells = (image.luma.reshape(-1).astype(np.int16) > threshold)
    cells.setflags(write=False)

    bitmap = Bitmap(width=image.width, height=image.height, cells=cells)
    logger.debug(
        "Extracted bitmap %dx%d: %d on, threshold %d",
        bitmap.width, bitmap.height, bitmap.count_on(), threshold
    )
    return bitmap
