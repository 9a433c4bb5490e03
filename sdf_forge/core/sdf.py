"""
Signed Distance Fields (SDF)

Brute-force windowed distance search over an occupancy bitmap:
- Each pixel looks for the nearest cell of the opposite state within
  a square window of +/- spread pixels (clipped to the image)
- Positive = inside the shape, Negative = outside
- Distances are normalized so 127.5 sits on the edge and +/- spread
  maps towards 255 / 0

Normalization runs in float32 and truncates toward zero, clamped to the
0-255 byte range. Nothing ever wraps.
"""

import numpy as np
from concurrent.futures import ThreadPoolExecutor
from typing import List, Tuple
import logging
import time

from .bitmap import Bitmap
from ..errors import InvalidSpreadArgument

logger = logging.getLogger(__name__)

DEFAULT_SPREAD = 16

_HALF = np.float32(0.5)
_SCALE = np.float32(128.0)
_MIDPOINT = np.float32(127.5)


def validate_spread(spread) -> int:
    """Check spread is an unsigned 8-bit integer and return it"""
    if isinstance(spread, bool) or not isinstance(spread, (int, np.integer)):
        raise InvalidSpreadArgument(spread)
    if not 0 <= spread <= 255:
        raise InvalidSpreadArgument(spread)
    return int(spread)


def search_window(x: int, y: int, width: int, height: int, spread: int) -> Tuple[int, int, int, int]:
    """Half-open window (bx, ex, by, ey) around (x, y), clipped to the image"""
    bx = max(0, x - spread)
    ex = min(width, x + spread)
    by = max(0, y - spread)
    ey = min(height, y + spread)
    return bx, ex, by, ey


# =============================================================================
# Per-pixel reference
# =============================================================================

def min_sq_distance(bitmap: Bitmap, x: int, y: int, spread: int) -> int:
    """
    Squared distance from (x, y) to the nearest opposite-state cell.

    Returns spread * spread when the window holds no opposite cell.
    """
    grid = bitmap.grid()
    current = grid[y, x]
    bx, ex, by, ey = search_window(x, y, bitmap.width, bitmap.height, spread)

    best = spread * spread
    window = grid[by:ey, bx:ex]
    ys, xs = np.nonzero(window != current)
    if len(xs) > 0:
        sq = (xs + bx - x) ** 2 + (ys + by - y) ** 2
        best = min(best, int(sq.min()))
    return best


def normalize_distance(min_sq_dist, inside, spread: int):
    """
    Map squared distance and occupancy to the 0-255 byte range.

    Works on scalars or on equally-shaped arrays. Scalars give an int.
    """
    dist = np.sqrt(np.asarray(min_sq_dist, dtype=np.float32)) - _HALF
    signed = np.where(inside, dist, -dist).astype(np.float32)

    # spread == 0 divides by zero; +/-inf then clamps to 255 / 0
    with np.errstate(divide='ignore', invalid='ignore'):
        norm = (signed / np.float32(spread)) * _SCALE + _MIDPOINT

    byte = _to_byte(norm)
    if byte.ndim == 0:
        return int(byte)
    return byte


def _to_byte(values: np.ndarray) -> np.ndarray:
    values = np.nan_to_num(values, nan=0.0, posinf=255.0, neginf=0.0)
    return np.clip(np.trunc(values), 0, 255).astype(np.uint8)


def sdf_pixel(bitmap: Bitmap, x: int, y: int, spread: int = DEFAULT_SPREAD) -> int:
    """Normalized SDF byte for a single pixel"""
    return normalize_distance(
        min_sq_distance(bitmap, x, y, spread),
        bitmap.at(x, y),
        spread
    )


# =============================================================================
# Whole-image generation
# =============================================================================

def _window_offsets(spread: int, width: int, height: int) -> List[Tuple[int, int, int]]:
    """Window offsets (dx, dy, d^2) that can beat the sentinel, nearest first"""
    sentinel = spread * spread
    offsets = []
    for dy in range(max(-spread, 1 - height), min(spread, height)):
        for dx in range(max(-spread, 1 - width), min(spread, width)):
            d = dx * dx + dy * dy
            if 0 < d < sentinel:
                offsets.append((dx, dy, d))
    offsets.sort(key=lambda o: o[2])
    return offsets


def _band_min_sq(grid: np.ndarray, y0: int, y1: int, spread: int,
                 offsets: List[Tuple[int, int, int]]) -> np.ndarray:
    """Minimum squared distances for output rows [y0, y1)"""
    h, w = grid.shape
    best = np.full((y1 - y0, w), spread * spread, dtype=np.int32)

    for dx, dy, d in offsets:
        # Rows/cols whose neighbour (x+dx, y+dy) is still inside the image
        ya, yb = max(y0, -dy), min(y1, h - dy)
        xa, xb = max(0, -dx), min(w, w - dx)
        if ya >= yb or xa >= xb:
            continue

        here = grid[ya:yb, xa:xb]
        there = grid[ya + dy:yb + dy, xa + dx:xb + dx]
        target = best[ya - y0:yb - y0, xa:xb]

        hit = (here != there) & (target > d)
        target[hit] = d

    return best


def _band_sdf(grid: np.ndarray, y0: int, y1: int, spread: int,
              offsets: List[Tuple[int, int, int]], out: np.ndarray) -> None:
    best = _band_min_sq(grid, y0, y1, spread, offsets)
    out[y0:y1] = normalize_distance(best, grid[y0:y1], spread)


def _row_bands(height: int, count: int) -> List[Tuple[int, int]]:
    count = max(1, min(count, height))
    edges = np.linspace(0, height, count + 1).astype(int)
    return [(int(a), int(b)) for a, b in zip(edges[:-1], edges[1:]) if b > a]


def generate_sdf(
    bitmap: Bitmap,
    spread: int = DEFAULT_SPREAD,
    workers: int = 1
) -> np.ndarray:
    """
    Generate an 8-bit signed distance field from an occupancy bitmap.

    The window scan is vectorized over bands of rows and gives exactly the
    same bytes as sdf_pixel() evaluated at every pixel.

    Args:
        bitmap: Occupancy bitmap (read only)
        spread: Search radius in pixels, 0-255
        workers: Number of threads; each handles a disjoint band of rows

    Returns:
        (H, W) uint8 array
    """
    spread = validate_spread(spread)
    if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
        raise ValueError(f"Workers must be at least 1, got {workers}")

    start = time.perf_counter()
    grid = bitmap.grid()
    out = np.empty((bitmap.height, bitmap.width), dtype=np.uint8)
    if out.size == 0:
        return out

    offsets = _window_offsets(spread, bitmap.width, bitmap.height)
    bands = _row_bands(bitmap.height, workers)

    if workers == 1 or len(bands) == 1:
        for y0, y1 in bands:
            _band_sdf(grid, y0, y1, spread, offsets, out)
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(_band_sdf, grid, y0, y1, spread, offsets, out)
                for y0, y1 in bands
            ]
            for future in futures:
                future.result()

    logger.debug(
        "Generated %dx%d SDF (spread %d, %d band(s)) in %.1fms",
        bitmap.width, bitmap.height, spread, len(bands),
        (time.perf_counter() - start) * 1000
    )
    return out


def generate_sdf_reference(bitmap: Bitmap, spread: int = DEFAULT_SPREAD) -> np.ndarray:
    """Pixel-by-pixel SDF using sdf_pixel(). Slow; used to check generate_sdf()"""
    spread = validate_spread(spread)
    out = np.empty((bitmap.height, bitmap.width), dtype=np.uint8)
    for y in range(bitmap.height):
        for x in range(bitmap.width):
            out[y, x] = sdf_pixel(bitmap, x, y, spread)
    return out
