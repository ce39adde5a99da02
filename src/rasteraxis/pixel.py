"""Raw ``(x, y)`` pixel helpers for signed 32-bit integer coordinates.

Same behavior as `rasteraxis.view` for integer coordinates, without going
through the per-domain conversion.
"""
import operator
from typing import Any, Optional, Tuple

from rasteraxis.config import I32_MAX, I32_MIN
from rasteraxis.view import EmptyRasterError, as_raster


def _as_i32(x: Any, y: Any) -> Tuple[int, int]:
    out = []
    for name, value in (('x', x), ('y', y)):
        if isinstance(value, bool):
            raise TypeError(f"{name} must be an integer, got bool")
        v = operator.index(value)
        if v < I32_MIN or v > I32_MAX:
            raise OverflowError(f"{name}={v} does not fit in a signed 32-bit integer")
        out.append(v)
    return out[0], out[1]


def in_bounds(raster: Any, x: int, y: int) -> bool:
    """Return True if ``(x, y)`` lies inside the raster."""
    r = as_raster(raster)
    x, y = _as_i32(x, y)
    return 0 <= x < r.width and 0 <= y < r.height


def get_pixel(raster: Any, x: int, y: int) -> Optional[Any]:
    """Return the pixel at ``(x, y)`` or ``None`` when it lies outside the raster."""
    r = as_raster(raster)
    if not in_bounds(r, x, y):
        return None
    return r.unchecked_fetch(int(x), int(y))


def clamp_pixel(raster: Any, x: int, y: int) -> Any:
    """Return the pixel at ``(x, y)`` with both coordinates clamped to the raster."""
    r = as_raster(raster)
    x, y = _as_i32(x, y)
    if r.width == 0 or r.height == 0:
        raise EmptyRasterError(f"raster {r.width}x{r.height} has no pixels")
    return r.unchecked_fetch(min(max(x, 0), r.width - 1), min(max(y, 0), r.height - 1))
