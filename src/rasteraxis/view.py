"""
view.py

Bounds-checked and clamped pixel access on top of `rasteraxis.coordinate`.

A raster is anything with ``width``, ``height`` and ``unchecked_fetch(x, y)``
(the `Raster` protocol). numpy arrays and PIL images are wrapped by
`as_raster`, so every function here accepts them directly.

``unchecked_fetch`` must only see indices already proven to be inside the
raster; the functions in this module and in `rasteraxis.pixel` are the only
callers.

Public functions:
- `edges(width, height)` / `raster_edges(raster)` -> (right, bottom)
- `within_bounds(raster, coords)` -> bool
- `get_pixel_at(raster, coords)` -> pixel or None
- `get_pixel_clamped(raster, coords)` -> pixel
- `get_pixels_at(raster, points, fill_value)` -> (pixels, valid)
- `get_pixels_clamped(raster, points)` -> pixels

"""
import logging
from typing import Any, Optional, Protocol, Tuple, runtime_checkable

import numpy as np
from PIL import Image

from rasteraxis.config import DEFAULT_AXIS_BITS
from rasteraxis.coordinate import (
    AxisIndexPair,
    image_coordinate,
    image_coordinate_clamped,
    image_coordinates,
    image_coordinates_clamped,
)
from rasteraxis.index import axis_limit

logger = logging.getLogger(__name__)


class EmptyRasterError(ValueError):
    """Raised when edges or clamped access are requested on a raster with no pixels."""


@runtime_checkable
class Raster(Protocol):
    """Read-only raster: extent plus a fetch that trusts its indices."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def unchecked_fetch(self, x: int, y: int) -> Any: ...


class ArrayRaster:
    """Row-major numpy raster of shape (H, W) or (H, W, C).

    Pixels of a 3-D array are returned as views of length C.
    """

    def __init__(self, array: Any):
        arr = np.asarray(array)
        if arr.ndim not in (2, 3):
            raise ValueError(f"raster array must be 2-D or 3-D, got shape {arr.shape}")
        self.array = arr

    @classmethod
    def from_flat(cls, samples: Any, width: int, height: int, channels: int = 1) -> 'ArrayRaster':
        """Build a raster from a flat, row-major sample buffer."""
        flat = np.asarray(samples)
        expected = width * height * channels
        if flat.size != expected:
            raise ValueError(f"expected {expected} samples for {width}x{height}x{channels}, got {flat.size}")
        shape = (height, width) if channels == 1 else (height, width, channels)
        return cls(flat.reshape(shape))

    @property
    def width(self) -> int:
        return int(self.array.shape[1])

    @property
    def height(self) -> int:
        return int(self.array.shape[0])

    def unchecked_fetch(self, x: int, y: int) -> Any:
        return self.array[y, x]

    def fetch_many(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        return self.array[ys, xs]

    def __repr__(self):
        return f"ArrayRaster({self.width}x{self.height}, dtype={self.array.dtype})"


class ImageRaster:
    """Raster backed by a ``PIL.Image.Image``; single pixels come from ``getpixel``."""

    def __init__(self, image: Image.Image):
        self.image = image

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def unchecked_fetch(self, x: int, y: int) -> Any:
        return self.image.getpixel((x, y))

    def fetch_many(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        # same dtype and channel layout as np.asarray(image)
        return np.asarray(self.image)[ys, xs]

    def __repr__(self):
        return f"ImageRaster({self.width}x{self.height}, mode={self.image.mode})"


def as_raster(obj: Any) -> Raster:
    """Return ``obj`` as a `Raster`, wrapping numpy arrays and PIL images."""
    if isinstance(obj, Raster):
        return obj
    if isinstance(obj, np.ndarray):
        return ArrayRaster(obj)
    if isinstance(obj, Image.Image):
        return ImageRaster(obj)
    raise TypeError(f"{type(obj).__name__} is not a raster")


def edges(width: int, height: int, bits: int = DEFAULT_AXIS_BITS) -> AxisIndexPair:
    """Return the right and bottom index edges ``(width - 1, height - 1)``.

    Raises `EmptyRasterError` if either extent is zero.
    """
    if width <= 0 or height <= 0:
        logger.debug('edges requested for empty raster %sx%s', width, height)
        raise EmptyRasterError(f"raster {width}x{height} has no pixels")
    limit = axis_limit(bits)
    right, bottom = width - 1, height - 1
    if right > limit or bottom > limit:
        raise ValueError(f"raster {width}x{height} exceeds the {bits}-bit axis range")
    return right, bottom


def raster_edges(raster: Any, bits: int = DEFAULT_AXIS_BITS) -> AxisIndexPair:
    """`edges` of any object `as_raster` accepts."""
    r = as_raster(raster)
    return edges(r.width, r.height, bits)


def within_bounds(raster: Any, coords: Any, bits: int = DEFAULT_AXIS_BITS) -> bool:
    """True if ``coords`` converts to a valid index inside the raster."""
    r = as_raster(raster)
    index = image_coordinate(coords, bits)
    if index is None:
        return False
    x, y = index
    return x < r.width and y < r.height


def get_pixel_at(raster: Any, coords: Any, bits: int = DEFAULT_AXIS_BITS) -> Optional[Any]:
    """Return the pixel at ``coords``, or ``None`` if invalid or out of bounds."""
    r = as_raster(raster)
    index = image_coordinate(coords, bits)
    if index is None:
        return None
    x, y = index
    if x >= r.width or y >= r.height:
        return None
    return r.unchecked_fetch(x, y)


def get_pixel_clamped(raster: Any, coords: Any, bits: int = DEFAULT_AXIS_BITS) -> Any:
    """Return the pixel at ``coords`` projected onto the nearest edge pixel.

    Always succeeds for a non-empty raster; raises `EmptyRasterError` otherwise.
    """
    r = as_raster(raster)
    right, bottom = edges(r.width, r.height, bits)
    x, y = image_coordinate_clamped(coords, right, bottom, bits)
    return r.unchecked_fetch(x, y)


def _fetch_many(raster: Raster, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    fetch_many = getattr(raster, 'fetch_many', None)
    if fetch_many is not None:
        return np.asarray(fetch_many(xs, ys))
    pixels = [raster.unchecked_fetch(int(x), int(y)) for x, y in zip(xs, ys)]
    if not pixels and raster.width > 0 and raster.height > 0:
        # nothing requested; keep the per-pixel shape and dtype of the raster
        template = np.asarray(raster.unchecked_fetch(0, 0))
        return np.empty((0,) + template.shape, dtype=template.dtype)
    return np.asarray(pixels)


def get_pixels_at(raster: Any, points: Any, fill_value: Any = 0,
                  bits: int = DEFAULT_AXIS_BITS) -> Tuple[np.ndarray, np.ndarray]:
    """Checked lookup for an (N,2) array of points.

    Rows that are invalid or out of bounds receive ``fill_value``, which must
    be representable in the pixel dtype.

    Returns
    - pixels: (N,) or (N, C) array
    - valid: (N,) boolean array, True where a pixel was fetched
    """
    r = as_raster(raster)
    indices, valid = image_coordinates(points, bits)
    inside = valid & (indices[:, 0] < r.width) & (indices[:, 1] < r.height)
    fetched = _fetch_many(r, indices[inside, 0], indices[inside, 1])
    pixels = np.full((indices.shape[0],) + fetched.shape[1:], fill_value, dtype=fetched.dtype)
    pixels[inside] = fetched
    return pixels, inside


def get_pixels_clamped(raster: Any, points: Any, bits: int = DEFAULT_AXIS_BITS) -> np.ndarray:
    """Clamped lookup for an (N,2) array of points."""
    r = as_raster(raster)
    right, bottom = edges(r.width, r.height, bits)
    indices = image_coordinates_clamped(points, right, bottom, bits)
    return _fetch_many(r, indices[:, 0], indices[:, 1])
