"""Lift a pair of axis values into a 2-D image coordinate.

Any two-component representation is accepted:
- tuples and lists of length two
- numpy arrays of shape (2,)
- objects exposing ``x`` and ``y`` (``shapely.geometry.Point``, dataclasses)

Both components must be of the same numeric kind (unsigned, signed or
float); each is then converted with the rule of its own `AxisDomain`.
"""
import logging
from typing import Any, Optional, Protocol, Tuple, runtime_checkable

import numpy as np

from rasteraxis.config import DEFAULT_AXIS_BITS
from rasteraxis.index import (
    AxisDomain,
    axis_domain,
    clamp_axis_index,
    clamp_axis_indices,
    to_axis_index,
    to_axis_indices,
)

logger = logging.getLogger(__name__)

AxisIndexPair = Tuple[int, int]

# width does not matter for pairing; each component keeps its own rule
_KINDS = {
    AxisDomain.UNSIGNED_NARROW: 'unsigned',
    AxisDomain.UNSIGNED_WIDE: 'unsigned',
    AxisDomain.SIGNED_NARROW: 'signed',
    AxisDomain.SIGNED_WIDE: 'signed',
    AxisDomain.FLOAT: 'float',
}


@runtime_checkable
class PointLike(Protocol):
    """Anything exposing ``x`` and ``y`` components."""
    x: Any
    y: Any


def coordinate_components(coords: Any, bits: int = DEFAULT_AXIS_BITS) -> Tuple[Any, Any]:
    """Return the raw ``(x, y)`` components of ``coords``.

    Raises ``TypeError`` for unsupported representations and for pairs whose
    components are of different numeric kinds (unsigned, signed, float).
    """
    if isinstance(coords, np.ndarray):
        if coords.shape != (2,):
            raise TypeError(f"coordinate array must have shape (2,), got {coords.shape}")
        x, y = coords[0], coords[1]
    elif isinstance(coords, (tuple, list)):
        if len(coords) != 2:
            raise TypeError(f"coordinate must have two components, got {len(coords)}")
        x, y = coords
    elif isinstance(coords, PointLike):
        x, y = coords.x, coords.y
    else:
        raise TypeError(f"{type(coords).__name__} is not a coordinate")

    kind_x = _KINDS[axis_domain(x, bits)]
    kind_y = _KINDS[axis_domain(y, bits)]
    if kind_x != kind_y:
        logger.debug('mixed coordinate kinds %s/%s for %r', kind_x, kind_y, coords)
        raise TypeError(f"coordinate components must share a numeric kind, got {kind_x} and {kind_y}")
    return x, y


def image_coordinate(coords: Any, bits: int = DEFAULT_AXIS_BITS) -> Optional[AxisIndexPair]:
    """Return ``(x, y)`` axis indices, or ``None`` if either component is invalid."""
    x, y = coordinate_components(coords, bits)
    ix = to_axis_index(x, bits)
    iy = to_axis_index(y, bits)
    if ix is None or iy is None:
        return None
    return ix, iy


def image_coordinate_clamped(coords: Any, right: int, bottom: int, bits: int = DEFAULT_AXIS_BITS) -> AxisIndexPair:
    """Return ``(x, y)`` clamped to ``[0, right] x [0, bottom]``."""
    x, y = coordinate_components(coords, bits)
    return clamp_axis_index(x, right, bits), clamp_axis_index(y, bottom, bits)


def _as_point_array(points: Any) -> np.ndarray:
    pts = np.asarray(points)
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError(f"points must be shape (N,2), got {pts.shape}")
    return pts


def image_coordinates(points: Any, bits: int = DEFAULT_AXIS_BITS) -> Tuple[np.ndarray, np.ndarray]:
    """Vectorized `image_coordinate` for an (N,2) array of points.

    Returns
    - indices: (N,2) unsigned array; rows that are not valid hold (0, 0)
    - valid: (N,) boolean array, True only where both components converted
    """
    pts = _as_point_array(points)
    xs, valid_x = to_axis_indices(pts[:, 0], bits)
    ys, valid_y = to_axis_indices(pts[:, 1], bits)
    valid = valid_x & valid_y
    indices = np.stack([xs, ys], axis=1)
    indices[~valid] = 0
    return indices, valid


def image_coordinates_clamped(points: Any, right: int, bottom: int, bits: int = DEFAULT_AXIS_BITS) -> np.ndarray:
    """Vectorized `image_coordinate_clamped`; returns an (N,2) unsigned array."""
    pts = _as_point_array(points)
    xs = clamp_axis_indices(pts[:, 0], right, bits)
    ys = clamp_axis_indices(pts[:, 1], bottom, bits)
    return np.stack([xs, ys], axis=1)
