"""
index.py

Conversion of a single scalar into a raster axis index (a row or a column).

Every numeric type falls into one ``AxisDomain``, chosen from its signedness
and its bit width relative to the addressing width ``bits``:

- UNSIGNED_NARROW: unsigned, at most ``bits`` wide. Always representable.
- UNSIGNED_WIDE:   unsigned, wider than ``bits``. Rejected above the limit.
- SIGNED_NARROW:   signed, at most ``bits`` wide. Rejected when negative.
- SIGNED_WIDE:     signed, wider than ``bits`` (the builtin ``int`` too).
                   Rejected when negative or above the limit.
- FLOAT:           floating point. Truncated toward zero; NaN, infinities and
                   values with the sign bit set are rejected.

Each domain has its own pair of rules (exact and saturating). Picking the
rule by domain matters at the boundaries: e.g. ``np.uint32`` with 32-bit
addressing never fails, while ``np.uint64`` must be range checked.

Public functions:
- `to_axis_index(value, bits=32)` -> int or None
- `clamp_axis_index(value, max_index, bits=32)` -> int in [0, max_index]
- `to_axis_indices(values, bits=32)` -> (indices, valid)
- `clamp_axis_indices(values, max_index, bits=32)` -> indices

"""
import enum
import logging
import math
import operator
from typing import Any, Optional, Tuple

import numpy as np

from rasteraxis.config import AXIS_INDEX_DTYPES, DEFAULT_AXIS_BITS

logger = logging.getLogger(__name__)


class AxisDomain(enum.Enum):
    """Numeric domains that need distinct axis conversion rules."""
    UNSIGNED_NARROW = 'unsigned_narrow'
    UNSIGNED_WIDE = 'unsigned_wide'
    SIGNED_NARROW = 'signed_narrow'
    SIGNED_WIDE = 'signed_wide'
    FLOAT = 'float'


def axis_limit(bits: int = DEFAULT_AXIS_BITS) -> int:
    """Return the largest axis index representable with ``bits`` bits."""
    if bits not in AXIS_INDEX_DTYPES:
        raise ValueError(f"unsupported axis width {bits!r}; expected one of {sorted(AXIS_INDEX_DTYPES)}")
    return (1 << bits) - 1


def domain_for_dtype(dtype: Any, bits: int = DEFAULT_AXIS_BITS) -> AxisDomain:
    """Classify a numpy dtype (or anything ``np.dtype`` accepts)."""
    axis_limit(bits)
    dt = np.dtype(dtype)
    width = dt.itemsize * 8
    if dt.kind == 'u':
        return AxisDomain.UNSIGNED_NARROW if width <= bits else AxisDomain.UNSIGNED_WIDE
    if dt.kind == 'i':
        return AxisDomain.SIGNED_NARROW if width <= bits else AxisDomain.SIGNED_WIDE
    if dt.kind == 'f':
        return AxisDomain.FLOAT
    logger.debug('rejecting axis dtype %s', dt)
    raise TypeError(f"dtype {dt} is not an axis value type")


def axis_domain(value: Any, bits: int = DEFAULT_AXIS_BITS) -> AxisDomain:
    """Classify a scalar value.

    numpy scalars are classified by their dtype. The builtin ``int`` has
    arbitrary precision and is always SIGNED_WIDE; the builtin ``float`` is
    FLOAT. Booleans and every other type raise ``TypeError``.
    """
    if isinstance(value, (bool, np.bool_)):
        raise TypeError("booleans are not axis values")
    if isinstance(value, (np.integer, np.floating)):
        return domain_for_dtype(value.dtype, bits)
    axis_limit(bits)
    if isinstance(value, int):
        return AxisDomain.SIGNED_WIDE
    if isinstance(value, float):
        return AxisDomain.FLOAT
    logger.debug('rejecting axis value of type %s', type(value).__name__)
    raise TypeError(f"{type(value).__name__} is not an axis value type")


def _is_sign_negative(v: float) -> bool:
    return math.copysign(1.0, v) < 0.0


# ───────────────────────────────────────────────────────────────────────────────
# Per-domain rules. `limit` is the largest index for the addressing width and
# `max_index` has already been checked against it.
# ───────────────────────────────────────────────────────────────────────────────
def _to_unsigned_narrow(value, limit):
    return int(value)


def _clamp_unsigned_narrow(value, max_index, limit):
    return min(int(value), max_index)


def _to_unsigned_wide(value, limit):
    v = int(value)
    return v if v <= limit else None


def _clamp_unsigned_wide(value, max_index, limit):
    # max_index <= limit, so values past the addressing width saturate here too
    return min(int(value), max_index)


def _to_signed_narrow(value, limit):
    v = int(value)
    return v if v >= 0 else None


def _clamp_signed_narrow(value, max_index, limit):
    return min(max(int(value), 0), max_index)


def _to_signed_wide(value, limit):
    v = int(value)
    if v < 0 or v > limit:
        return None
    return v


def _clamp_signed_wide(value, max_index, limit):
    v = int(value)
    if v < 0:
        return 0
    return min(v, max_index)


def _to_float(value, limit):
    v = float(value)
    if not math.isfinite(v) or _is_sign_negative(v):
        return None
    truncated = int(v)
    return truncated if truncated <= limit else None


def _clamp_float(value, max_index, limit):
    v = float(value)
    if math.isnan(v) or _is_sign_negative(v):
        return 0
    if math.isinf(v):
        return max_index
    return min(int(v), max_index)


_RULES = {
    AxisDomain.UNSIGNED_NARROW: (_to_unsigned_narrow, _clamp_unsigned_narrow),
    AxisDomain.UNSIGNED_WIDE: (_to_unsigned_wide, _clamp_unsigned_wide),
    AxisDomain.SIGNED_NARROW: (_to_signed_narrow, _clamp_signed_narrow),
    AxisDomain.SIGNED_WIDE: (_to_signed_wide, _clamp_signed_wide),
    AxisDomain.FLOAT: (_to_float, _clamp_float),
}


def _check_max_index(max_index: int, limit: int) -> int:
    m = operator.index(max_index)
    if m < 0 or m > limit:
        raise ValueError(f"max_index {m} is outside the axis range [0, {limit}]")
    return m


def to_axis_index(value: Any, bits: int = DEFAULT_AXIS_BITS) -> Optional[int]:
    """Convert ``value`` to an axis index, or ``None`` if it cannot be one.

    Floats are truncated toward zero (42.7 -> 42).
    """
    to_index, _ = _RULES[axis_domain(value, bits)]
    return to_index(value, axis_limit(bits))


def clamp_axis_index(value: Any, max_index: int, bits: int = DEFAULT_AXIS_BITS) -> int:
    """Convert ``value`` to an axis index saturated to ``[0, max_index]``.

    Values below the range (negative numbers, -inf) and NaN map to ``0``;
    values above it (including +inf) map to ``max_index``.
    """
    domain = axis_domain(value, bits)
    limit = axis_limit(bits)
    max_index = _check_max_index(max_index, limit)
    _, clamp_index = _RULES[domain]
    return clamp_index(value, max_index, limit)


def _as_value_array(values: Any) -> np.ndarray:
    arr = np.asarray(values)
    if arr.dtype.kind == 'b':
        raise TypeError("boolean arrays are not axis values")
    return arr


def to_axis_indices(values: Any, bits: int = DEFAULT_AXIS_BITS) -> Tuple[np.ndarray, np.ndarray]:
    """Elementwise `to_axis_index` over an array.

    The rule is chosen once from the array dtype.

    Returns
    - indices: unsigned array of the addressing width; invalid slots hold 0
    - valid: boolean array, False where `to_axis_index` would give None
    """
    arr = _as_value_array(values)
    domain = domain_for_dtype(arr.dtype, bits)
    limit = axis_limit(bits)
    if domain is AxisDomain.UNSIGNED_NARROW:
        valid = np.ones(arr.shape, dtype=bool)
    elif domain is AxisDomain.UNSIGNED_WIDE:
        valid = arr <= limit
    elif domain is AxisDomain.SIGNED_NARROW:
        valid = arr >= 0
    elif domain is AxisDomain.SIGNED_WIDE:
        valid = (arr >= 0) & (arr <= limit)
    else:
        with np.errstate(invalid='ignore'):
            arr = np.trunc(arr)
            valid = np.isfinite(arr) & ~np.signbit(arr) & (arr < 2.0 ** bits)
    indices = np.where(valid, arr, 0).astype(AXIS_INDEX_DTYPES[bits])
    return indices, np.asarray(valid, dtype=bool)


def clamp_axis_indices(values: Any, max_index: int, bits: int = DEFAULT_AXIS_BITS) -> np.ndarray:
    """Elementwise `clamp_axis_index` over an array."""
    arr = _as_value_array(values)
    domain = domain_for_dtype(arr.dtype, bits)
    max_index = _check_max_index(max_index, axis_limit(bits))
    top = np.uint64(max_index)
    if domain is AxisDomain.FLOAT:
        wide = arr.astype(np.float64)
        with np.errstate(invalid='ignore'):
            finite_positive = np.isfinite(wide) & ~np.signbit(wide)
            truncated = np.trunc(np.where(finite_positive, wide, 0.0))
            saturated = np.isposinf(wide) | (truncated >= max_index)
        # saturated slots are zeroed before the cast so nothing overflows
        safe = np.where(saturated, 0.0, truncated).astype(np.uint64)
        clamped = np.where(saturated, top, safe)
    elif domain in (AxisDomain.SIGNED_NARROW, AxisDomain.SIGNED_WIDE):
        clamped = np.minimum(np.where(arr < 0, 0, arr).astype(np.uint64), top)
    else:
        clamped = np.minimum(arr.astype(np.uint64), top)
    return clamped.astype(AXIS_INDEX_DTYPES[bits])
