"""
config.py

Central constants for raster axis addressing.

Contents:
---------
1. DEFAULT_AXIS_BITS:
   - Width (in bits) of an axis index when callers do not pass ``bits``.
     Matches the 32-bit width/height used by common image containers.

2. AXIS_INDEX_DTYPES:
   - Supported addressing widths mapped to the numpy unsigned dtype used by
     the array (vectorized) helpers.

3. I32_MIN / I32_MAX:
   - Range accepted by the raw ``(x, y)`` helpers in ``rasteraxis.pixel``.

Usage:
------
    from rasteraxis.config import DEFAULT_AXIS_BITS, AXIS_INDEX_DTYPES
"""
import numpy as np

# ───────────────────────────────────────────────────────────────────────────────
# 1) ADDRESSING WIDTH
# ───────────────────────────────────────────────────────────────────────────────
DEFAULT_AXIS_BITS = 32

# ───────────────────────────────────────────────────────────────────────────────
# 2) ARRAY DTYPES PER WIDTH
# ───────────────────────────────────────────────────────────────────────────────
AXIS_INDEX_DTYPES = {
    8: np.dtype(np.uint8),
    16: np.dtype(np.uint16),
    32: np.dtype(np.uint32),
    64: np.dtype(np.uint64),
}

# ───────────────────────────────────────────────────────────────────────────────
# 3) RAW SIGNED 32-BIT COORDINATES
# ───────────────────────────────────────────────────────────────────────────────
I32_MIN = -(2 ** 31)
I32_MAX = 2 ** 31 - 1
