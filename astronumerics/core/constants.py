"""
Numerical constants and defaults.

Sources:
    - IEEE 754 binary64 for machine precision
    - ISO 18431-2 and Nuttall (1981) for window coefficients
"""

import numpy as np

# ---------------------------------------------------------------------------
# Mathematical constants
# ---------------------------------------------------------------------------
TWO_PI = 2.0 * np.pi
DEG2RAD = np.pi / 180.0
ARCMIN2RAD = DEG2RAD / 60.0
ARCSEC2RAD = DEG2RAD / 3600.0

# ---------------------------------------------------------------------------
# Time constants
# ---------------------------------------------------------------------------
SECONDS_PER_MINUTE = 60.0
SECONDS_PER_HOUR = 3600.0
SECONDS_PER_DAY = 86400.0

# ---------------------------------------------------------------------------
# Quadrature defaults
# ---------------------------------------------------------------------------
CLENSHAW_CURTIS_INITIAL_POINTS = 2          # 2^0 + 1
INNER_PRODUCT_MAX_RELATIVE_ERROR = 1e-13
INNER_PRODUCT_MAX_POINTS = 2 ** 14 + 1

# ---------------------------------------------------------------------------
# Cosine-sum window coefficients (centred form, all terms added)
# ---------------------------------------------------------------------------
HAMMING_COEFFICIENTS = (25.0 / 46.0, 21.0 / 46.0)
BLACKMAN_COEFFICIENTS = (0.42, 0.5, 0.08)
EXACT_BLACKMAN_COEFFICIENTS = (7938.0 / 18608.0,
                               9240.0 / 18608.0,
                               1430.0 / 18608.0)
NUTTALL_COEFFICIENTS = (0.355768, 0.487396, 0.144232, 0.012604)
BLACKMAN_NUTTALL_COEFFICIENTS = (0.3635819, 0.4891775, 0.1365995, 0.0106411)
BLACKMAN_HARRIS_COEFFICIENTS = (0.35875, 0.48829, 0.14128, 0.01168)
FLAT_TOP_COEFFICIENTS = (0.21557895, 0.41663158, 0.277263158,
                         0.083578947, 0.006947368)
