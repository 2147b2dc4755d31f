"""
Core math modules для rate oracle

Целочисленная fixed-point арифметика и RateEngine.
"""

# Fixed-Point (RAY primitives)
from rate_oracle.core.math.fixed_point import (
    HALF_RAY,
    RAY,
    SECONDS_PER_YEAR,
    UINT256_MAX,
    fits_bits,
    require_bits,
    require_uint,
    rmul_down,
    rmul_half_up,
    rpow,
)

# RateEngine
from rate_oracle.core.math.rate_engine import (
    RateDomainError,
    apr,
    compound,
    conversion_rate,
    conversion_rate_binomial_approx,
    conversion_rate_linear_approx,
    elapsed_seconds,
)

__all__ = [
    # Fixed-Point — Constants
    "HALF_RAY",
    "RAY",
    "SECONDS_PER_YEAR",
    "UINT256_MAX",
    # Fixed-Point — Functions
    "fits_bits",
    "require_bits",
    "require_uint",
    "rmul_down",
    "rmul_half_up",
    "rpow",
    # RateEngine — Exceptions
    "RateDomainError",
    # RateEngine — Functions
    "apr",
    "compound",
    "conversion_rate",
    "conversion_rate_binomial_approx",
    "conversion_rate_linear_approx",
    "elapsed_seconds",
]
