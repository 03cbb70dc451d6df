"""
Core math modules для bohr_mollerup

Математические примитивы и численные алгоритмы с гарантией стабильности.
"""

# Errors
from bohr_mollerup.core.math.errors import (
    GammaDomainError,
    NumericInstabilityWarning,
    OffsetRangeError,
    SqueezeError,
)

# Numerical Safeguards
from bohr_mollerup.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    EPS_MONOTONE_REL,
    # Safe division
    denom_safe_unsigned,
    # NaN/Inf validation
    is_valid_float,
    validate_finite,
    # Epsilon comparisons
    is_close,
    is_non_increasing,
    # Domain checks
    is_non_positive_integer,
    validate_open_interval,
    # Utilities
    clamp,
    round_to_step,
)

# Log-Gamma (Lanczos)
from bohr_mollerup.core.math.log_gamma import (
    LANCZOS_COEFFICIENTS,
    LANCZOS_G,
    LANCZOS_G0,
    REFLECTION_THRESHOLD,
    gamma_sign,
    log_gamma,
)

__all__ = [
    # Errors
    "GammaDomainError",
    "NumericInstabilityWarning",
    "OffsetRangeError",
    "SqueezeError",
    # Numerical Safeguards: Epsilon constants
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    "EPS_MONOTONE_REL",
    # Numerical Safeguards: Safe division
    "denom_safe_unsigned",
    # Numerical Safeguards: NaN/Inf validation
    "is_valid_float",
    "validate_finite",
    # Numerical Safeguards: Epsilon comparisons
    "is_close",
    "is_non_increasing",
    # Numerical Safeguards: Domain checks
    "is_non_positive_integer",
    "validate_open_interval",
    # Numerical Safeguards: Utilities
    "clamp",
    "round_to_step",
    # Log-Gamma: Constants
    "LANCZOS_COEFFICIENTS",
    "LANCZOS_G",
    "LANCZOS_G0",
    "REFLECTION_THRESHOLD",
    # Log-Gamma: Functions
    "gamma_sign",
    "log_gamma",
]
