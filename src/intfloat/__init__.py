"""
intfloat — hashable fixed-point числа для замены float

Числа хранятся как mantissa × 10^(-scale) с целыми mantissa и scale,
поэтому их можно использовать как ключи dict/set (например, при
слиянии интервалов).
"""

# Errors
from intfloat.errors import (
    IntFloatError,
    InvalidInput,
    Overflow,
    PrecisionLossRejected,
)

# Config
from intfloat.config import (
    DEFAULT_CONFIG,
    MANTISSA_BITS_DEFAULT,
    MAX_SCALE_DEFAULT,
    IntFloatConfig,
)

# Rounding
from intfloat.rounding import (
    check_mantissa_range,
    is_valid_float,
    round_half_away_from_zero,
    validate_finite,
    validate_scale,
)

# Contracts
from intfloat.contracts import (
    ContractValidator,
    IntFloatValidator,
    SchemaLoader,
    validate_intfloat,
)

# Value type
from intfloat.intfloat import IntFloat

__all__ = [
    # Value type
    "IntFloat",
    # Errors
    "IntFloatError",
    "InvalidInput",
    "Overflow",
    "PrecisionLossRejected",
    # Config
    "DEFAULT_CONFIG",
    "MANTISSA_BITS_DEFAULT",
    "MAX_SCALE_DEFAULT",
    "IntFloatConfig",
    # Rounding
    "check_mantissa_range",
    "is_valid_float",
    "round_half_away_from_zero",
    "validate_finite",
    "validate_scale",
    # Contracts
    "ContractValidator",
    "IntFloatValidator",
    "SchemaLoader",
    "validate_intfloat",
]
