"""
Contract Validation Module

Валидация сериализованной формы IntFloat ({"mantissa", "scale"})
против JSON Schema контракта.
"""

from .validators import (
    ContractValidator,
    IntFloatValidator,
    SchemaLoader,
    validate_intfloat,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "IntFloatValidator",
    # Functions
    "validate_intfloat",
]
