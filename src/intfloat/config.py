"""
Config — Параметры представления IntFloat

Immutable Pydantic модель с шириной мантиссы и верхней границей scale.
DEFAULT_CONFIG соответствует знаковому 64-битному целому (isize).

Глобального изменяемого состояния нет: другой конфиг привязывается к
подклассу через IntFloat.configured(config).
"""

from typing import Final

from pydantic import BaseModel, Field

# =============================================================================
# DEFAULTS
# =============================================================================

# Ширина мантиссы в битах (знаковое целое)
MANTISSA_BITS_DEFAULT: Final[int] = 64

# Максимальный scale (число сохраняемых десятичных знаков)
# Покрывает наименьший субнормальный float (1e-324) плюс 19 цифр 64-битной мантиссы.
# Защита от неограниченного роста 10**scale, а не ограничение точности
MAX_SCALE_DEFAULT: Final[int] = 400


# =============================================================================
# CONFIG MODEL
# =============================================================================


class IntFloatConfig(BaseModel):
    """
    Параметры fixed-point представления.

    Immutable модель (frozen=True): конфиг разделяется всеми значениями
    одного класса и не может быть изменён после создания.
    """

    mantissa_bits: int = Field(
        MANTISSA_BITS_DEFAULT,
        ge=8,
        le=4096,
        description="Знаковая ширина мантиссы в битах",
    )
    max_scale: int = Field(
        MAX_SCALE_DEFAULT,
        ge=0,
        le=1000,
        description="Максимально допустимый scale",
    )

    model_config = {"frozen": True}  # Immutable

    @property
    def mantissa_min(self) -> int:
        """Минимальная мантисса: -2^(bits-1)"""
        return -(1 << (self.mantissa_bits - 1))

    @property
    def mantissa_max(self) -> int:
        """Максимальная мантисса: 2^(bits-1) - 1"""
        return (1 << (self.mantissa_bits - 1)) - 1


DEFAULT_CONFIG: Final[IntFloatConfig] = IntFloatConfig()
