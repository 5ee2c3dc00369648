"""
Rounding — Точное округление и проверки диапазона

Модуль обеспечивает:
- Проверку finite для float входов
- Точное округление рациональных чисел (round half away from zero)
- Проверку scale и диапазона мантиссы

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Округление выполняется над точным рациональным значением, без float
2. Правило tie-break одно для конверсии, divide и quantize
3. Выход за диапазон мантиссы → Overflow, никогда не wraparound
"""

import logging
import math
from fractions import Fraction

from intfloat.config import DEFAULT_CONFIG, IntFloatConfig
from intfloat.errors import InvalidInput, Overflow

logger = logging.getLogger(__name__)


# =============================================================================
# FLOAT ВАЛИДАЦИЯ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение finite, False если NaN или Inf
    """
    return math.isfinite(value)


def validate_finite(value: float) -> None:
    """
    Валидация, что вход конечен.

    Raises:
        InvalidInput: Если value равен NaN/Inf
    """
    if not is_valid_float(value):
        logger.debug("Rejected non-finite input: %r", value)
        raise InvalidInput(f"value must be finite (not NaN/Inf), got {value}")


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def round_half_away_from_zero(value: Fraction) -> int:
    """
    Округление рационального числа до ближайшего целого.

    Ничьи (ровно .5) округляются от нуля: 2.5 → 3, -2.5 → -3.
    Вычисление целочисленное, без промежуточного float.

    Args:
        value: Точное рациональное значение

    Returns:
        Округлённое целое

    Examples:
        >>> round_half_away_from_zero(Fraction(5, 2))
        3
        >>> round_half_away_from_zero(Fraction(-5, 2))
        -3
        >>> round_half_away_from_zero(Fraction(26, 5))
        5
    """
    quotient, remainder = divmod(abs(value.numerator), value.denominator)
    if 2 * remainder >= value.denominator:
        quotient += 1
    return -quotient if value.numerator < 0 else quotient


def scale_and_round(value: Fraction, scale: int) -> int:
    """
    Вычисление round(value × 10^scale) по правилу half away from zero.

    Args:
        value: Точное рациональное значение
        scale: Неотрицательный scale

    Returns:
        Округлённая мантисса (без проверки диапазона)
    """
    return round_half_away_from_zero(value * 10**scale)


# =============================================================================
# ВАЛИДАЦИЯ SCALE И ДИАПАЗОНА
# =============================================================================


def validate_scale(scale: int, config: IntFloatConfig = DEFAULT_CONFIG) -> None:
    """
    Валидация scale: целое, 0 <= scale <= config.max_scale.

    Raises:
        InvalidInput: Если scale не целое или вне диапазона
    """
    # bool — подкласс int, но как scale не имеет смысла
    if not isinstance(scale, int) or isinstance(scale, bool):
        raise InvalidInput(f"scale must be an int, got {type(scale).__name__}")

    if scale < 0:
        logger.debug("Rejected negative scale: %d", scale)
        raise InvalidInput(f"scale must be non-negative, got {scale}")

    if scale > config.max_scale:
        logger.debug("Rejected scale %d above max_scale %d", scale, config.max_scale)
        raise InvalidInput(f"scale must be <= max_scale {config.max_scale}, got {scale}")


def check_mantissa_range(
    mantissa: int,
    config: IntFloatConfig = DEFAULT_CONFIG,
    operation: str = "conversion",
) -> int:
    """
    Проверка, что мантисса помещается в знаковое целое config.mantissa_bits.

    Args:
        mantissa: Проверяемая мантисса
        config: Конфиг с шириной мантиссы
        operation: Имя операции (для сообщения об ошибке)

    Returns:
        mantissa без изменений

    Raises:
        Overflow: Если mantissa вне [mantissa_min, mantissa_max]
    """
    if config.mantissa_min <= mantissa <= config.mantissa_max:
        return mantissa

    logger.debug(
        "Mantissa overflow in %s: %d does not fit in %d bits",
        operation,
        mantissa,
        config.mantissa_bits,
    )
    raise Overflow(
        f"{operation} overflow: mantissa {mantissa} exceeds "
        f"{config.mantissa_bits}-bit range "
        f"[{config.mantissa_min}, {config.mantissa_max}]"
    )
