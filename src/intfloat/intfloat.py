"""
IntFloat — Hashable fixed-point замена float

Упрощённая альтернатива Decimal, допускающая хэширование. Стандартные
float плохо подходят как ключи dict/set (нет тотального равенства и
согласованного хэша), что нужно, например, при слиянии интервалов.

Число хранится как пара (mantissa, scale) и представляет
mantissa × 10^(-scale), где mantissa и scale — целые (и потому hashable).

Когда важна точность, decimal.Decimal безопаснее. Когда важна скорость,
эта реализация быстрее, ценой ограниченной ширины мантиссы: выход за
диапазон всегда даёт Overflow, а не молчаливое усечение.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. scale никогда не уменьшается неявно (rescale только вверх)
2. Равенство и порядок определены над представленным числом, не над парой
3. a == b ⇒ hash(a) == hash(b), в том числе при разных scale
4. Арифметика сигнализирует Overflow вместо wraparound

ПРАВИЛО ОКРУГЛЕНИЯ:
    round half away from zero над точным двоичным значением float
    (from_float, divide, quantize используют одно правило)

Examples:
    >>> a = IntFloat.from_float(10.0, 0)
    >>> b = IntFloat.from_float(5.2, 0)
    >>> a == b + b
    True
    >>> IntFloat.from_float(5.2, 1) == b
    False
"""

import logging
import re
import sys
from decimal import Decimal
from fractions import Fraction
from typing import Any, ClassVar, Dict, Iterable, Optional, Tuple, Union

from intfloat.config import DEFAULT_CONFIG, IntFloatConfig
from intfloat.contracts import validate_intfloat
from intfloat.errors import InvalidInput, Overflow, PrecisionLossRejected
from intfloat.rounding import (
    check_mantissa_range,
    round_half_away_from_zero,
    scale_and_round,
    validate_finite,
    validate_scale,
)

logger = logging.getLogger(__name__)

# Параметры числового хэша CPython (тот же алгоритм, что у int/Fraction/Decimal)
_HASH_MODULUS = sys.hash_info.modulus
_HASH_10INV = pow(10, _HASH_MODULUS - 2, _HASH_MODULUS)

# Десятичный литерал: знак, целая часть, дробная часть
_DECIMAL_LITERAL = re.compile(r"\s*([+-]?)(\d*)(?:\.(\d*))?\s*")


# =============================================================================
# ВЫРАВНИВАНИЕ (без проверки диапазона)
# =============================================================================


def _raw_parts(value: Any) -> Optional[Tuple[int, int]]:
    """(mantissa, scale) для IntFloat или int, иначе None."""
    if isinstance(value, IntFloat):
        return value._mantissa, value._scale
    if isinstance(value, int):
        return value, 0
    return None


def _aligned(
    mantissa_a: int, scale_a: int, mantissa_b: int, scale_b: int
) -> Tuple[int, int, int]:
    """
    Выравнивание двух мантисс к max(scale_a, scale_b).

    Использует неограниченные int Python (widening), поэтому путь
    сравнения никогда не переполняется и не искажает порядок.
    """
    if scale_a < scale_b:
        return mantissa_a * 10 ** (scale_b - scale_a), mantissa_b, scale_b
    if scale_b < scale_a:
        return mantissa_a, mantissa_b * 10 ** (scale_a - scale_b), scale_a
    return mantissa_a, mantissa_b, scale_a


def _strip_trailing_zeros(mantissa: int, scale: int) -> Tuple[int, int]:
    """Каноническая форма: убрать десятичные нули мантиссы вплоть до scale 0."""
    if mantissa == 0:
        return 0, 0
    while scale > 0 and mantissa % 10 == 0:
        mantissa //= 10
        scale -= 1
    return mantissa, scale


# =============================================================================
# INTFLOAT
# =============================================================================


class IntFloat:
    """
    Immutable fixed-point значение mantissa × 10^(-scale).

    Value semantics: атрибуты нельзя изменить после создания, все операции
    возвращают новый экземпляр. Безопасно для конкурентного использования.

    Операнды-int трактуются как значения со scale 0. Сравнение и
    арифметика с float не поддерживаются (NotImplemented): float
    конвертируется явно через from_float с выбранным scale.
    """

    __slots__ = ("_mantissa", "_scale")

    config: ClassVar[IntFloatConfig] = DEFAULT_CONFIG

    def __init__(self, mantissa: int, scale: int = 0) -> None:
        """
        Создание из сырой пары (mantissa, scale).

        Args:
            mantissa: Знаковое целое в пределах config.mantissa_bits
            scale: Число десятичных знаков (0 <= scale <= config.max_scale)

        Raises:
            InvalidInput: Если mantissa не int или scale невалиден
            Overflow: Если mantissa вне диапазона
        """
        if not isinstance(mantissa, int) or isinstance(mantissa, bool):
            raise InvalidInput(f"mantissa must be an int, got {type(mantissa).__name__}")
        validate_scale(scale, self.config)
        check_mantissa_range(mantissa, self.config, "construction")
        object.__setattr__(self, "_mantissa", int(mantissa))
        object.__setattr__(self, "_scale", scale)

    @classmethod
    def _from_parts(cls, mantissa: int, scale: int, operation: str) -> "IntFloat":
        # Результат операции: scale и мантисса проверяются, но не валидируются как вход
        if scale > cls.config.max_scale:
            logger.debug(
                "Scale overflow in %s: %d > max_scale %d", operation, scale, cls.config.max_scale
            )
            raise Overflow(
                f"{operation} overflow: scale {scale} exceeds max_scale {cls.config.max_scale}"
            )
        check_mantissa_range(mantissa, cls.config, operation)
        instance = object.__new__(cls)
        object.__setattr__(instance, "_mantissa", mantissa)
        object.__setattr__(instance, "_scale", scale)
        return instance

    @classmethod
    def _lift(cls, value: "IntFloat", scale: int, operation: str) -> int:
        """Мантисса value, поднятая к scale, с проверкой диапазона cls."""
        return check_mantissa_range(
            value._mantissa * 10 ** (scale - value._scale), cls.config, operation
        )

    def _coerce(self, other: Any) -> Optional["IntFloat"]:
        if isinstance(other, IntFloat):
            return other
        if isinstance(other, int):
            return self._from_parts(int(other), 0, "conversion")
        return None

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def from_float(cls, value: Union[float, int], scale: int) -> "IntFloat":
        """
        Конверсия float → fixed-point.

        Алгоритм:
            mantissa = round(value × 10^scale), ничьи — от нуля,
            над точным двоичным значением value

        Гарантия: |represented - value| <= 0.5 × 10^(-scale)

        Args:
            value: Конечный float (или int, конвертируется точно)
            scale: Число сохраняемых десятичных знаков

        Returns:
            Новый IntFloat со scale = scale

        Raises:
            InvalidInput: Если value NaN/Inf, не число, или scale невалиден
            Overflow: Если округлённая мантисса вне диапазона

        Examples:
            >>> IntFloat.from_float(5.34234, 2)
            IntFloat(mantissa=534, scale=2)
            >>> IntFloat.from_float(-2.5, 0)
            IntFloat(mantissa=-3, scale=0)
        """
        validate_scale(scale, cls.config)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidInput(f"value must be a float or int, got {type(value).__name__}")
        if isinstance(value, float):
            validate_finite(value)

        mantissa = scale_and_round(Fraction(value), scale)
        return cls._from_parts(mantissa, scale, "conversion")

    @classmethod
    def from_str(cls, text: str) -> "IntFloat":
        """
        Точный разбор десятичного литерала: "-12.340" → (-12340, 3).

        scale равен числу дробных цифр, округления нет.

        Raises:
            InvalidInput: Если текст не является десятичным литералом
        """
        match = _DECIMAL_LITERAL.fullmatch(text) if isinstance(text, str) else None
        if match is None or not (match.group(2) or match.group(3)):
            logger.debug("Rejected decimal literal: %r", text)
            raise InvalidInput(f"invalid decimal literal: {text!r}")

        sign, integer_part, fraction_part = match.groups()
        fraction_part = fraction_part or ""
        scale = len(fraction_part)
        validate_scale(scale, cls.config)

        # Длина проверяется до int(): длинные строки упираются в лимит CPython
        digits = ((integer_part or "0") + fraction_part).lstrip("0") or "0"
        if len(digits) > len(str(cls.config.mantissa_max)):
            logger.debug("Decimal literal overflow: %d significant digits", len(digits))
            raise Overflow(
                f"conversion overflow: literal with {len(digits)} digits exceeds "
                f"{cls.config.mantissa_bits}-bit range"
            )

        mantissa = int(digits)
        if sign == "-":
            mantissa = -mantissa
        return cls._from_parts(mantissa, scale, "conversion")

    @classmethod
    def from_str_radix(cls, text: str, radix: int = 10) -> "IntFloat":
        """
        Разбор целого в системе счисления radix, scale 0.

        Raises:
            InvalidInput: Если текст не разбирается как целое
        """
        try:
            mantissa = int(text, radix)
        except (TypeError, ValueError) as e:
            logger.debug("Rejected integer literal %r (radix %r)", text, radix)
            raise InvalidInput(f"invalid integer literal {text!r} for radix {radix}: {e}") from e
        return cls._from_parts(mantissa, 0, "conversion")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IntFloat":
        """
        Создание из сериализованной формы {"mantissa": int, "scale": int}.

        JSON Schema "integer" допускает целочисленные float (534.0),
        поэтому после валидации поля приводятся к int.

        Raises:
            jsonschema.ValidationError: Если data не соответствует контракту
            Overflow: Если mantissa вне диапазона
        """
        validate_intfloat(data)
        return cls(int(data["mantissa"]), int(data["scale"]))

    @classmethod
    def zero(cls) -> "IntFloat":
        return cls._from_parts(0, 0, "construction")

    @classmethod
    def one(cls) -> "IntFloat":
        return cls._from_parts(1, 0, "construction")

    @classmethod
    def sum(cls, values: Iterable[Union["IntFloat", int]]) -> "IntFloat":
        """Сумма значений, начиная с нуля."""
        total = cls.zero()
        for value in values:
            total = total + value
        return total

    @classmethod
    def configured(cls, config: IntFloatConfig, name: Optional[str] = None) -> type:
        """
        Подкласс, привязанный к другому конфигу.

        Examples:
            >>> IntFloat32 = IntFloat.configured(IntFloatConfig(mantissa_bits=32))
            >>> IntFloat32.config.mantissa_max
            2147483647
        """
        class_name = name or f"{cls.__name__}{config.mantissa_bits}"
        return type(class_name, (cls,), {"__slots__": (), "config": config})

    # -------------------------------------------------------------------------
    # Доступ и immutability
    # -------------------------------------------------------------------------

    @property
    def mantissa(self) -> int:
        return self._mantissa

    @property
    def scale(self) -> int:
        return self._scale

    def as_tuple(self) -> Tuple[int, int]:
        return self._mantissa, self._scale

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return type(self), (self._mantissa, self._scale)

    def __copy__(self) -> "IntFloat":
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> "IntFloat":
        return self

    # -------------------------------------------------------------------------
    # Rescale / нормализация / квантование
    # -------------------------------------------------------------------------

    def rescale(self, target_scale: int) -> "IntFloat":
        """
        Точное увеличение scale без изменения представленного числа.

        mantissa × 10^(target_scale - scale), целочисленно.

        Args:
            target_scale: Новый scale (>= self.scale)

        Returns:
            IntFloat с тем же значением и scale = target_scale

        Raises:
            PrecisionLossRejected: Если target_scale < self.scale
            Overflow: Если новая мантисса вне диапазона
            InvalidInput: Если target_scale невалиден

        Examples:
            >>> IntFloat(5, 0).rescale(2)
            IntFloat(mantissa=500, scale=2)
        """
        is_int = isinstance(target_scale, int) and not isinstance(target_scale, bool)
        if is_int and target_scale < self._scale:
            logger.debug("Rejected rescale from %d down to %d", self._scale, target_scale)
            raise PrecisionLossRejected(
                f"cannot rescale from scale {self._scale} down to {target_scale}: "
                f"retained digits would be discarded (use quantize to round explicitly)"
            )
        validate_scale(target_scale, self.config)
        if target_scale == self._scale:
            return self
        return self._from_parts(self._lift(self, target_scale, "rescale"), target_scale, "rescale")

    def normalized(self) -> "IntFloat":
        """
        Каноническая форма: минимальный scale с тем же значением.

        Examples:
            >>> IntFloat(50000, 2).normalized()
            IntFloat(mantissa=500, scale=0)
        """
        mantissa, scale = _strip_trailing_zeros(self._mantissa, self._scale)
        if scale == self._scale:
            return self
        return self._from_parts(mantissa, scale, "normalization")

    def quantize(self, scale: int) -> "IntFloat":
        """
        Явное переокругление к scale (вверх или вниз).

        Единственный способ отбросить разряды: используется, чтобы
        ограничить рост scale после умножений. Правило округления то же,
        что у from_float.

        Examples:
            >>> IntFloat(2675, 3).quantize(2)
            IntFloat(mantissa=268, scale=2)
        """
        validate_scale(scale, self.config)
        if scale >= self._scale:
            return self.rescale(scale)
        mantissa = round_half_away_from_zero(
            Fraction(self._mantissa, 10 ** (self._scale - scale))
        )
        return self._from_parts(mantissa, scale, "quantize")

    # -------------------------------------------------------------------------
    # Равенство, порядок, хэш
    # -------------------------------------------------------------------------

    def _compare(self, other: Any) -> Any:
        parts = _raw_parts(other)
        if parts is None:
            return NotImplemented
        left, right, _ = _aligned(self._mantissa, self._scale, *parts)
        return (left > right) - (left < right)

    def __eq__(self, other: Any) -> Any:
        result = self._compare(other)
        return result if result is NotImplemented else result == 0

    def __ne__(self, other: Any) -> Any:
        result = self._compare(other)
        return result if result is NotImplemented else result != 0

    def __lt__(self, other: Any) -> Any:
        result = self._compare(other)
        return result if result is NotImplemented else result < 0

    def __le__(self, other: Any) -> Any:
        result = self._compare(other)
        return result if result is NotImplemented else result <= 0

    def __gt__(self, other: Any) -> Any:
        result = self._compare(other)
        return result if result is NotImplemented else result > 0

    def __ge__(self, other: Any) -> Any:
        result = self._compare(other)
        return result if result is NotImplemented else result >= 0

    def __hash__(self) -> int:
        """
        Хэш канонической формы по правилу числового хэша CPython.

        hash = mantissa × 10^(-scale) mod (2^61 - 1)

        Не зависит от scale для равных значений; целое значение хэшируется
        как равный ему int.
        """
        mantissa, scale = _strip_trailing_zeros(self._mantissa, self._scale)
        hash_ = abs(mantissa) * pow(_HASH_10INV, scale, _HASH_MODULUS) % _HASH_MODULUS
        if mantissa < 0:
            hash_ = -hash_
        return -2 if hash_ == -1 else hash_

    def is_zero(self) -> bool:
        return self._mantissa == 0

    def __bool__(self) -> bool:
        return self._mantissa != 0

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def __add__(self, other: Any) -> Any:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        scale = max(self._scale, operand._scale)
        mantissa = self._lift(self, scale, "addition") + self._lift(operand, scale, "addition")
        return self._from_parts(mantissa, scale, "addition")

    def __radd__(self, other: Any) -> Any:
        return self.__add__(other)

    def __sub__(self, other: Any) -> Any:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        scale = max(self._scale, operand._scale)
        mantissa = self._lift(self, scale, "subtraction") - self._lift(
            operand, scale, "subtraction"
        )
        return self._from_parts(mantissa, scale, "subtraction")

    def __rsub__(self, other: Any) -> Any:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return operand.__sub__(self)

    def __mul__(self, other: Any) -> Any:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._from_parts(
            self._mantissa * operand._mantissa,
            self._scale + operand._scale,
            "multiplication",
        )

    def __rmul__(self, other: Any) -> Any:
        return self.__mul__(other)

    def __neg__(self) -> "IntFloat":
        return self._from_parts(-self._mantissa, self._scale, "negation")

    def __pos__(self) -> "IntFloat":
        return self

    def __abs__(self) -> "IntFloat":
        return self if self._mantissa >= 0 else -self

    def divide(self, other: Union["IntFloat", int], scale: int) -> "IntFloat":
        """
        Деление с округлением к явно заданному scale.

        Частное вычисляется точно (Fraction) и округляется тем же правилом,
        что from_float.

        Args:
            other: Делитель (IntFloat или int)
            scale: scale результата

        Raises:
            ZeroDivisionError: Если делитель равен нулю
            Overflow: Если результат вне диапазона
            TypeError: Если делитель не IntFloat/int

        Examples:
            >>> IntFloat(10, 0).divide(IntFloat(3, 0), scale=3)
            IntFloat(mantissa=3333, scale=3)
        """
        operand = self._coerce(other)
        if operand is None:
            raise TypeError(f"cannot divide IntFloat by {type(other).__name__}")
        validate_scale(scale, self.config)
        if operand._mantissa == 0:
            raise ZeroDivisionError("IntFloat division by zero")

        quotient = self.to_fraction() / operand.to_fraction()
        return self._from_parts(scale_and_round(quotient, scale), scale, "division")

    def _divmod(self, dividend: "IntFloat", divisor: "IntFloat") -> Tuple["IntFloat", "IntFloat"]:
        left, right, scale = _aligned(
            dividend._mantissa, dividend._scale, divisor._mantissa, divisor._scale
        )
        if right == 0:
            raise ZeroDivisionError("IntFloat division by zero")
        quotient, remainder = divmod(left, right)
        return (
            self._from_parts(quotient, 0, "floor division"),
            self._from_parts(remainder, scale, "modulo"),
        )

    def __floordiv__(self, other: Any) -> Any:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._divmod(self, operand)[0]

    def __rfloordiv__(self, other: Any) -> Any:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._divmod(operand, self)[0]

    def __mod__(self, other: Any) -> Any:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._divmod(self, operand)[1]

    def __rmod__(self, other: Any) -> Any:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._divmod(operand, self)[1]

    def __divmod__(self, other: Any) -> Any:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._divmod(self, operand)

    def __rdivmod__(self, other: Any) -> Any:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._divmod(operand, self)

    # -------------------------------------------------------------------------
    # Конверсия и форматирование
    # -------------------------------------------------------------------------

    def to_fraction(self) -> Fraction:
        """Точное представленное значение как Fraction."""
        return Fraction(self._mantissa, 10**self._scale)

    def to_decimal(self) -> Decimal:
        """Точное представленное значение как Decimal (scale сохраняется)."""
        digits = tuple(int(digit) for digit in str(abs(self._mantissa)))
        return Decimal((1 if self._mantissa < 0 else 0, digits, -self._scale))

    def to_float(self) -> float:
        """Ближайший float (корректно округлённое деление int)."""
        return self._mantissa / 10**self._scale

    def to_int(self) -> int:
        """Целая часть с усечением к нулю."""
        quotient = abs(self._mantissa) // 10**self._scale
        return -quotient if self._mantissa < 0 else quotient

    def __float__(self) -> float:
        return self.to_float()

    def __int__(self) -> int:
        return self.to_int()

    def __str__(self) -> str:
        """
        Точный текст ровно со scale дробными цифрами.

        Examples:
            >>> str(IntFloat(534, 2))
            '5.34'
            >>> str(IntFloat(-5, 3))
            '-0.005'
        """
        sign = "-" if self._mantissa < 0 else ""
        digits = str(abs(self._mantissa))
        if self._scale == 0:
            return sign + digits
        digits = digits.rjust(self._scale + 1, "0")
        return f"{sign}{digits[:-self._scale]}.{digits[-self._scale:]}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(mantissa={self._mantissa}, scale={self._scale})"

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return str(self)
        return format(self.to_decimal(), format_spec)

    def to_dict(self) -> Dict[str, int]:
        """Сериализованная форма (см. контракт intfloat.json)."""
        return {"mantissa": self._mantissa, "scale": self._scale}
