"""
Errors — Исключения IntFloat

Все ошибки сообщаются вызывающему коду явно из операции, которая их
вызвала. Ни одна не поглощается: молчаливое усечение или wraparound
нарушили бы инварианты равенства, порядка и хэша.

Иерархия:
- IntFloatError            — базовый класс
- InvalidInput             — NaN/Inf, неверный scale, неразбираемый текст
- Overflow                 — мантисса вышла за пределы целочисленного диапазона
- PrecisionLossRejected    — rescale в меньший scale (запрещено)
"""


class IntFloatError(Exception):
    """Базовое исключение для всех ошибок IntFloat."""

    pass


class InvalidInput(IntFloatError, ValueError):
    """
    Невалидный вход для построения IntFloat.

    Возникает при:
    1. Конверсии из не-finite float (NaN, +Inf, -Inf)
    2. Отрицательном scale или scale выше config.max_scale
    3. Неразбираемой строке в from_str / from_str_radix
    """

    pass


class Overflow(IntFloatError, OverflowError):
    """
    Мантисса вышла за пределы диапазона.

    Возникает при конверсии, rescale или арифметике. Вызывающий код
    решает, что делать (например, выбрать меньший scale).
    """

    pass


class PrecisionLossRejected(IntFloatError, ValueError):
    """Попытка rescale в меньший scale, чем уже хранится."""

    pass
