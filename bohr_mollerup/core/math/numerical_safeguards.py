"""
Numerical Safeguards — Safe Math Primitives

Модуль обеспечивает численную устойчивость операций ядра:
- NaN/Inf валидация входов (невалидные значения никогда не пропагируют)
- Epsilon-защиты для сравнений float с учётом машинной точности
- Детекция полюсов Γ (неположительные целые)
- Валидация открытых интервалов
- Clamp и квантование значений (для интерактивного ввода)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN/Inf никогда не пропагируют (ValueError на входе)
2. Float сравнения всегда учитывают машинную точность
3. Все операции детерминированы и воспроизводимы
"""

import math
import numbers
from decimal import Decimal
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Epsilon для сравнения float (относительная толерантность)
# Используется в is_close для относительных сравнений
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Epsilon для сравнения float (абсолютная толерантность)
# Используется в is_close для абсолютных сравнений
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12

# Относительная толерантность для проверок монотонности gap
EPS_MONOTONE_REL: Final[float] = 1e-12


# =============================================================================
# NaN/Inf ВАЛИДАЦИЯ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def validate_finite(value: float, name: str) -> float:
    """
    Валидация, что значение конечное.

    Принимается любое вещественное число: int, float, numbers.Real
    (Fraction, numpy скаляры) и decimal.Decimal. bool и прочие типы
    отклоняются.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value как float

    Raises:
        ValueError: Если value NaN/Inf (в том числе после приведения к float)
            или не вещественное число

    Examples:
        >>> validate_finite(3, "x")
        3.0
    """
    if isinstance(value, bool) or not isinstance(value, (numbers.Real, Decimal)):
        raise ValueError(f"{name} must be a real number, got {value!r}")

    try:
        number = float(value)
    except OverflowError:
        number = math.inf

    if not is_valid_float(number):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    return number


# =============================================================================
# БЕЗОПАСНОЕ ДЕЛЕНИЕ
# =============================================================================


def denom_safe_unsigned(value: float, eps: float = EPS_FLOAT_COMPARE_ABS) -> float:
    """
    Безопасный беззнаковый делитель с epsilon-защитой.

    denom_safe_unsigned(x, eps) = max(abs(x), eps)

    Examples:
        >>> denom_safe_unsigned(10.0, 1e-6)
        10.0
        >>> denom_safe_unsigned(-10.0, 1e-6)
        10.0
        >>> denom_safe_unsigned(0.0, 1.0)
        1.0
    """
    if eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")

    return max(abs(value), eps)


# =============================================================================
# EPSILON-СРАВНЕНИЯ FLOAT
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение float с учётом машинной точности.

    Алгоритм:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Examples:
        >>> is_close(1.0, 1.0 + 1e-10)
        True
        >>> is_close(1.0, 1.1)
        False
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def is_non_increasing(
    values: list[float],
    rel_tol: float = EPS_MONOTONE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Проверка, что последовательность не возрастает с учётом толерантности.

    Каждый следующий элемент может превышать предыдущий не более чем на
    max(rel_tol * abs(prev), abs_tol).

    Examples:
        >>> is_non_increasing([3.0, 2.0, 2.0, 1.0])
        True
        >>> is_non_increasing([1.0, 2.0])
        False
        >>> is_non_increasing([])
        True
    """
    for prev, curr in zip(values, values[1:]):
        allowance = max(rel_tol * abs(prev), abs_tol)
        if curr - prev > allowance:
            return False
    return True


# =============================================================================
# DOMAIN ПРОВЕРКИ
# =============================================================================


def is_non_positive_integer(value: float) -> bool:
    """
    Проверка, является ли значение неположительным целым (0, -1, -2, ...).

    Это полюса функции Γ.

    Examples:
        >>> is_non_positive_integer(0.0)
        True
        >>> is_non_positive_integer(-3.0)
        True
        >>> is_non_positive_integer(-0.5)
        False
        >>> is_non_positive_integer(2.0)
        False
    """
    return value <= 0 and value == math.floor(value)


def validate_open_interval(
    value: float,
    name: str,
    low: float,
    high: float,
    error_cls: type[ValueError] = ValueError,
) -> float:
    """
    Валидация, что значение строго внутри интервала (low, high).

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        low: Нижняя граница (исключена)
        high: Верхняя граница (исключена)
        error_cls: Класс исключения для нарушения границ

    Returns:
        value как float

    Raises:
        ValueError: Если value NaN/Inf
        error_cls: Если value вне (low, high)
    """
    value = validate_finite(value, name)

    if not low < value < high:
        raise error_cls(f"{name} must lie in the open interval ({low}, {high}), got {value}")

    return value


# =============================================================================
# CLAMP И КВАНТОВАНИЕ
# =============================================================================


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Ограничение значения в заданном диапазоне.

    Examples:
        >>> clamp(5.0, 0.0, 10.0)
        5.0
        >>> clamp(-1.0, 0.0, 10.0)
        0.0
        >>> clamp(15.0, 0.0, 10.0)
        10.0
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result


def round_to_step(value: float, step: float, origin: float = 0.0) -> float:
    """
    Округление значения до ближайшего узла сетки origin + k * step.

    Использует round half away from zero, результат дополнительно
    округляется до 12 знаков, чтобы убрать хвосты вида 2.3000000000000003.

    Args:
        value: Значение для округления
        step: Шаг сетки (> 0)
        origin: Начало сетки

    Returns:
        Ближайший узел сетки

    Raises:
        ValueError: Если step <= 0

    Examples:
        >>> round_to_step(2.34, 0.1, origin=2.0)
        2.3
        >>> round_to_step(2.37, 0.1, origin=2.0)
        2.4
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")

    ratio = (value - origin) / step

    if ratio >= 0:
        steps = math.floor(ratio + 0.5)
    else:
        steps = math.ceil(ratio - 0.5)

    return round(origin + steps * step, 12)
