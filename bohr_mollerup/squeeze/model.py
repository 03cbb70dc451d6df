"""
Squeeze Model — Bounding chords of log Γ around a pivot

Модуль вычисляет геометрию "ловушки" из доказательства Бора–Моллерупа:
- три точки кривой в n-1, n, n+1 и целевую точку в n+x
- наклоны хорд [n-1, n] и [n, n+1]
- продолжения хорд до абсциссы n+x (нижняя и верхняя граница)
- ширину ловушки gap (метрика сходимости при n → ∞)

ФОРМУЛЫ:
    lower_slope   = log Γ(n) − log Γ(n−1)
    upper_slope   = log Γ(n+1) − log Γ(n)
    lower_bound_y = log Γ(n) + lower_slope · x
    upper_bound_y = log Γ(n) + upper_slope · x
    gap           = upper_bound_y − lower_bound_y

    Для целого n: gap = x · ln(n / (n−1)) → 0 при n → ∞

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN/Inf в pivot/offset → ValueError до вызова log_gamma
2. offset вне (0, 1) → OffsetRangeError
3. GammaDomainError из log_gamma пропагирует без изменений
4. pivot >= 1: lower_slope <= upper_slope, gap >= 0, пока не выдан
   NumericInstabilityWarning (нарушение при огромных pivot всегда
   сопровождается предупреждением)
5. Модель без состояния: каждый вызов независим и идемпотентен
"""

import logging
import math
import warnings
from typing import Final, Iterable

from bohr_mollerup.core.domain.squeeze import Point, SqueezeResult, chord_slope
from bohr_mollerup.core.math.errors import NumericInstabilityWarning, OffsetRangeError
from bohr_mollerup.core.math.numerical_safeguards import (
    EPS_MONOTONE_REL,
    denom_safe_unsigned,
    is_non_increasing,
    validate_finite,
    validate_open_interval,
)

log = logging.getLogger(__name__)

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Открытый интервал допустимых offset
OFFSET_MIN: Final[float] = 0.0
OFFSET_MAX: Final[float] = 1.0

# Порог cancellation: если |gap| < GAP_CANCELLATION_REL_TOL * max(|lower|, |upper|),
# значащих цифр в gap почти не осталось → NumericInstabilityWarning
GAP_CANCELLATION_REL_TOL: Final[float] = 1e-10

# Pivot, начиная с которого дискретная выпуклость гарантирована
# (n-1 >= 0 и все абсциссы на выпуклой ветке log Γ)
CONVEX_PIVOT_MIN: Final[float] = 1.0


# =============================================================================
# SQUEEZE
# =============================================================================


def compute_squeeze(pivot: float, offset: float) -> SqueezeResult:
    """
    Вычисление ловушки в pivot n и offset x.

    Дробный pivot допускается (интерактивный слайдер двигается непрерывно);
    точки всегда берутся в pivot-1, pivot, pivot+1 и pivot+offset.

    Args:
        pivot: Опорная точка n (конечный float)
        offset: Смещение x строго в (0, 1)

    Returns:
        SqueezeResult с точками, наклонами, границами и gap

    Raises:
        ValueError: если pivot или offset содержат NaN/Inf, либо |pivot| так
            велик (>= 2**53), что pivot ± 1 совпадает с pivot
        OffsetRangeError: если offset вне (0, 1)
        GammaDomainError: если одна из четырёх абсцисс является полюсом Γ

    Warns:
        NumericInstabilityWarning: при cancellation в gap или если округление
            нарушило порядок наклонов при pivot >= 1

    Examples:
        >>> result = compute_squeeze(2.0, 0.5)
        >>> round(result.upper_slope, 4)
        0.6931
        >>> round(result.gap, 4)
        0.3466
    """
    pivot = validate_finite(pivot, "pivot")
    offset = validate_open_interval(offset, "offset", OFFSET_MIN, OFFSET_MAX, OffsetRangeError)

    prev = Point.evaluate(pivot - 1.0)
    curr = Point.evaluate(pivot)
    nxt = Point.evaluate(pivot + 1.0)
    target = Point.evaluate(pivot + offset)

    lower_slope = chord_slope(prev, curr)
    upper_slope = chord_slope(curr, nxt)

    lower_bound_y = curr.y + lower_slope * offset
    upper_bound_y = curr.y + upper_slope * offset
    gap = upper_bound_y - lower_bound_y

    _check_stability(pivot, lower_slope, upper_slope, lower_bound_y, upper_bound_y, gap)

    log.debug(
        "squeeze pivot=%s offset=%s slopes=(%.12g, %.12g) gap=%.12g",
        pivot,
        offset,
        lower_slope,
        upper_slope,
        gap,
    )

    return SqueezeResult(
        pivot=pivot,
        offset=offset,
        prev=prev,
        curr=curr,
        next=nxt,
        target=target,
        lower_slope=lower_slope,
        upper_slope=upper_slope,
        lower_bound_y=lower_bound_y,
        upper_bound_y=upper_bound_y,
        gap=gap,
    )


def _check_stability(
    pivot: float,
    lower_slope: float,
    upper_slope: float,
    lower_bound_y: float,
    upper_bound_y: float,
    gap: float,
) -> None:
    """Предупреждения о потере точности (не фатальны, результат не меняется).

    Канал один: warnings.warn; в лог та же строка идёт только на DEBUG.
    """
    magnitude = max(abs(lower_bound_y), abs(upper_bound_y))

    if magnitude > 0 and abs(gap) < GAP_CANCELLATION_REL_TOL * magnitude:
        message = (
            f"gap={gap:.3e} is below {GAP_CANCELLATION_REL_TOL:.0e} relative to bound "
            f"magnitude {magnitude:.3e} at pivot={pivot}: most significant digits cancelled"
        )
        log.debug(message)
        warnings.warn(message, NumericInstabilityWarning, stacklevel=3)

    if pivot >= CONVEX_PIVOT_MIN and lower_slope > upper_slope:
        message = (
            f"chord slopes inverted at pivot={pivot}: "
            f"lower_slope={lower_slope!r} > upper_slope={upper_slope!r}"
        )
        log.debug(message)
        warnings.warn(message, NumericInstabilityWarning, stacklevel=3)


# =============================================================================
# СХОДИМОСТЬ
# =============================================================================


def convergence_profile(pivots: Iterable[float], offset: float) -> list[SqueezeResult]:
    """
    Последовательность squeeze-результатов для возрастающей выборки pivot.

    Обычный цикл по compute_squeeze: каждый элемент вычисляется независимо.

    Args:
        pivots: Строго возрастающая последовательность pivot
        offset: Смещение x строго в (0, 1)

    Returns:
        Список SqueezeResult в порядке pivots

    Raises:
        ValueError: если pivots пуст или не строго возрастает
        OffsetRangeError: если offset вне (0, 1)
    """
    pivots = [validate_finite(p, "pivot") for p in pivots]

    if not pivots:
        raise ValueError("pivots must not be empty")

    for prev, curr in zip(pivots, pivots[1:]):
        if curr <= prev:
            raise ValueError(f"pivots must be strictly increasing, got {prev} then {curr}")

    return [compute_squeeze(pivot, offset) for pivot in pivots]


def is_gap_non_increasing(
    results: list[SqueezeResult],
    relative: bool = False,
    rel_tol: float = EPS_MONOTONE_REL,
) -> bool:
    """
    Проверка сходимости: gap не возрастает вдоль results (с толерантностью).

    Args:
        results: Результаты в порядке возрастания pivot
        relative: Сравнивать relative_gap вместо абсолютного gap
        rel_tol: Допустимый относительный рост между соседями

    Returns:
        True если последовательность gap не возрастает
    """
    if relative:
        gaps = [relative_gap(result) for result in results]
    else:
        gaps = [result.gap for result in results]

    return is_non_increasing(gaps, rel_tol=rel_tol)


def relative_gap(result: SqueezeResult) -> float:
    """
    Gap относительно величины целевого значения.

    relative_gap = gap / max(|target.y|, 1)

    Для |target.y| < 1 совпадает с абсолютным gap (без деления на ~0).
    """
    return result.gap / denom_safe_unsigned(result.target.y, eps=1.0)


def integer_gap(n: float, offset: float) -> float:
    """
    Точное значение gap для целого pivot n >= 2.

    log Γ(n+1) − 2·log Γ(n) + log Γ(n−1) = ln(n / (n−1)), поэтому
    gap = offset · ln(n / (n−1)) = offset · log1p(1 / (n−1)).

    Raises:
        ValueError: если n не целое или n < 2, либо NaN/Inf
        OffsetRangeError: если offset вне (0, 1)

    Examples:
        >>> round(integer_gap(2, 0.5), 4)
        0.3466
    """
    n = validate_finite(n, "n")
    offset = validate_open_interval(offset, "offset", OFFSET_MIN, OFFSET_MAX, OffsetRangeError)

    if n != math.floor(n) or n < 2:
        raise ValueError(f"n must be an integer >= 2, got {n}")

    return offset * math.log1p(1.0 / (n - 1.0))
