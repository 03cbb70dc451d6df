"""
Squeeze — Модели точек кривой и результата squeeze

Immutable Pydantic модели:
- Point: точка (x, log|Γ(x)|), создаётся только вычислением
- chord_slope: наклон хорды между двумя уже вычисленными точками
- SqueezeResult: четыре точки, наклоны хорд, границы ловушки и gap

Все значения являются конечными float (allow_inf_nan=False): NaN/Inf не проходят
валидацию модели. Экземпляры создаются заново на каждый вызов, без
идентичности, кэша и мутаций.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from bohr_mollerup.core.math.log_gamma import log_gamma
from bohr_mollerup.core.math.numerical_safeguards import is_close


# =============================================================================
# POINT
# =============================================================================


class Point(BaseModel):
    """Точка кривой log|Γ|: y = log_gamma(x)."""

    x: float = Field(..., description="Абсцисса")
    y: float = Field(..., description="log|Γ(x)|")

    model_config = {"frozen": True, "allow_inf_nan": False, "extra": "forbid"}

    @classmethod
    def evaluate(cls, x: float) -> "Point":
        """
        Точка кривой в абсциссе x.

        Raises:
            ValueError: если x содержит NaN/Inf
            GammaDomainError: если x является полюсом Γ
        """
        return cls(x=x, y=log_gamma(x))


def chord_slope(left: Point, right: Point) -> float:
    """
    Наклон хорды log|Γ| между двумя точками кривой.

    slope = (right.y - left.y) / (right.x - left.x)

    Точки уже содержат значения log_gamma, повторного вычисления нет.

    Raises:
        ValueError: если абсциссы совпадают (например, pivot ± 1 == pivot
            при |pivot| >= 2**53)
    """
    dx = right.x - left.x
    if dx == 0.0:
        raise ValueError(f"chord requires distinct abscissas, got x={left.x} twice")
    return (right.y - left.y) / dx


# =============================================================================
# SQUEEZE RESULT
# =============================================================================


class SqueezeResult(BaseModel):
    """
    Результат squeeze-вычисления в pivot n и offset x.

    Для pivot >= 1 и offset в (0, 1) выполняется:
    - lower_slope <= upper_slope (дискретная выпуклость log Γ)
    - lower_bound_y <= upper_bound_y
    - gap = upper_bound_y - lower_bound_y >= 0

    Эти неравенства гарантированы, пока compute_squeeze не выдал
    NumericInstabilityWarning. При очень больших pivot (порядка 1e4 и выше)
    gap теряет значащие цифры и может стать отрицательным; такой результат
    всегда сопровождается предупреждением.

    Схема контракта payload строится из этой модели (extra="forbid" даёт
    additionalProperties: false).

    target.y ожидаемо (но не обязательно) лежит в [lower_bound_y, upper_bound_y],
    см. target_is_trapped.
    """

    # Вход
    pivot: float = Field(..., description="Опорная точка n (допускаются дробные значения)")
    offset: float = Field(..., gt=0.0, lt=1.0, description="Смещение x в (0, 1)")

    # Точки кривой
    prev: Point = Field(..., description="Точка в n - 1")
    curr: Point = Field(..., description="Точка в n")
    next: Point = Field(..., description="Точка в n + 1")
    target: Point = Field(..., description="Точка в n + x")

    # Наклоны хорд
    lower_slope: float = Field(..., description="Наклон хорды [n-1, n]")
    upper_slope: float = Field(..., description="Наклон хорды [n, n+1]")

    # Ловушка
    lower_bound_y: float = Field(..., description="Продолжение левой хорды в n + x")
    upper_bound_y: float = Field(..., description="Продолжение правой хорды в n + x")
    gap: float = Field(..., description="upper_bound_y - lower_bound_y")

    model_config = {"frozen": True, "allow_inf_nan": False, "extra": "forbid"}

    @field_validator("gap")
    @classmethod
    def validate_gap_matches_bounds(cls, v: float, info) -> float:
        """Проверка, что gap согласован с границами ловушки"""
        if "lower_bound_y" in info.data and "upper_bound_y" in info.data:
            expected = info.data["upper_bound_y"] - info.data["lower_bound_y"]
            if not is_close(v, expected):
                raise ValueError(
                    f"gap {v} must equal upper_bound_y - lower_bound_y = {expected}"
                )
        return v

    @property
    def target_is_trapped(self) -> bool:
        """True если target.y лежит в [lower_bound_y, upper_bound_y] (с толерантностью)."""
        y = self.target.y
        above_lower = y >= self.lower_bound_y or is_close(y, self.lower_bound_y)
        below_upper = y <= self.upper_bound_y or is_close(y, self.upper_bound_y)
        return above_lower and below_upper

    def to_payload(self) -> dict[str, Any]:
        """Сериализация в dict для слоя представления (контракт squeeze_result)."""
        return self.model_dump(mode="json")
