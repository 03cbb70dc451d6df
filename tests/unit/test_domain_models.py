"""
Тесты для domain моделей: Point и SqueezeResult

Покрытие:
- Point.evaluate: y = log_gamma(x), полюса
- chord_slope между двумя точками
- Immutability (frozen=True)
- Отказ от NaN/Inf (allow_inf_nan=False)
- Согласованность gap с границами
- target_is_trapped
- to_payload сериализация
- Запрет лишних полей (extra="forbid")
"""

import math

import pytest
from pydantic import ValidationError

from bohr_mollerup.core.domain import Point, SqueezeResult, chord_slope
from bohr_mollerup.core.math.errors import GammaDomainError
from bohr_mollerup.squeeze import compute_squeeze


def _point(x: float, y: float) -> Point:
    return Point(x=x, y=y)


def _result_kwargs(**overrides) -> dict:
    data = {
        "pivot": 2.0,
        "offset": 0.5,
        "prev": _point(1.0, 0.0),
        "curr": _point(2.0, 0.0),
        "next": _point(3.0, math.log(2.0)),
        "target": _point(2.5, math.lgamma(2.5)),
        "lower_slope": 0.0,
        "upper_slope": math.log(2.0),
        "lower_bound_y": 0.0,
        "upper_bound_y": 0.5 * math.log(2.0),
        "gap": 0.5 * math.log(2.0),
    }
    data.update(overrides)
    return data


class TestPoint:
    """Тесты для Point."""

    def test_evaluate(self):
        point = Point.evaluate(6.0)
        assert point.x == 6.0
        assert point.y == pytest.approx(math.log(120.0), rel=1e-12)

    def test_evaluate_pole(self):
        with pytest.raises(GammaDomainError):
            Point.evaluate(-1.0)

    def test_frozen(self):
        point = Point.evaluate(3.0)
        with pytest.raises(ValidationError):
            point.y = 1.0

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_rejected(self, bad):
        with pytest.raises(ValidationError):
            Point(x=1.0, y=bad)
        with pytest.raises(ValidationError):
            Point(x=bad, y=0.0)

    def test_value_equality(self):
        """Без идентичности: равенство по значениям."""
        assert Point.evaluate(4.5) == Point.evaluate(4.5)

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError):
            Point(x=1.0, y=0.0, z=0.0)


class TestChordSlope:
    """Наклон хорды между двумя вычисленными точками."""

    def test_unit_chord(self):
        """Хорда [2, 3]: ln 2."""
        slope = chord_slope(Point.evaluate(2.0), Point.evaluate(3.0))
        assert slope == pytest.approx(math.log(2.0), rel=1e-12)

    def test_uses_stored_values(self):
        """Наклон считается по y точек, log_gamma не вызывается повторно."""
        assert chord_slope(_point(1.0, 2.0), _point(3.0, 8.0)) == 3.0

    def test_symmetric(self):
        left, right = Point.evaluate(3.0), Point.evaluate(5.5)
        assert chord_slope(left, right) == chord_slope(right, left)

    def test_degenerate_chord(self):
        with pytest.raises(ValueError, match="distinct abscissas"):
            chord_slope(_point(2.0, 0.0), _point(2.0, 1.0))


class TestSqueezeResult:
    """Тесты для SqueezeResult."""

    def test_valid_construction(self):
        result = SqueezeResult(**_result_kwargs())
        assert result.gap == pytest.approx(0.3466, abs=1e-4)

    def test_frozen(self):
        result = SqueezeResult(**_result_kwargs())
        with pytest.raises(ValidationError):
            result.gap = 0.0

    def test_gap_must_match_bounds(self):
        with pytest.raises(ValidationError, match="gap"):
            SqueezeResult(**_result_kwargs(gap=1.0))

    @pytest.mark.parametrize("offset", [0.0, 1.0, -0.5])
    def test_offset_bounds(self, offset):
        with pytest.raises(ValidationError):
            SqueezeResult(**_result_kwargs(offset=offset))

    def test_non_finite_rejected(self):
        with pytest.raises(ValidationError):
            SqueezeResult(**_result_kwargs(lower_slope=float("nan")))

    def test_target_is_trapped(self):
        assert SqueezeResult(**_result_kwargs()).target_is_trapped

    def test_target_outside_trap(self):
        result = SqueezeResult(**_result_kwargs(target=_point(2.5, 5.0)))
        assert not result.target_is_trapped

    def test_target_on_bound_within_tolerance(self):
        upper = 0.5 * math.log(2.0)
        result = SqueezeResult(**_result_kwargs(target=_point(2.5, upper + 1e-14)))
        assert result.target_is_trapped


class TestPayload:
    """Сериализация для слоя представления."""

    def test_payload_keys(self):
        payload = compute_squeeze(5.0, 0.5).to_payload()
        assert set(payload) == {
            "pivot",
            "offset",
            "prev",
            "curr",
            "next",
            "target",
            "lower_slope",
            "upper_slope",
            "lower_bound_y",
            "upper_bound_y",
            "gap",
        }
        assert set(payload["target"]) == {"x", "y"}

    def test_payload_roundtrip(self):
        result = compute_squeeze(5.0, 0.5)
        assert SqueezeResult.model_validate(result.to_payload()) == result
