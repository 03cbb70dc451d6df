"""Narrative State Machine — пошаговое изложение доказательства.

Четыре шага: SETUP → SLOPES → TRAP → LIMIT.
- Переходы next/back ограничены концами последовательности (clamp)
- Возврат из LIMIT сбрасывает pivot к начальному значению
- Pivot двигается только на шаге LIMIT (слайдер), с clamp и квантованием
- Видимость слоёв визуализации определяется текущим шагом

Машина состояний не хранит текущий шаг: состояние передаётся явно и
каждый переход возвращает новый immutable NarrativeState. Численное ядро
про этот модуль ничего не знает.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from bohr_mollerup.core.math.errors import OffsetRangeError
from bohr_mollerup.core.math.numerical_safeguards import (
    clamp,
    round_to_step,
    validate_finite,
    validate_open_interval,
)

log = logging.getLogger(__name__)


class ProofStep(str, Enum):
    """Шаг изложения доказательства (в порядке показа)."""
    SETUP = "setup"
    SLOPES = "slopes"
    TRAP = "trap"
    LIMIT = "limit"


STEP_ORDER: tuple[ProofStep, ...] = (
    ProofStep.SETUP,
    ProofStep.SLOPES,
    ProofStep.TRAP,
    ProofStep.LIMIT,
)


class Layer(str, Enum):
    """Слой визуализации, включаемый шагом."""
    CURVE = "curve"
    PIVOT_POINTS = "pivot_points"
    SLOPES = "slopes"
    TRAP = "trap"
    SLIDER = "slider"


@dataclass(frozen=True)
class StepCaption:
    """Заголовок, пояснение, подсказка и формула шага."""
    title: str
    description: str
    action: str
    formula: str


STEP_CAPTIONS: dict[ProofStep, StepCaption] = {
    ProofStep.SETUP: StepCaption(
        title="1. The Convexity Condition",
        description=(
            "The theorem requires log Γ(x) to be convex. This means the curve must bend "
            "upwards. Geometrically, the slope of the chord connecting any two points must "
            "be non-decreasing as we move to the right."
        ),
        action="Notice how the curve bends up?",
        formula="f''(x) > 0",
    ),
    ProofStep.SLOPES: StepCaption(
        title="2. The Slope Inequality",
        description=(
            "Compare the slopes at integer 'n'. The slope coming from the left (Blue) must "
            "be less than or equal to the slope going to the right (Red)."
        ),
        action="Blue Slope ≤ Red Slope",
        formula="S_{n-1, n} \\le S_{n, n+1}",
    ),
    ProofStep.TRAP: StepCaption(
        title="3. The 'Sandwich' Trap",
        description=(
            "For any point 'n+x' (Green), the value must lie between the line extended from "
            "the left and the line extended to the right. It is physically trapped between "
            "these two slopes."
        ),
        action="The green dot is stuck.",
        formula="\\text{Lower} \\le \\log \\Gamma(n+x) \\le \\text{Upper}",
    ),
    ProofStep.LIMIT: StepCaption(
        title="4. The Limit (Squeeze)",
        description=(
            "Increase 'n' to a large number. As we go further out, the relative difference "
            "between the Blue slope and Red slope vanishes. The trap closes completely."
        ),
        action="Drag the slider below!",
        formula="\\lim_{n \\to \\infty} (\\text{Upper} - \\text{Lower}) = 0",
    ),
}


@dataclass(frozen=True)
class NarrativeConfig:
    """Политика слоя представления (ядро её не читает).

    - pivot_min / pivot_max: диапазон слайдера
    - pivot_step: шаг слайдера
    - initial_pivot: pivot на старте и после возврата из LIMIT
    - narrative_offset: фиксированный x в n + x
    """
    pivot_min: float = 2.0
    pivot_max: float = 15.0
    pivot_step: float = 0.1
    initial_pivot: float = 2.0
    narrative_offset: float = 0.5

    def __post_init__(self):
        for name in ("pivot_min", "pivot_max", "pivot_step", "initial_pivot"):
            validate_finite(getattr(self, name), name)
        if self.pivot_min >= self.pivot_max:
            raise ValueError(
                f"pivot_min must be < pivot_max, got {self.pivot_min} >= {self.pivot_max}"
            )
        if self.pivot_step <= 0:
            raise ValueError(f"pivot_step must be positive, got {self.pivot_step}")
        if not self.pivot_min <= self.initial_pivot <= self.pivot_max:
            raise ValueError(
                f"initial_pivot must lie in [{self.pivot_min}, {self.pivot_max}], "
                f"got {self.initial_pivot}"
            )
        validate_open_interval(
            self.narrative_offset, "narrative_offset", 0.0, 1.0, OffsetRangeError
        )


@dataclass(frozen=True)
class NarrativeState:
    """Текущий шаг и pivot, удерживаемые вызывающей стороной."""
    step: ProofStep
    pivot: float


@dataclass(frozen=True)
class NarrativeTransitionResult:
    """Результат перехода narrative состояния."""

    new_state: NarrativeState
    previous_state: NarrativeState

    # Диагностика
    transition_occurred: bool
    transition_reason: str
    details: str = field(default="")


class NarrativeStateMachine:
    """Narrative State Machine с clamp-переходами next/back.

    Transitions:
    - next: SETUP → SLOPES → TRAP → LIMIT, на LIMIT остаётся (at_last_step)
    - back: LIMIT → TRAP → SLOPES → SETUP, на SETUP остаётся (at_first_step)
    - back из LIMIT при pivot > initial_pivot → pivot сбрасывается
    - set_pivot: только на LIMIT, иначе pivot_locked
    """

    def __init__(self, config: NarrativeConfig | None = None):
        self.config = config or NarrativeConfig()

    def initial_state(self) -> NarrativeState:
        """Стартовое состояние: SETUP, pivot = initial_pivot."""
        return NarrativeState(step=ProofStep.SETUP, pivot=self.config.initial_pivot)

    def next(self, state: NarrativeState) -> NarrativeTransitionResult:
        """Переход к следующему шагу (clamp на LIMIT)."""
        index = STEP_ORDER.index(state.step)

        if index == len(STEP_ORDER) - 1:
            return self._create_result(
                new_state=state,
                previous_state=state,
                transition_occurred=False,
                transition_reason="at_last_step",
                details=f"Already at {state.step.value}",
            )

        new_state = NarrativeState(step=STEP_ORDER[index + 1], pivot=state.pivot)
        return self._create_result(
            new_state=new_state,
            previous_state=state,
            transition_occurred=True,
            transition_reason=f"next_{state.step.value}_to_{new_state.step.value}",
            details=f"{state.step.value} → {new_state.step.value}",
        )

    def back(self, state: NarrativeState) -> NarrativeTransitionResult:
        """Возврат к предыдущему шагу (clamp на SETUP).

        При уходе с LIMIT pivot, сдвинутый выше initial_pivot, сбрасывается.
        """
        index = STEP_ORDER.index(state.step)

        if index == 0:
            return self._create_result(
                new_state=state,
                previous_state=state,
                transition_occurred=False,
                transition_reason="at_first_step",
                details=f"Already at {state.step.value}",
            )

        pivot = state.pivot
        if state.step == ProofStep.LIMIT and pivot > self.config.initial_pivot:
            pivot = self.config.initial_pivot

        new_state = NarrativeState(step=STEP_ORDER[index - 1], pivot=pivot)
        return self._create_result(
            new_state=new_state,
            previous_state=state,
            transition_occurred=True,
            transition_reason=f"back_{state.step.value}_to_{new_state.step.value}",
            details=f"{state.step.value} → {new_state.step.value}, pivot={pivot}",
        )

    def set_pivot(self, state: NarrativeState, value: float) -> NarrativeTransitionResult:
        """Новое значение слайдера pivot.

        Args:
            state: текущее состояние
            value: запрошенный pivot (clamp в [pivot_min, pivot_max], квантование по pivot_step)

        Raises:
            ValueError: если value содержит NaN/Inf
        """
        value = validate_finite(value, "pivot")

        if state.step != ProofStep.LIMIT:
            return self._create_result(
                new_state=state,
                previous_state=state,
                transition_occurred=False,
                transition_reason="pivot_locked",
                details=f"Pivot slider is only active in {ProofStep.LIMIT.value}",
            )

        pivot = clamp(
            round_to_step(value, self.config.pivot_step, origin=self.config.pivot_min),
            self.config.pivot_min,
            self.config.pivot_max,
        )

        if pivot == state.pivot:
            return self._create_result(
                new_state=state,
                previous_state=state,
                transition_occurred=False,
                transition_reason="pivot_unchanged",
                details=f"pivot={pivot}",
            )

        new_state = NarrativeState(step=state.step, pivot=pivot)
        return self._create_result(
            new_state=new_state,
            previous_state=state,
            transition_occurred=True,
            transition_reason="pivot_moved",
            details=f"pivot {state.pivot} → {pivot} (requested {value})",
        )

    @staticmethod
    def visible_layers(step: ProofStep) -> frozenset[Layer]:
        """Слои визуализации, видимые на шаге.

        - CURVE, PIVOT_POINTS: всегда
        - SLOPES: начиная со SLOPES
        - TRAP: начиная с TRAP
        - SLIDER: только на LIMIT
        """
        index = STEP_ORDER.index(step)
        layers = {Layer.CURVE, Layer.PIVOT_POINTS}

        if index >= STEP_ORDER.index(ProofStep.SLOPES):
            layers.add(Layer.SLOPES)
        if index >= STEP_ORDER.index(ProofStep.TRAP):
            layers.add(Layer.TRAP)
        if step == ProofStep.LIMIT:
            layers.add(Layer.SLIDER)

        return frozenset(layers)

    def _create_result(
        self,
        new_state: NarrativeState,
        previous_state: NarrativeState,
        transition_occurred: bool,
        transition_reason: str,
        details: str
    ) -> NarrativeTransitionResult:
        """Создание результата перехода."""
        log.debug("narrative %s: %s", transition_reason, details)
        return NarrativeTransitionResult(
            new_state=new_state,
            previous_state=previous_state,
            transition_occurred=transition_occurred,
            transition_reason=transition_reason,
            details=details
        )
