"""Narrative — пошаговое изложение доказательства Бора–Моллерупа.

- ProofStep: SETUP / SLOPES / TRAP / LIMIT
- NarrativeStateMachine: clamp-переходы next/back и слайдер pivot
- NarrativeConfig: политика слоя представления (диапазон и шаг слайдера, offset)
"""

from .state_machine import (
    STEP_CAPTIONS,
    STEP_ORDER,
    Layer,
    NarrativeConfig,
    NarrativeState,
    NarrativeStateMachine,
    NarrativeTransitionResult,
    ProofStep,
    StepCaption,
)

__all__ = [
    "STEP_CAPTIONS",
    "STEP_ORDER",
    "Layer",
    "NarrativeConfig",
    "NarrativeState",
    "NarrativeStateMachine",
    "NarrativeTransitionResult",
    "ProofStep",
    "StepCaption",
]
