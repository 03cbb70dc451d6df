"""
Contract Validation Module

Модуль для валидации JSON контрактов между численным ядром и слоем
представления.
"""

from .validators import (
    SQUEEZE_RESULT_CONTRACT,
    ContractValidator,
    validate_squeeze_result,
)

__all__ = [
    "ContractValidator",
    "SQUEEZE_RESULT_CONTRACT",
    "validate_squeeze_result",
]
