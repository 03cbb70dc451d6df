"""
Errors — Исключения и предупреждения численного ядра

Таксономия:
- GammaDomainError: аргумент попадает в полюс Γ (0, -1, -2, ...) или
  значение log|Γ| не представимо конечным float
- OffsetRangeError: offset вне открытого интервала (0, 1)
- NumericInstabilityWarning: нефатальное предупреждение о потере
  относительной точности (cancellation при больших pivot)

Ошибки локальны и синхронны: ядро не выполняет retry и не восстанавливается,
решение о clamp/игнорировании ввода принимает вызывающий слой.
"""


class SqueezeError(Exception):
    """Базовое исключение численного ядра."""

    pass


class GammaDomainError(SqueezeError, ValueError):
    """
    Аргумент вне domain log|Γ(z)|.

    Возникает для неположительных целых z (полюса Γ) и в случае, когда
    результат вычисления не является конечным float.
    """

    pass


class OffsetRangeError(SqueezeError, ValueError):
    """
    offset вне открытого интервала (0, 1).

    Геометрическая "ловушка" определена только строго между двумя
    соседними pivot.
    """

    pass


class NumericInstabilityWarning(RuntimeWarning):
    """Потеря относительной точности при вычислении gap (не фатально)."""

    pass
