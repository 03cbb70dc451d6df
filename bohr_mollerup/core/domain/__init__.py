"""
Domain models and value objects.

Contains immutable curve points and squeeze results.
"""

from bohr_mollerup.core.domain.squeeze import Point, SqueezeResult, chord_slope

__all__ = [
    "Point",
    "SqueezeResult",
    "chord_slope",
]
