"""Squeeze — ловушка из выпуклых хорд log Γ и метрика сходимости gap.

- compute_squeeze: точки, наклоны хорд, границы и gap в pivot n и offset x
- convergence_profile / is_gap_non_increasing: сходимость gap при росте n
- integer_gap: точное значение gap для целого n
"""

from .model import (
    CONVEX_PIVOT_MIN,
    GAP_CANCELLATION_REL_TOL,
    OFFSET_MAX,
    OFFSET_MIN,
    compute_squeeze,
    convergence_profile,
    integer_gap,
    is_gap_non_increasing,
    relative_gap,
)

__all__ = [
    "CONVEX_PIVOT_MIN",
    "GAP_CANCELLATION_REL_TOL",
    "OFFSET_MAX",
    "OFFSET_MIN",
    "compute_squeeze",
    "convergence_profile",
    "integer_gap",
    "is_gap_non_increasing",
    "relative_gap",
]
