from __future__ import annotations

from enum import Enum

from ...exceptions import InvalidArgumentError
from .operators import TridiagOperator1D


class BoundaryCondition1D(str, Enum):
    """Continuous boundary behavior folded into the first/last operator row.

    Each variant turns its condition into an affine ghost-point relation
    (``V[-1]`` in terms of ``V[0], V[1]``, or ``V[N]`` in terms of
    ``V[N-1], V[N-2]``) and hands it to the operator's folding methods.
    """

    NO_CONVEXITY = "no_convexity"  # d2V/dx2 = 0
    EXPONENTIAL = "exponential"  # d2V/dx2 = dV/dx

    def set_inf(self, op: TridiagOperator1D, dx: float) -> None:
        dx = float(dx)
        if self is BoundaryCondition1D.NO_CONVEXITY:
            # V[-1] = 2 V[0] - V[1]
            op.set_inf_boundary_condition(2.0, -1.0, 0.0)
            return
        # second difference at node 0 equal to the backward first difference
        if dx == -1.0:
            raise InvalidArgumentError("Exponential inf boundary is singular for dx == -1")
        op.set_inf_boundary_condition((2.0 + dx) / (1.0 + dx), -1.0 / (1.0 + dx), 0.0)

    def set_sup(self, op: TridiagOperator1D, dx: float) -> None:
        dx = float(dx)
        if self is BoundaryCondition1D.NO_CONVEXITY:
            # V[N] = 2 V[N-1] - V[N-2]
            op.set_sup_boundary_condition(2.0, -1.0, 0.0)
            return
        # second difference at node N-1 equal to the forward first difference
        if dx == 1.0:
            raise InvalidArgumentError("Exponential sup boundary is singular for dx == 1")
        op.set_sup_boundary_condition((dx - 2.0) / (dx - 1.0), 1.0 / (dx - 1.0), 0.0)


def no_convexity() -> BoundaryCondition1D:
    """Boundary condition d2V/dx2 = 0 (linear extrapolation)."""
    return BoundaryCondition1D.NO_CONVEXITY


def exponential() -> BoundaryCondition1D:
    """Boundary condition d2V/dx2 = dV/dx."""
    return BoundaryCondition1D.EXPONENTIAL
