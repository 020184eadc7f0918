from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

import numpy as np

from ...config import DEFAULT_NUMERICS, NumericsConfig
from ...exceptions import NotSupportedError
from ...typing import FloatArray
from ..grids import RegularGrid1D
from ..validate import check_equal_size
from .boundary import BoundaryCondition1D
from .coefficients import PdeCoeffSampler1D
from .operators import DiscreteOperator, TridiagOperator1D

logger = logging.getLogger(__name__)


@runtime_checkable
class OperatorDiscretizer(Protocol):
    """Turns the continuous spatial operator into a discrete one per time interval."""

    @property
    def grid(self) -> RegularGrid1D:  # pragma: no cover
        ...

    @property
    def has_source_term(self) -> bool:  # pragma: no cover
        ...

    def discretize(self, start: float, end: float) -> DiscreteOperator:  # pragma: no cover
        ...

    def source_term(self, start: float, end: float) -> FloatArray:  # pragma: no cover
        ...


def upwind_tridiag_coeffs(
    d2x: FloatArray,
    dx: FloatArray,
    i0: FloatArray,
    step: float,
) -> tuple[FloatArray, FloatArray, FloatArray]:
    """
    Tridiagonal coefficients (lower, diag, upper) of

        L(V) = d2x V_xx + dx V_x + i0 V

    on a uniform grid with spacing ``step``.

    The first-derivative stencil is picked node by node. Where the drift
    dominates the diffusion (|dx|*h > 2*d2x) a one-sided difference is taken
    on the side the drift points to, which keeps the off-diagonals
    non-negative; elsewhere the central difference is used.

    lower[0] and upper[-1] are the coefficients of the nodes just outside the
    grid and are left for a boundary condition to fold away.
    """
    d2x = np.asarray(d2x, dtype=float)
    dx = np.asarray(dx, dtype=float)
    i0 = np.asarray(i0, dtype=float)

    h = float(step)
    h2 = h * h

    drift = dx * h
    diffusion = 2.0 * d2x

    # Masks for flow direction
    neg = drift < -diffusion
    pos = (~neg) & (drift > diffusion)

    # central difference everywhere, then overwrite the upwinded nodes
    lower = 0.5 * (-drift + diffusion) / h2
    diag = -diffusion / h2 + i0
    upper = 0.5 * (drift + diffusion) / h2

    # 1. strong negative drift: backward difference
    lower[neg] = (-drift[neg] + 0.5 * diffusion[neg]) / h2
    diag[neg] = (drift[neg] - diffusion[neg]) / h2 + i0[neg]
    upper[neg] = 0.5 * diffusion[neg] / h2

    # 2. strong positive drift: forward difference
    lower[pos] = 0.5 * diffusion[pos] / h2
    diag[pos] = (-drift[pos] - diffusion[pos]) / h2 + i0[pos]
    upper[pos] = (drift[pos] + 0.5 * diffusion[pos]) / h2

    return lower, diag, upper


class FiniteDiffDiscretizer1D:
    """Upwind finite-difference discretizer over a sampler's regular grid.

    Parameters
    ----------
    sampler:
        Source of the ``(d2x, dx, i0)`` coefficients; its grid fixes the
        operator size and spacing.
    inf_bc, sup_bc:
        Optional boundary conditions folded into the first/last row of every
        operator (with ``dx = grid.step``). When omitted the boundary rows are
        returned exactly as the stencil builds them.
    numerics:
        Solver guards attached to the produced operators.
    """

    __slots__ = ("sampler", "inf_bc", "sup_bc", "numerics")

    def __init__(
        self,
        sampler: PdeCoeffSampler1D,
        inf_bc: BoundaryCondition1D | None = None,
        sup_bc: BoundaryCondition1D | None = None,
        *,
        numerics: NumericsConfig = DEFAULT_NUMERICS,
    ) -> None:
        self.sampler = sampler
        self.inf_bc = None if inf_bc is None else BoundaryCondition1D(inf_bc)
        self.sup_bc = None if sup_bc is None else BoundaryCondition1D(sup_bc)
        self.numerics = numerics

    @property
    def grid(self) -> RegularGrid1D:
        return self.sampler.grid

    @property
    def has_source_term(self) -> bool:
        return False

    def discretize(self, start: float, end: float) -> TridiagOperator1D:
        grid = self.grid
        n = int(grid.size)

        d2x, dx, i0 = self.sampler.fill_coeff(float(start), float(end))
        d2x = np.asarray(d2x, dtype=float)
        dx = np.asarray(dx, dtype=float)
        i0 = np.asarray(i0, dtype=float)
        check_equal_size(n, d2x, dx, i0)

        step = grid.step
        lower, diag, upper = upwind_tridiag_coeffs(d2x, dx, i0, step)
        if logger.isEnabledFor(logging.DEBUG):
            drift = dx * step
            n_up = int(np.count_nonzero(np.abs(drift) > 2.0 * d2x))
            logger.debug(
                "discretize [%g, %g]: %d nodes, %d upwinded", start, end, n, n_up
            )

        op = TridiagOperator1D(lower, diag, upper, numerics=self.numerics)
        if self.inf_bc is not None:
            self.inf_bc.set_inf(op, step)
        if self.sup_bc is not None:
            self.sup_bc.set_sup(op, step)
        return op

    def source_term(self, start: float, end: float) -> FloatArray:
        raise NotSupportedError(
            "FiniteDiffDiscretizer1D does not provide a source term"
        )
