from __future__ import annotations

from typing import Protocol, Self, runtime_checkable

import numpy as np

from ...config import DEFAULT_NUMERICS, NumericsConfig
from ...exceptions import InvalidOperationError
from ...typing import FloatArray
from ..tridiag import (
    copy_into,
    solve_tridiag_thomas_inplace,
    tridiag_mv_inplace,
    tridiag_to_dense,
)
from ..validate import as_slice, check_equal_size


@runtime_checkable
class DiscreteOperator(Protocol):
    """Linear (or affine) operator over a vector of node values.

    ``apply`` and ``solve`` mutate their argument; the remaining methods mutate
    the operator itself.
    """

    def apply(self, x: FloatArray) -> FloatArray:  # pragma: no cover
        ...

    def solve(self, y: FloatArray) -> FloatArray:  # pragma: no cover
        ...

    def adjoint(self) -> None:  # pragma: no cover
        ...

    def scale_plus_identity(self, a: float) -> None:  # pragma: no cover
        ...

    def copy(self) -> Self:  # pragma: no cover
        ...


class TridiagOperator1D:
    """Affine tridiagonal operator ``y = M x + shift``.

    ``M`` is stored as three bands of the system size N (see
    :mod:`theta_pde.numerics.tridiag` for the layout). ``shift`` is zero except
    for ``inf_shift`` on the first component and ``sup_shift`` on the last.

    The ghost coefficients ``lower[0]`` and ``upper[N-1]`` are what the
    finite-difference stencil attaches to the nodes just outside the grid.
    They are ignored by :meth:`apply` / :meth:`solve` and are eliminated by
    :meth:`set_inf_boundary_condition` / :meth:`set_sup_boundary_condition`.

    The bands are owned by the operator and mutated in place by
    :meth:`scale_plus_identity`, :meth:`adjoint` and the boundary folding.
    """

    __slots__ = ("lower", "diag", "upper", "inf_shift", "sup_shift", "numerics")

    def __init__(
        self,
        lower: FloatArray,
        diag: FloatArray,
        upper: FloatArray,
        inf_shift: float = 0.0,
        sup_shift: float = 0.0,
        *,
        numerics: NumericsConfig = DEFAULT_NUMERICS,
    ) -> None:
        lower = np.asarray(lower, dtype=float)
        diag = np.asarray(diag, dtype=float)
        upper = np.asarray(upper, dtype=float)
        check_equal_size(int(np.shape(lower)[0]) if lower.ndim == 1 else -1, lower, diag, upper)

        self.lower = lower
        self.diag = diag
        self.upper = upper
        self.inf_shift = float(inf_shift)
        self.sup_shift = float(sup_shift)
        self.numerics = numerics

    @property
    def size(self) -> int:
        return int(self.diag.shape[0])

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(size={self.size}, "
            f"inf_shift={self.inf_shift!r}, sup_shift={self.sup_shift!r})"
        )

    # --- linear algebra on a caller-owned vector ---------------------------

    def apply(self, x: FloatArray) -> FloatArray:
        """In place ``x <- M x + shift``; returns ``x``."""
        n = self.size
        x = as_slice(x, n)
        tridiag_mv_inplace(self.lower, self.diag, self.upper, x)
        if n > 0:
            x[0] += self.inf_shift
            x[n - 1] += self.sup_shift
        return x

    def solve(self, y: FloatArray) -> FloatArray:
        """In place ``y <- M^{-1} (y - shift)``; returns ``y``."""
        n = self.size
        y = as_slice(y, n, name="y")
        if n > 0:
            y[0] -= self.inf_shift
            y[n - 1] -= self.sup_shift
        return solve_tridiag_thomas_inplace(
            self.lower, self.diag, self.upper, y, pivot_tol=self.numerics.pivot_tol
        )

    # --- in-place operator algebra -----------------------------------------

    def scale_plus_identity(self, a: float) -> None:
        """M <- a*M + I (the boundary shifts are scaled by ``a`` too)."""
        a = float(a)
        self.lower *= a
        self.upper *= a
        self.diag *= a
        self.diag += 1.0
        self.inf_shift *= a
        self.sup_shift *= a

    def adjoint(self) -> None:
        """Transpose M in place.

        Row i of the transpose holds column i of M, so the bands trade places
        with a one-node offset: ``lower'[i] = upper[i-1]`` and
        ``upper'[i] = lower[i+1]``. The two ghost coefficients trade places as
        well, which makes the operation exactly self-inverse.
        """
        if self.inf_shift != 0.0 or self.sup_shift != 0.0:
            raise InvalidOperationError(
                "Transpose is not defined with non zero boundary shift"
            )
        old_lower = self.lower.copy()
        copy_into(self.lower, np.roll(self.upper, 1))
        copy_into(self.upper, np.roll(old_lower, -1))

    def copy(self) -> TridiagOperator1D:
        return TridiagOperator1D(
            self.lower.copy(),
            self.diag.copy(),
            self.upper.copy(),
            self.inf_shift,
            self.sup_shift,
            numerics=self.numerics,
        )

    # --- ghost-point boundary folding --------------------------------------

    def set_inf_boundary_condition(self, a: float, b: float, c: float) -> None:
        """Fold the affine ghost constraint ``V[-1] = a*V[0] + b*V[1] + c`` into row 0."""
        # row 0: (diag[0] + l0*a) V[0] + (upper[0] + l0*b) V[1] + l0*c
        l0 = float(self.lower[0])
        self.lower[0] = 0.0
        self.diag[0] += l0 * a
        self.upper[0] += l0 * b
        self.inf_shift += l0 * c

    def set_sup_boundary_condition(self, a: float, b: float, c: float) -> None:
        """Fold the affine ghost constraint ``V[N] = a*V[N-1] + b*V[N-2] + c`` into row N-1."""
        # row N-1: (diag[N-1] + uN*a) V[N-1] + (lower[N-1] + uN*b) V[N-2] + uN*c
        n = self.size - 1
        u_n = float(self.upper[n])
        self.upper[n] = 0.0
        self.diag[n] += u_n * a
        self.lower[n] += u_n * b
        self.sup_shift += u_n * c

    def to_dense(self) -> FloatArray:
        """Dense matrix of M (the affine shift is not represented)."""
        return tridiag_to_dense(self.lower, self.diag, self.upper)
