# tests/test_boundary.py
import numpy as np
import pytest

from theta_pde import BoundaryCondition1D, InvalidArgumentError, TridiagOperator1D
from theta_pde.numerics.pde import exponential, no_convexity


def _operator(n: int = 5) -> TridiagOperator1D:
    lower = np.full(n, 1.0)
    diag = np.full(n, -2.0)
    upper = np.full(n, 1.0)
    return TridiagOperator1D(lower, diag, upper)


def test_factories_return_variants() -> None:
    assert no_convexity() is BoundaryCondition1D.NO_CONVEXITY
    assert exponential() is BoundaryCondition1D.EXPONENTIAL
    assert BoundaryCondition1D("exponential") is BoundaryCondition1D.EXPONENTIAL


def test_no_convexity_folds_linear_extrapolation() -> None:
    op = _operator()
    BoundaryCondition1D.NO_CONVEXITY.set_inf(op, 0.1)
    BoundaryCondition1D.NO_CONVEXITY.set_sup(op, 0.1)

    # second difference with a linearly extrapolated ghost vanishes
    assert op.lower[0] == 0.0 and op.upper[-1] == 0.0
    assert op.diag[0] == 0.0 and op.upper[0] == 0.0
    assert op.diag[-1] == 0.0 and op.lower[-1] == 0.0
    assert op.inf_shift == 0.0 and op.sup_shift == 0.0


def test_no_convexity_annihilates_affine_functions() -> None:
    op = _operator(7)
    BoundaryCondition1D.NO_CONVEXITY.set_inf(op, 0.5)
    BoundaryCondition1D.NO_CONVEXITY.set_sup(op, 0.5)

    v = 3.0 - 0.5 * np.arange(7.0)
    np.testing.assert_allclose(op.apply(v), 0.0, atol=1e-14)


@pytest.mark.parametrize("dx", [0.05, 0.3, 2.5])
def test_exponential_coefficients(dx: float) -> None:
    op = _operator()
    BoundaryCondition1D.EXPONENTIAL.set_inf(op, dx)
    BoundaryCondition1D.EXPONENTIAL.set_sup(op, dx)

    np.testing.assert_allclose(op.diag[0], -2.0 + (2.0 + dx) / (1.0 + dx))
    np.testing.assert_allclose(op.upper[0], 1.0 - 1.0 / (1.0 + dx))
    np.testing.assert_allclose(op.diag[-1], -2.0 + (dx - 2.0) / (dx - 1.0))
    np.testing.assert_allclose(op.lower[-1], 1.0 + 1.0 / (dx - 1.0))
    assert op.inf_shift == 0.0 and op.sup_shift == 0.0


def test_exponential_ghost_satisfies_discrete_condition() -> None:
    dx = 0.2
    v0, v1 = 1.3, 0.4
    a, b = (2.0 + dx) / (1.0 + dx), -1.0 / (1.0 + dx)
    ghost = a * v0 + b * v1

    second = (v1 - 2.0 * v0 + ghost) / dx**2
    first = (v0 - ghost) / dx
    np.testing.assert_allclose(second, first, rtol=1e-12)


def test_exponential_singular_spacing_is_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        BoundaryCondition1D.EXPONENTIAL.set_sup(_operator(), 1.0)
    with pytest.raises(InvalidArgumentError):
        BoundaryCondition1D.EXPONENTIAL.set_inf(_operator(), -1.0)
