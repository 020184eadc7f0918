# tests/test_operators.py
import numpy as np
import pytest

from theta_pde import NumericsConfig, TridiagOperator1D
from theta_pde.exceptions import InvalidOperationError, SizeMismatchError
from theta_pde.numerics.pde.operators import DiscreteOperator


def make_operator(rng, make_bands, n: int, seed: int = 0) -> TridiagOperator1D:
    lower, diag, upper = make_bands(rng(seed), n)
    return TridiagOperator1D(lower, diag, upper)


def test_operator_satisfies_protocol(rng, make_bands) -> None:
    assert isinstance(make_operator(rng, make_bands, 4), DiscreteOperator)


def test_constructor_rejects_unequal_bands() -> None:
    with pytest.raises(SizeMismatchError):
        TridiagOperator1D(np.zeros(3), np.ones(4), np.zeros(4))


def test_apply_adds_boundary_shifts(rng, make_bands) -> None:
    op = make_operator(rng, make_bands, 6, seed=1)
    op.inf_shift = 0.7
    op.sup_shift = -1.3
    x = rng(2).normal(size=6)

    expected = op.to_dense() @ x
    expected[0] += 0.7
    expected[-1] += -1.3

    out = op.apply(x)
    assert out is x
    np.testing.assert_allclose(x, expected, rtol=1e-12, atol=1e-12)


def test_solve_inverts_affine_apply(rng, make_bands) -> None:
    op = make_operator(rng, make_bands, 25, seed=3)
    op.inf_shift = 2.0
    op.sup_shift = 0.5
    x_ref = rng(4).normal(size=25)

    x = x_ref.copy()
    op.apply(x)
    op.solve(x)
    np.testing.assert_allclose(x, x_ref, rtol=1e-10, atol=1e-12)


def test_empty_operator_is_noop() -> None:
    op = TridiagOperator1D(np.array([]), np.array([]), np.array([]))
    x = np.array([], dtype=float)
    assert op.apply(x).shape == (0,)
    assert op.solve(x).shape == (0,)


def test_size_one_operator() -> None:
    op = TridiagOperator1D(np.array([np.nan]), np.array([4.0]), np.array([np.nan]))
    x = np.array([3.0])
    op.apply(x)
    assert x[0] == 12.0
    op.solve(x)
    assert x[0] == 3.0


def test_apply_rejects_wrong_size(rng, make_bands) -> None:
    op = make_operator(rng, make_bands, 5)
    with pytest.raises(SizeMismatchError):
        op.apply(np.zeros(4))
    with pytest.raises(SizeMismatchError):
        op.solve(np.zeros(6))


def test_scale_plus_identity_zero_gives_identity(rng, make_bands) -> None:
    op = make_operator(rng, make_bands, 8, seed=5)
    op.inf_shift = 1.5
    op.scale_plus_identity(0.0)

    np.testing.assert_array_equal(op.diag, np.ones(8))
    np.testing.assert_array_equal(op.lower, np.zeros(8))
    np.testing.assert_array_equal(op.upper, np.zeros(8))
    assert op.inf_shift == 0.0
    assert op.sup_shift == 0.0


def test_scale_plus_identity_is_affine(rng, make_bands) -> None:
    op = make_operator(rng, make_bands, 8, seed=6)
    op.sup_shift = 2.0
    ref = op.copy()

    op.scale_plus_identity(-0.25)
    np.testing.assert_allclose(op.to_dense(), -0.25 * ref.to_dense() + np.eye(8))
    assert op.sup_shift == -0.5

    # scaling back by 1/a does not undo it: the identity is added twice
    op.scale_plus_identity(-4.0)
    assert not np.allclose(op.to_dense(), ref.to_dense())


def test_copy_is_independent(rng, make_bands) -> None:
    op = make_operator(rng, make_bands, 5, seed=7)
    op.inf_shift = 0.3
    cp = op.copy()

    assert cp.inf_shift == 0.3
    for a, b in ((op.lower, cp.lower), (op.diag, cp.diag), (op.upper, cp.upper)):
        assert not np.shares_memory(a, b)
        np.testing.assert_array_equal(a, b)

    cp.scale_plus_identity(3.0)
    assert not np.array_equal(op.diag, cp.diag)
    assert op.inf_shift == 0.3


def test_copy_keeps_numerics_config() -> None:
    cfg = NumericsConfig(pivot_tol=1e-9)
    op = TridiagOperator1D(np.zeros(2), np.ones(2), np.zeros(2), numerics=cfg)
    assert op.copy().numerics is cfg


@pytest.mark.parametrize("n", [1, 2, 3, 17])
def test_adjoint_is_dense_transpose_and_involution(rng, n: int) -> None:
    g = rng(100 + n)
    lower, diag, upper = g.normal(size=(3, n))
    op = TridiagOperator1D(lower.copy(), diag.copy(), upper.copy())
    dense = op.to_dense()

    op.adjoint()
    np.testing.assert_array_equal(op.to_dense(), dense.T)
    np.testing.assert_array_equal(op.diag, diag)

    op.adjoint()
    np.testing.assert_array_equal(op.lower, lower)
    np.testing.assert_array_equal(op.diag, diag)
    np.testing.assert_array_equal(op.upper, upper)


def test_adjoint_keeps_band_storage(rng, make_bands) -> None:
    op = make_operator(rng, make_bands, 6)
    lower_buf, upper_buf = op.lower, op.upper
    op.adjoint()
    assert op.lower is lower_buf
    assert op.upper is upper_buf


def test_adjoint_with_shift_is_invalid(rng, make_bands) -> None:
    op = make_operator(rng, make_bands, 4)
    op.inf_shift = 1e-3
    with pytest.raises(InvalidOperationError):
        op.adjoint()

    op.inf_shift = 0.0
    op.sup_shift = -2.0
    with pytest.raises(InvalidOperationError):
        op.adjoint()


def test_inf_boundary_folding(rng) -> None:
    g = rng(11)
    lower, diag, upper = g.normal(size=(3, 6))
    op = TridiagOperator1D(lower.copy(), diag.copy(), upper.copy())
    a, b, c = 2.0, -0.5, 0.25

    op.set_inf_boundary_condition(a, b, c)
    assert op.lower[0] == 0.0
    assert op.diag[0] == diag[0] + lower[0] * a
    assert op.upper[0] == upper[0] + lower[0] * b
    assert op.inf_shift == lower[0] * c
    np.testing.assert_array_equal(op.diag[1:], diag[1:])

    # folded row 0 equals the stencil row with the ghost value substituted
    v = g.normal(size=6)
    ghost = a * v[0] + b * v[1] + c
    expected = diag[0] * v[0] + upper[0] * v[1] + lower[0] * ghost
    y = op.apply(v.copy())
    np.testing.assert_allclose(y[0], expected, rtol=1e-12, atol=1e-12)


def test_sup_boundary_folding(rng) -> None:
    g = rng(12)
    lower, diag, upper = g.normal(size=(3, 6))
    op = TridiagOperator1D(lower.copy(), diag.copy(), upper.copy())
    a, b, c = 1.5, 0.5, -1.0

    op.set_sup_boundary_condition(a, b, c)
    assert op.upper[-1] == 0.0
    assert op.diag[-1] == diag[-1] + upper[-1] * a
    assert op.lower[-1] == lower[-1] + upper[-1] * b
    assert op.sup_shift == upper[-1] * c

    v = g.normal(size=6)
    ghost = a * v[-1] + b * v[-2] + c
    expected = lower[-1] * v[-2] + diag[-1] * v[-1] + upper[-1] * ghost
    y = op.apply(v.copy())
    np.testing.assert_allclose(y[-1], expected, rtol=1e-12, atol=1e-12)


def test_pivot_guard_from_config() -> None:
    singular = TridiagOperator1D(
        np.array([0.0, 1.0]),
        np.array([1.0, 1.0]),
        np.array([1.0, 0.0]),
        numerics=NumericsConfig(pivot_tol=1e-12),
    )
    with pytest.raises(np.linalg.LinAlgError):
        singular.solve(np.ones(2))
