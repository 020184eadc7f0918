# src/theta_pde/numerics/tridiag.py
from __future__ import annotations

from typing import cast

import numpy as np
from numpy.typing import NDArray

from ..exceptions import NotSupportedError
from .validate import as_slice, check_equal_size

__all__ = [
    "tridiag_mv_inplace",
    "solve_tridiag_thomas_inplace",
    "solve_tridiag_scipy",
    "tridiag_to_dense",
    "copy_into",
]

# Band convention (all bands have the system size N):
#
#   M = ( d_0 u_0  0    0  )
#       ( l_1 d_1 u_1   0  )
#       (  0  l_2 d_2  u_2 )
#       (  0   0  l_3  d_3 )
#
# l_0 and u_{N-1} sit outside the matrix (ghost-point coefficients) and are
# never read by the kernels below.


def tridiag_mv_inplace(
    lower: NDArray[np.floating],
    diag: NDArray[np.floating],
    upper: NDArray[np.floating],
    x: NDArray[np.floating],
) -> NDArray[np.floating]:
    """
    In-place product x <- M x.

    The update streams left to right keeping the pre-update value of the
    previous component in a single scalar, so no second buffer is needed:

      x[0]   = d_0*x_0 + u_0*x_1
      x[i]   = l_i*x_{i-1} + d_i*x_i + u_i*x_{i+1}     for 1<=i<=N-2
      x[N-1] = l_{N-1}*x_{N-2} + d_{N-1}*x_{N-1}

    For N==0 this is a no-op, for N==1 x[0] *= d_0. Returns x.
    """
    n = int(np.shape(x)[0]) if np.ndim(x) == 1 else -1
    x = as_slice(x, n)
    check_equal_size(n, lower, diag, upper)

    if n == 0:
        return x
    if n == 1:
        x[0] *= diag[0]
        return x

    x_prev = x[0]
    x[0] = diag[0] * x[0] + upper[0] * x[1]
    for i in range(1, n - 1):
        tmp = x[i]
        x[i] = lower[i] * x_prev + diag[i] * x[i] + upper[i] * x[i + 1]
        x_prev = tmp
    x[n - 1] = lower[n - 1] * x_prev + diag[n - 1] * x[n - 1]
    return x


def solve_tridiag_thomas_inplace(
    lower: NDArray[np.floating],
    diag: NDArray[np.floating],
    upper: NDArray[np.floating],
    y: NDArray[np.floating],
    *,
    pivot_tol: float = 0.0,
) -> NDArray[np.floating]:
    """
    In-place solve y <- M^{-1} y with the Thomas algorithm.

    Notes:
    - No pivoting. Callers are expected to pass diagonally dominant bands.
    - With pivot_tol > 0, raises np.linalg.LinAlgError on a pivot smaller than
      pivot_tol in magnitude; with the default 0.0 nothing is checked.
    - The bands are left untouched; one scratch array holds the modified
      upper coefficients c'.
    """
    n = int(np.shape(y)[0]) if np.ndim(y) == 1 else -1
    y = as_slice(y, n, name="y")
    check_equal_size(n, lower, diag, upper)

    if n == 0:
        return y

    def _pivot(i: int, denom: float) -> float:
        if pivot_tol > 0.0 and not abs(denom) >= pivot_tol:
            raise np.linalg.LinAlgError(f"Near-zero pivot at row {i}")
        return denom

    if n == 1:
        y[0] /= _pivot(0, diag[0])
        return y

    c_prime = np.empty(n, dtype=float)

    # Forward sweep
    d0 = _pivot(0, diag[0])
    c_prime[0] = upper[0] / d0
    y[0] = y[0] / d0
    for i in range(1, n):
        m = 1.0 / _pivot(i, diag[i] - lower[i] * c_prime[i - 1])
        if i < n - 1:
            c_prime[i] = upper[i] * m
        y[i] = (y[i] - lower[i] * y[i - 1]) * m

    # Back substitution, i = N-2 .. 0
    for i in range(n - 2, -1, -1):
        y[i] = y[i] - c_prime[i] * y[i + 1]
    return y


def solve_tridiag_scipy(
    lower: NDArray[np.floating],
    diag: NDArray[np.floating],
    upper: NDArray[np.floating],
    rhs: NDArray[np.floating],
) -> NDArray[np.floating]:
    """
    Solve M x = rhs with SciPy's banded LU solver and return a new array.

    Reference implementation for the Thomas kernel (uses partial pivoting).
    SciPy is imported lazily.
    """
    from scipy.linalg import (
        solve_banded,  # local import to avoid import-time dependency
    )

    rhs = np.asarray(rhs, dtype=float)
    n = int(rhs.shape[0]) if rhs.ndim == 1 else -1
    check_equal_size(n, lower, diag, upper, rhs)

    if n == 0:
        return cast(NDArray[np.floating], rhs.copy())

    ab = np.zeros((3, n), dtype=float)
    ab[0, 1:] = np.asarray(upper, dtype=float)[:-1]
    ab[1, :] = np.asarray(diag, dtype=float)
    ab[2, :-1] = np.asarray(lower, dtype=float)[1:]

    res = solve_banded((1, 1), ab, rhs)
    # scipy stubs often return Any; cast back to an NDArray
    return cast(NDArray[np.floating], np.asarray(res))


def tridiag_to_dense(
    lower: NDArray[np.floating],
    diag: NDArray[np.floating],
    upper: NDArray[np.floating],
) -> NDArray[np.floating]:
    """Dense (N, N) matrix of the bands; ghost coefficients are dropped."""
    diag = np.asarray(diag, dtype=float)
    n = int(diag.shape[0]) if diag.ndim == 1 else -1
    check_equal_size(n, lower, diag, upper)

    A = np.zeros((n, n), dtype=float)
    A[np.arange(n), np.arange(n)] = diag
    A[np.arange(1, n), np.arange(n - 1)] = np.asarray(lower, dtype=float)[1:]
    A[np.arange(n - 1), np.arange(1, n)] = np.asarray(upper, dtype=float)[:-1]
    return A


def copy_into(dst: NDArray[np.floating], src: NDArray[np.floating]) -> None:
    """Overwrite ``dst`` element-wise with ``src`` (1D only)."""
    if np.ndim(dst) != 1 or np.ndim(src) != 1:
        raise NotSupportedError("copy_into is only defined for 1D arrays")
    check_equal_size(int(np.shape(dst)[0]), src)
    dst[:] = src
