# src/theta_pde/numerics/__init__.py
"""
Numerical building blocks (advanced API).

Top-level package `theta_pde` exposes the everyday PDE API.
This subpackage exposes the grid and the raw tridiagonal kernels.
"""

from .grids import RegularGrid1D, build_time_grid
from .tridiag import (
    copy_into,
    solve_tridiag_scipy,
    solve_tridiag_thomas_inplace,
    tridiag_mv_inplace,
    tridiag_to_dense,
)
from .validate import as_slice, check_equal_size

__all__ = [
    # Grid
    "RegularGrid1D",
    "build_time_grid",
    # Tridiagonal
    "tridiag_mv_inplace",
    "solve_tridiag_thomas_inplace",
    "solve_tridiag_scipy",
    "tridiag_to_dense",
    "copy_into",
    # Validation
    "check_equal_size",
    "as_slice",
]
