"""
theta_pde

Finite-difference core for 1D linear parabolic PDEs of the form

    dV/dt + L(V) = 0,    L(V) = d2x V_xx + dx V_x + i0 V

on a regular grid: upwind discretization into tridiagonal operators and
theta-scheme stepping, backward for pricing and forward (adjoint) for
density propagation.

    from theta_pde import RegularGrid1D, ConstantCoeffSampler1D
    from theta_pde import FiniteDiffDiscretizer1D, ThetaScheme1D
"""

import logging

from .config import NumericsConfig, SolverConfig
from .exceptions import (
    InvalidArgumentError,
    InvalidOperationError,
    NotSupportedError,
    PdeError,
    SizeMismatchError,
)
from .numerics.grids import RegularGrid1D, build_time_grid
from .numerics.pde import (
    BoundaryCondition1D,
    ConstantCoeffSampler1D,
    FiniteDiffDiscretizer1D,
    FunctionCoeffSampler1D,
    PDESolution1D,
    ThetaScheme1D,
    TridiagOperator1D,
    make_scheme,
    propagate,
    rollback,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Config
    "NumericsConfig",
    "SolverConfig",
    # Errors
    "PdeError",
    "SizeMismatchError",
    "InvalidArgumentError",
    "InvalidOperationError",
    "NotSupportedError",
    # Grid
    "RegularGrid1D",
    "build_time_grid",
    # PDE core
    "BoundaryCondition1D",
    "ConstantCoeffSampler1D",
    "FunctionCoeffSampler1D",
    "FiniteDiffDiscretizer1D",
    "TridiagOperator1D",
    "ThetaScheme1D",
    "make_scheme",
    # Drivers
    "PDESolution1D",
    "rollback",
    "propagate",
]
