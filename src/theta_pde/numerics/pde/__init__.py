"""Finite-difference theta-scheme solver for 1D linear parabolic PDEs.

Supported PDE form (1D, regular grid):

    dV/dt + d2x(x,t) V_xx + dx(x,t) V_x + i0(x,t) V = 0

Data flow per time interval: sampler -> discretizer -> tridiagonal operator
(boundary rows folded) -> theta scheme stepping a caller-owned slice.
"""

from .boundary import BoundaryCondition1D, exponential, no_convexity
from .coefficients import ConstantCoeffSampler1D, FunctionCoeffSampler1D, PdeCoeffSampler1D
from .discretizer import FiniteDiffDiscretizer1D, OperatorDiscretizer, upwind_tridiag_coeffs
from .methods import (
    PdeStepSolver,
    ThetaScheme1D,
    available_methods,
    make_scheme,
    register_method,
    resolve_theta,
)
from .operators import DiscreteOperator, TridiagOperator1D
from .solver import PDESolution1D, propagate, rollback

__all__ = [
    # Boundary conditions
    "BoundaryCondition1D",
    "no_convexity",
    "exponential",
    # Coefficients
    "PdeCoeffSampler1D",
    "ConstantCoeffSampler1D",
    "FunctionCoeffSampler1D",
    # Operators / discretization
    "DiscreteOperator",
    "TridiagOperator1D",
    "OperatorDiscretizer",
    "FiniteDiffDiscretizer1D",
    "upwind_tridiag_coeffs",
    # Methods / registry
    "PdeStepSolver",
    "ThetaScheme1D",
    "register_method",
    "available_methods",
    "resolve_theta",
    "make_scheme",
    # Drivers
    "PDESolution1D",
    "rollback",
    "propagate",
]
