from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from theta_pde.exceptions import InvalidArgumentError

StoreMode = Literal["all", "final"]


@dataclass(frozen=True, slots=True)
class NumericsConfig:
    """Numerical guards for the tridiagonal solver.

    ``pivot_tol`` is the smallest pivot magnitude the Thomas algorithm accepts;
    ``0.0`` disables the check and leaves stability to the caller (diagonal
    dominance of the upwind stencil).
    """

    pivot_tol: float = 0.0

    def __post_init__(self) -> None:
        if not self.pivot_tol >= 0.0:
            raise InvalidArgumentError("pivot_tol must be >= 0")


@dataclass(frozen=True, slots=True)
class SolverConfig:
    method: str | float = "cn"
    store: StoreMode = "all"

    def __post_init__(self) -> None:
        if self.store not in ("all", "final"):
            raise InvalidArgumentError(
                f"store must be 'all' or 'final', got {self.store!r}"
            )
        if isinstance(self.method, float) and not (0.0 <= self.method <= 1.0):
            raise InvalidArgumentError("theta must be in [0, 1]")


DEFAULT_NUMERICS: NumericsConfig = NumericsConfig()
