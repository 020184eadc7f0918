# src/theta_pde/numerics/grids.py
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..exceptions import InvalidArgumentError
from ..typing import FloatArray

__all__ = [
    "RegularGrid1D",
    "build_time_grid",
]


@dataclass(frozen=True, slots=True)
class RegularGrid1D:
    """Uniform spatial grid on ``[boundary_inf, boundary_sup]`` with ``size`` nodes.

    The grid is shared by reference between a coefficient sampler and every
    operator discretized from it, so it is immutable.
    """

    size: int
    boundary_inf: float
    boundary_sup: float

    def __post_init__(self) -> None:
        if int(self.size) != self.size or self.size <= 1:
            raise InvalidArgumentError(f"size must be an integer > 1, got {self.size!r}")
        if not (self.boundary_sup >= self.boundary_inf):
            raise InvalidArgumentError(
                "Need boundary_sup >= boundary_inf, got "
                f"[{self.boundary_inf}, {self.boundary_sup}]"
            )

    @property
    def step(self) -> float:
        return (float(self.boundary_sup) - float(self.boundary_inf)) / (self.size - 1.0)

    @property
    def nodes(self) -> FloatArray:
        return np.linspace(
            float(self.boundary_inf), float(self.boundary_sup), int(self.size), dtype=float
        )


def build_time_grid(start: float, end: float, n_steps: int) -> FloatArray:
    """Uniform time grid with ``n_steps`` intervals (``n_steps + 1`` dates)."""
    if int(n_steps) != n_steps or n_steps < 1:
        raise InvalidArgumentError("n_steps must be an integer >= 1")
    if not (end > start):
        raise InvalidArgumentError("Need end > start")
    return np.linspace(float(start), float(end), int(n_steps) + 1, dtype=float)
