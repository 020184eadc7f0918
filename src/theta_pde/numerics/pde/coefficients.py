"""PDE coefficient samplers.

A sampler describes the spatial operator of ``dV/dt + L(V) = 0`` with

    L(V) = d2x(x,t) V_xx + dx(x,t) V_x + i0(x,t) V

by returning, for one time sub-interval, the three coefficients sampled on the
nodes of a :class:`~theta_pde.numerics.grids.RegularGrid1D`. New models plug in
by implementing :class:`PdeCoeffSampler1D`; nothing needs to subclass anything.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol, cast, runtime_checkable

import numpy as np

from ...exceptions import InvalidArgumentError
from ...typing import CoeffTriple, FloatArray, ScalarXT
from ..grids import RegularGrid1D

SampleAt = Literal["start", "mid", "end"]


@runtime_checkable
class PdeCoeffSampler1D(Protocol):
    """Capability interface: coefficient triple for a time interval on a fixed grid."""

    @property
    def grid(self) -> RegularGrid1D:  # pragma: no cover
        ...

    def fill_coeff(self, start: float, end: float) -> CoeffTriple:  # pragma: no cover
        """Return fresh ``(d2x, dx, i0)`` arrays of length ``grid.size``."""
        ...


@dataclass(frozen=True, slots=True)
class ConstantCoeffSampler1D:
    """Space- and time-independent coefficients (e.g. Black-Scholes in log-spot).

    For log-spot Black-Scholes: ``diffusion = 0.5*sigma**2``,
    ``drift = r - q - 0.5*sigma**2``, ``reaction = -r``.
    """

    grid: RegularGrid1D
    diffusion: float
    drift: float = 0.0
    reaction: float = 0.0

    def fill_coeff(self, start: float, end: float) -> CoeffTriple:
        n = int(self.grid.size)
        return (
            np.full(n, float(self.diffusion)),
            np.full(n, float(self.drift)),
            np.full(n, float(self.reaction)),
        )


def _eval_xt(fn: ScalarXT, x: FloatArray, t: float) -> FloatArray:
    """Evaluate fn(x,t) on an array x.

    We attempt a vectorized call first; if that fails with a type or value
    error, or returns an unexpected shape, we fall back to scalar evaluation.
    """

    try:
        arr = np.asarray(fn(x, t), dtype=float)
    except (TypeError, ValueError):
        arr = None
    if arr is not None:
        if arr.shape == x.shape:
            return cast(FloatArray, arr)
        if arr.ndim == 0:
            return cast(FloatArray, np.full(x.shape, float(arr)))

    out = np.empty_like(x, dtype=float)
    for i, xi in enumerate(np.asarray(x, dtype=float)):
        out[i] = float(fn(float(xi), float(t)))
    return cast(FloatArray, out)


@dataclass(frozen=True, slots=True)
class FunctionCoeffSampler1D:
    """Coefficients given as functions ``fn(x, t)``, frozen over each interval.

    Every function is evaluated on the grid nodes at a single time per
    sub-interval: its start, midpoint (default) or end.
    """

    grid: RegularGrid1D
    d2x: ScalarXT
    dx: ScalarXT
    i0: ScalarXT
    at: SampleAt = "mid"

    def __post_init__(self) -> None:
        if self.at not in ("start", "mid", "end"):
            raise InvalidArgumentError(f"at must be 'start', 'mid' or 'end', got {self.at!r}")

    def sample_time(self, start: float, end: float) -> float:
        if self.at == "start":
            return float(start)
        if self.at == "end":
            return float(end)
        return 0.5 * (float(start) + float(end))

    def fill_coeff(self, start: float, end: float) -> CoeffTriple:
        x = self.grid.nodes
        t = self.sample_time(start, end)
        return (
            _eval_xt(self.d2x, x, t),
            _eval_xt(self.dx, x, t),
            _eval_xt(self.i0, x, t),
        )
