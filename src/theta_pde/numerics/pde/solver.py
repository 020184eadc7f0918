from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, cast

import numpy as np

from ...config import SolverConfig, StoreMode
from ...exceptions import InvalidArgumentError, SizeMismatchError
from ...typing import FloatArray
from ..grids import RegularGrid1D
from ..validate import assert_strictly_increasing
from .methods import ThetaScheme1D

logger = logging.getLogger(__name__)

Direction = Literal["backward", "forward"]


@dataclass(frozen=True, slots=True)
class PDESolution1D:
    """Slices produced by a driver.

    With ``store="all"``, ``u[k]`` is the slice at ``times[k]`` (shape
    ``(Nt, Nx)``) whatever the stepping direction. With ``store="final"`` only
    the last slice computed is kept (shape ``(1, Nx)``).
    """

    grid: RegularGrid1D
    times: FloatArray
    u: FloatArray
    method: str
    direction: Direction

    @property
    def u_final(self) -> FloatArray:
        """Last slice in stepping order: V(times[0]) backward, p(times[-1]) forward."""
        if self.u.shape[0] == 1:
            return cast(FloatArray, self.u[0])
        if self.direction == "backward":
            return cast(FloatArray, self.u[0])
        return cast(FloatArray, self.u[-1])


def _resolve_store(store: StoreMode | None, cfg: SolverConfig | None) -> StoreMode:
    if store is not None:
        if store not in ("all", "final"):
            raise InvalidArgumentError(f"store must be 'all' or 'final', got {store!r}")
        return store
    return (cfg or SolverConfig()).store


def _prepare(
    scheme: ThetaScheme1D, values: FloatArray, times: FloatArray
) -> tuple[RegularGrid1D, FloatArray, FloatArray]:
    grid = scheme.discretizer.grid
    t = np.asarray(times, dtype=float)
    assert_strictly_increasing(t, "times")
    if t.shape[0] < 2:
        raise InvalidArgumentError("Need at least 2 time points")

    u = np.array(values, dtype=float)  # own copy, stepped in place
    if u.shape != (grid.size,):
        raise SizeMismatchError(f"values must have shape {(grid.size,)} got {u.shape}")
    return grid, t, u


def rollback(
    scheme: ThetaScheme1D,
    terminal: FloatArray,
    times: FloatArray,
    *,
    store: StoreMode | None = None,
    cfg: SolverConfig | None = None,
) -> PDESolution1D:
    """Step ``terminal`` (the value at ``times[-1]``) backward to ``times[0]``."""
    grid, t, u = _prepare(scheme, terminal, times)
    mode = _resolve_store(store, cfg)
    Nt = int(t.shape[0])

    U = np.empty((Nt if mode == "all" else 1, grid.size), dtype=float)
    U[-1] = u
    logger.debug("rollback: %d steps on %d nodes with %s", Nt - 1, grid.size, scheme.name)

    for n in range(Nt - 2, -1, -1):
        scheme.backward(u, float(t[n]), float(t[n + 1]))
        if mode == "all":
            U[n] = u
        else:
            U[0] = u

    return PDESolution1D(grid=grid, times=t, u=U, method=scheme.name, direction="backward")


def propagate(
    scheme: ThetaScheme1D,
    initial: FloatArray,
    times: FloatArray,
    *,
    store: StoreMode | None = None,
    cfg: SolverConfig | None = None,
) -> PDESolution1D:
    """Step ``initial`` (the density at ``times[0]``) forward to ``times[-1]``."""
    grid, t, u = _prepare(scheme, initial, times)
    mode = _resolve_store(store, cfg)
    Nt = int(t.shape[0])

    U = np.empty((Nt if mode == "all" else 1, grid.size), dtype=float)
    U[0] = u
    logger.debug("propagate: %d steps on %d nodes with %s", Nt - 1, grid.size, scheme.name)

    for n in range(Nt - 1):
        scheme.forward(u, float(t[n]), float(t[n + 1]))
        if mode == "all":
            U[n + 1] = u
        else:
            U[0] = u

    return PDESolution1D(grid=grid, times=t, u=U, method=scheme.name, direction="forward")
