"""Theta-scheme time stepping and a small method registry.

This module provides:

1) A lightweight *stepper interface* (:class:`PdeStepSolver`) so drivers can
   advance a slice over one time interval in either direction.
2) :class:`ThetaScheme1D`, the theta-weighted stepper (explicit / CN / implicit).
3) A string-to-theta *registry* so users can write ``method="cn"`` (or
   register their own names) when building a scheme.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from ...config import SolverConfig
from ...exceptions import InvalidArgumentError
from ...typing import FloatArray
from .discretizer import OperatorDiscretizer
from .operators import DiscreteOperator

logger = logging.getLogger(__name__)


@runtime_checkable
class PdeStepSolver(Protocol):
    """Advances a caller-owned slice over ``[start, end]`` in place."""

    def backward(self, slice_: FloatArray, start: float, end: float) -> FloatArray:  # pragma: no cover
        ...

    def forward(self, slice_: FloatArray, start: float, end: float) -> FloatArray:  # pragma: no cover
        ...


@dataclass(frozen=True, slots=True)
class ThetaScheme1D:
    """Theta scheme for ``dV/dt + L(V) = 0`` with ``L`` linear.

    On ``[start, end]`` with ``dt = end - start`` the PDE is approximated by

        (V(end) - V(start))/dt + theta*L(V)(start) + (1-theta)*L(V)(end) = 0

    Common choices:
    - theta=0.0: explicit Euler
    - theta=0.5: Crank-Nicolson
    - theta=1.0: implicit Euler

    The scheme holds no per-step state: each call discretizes afresh and
    only mutates the operators it built and the slice it was given.
    """

    discretizer: OperatorDiscretizer
    theta: float = 0.5

    def __post_init__(self) -> None:
        if not (0.0 <= float(self.theta) <= 1.0):
            raise InvalidArgumentError("theta must be in [0, 1]")

    @property
    def name(self) -> str:
        if self.theta == 0.5:
            return "cn"
        if self.theta == 0.0:
            return "explicit"
        if self.theta == 1.0:
            return "implicit"
        return f"theta={self.theta:g}"

    def build_parts(
        self, start: float, end: float
    ) -> tuple[DiscreteOperator, DiscreteOperator]:
        """Return ``(implicit, explicit)`` = ``(I - theta*dt*L, I + (1-theta)*dt*L)``."""
        start = float(start)
        end = float(end)
        if not (end > start):
            raise InvalidArgumentError(f"Require end > start, got [{start}, {end}]")
        dt = end - start
        theta = float(self.theta)

        implicit_part = self.discretizer.discretize(start, end)
        explicit_part = implicit_part.copy()
        implicit_part.scale_plus_identity(-theta * dt)
        explicit_part.scale_plus_identity((1.0 - theta) * dt)
        return implicit_part, explicit_part

    def backward(self, slice_: FloatArray, start: float, end: float) -> FloatArray:
        """Pricing step: ``slice_`` holds V(end) on entry and V(start) on return.

        Solves ``(I - theta dt L) V(start) = (I + (1-theta) dt L) V(end) + dt*source``.
        """
        implicit_part, explicit_part = self.build_parts(start, end)
        logger.debug("%s backward step [%g, %g]", self.name, start, end)

        explicit_part.apply(slice_)
        if self.discretizer.has_source_term:
            slice_ += (float(end) - float(start)) * self.discretizer.source_term(start, end)
        implicit_part.solve(slice_)
        return slice_

    def forward(self, slice_: FloatArray, start: float, end: float) -> FloatArray:
        """Density step: ``slice_`` holds p(start) on entry and p(end) on return.

        Applies the transpose of the backward step map, so for any V
        ``<forward(p), V> == <p, backward(V)>``.
        """
        implicit_part, explicit_part = self.build_parts(start, end)
        logger.debug("%s forward step [%g, %g]", self.name, start, end)

        explicit_part.adjoint()
        implicit_part.adjoint()

        implicit_part.solve(slice_)
        explicit_part.apply(slice_)
        return slice_


# -----------------------------
# Registry
# -----------------------------

_METHOD_REGISTRY: dict[str, float] = {}


def register_method(
    name: str,
    theta: float,
    *,
    overwrite: bool = False,
    aliases: tuple[str, ...] = (),
) -> None:
    """Register a theta value under one or more names.

    Parameters
    ----------
    name:
        Primary key users will pass as ``method=...``.
    theta:
        Implicitness weight in ``[0, 1]``.
    overwrite:
        If False (default), raise if ``name`` or any alias already exists.
    aliases:
        Additional strings that should resolve to the same theta.
    """

    theta = float(theta)
    if not (0.0 <= theta <= 1.0):
        raise InvalidArgumentError("theta must be in [0, 1]")

    keys = (name, *aliases)
    for k in keys:
        kk = str(k).lower().strip()
        if not kk:
            raise InvalidArgumentError("Method name/alias cannot be empty")
        if (not overwrite) and (kk in _METHOD_REGISTRY):
            raise KeyError(f"Method '{kk}' is already registered")
        _METHOD_REGISTRY[kk] = theta


def available_methods() -> list[str]:
    """Return the currently registered method keys (sorted)."""

    return sorted(_METHOD_REGISTRY.keys())


def resolve_theta(method: str | float) -> float:
    """Resolve a registered method name, or a numeric theta, to a theta value."""

    if isinstance(method, (int, float)) and not isinstance(method, bool):
        theta = float(method)
        if not (0.0 <= theta <= 1.0):
            raise InvalidArgumentError("theta must be in [0, 1]")
        return theta

    key = str(method).lower().strip()
    try:
        return _METHOD_REGISTRY[key]
    except KeyError as e:
        raise InvalidArgumentError(
            f"Unknown method '{method}'. Available: {', '.join(available_methods())}"
        ) from e


def make_scheme(
    discretizer: OperatorDiscretizer,
    method: str | float | SolverConfig = "cn",
) -> ThetaScheme1D:
    """Build a :class:`ThetaScheme1D` from a method name, a theta or a config."""

    if isinstance(method, SolverConfig):
        method = method.method
    return ThetaScheme1D(discretizer=discretizer, theta=resolve_theta(method))


def _register_builtin_methods() -> None:
    register_method(
        "cn",
        0.5,
        overwrite=True,
        aliases=("crank-nicolson", "crank_nicolson", "crank"),
    )
    register_method(
        "implicit",
        1.0,
        overwrite=True,
        aliases=("backward-euler", "be", "implicit-euler"),
    )
    register_method(
        "explicit",
        0.0,
        overwrite=True,
        aliases=("forward-euler", "fe", "explicit-euler"),
    )


_register_builtin_methods()
