"""Pytest helpers for the theta_pde library."""

from __future__ import annotations

import numpy as np
import pytest

from theta_pde import ConstantCoeffSampler1D, FiniteDiffDiscretizer1D, RegularGrid1D


@pytest.fixture
def rng():
    """Seeded RNG factory."""

    def _rng(seed: int) -> np.random.Generator:
        return np.random.default_rng(seed)

    return _rng


@pytest.fixture
def make_bands():
    """Factory for random *strictly diagonally dominant* full-length bands.

    Off-diagonals around -1 and the diagonal around 2, shifted so every row
    stays dominant (ghost entries included).
    """

    def _make(rng: np.random.Generator, n: int):
        lower = -1.0 - 0.25 + 0.5 * rng.random(n)
        upper = -1.0 - 0.25 + 0.5 * rng.random(n)
        diag = 2.0 - 0.25 + 0.5 * rng.random(n)
        # make every row strictly dominant
        diag += np.abs(lower) + np.abs(upper) - 2.0 + 0.5
        return lower, diag, upper

    return _make


@pytest.fixture
def heat_discretizer():
    """Pure diffusion ``V_t + 0.5 V_xx = 0`` on 41 nodes of [-2, 2]."""

    def _make(diffusion: float = 0.5, drift: float = 0.0, reaction: float = 0.0, **kw):
        grid = RegularGrid1D(size=41, boundary_inf=-2.0, boundary_sup=2.0)
        sampler = ConstantCoeffSampler1D(
            grid=grid, diffusion=diffusion, drift=drift, reaction=reaction
        )
        return FiniteDiffDiscretizer1D(sampler, **kw)

    return _make
