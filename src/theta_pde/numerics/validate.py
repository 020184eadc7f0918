"""
Size and slice validation shared by the tridiagonal kernels and the PDE layer.

Every array handed to an in-place kernel goes through these helpers so that
length disagreements surface as the same :class:`SizeMismatchError` whichever
code path detects them.
"""

from __future__ import annotations

import numpy as np

from ..exceptions import InvalidArgumentError, NotSupportedError, SizeMismatchError


def check_equal_size(size: int, *arrays: np.ndarray) -> None:
    """Raise unless every array is 1D with length ``size``."""
    if not arrays:
        raise SizeMismatchError("Incompatible array size: no arrays given")
    for k, arr in enumerate(arrays):
        shape = np.shape(arr)
        if len(shape) != 1:
            raise NotSupportedError(
                f"Size check only supports 1D arrays, argument {k} has shape {shape}"
            )
        if shape[0] != size:
            raise SizeMismatchError(
                f"Incompatible array size: expected {size}, argument {k} has {shape[0]}"
            )


def as_slice(x: np.ndarray, size: int, name: str = "x") -> np.ndarray:
    """Validate a caller-owned buffer that is about to be mutated in place."""
    if not isinstance(x, np.ndarray):
        raise InvalidArgumentError(
            f"{name} must be a numpy array to be updated in place, got {type(x).__name__}"
        )
    if not np.issubdtype(x.dtype, np.floating):
        raise InvalidArgumentError(f"{name} must have a floating dtype, got {x.dtype}")
    if x.ndim != 1:
        raise NotSupportedError(f"{name} must be 1D, got shape {x.shape}")
    if x.shape[0] != size:
        raise SizeMismatchError(f"{name} must have shape {(size,)} got {x.shape}")
    return x


def assert_strictly_increasing(x: np.ndarray, name: str) -> None:
    x = np.asarray(x)
    if x.ndim != 1:
        raise InvalidArgumentError(f"{name} must be 1D")
    if np.any(np.diff(x) <= 0):
        raise InvalidArgumentError(f"{name} must be strictly increasing")
