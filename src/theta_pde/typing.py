from __future__ import annotations

from collections.abc import Callable
from typing import TypeAlias

import numpy as np
from numpy.typing import NDArray

# typing only
FloatArray: TypeAlias = NDArray[np.floating]
ArrayLike: TypeAlias = float | np.ndarray | np.floating
CoeffTriple: TypeAlias = tuple[FloatArray, FloatArray, FloatArray]

# coefficient functions fn(x, t), scalar or NumPy-vectorized
XTInput: TypeAlias = float | NDArray[np.floating]
XTOutput: TypeAlias = float | NDArray[np.floating]
ScalarXT: TypeAlias = Callable[[XTInput, float], XTOutput]

# Runtime types
FloatDType = np.float64  # runtime dtype only
