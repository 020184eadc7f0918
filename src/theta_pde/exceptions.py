class PdeError(Exception):
    """Base class for every error raised by :mod:`theta_pde`."""


class SizeMismatchError(PdeError, ValueError):
    """Raised when arrays that must share a length N disagree.

    Covers operator bands against each other, a solution slice against the
    operator it is applied to, and sampled coefficients against the grid.
    Nothing is ever truncated or padded.
    """


class InvalidArgumentError(PdeError, ValueError):
    """Raised for invalid construction or call arguments.

    Examples: a grid with fewer than two nodes or inverted bounds, a theta
    outside ``[0, 1]``, a time interval with ``start >= end``, or a slice that
    cannot be mutated in place as floating point data.
    """


class InvalidOperationError(PdeError, RuntimeError):
    """Raised when an operation is numerically undefined for the operator state.

    The transpose of an affine operator with a non-zero boundary shift is not a
    linear transpose, so :meth:`TridiagOperator1D.adjoint` refuses it.
    """


class NotSupportedError(PdeError, NotImplementedError):
    """Raised by features that are deliberately unavailable.

    The source (forcing) term of the finite-difference discretizer, size checks
    on 2D arrays and matrix fill-from-matrix all fail loudly rather than
    approximate.
    """
