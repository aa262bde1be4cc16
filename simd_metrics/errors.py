"""Exception hierarchy for vector metric kernels."""

from __future__ import annotations

__all__ = [
    "MetricsError",
    "DimensionMismatch",
    "InvalidVectorShape",
    "UnsupportedElementType",
]


class MetricsError(Exception):
    """Base class for errors raised by :mod:`simd_metrics`."""


class DimensionMismatch(MetricsError, ValueError):
    """Raised when two vectors passed to one metric differ in length."""

    def __init__(self, left: int, right: int) -> None:
        super().__init__(
            f"dimension mismatch: left has {left} elements, right has {right}"
        )
        self.left = left
        self.right = right


class UnsupportedElementType(MetricsError, TypeError):
    """Raised when no lane layout exists for the requested dtype."""

    def __init__(self, dtype: object) -> None:
        super().__init__(
            f"Unsupported element type '{dtype}'. Use float32 or float64."
        )
        self.dtype = dtype


class InvalidVectorShape(MetricsError, ValueError):
    """Raised when an input is not a one-dimensional sequence."""

    def __init__(self, shape: tuple[int, ...]) -> None:
        super().__init__(
            f"Expected a one-dimensional vector, got an array of shape {shape}"
        )
        self.shape = shape
