"""Dot product, Manhattan and squared Euclidean metrics for float vectors."""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Union

import numpy as np

from .calc import same_dimension
from .capabilities import Backend, default_backend, resolve_backend
from .lanes import FLOAT32_LAYOUT, FLOAT64_LAYOUT, LaneLayout, layout_for
from .operators import (
    ABSOLUTE_DIFFERENCE,
    MULTIPLY,
    SQUARED_DIFFERENCE,
    ElementwiseOperator,
)
from .reduction import chunked_reduce, scalar_reduce

__all__ = [
    "VectorMetrics",
    "FLOAT32",
    "FLOAT64",
    "metrics_for",
    "dot_product",
    "manhattan_distance",
    "euclidean_distance",
]

Vector = Union[Iterable[float], np.ndarray]


class VectorMetrics:
    """Pairwise vector metrics for one element type.

    Inputs are coerced to the layout's dtype and never modified. Inputs that
    are not one-dimensional raise :class:`~simd_metrics.errors.InvalidVectorShape`
    and vectors of different lengths raise
    :class:`~simd_metrics.errors.DimensionMismatch`; nothing is flattened,
    truncated or padded.

    The vector and scalar backends sum in different orders, so their results
    may differ in the last bits for the same input.
    """

    def __init__(
        self, layout: LaneLayout, *, backend: Optional[Backend | str] = None
    ) -> None:
        self.layout = layout
        self._backend = None if backend is None else resolve_backend(backend)

    def __repr__(self) -> str:
        backend = self._backend.value if self._backend is not None else "default"
        return f"VectorMetrics(dtype={self.layout.name}, backend={backend})"

    @property
    def backend(self) -> Backend:
        if self._backend is not None:
            return self._backend
        return default_backend()

    def with_backend(self, backend: Backend | str) -> "VectorMetrics":
        """Return a copy of these metrics pinned to ``backend``."""

        return VectorMetrics(self.layout, backend=backend)

    def _reduce(self, a: Vector, b: Vector, operator: ElementwiseOperator) -> np.floating:
        left = self.layout.load(a)
        right = self.layout.load(b)
        same_dimension(left, right)
        if self.backend is Backend.VECTOR:
            return chunked_reduce(left, right, operator, self.layout)
        return scalar_reduce(left, right, operator, self.layout)

    def dot_product(self, a: Vector, b: Vector) -> np.floating:
        """Return ``sum(a[i] * b[i])``; ``0`` for empty vectors."""

        return self._reduce(a, b, MULTIPLY)

    def manhattan_distance(self, a: Vector, b: Vector) -> np.floating:
        """Return the L1 distance ``sum(|a[i] - b[i]|)``."""

        return self._reduce(a, b, ABSOLUTE_DIFFERENCE)

    def euclidean_distance(self, a: Vector, b: Vector) -> np.floating:
        """Return the squared Euclidean distance ``sum((a[i] - b[i]) ** 2)``.

        This is the squared form, not its square root. Callers needing the
        true Euclidean distance must take the square root themselves.
        """

        return self._reduce(a, b, SQUARED_DIFFERENCE)


FLOAT32 = VectorMetrics(FLOAT32_LAYOUT)
FLOAT64 = VectorMetrics(FLOAT64_LAYOUT)

_BY_DTYPE: Dict[str, VectorMetrics] = {
    FLOAT32.layout.name: FLOAT32,
    FLOAT64.layout.name: FLOAT64,
}


def metrics_for(dtype: object = np.float32) -> VectorMetrics:
    """Return the shared :class:`VectorMetrics` instance for ``dtype``."""

    return _BY_DTYPE[layout_for(dtype).name]


def dot_product(a: Vector, b: Vector, *, dtype: object = np.float32) -> np.floating:
    return metrics_for(dtype).dot_product(a, b)


def manhattan_distance(a: Vector, b: Vector, *, dtype: object = np.float32) -> np.floating:
    return metrics_for(dtype).manhattan_distance(a, b)


def euclidean_distance(a: Vector, b: Vector, *, dtype: object = np.float32) -> np.floating:
    """Squared Euclidean distance; take the square root for the true distance."""

    return metrics_for(dtype).euclidean_distance(a, b)
