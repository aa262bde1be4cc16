"""Chunked and scalar reductions over a pair of vectors.

Both functions assume the inputs were produced by :meth:`LaneLayout.load` and
have equal length; :mod:`simd_metrics.metrics` performs that check.
"""

from __future__ import annotations

import numpy as np

from .lanes import LaneLayout
from .operators import ElementwiseOperator

__all__ = ["split_tail", "chunked_reduce", "scalar_reduce"]


def split_tail(length: int, chunk_width: int) -> int:
    """Return the index where the partial trailing chunk begins."""

    if chunk_width <= 0:
        raise ValueError("Chunk width must be positive.")
    return length - (length % chunk_width)


def _scalar_sum(
    a: np.ndarray, b: np.ndarray, operator: ElementwiseOperator, layout: LaneLayout
) -> np.floating:
    total = layout.zero()
    for p, q in zip(a, b):
        total += operator(p, q)
    return total


def chunked_reduce(
    a: np.ndarray, b: np.ndarray, operator: ElementwiseOperator, layout: LaneLayout
) -> np.floating:
    """Reduce full chunks with lane arithmetic and the tail with scalars.

    Every full chunk pair is combined by ``operator`` across all lanes at
    once and added into a zero-initialised lane accumulator. The accumulator
    is then summed horizontally. Elements past the last full chunk are
    handled one at a time and added to that result.
    """

    width = layout.chunk_width
    size = split_tail(len(a), width)

    accumulator = layout.zeros()
    for start in range(0, size, width):
        stop = start + width
        accumulator += operator(a[start:stop], b[start:stop])
    chunk_sum = layout.horizontal_sum(accumulator)

    tail_sum = _scalar_sum(a[size:], b[size:], operator, layout)
    return layout.dtype.type(chunk_sum + tail_sum)


def scalar_reduce(
    a: np.ndarray, b: np.ndarray, operator: ElementwiseOperator, layout: LaneLayout
) -> np.floating:
    """Apply ``operator`` element by element and sum the results."""

    return _scalar_sum(a, b, operator, layout)
