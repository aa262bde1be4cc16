"""Lane layouts describing how vectors map onto hardware registers.

Each supported element type is described by a :class:`LaneLayout`: the numpy
dtype, and the number of lanes that fit in one 512-bit vector register. The
chunked reduction processes ``chunk_width`` elements per step, so ``float32``
vectors advance sixteen values at a time and ``float64`` vectors eight.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable

import numpy as np

from .errors import InvalidVectorShape, UnsupportedElementType

__all__ = [
    "REGISTER_BITS",
    "LaneLayout",
    "FLOAT32_LAYOUT",
    "FLOAT64_LAYOUT",
    "SUPPORTED_LAYOUTS",
    "layout_for",
]

REGISTER_BITS = 512


@dataclass(frozen=True, slots=True)
class LaneLayout:
    """Element type paired with its register chunk width."""

    dtype: np.dtype
    chunk_width: int

    @classmethod
    def for_register(cls, dtype: object, register_bits: int = REGISTER_BITS) -> "LaneLayout":
        resolved = np.dtype(dtype)
        if resolved.kind != "f":
            raise UnsupportedElementType(dtype)
        return cls(dtype=resolved, chunk_width=register_bits // (resolved.itemsize * 8))

    @property
    def name(self) -> str:
        return self.dtype.name

    def zero(self) -> np.floating:
        """Return the additive identity as a scalar of this element type."""

        return self.dtype.type(0)

    def zeros(self) -> np.ndarray:
        """Return an accumulator with every lane set to zero."""

        return np.zeros(self.chunk_width, dtype=self.dtype)

    def load(self, values: Iterable[float] | np.ndarray) -> np.ndarray:
        """Coerce ``values`` to a one-dimensional array of this element type.

        Scalars and multi-dimensional arrays raise
        :class:`~simd_metrics.errors.InvalidVectorShape`. Arrays that already
        match are returned as read-only views, so the caller's buffer is never
        written.
        """

        array = np.asarray(values, dtype=self.dtype)
        if array.ndim != 1:
            raise InvalidVectorShape(array.shape)
        view = array.view()
        view.flags.writeable = False
        return view

    def horizontal_sum(self, accumulator: np.ndarray) -> np.floating:
        """Reduce all lanes of ``accumulator`` into one scalar."""

        total = self.zero()
        for lane in accumulator:
            total += lane
        return total


FLOAT32_LAYOUT = LaneLayout.for_register(np.float32)
FLOAT64_LAYOUT = LaneLayout.for_register(np.float64)

SUPPORTED_LAYOUTS: Dict[str, LaneLayout] = {
    FLOAT32_LAYOUT.name: FLOAT32_LAYOUT,
    FLOAT64_LAYOUT.name: FLOAT64_LAYOUT,
}


def layout_for(dtype: object) -> LaneLayout:
    """Return the lane layout registered for ``dtype``."""

    if dtype is None:
        raise UnsupportedElementType(dtype)
    try:
        key = np.dtype(dtype).name
    except TypeError as exc:
        raise UnsupportedElementType(dtype) from exc
    try:
        return SUPPORTED_LAYOUTS[key]
    except KeyError as exc:
        raise UnsupportedElementType(dtype) from exc
