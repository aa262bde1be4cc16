"""Elementwise operators that define each metric.

The callables accept either lane arrays or numpy scalars and return the same
kind of value, so the chunked and scalar paths share one definition.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, TypeVar

import numpy as np

__all__ = [
    "ElementwiseOperator",
    "MULTIPLY",
    "ABSOLUTE_DIFFERENCE",
    "SQUARED_DIFFERENCE",
]

T = TypeVar("T", np.ndarray, np.floating)


@dataclass(frozen=True, slots=True)
class ElementwiseOperator:
    """Named per-position operation applied before the sum."""

    name: str
    apply: Callable[[Any, Any], Any]

    def __call__(self, left: T, right: T) -> T:
        return self.apply(left, right)


def _multiply(left: T, right: T) -> T:
    return left * right


def _absolute_difference(left: T, right: T) -> T:
    return np.abs(left - right)


def _squared_difference(left: T, right: T) -> T:
    diff = left - right
    return diff * diff


MULTIPLY = ElementwiseOperator("multiply", _multiply)
ABSOLUTE_DIFFERENCE = ElementwiseOperator("absolute_difference", _absolute_difference)
SQUARED_DIFFERENCE = ElementwiseOperator("squared_difference", _squared_difference)
