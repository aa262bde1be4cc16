from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from simd_metrics.errors import InvalidVectorShape  # noqa: E402  -- imported after sys.path mutation
from simd_metrics.lanes import (  # noqa: E402
    FLOAT32_LAYOUT,
    FLOAT64_LAYOUT,
    LaneLayout,
)
from simd_metrics.operators import (  # noqa: E402
    ABSOLUTE_DIFFERENCE,
    MULTIPLY,
    SQUARED_DIFFERENCE,
    ElementwiseOperator,
)
from simd_metrics.reduction import (  # noqa: E402
    chunked_reduce,
    scalar_reduce,
    split_tail,
)

TOLERANCE = {"float32": 1e-5, "float64": 1e-9}

OPERATORS = [MULTIPLY, ABSOLUTE_DIFFERENCE, SQUARED_DIFFERENCE]


def _naive(a: list[float], b: list[float], operator: ElementwiseOperator) -> float:
    if operator is MULTIPLY:
        return sum(p * q for p, q in zip(a, b))
    if operator is ABSOLUTE_DIFFERENCE:
        return sum(abs(p - q) for p, q in zip(a, b))
    return sum((p - q) ** 2 for p, q in zip(a, b))


def _pair(layout: LaneLayout, length: int, seed: int = 11) -> tuple[np.ndarray, np.ndarray]:
    rng = np.random.default_rng(seed)
    a = rng.uniform(0.5, 2.0, size=length)
    b = rng.uniform(-2.0, -0.5, size=length)
    return layout.load(a), layout.load(b)


def test_chunk_widths_follow_register_size() -> None:
    assert FLOAT32_LAYOUT.chunk_width == 16
    assert FLOAT64_LAYOUT.chunk_width == 8
    assert LaneLayout.for_register(np.float32, register_bits=256).chunk_width == 8


@pytest.mark.parametrize(
    "length, width, expected",
    [(0, 16, 0), (15, 16, 0), (16, 16, 16), (17, 16, 16), (33, 8, 32)],
)
def test_split_tail(length: int, width: int, expected: int) -> None:
    assert split_tail(length, width) == expected


def test_split_tail_rejects_non_positive_width() -> None:
    with pytest.raises(ValueError):
        split_tail(4, 0)


def test_horizontal_sum_adds_every_lane() -> None:
    accumulator = np.arange(8, dtype=np.float64)
    assert FLOAT64_LAYOUT.horizontal_sum(accumulator) == 28.0
    assert FLOAT32_LAYOUT.zeros().shape == (16,)


@pytest.mark.parametrize("values", [2.5, [[1.0, 2.0]], np.zeros((2, 2, 2))])
def test_load_rejects_non_vectors(values: object) -> None:
    with pytest.raises(InvalidVectorShape):
        FLOAT64_LAYOUT.load(values)


def test_load_returns_read_only_view() -> None:
    source = np.arange(4, dtype=np.float32)
    loaded = FLOAT32_LAYOUT.load(source)
    assert not loaded.flags.writeable
    assert source.flags.writeable


@pytest.mark.parametrize("layout", [FLOAT32_LAYOUT, FLOAT64_LAYOUT], ids=lambda layout: layout.name)
@pytest.mark.parametrize("operator", OPERATORS, ids=lambda op: op.name)
@pytest.mark.parametrize("offset", [-1, 0, 1])
def test_chunked_reduce_handles_tail(
    layout: LaneLayout, operator: ElementwiseOperator, offset: int
) -> None:
    length = layout.chunk_width + offset
    a, b = _pair(layout, length)
    expected = _naive(a.tolist(), b.tolist(), operator)
    result = chunked_reduce(a, b, operator, layout)
    assert result == pytest.approx(expected, rel=TOLERANCE[layout.name])


@pytest.mark.parametrize("layout", [FLOAT32_LAYOUT, FLOAT64_LAYOUT], ids=lambda layout: layout.name)
@pytest.mark.parametrize("operator", OPERATORS, ids=lambda op: op.name)
@pytest.mark.parametrize("length", [1, 7, 8, 9, 15, 16, 17, 31, 32, 33, 100])
def test_vector_and_scalar_paths_agree(
    layout: LaneLayout, operator: ElementwiseOperator, length: int
) -> None:
    a, b = _pair(layout, length, seed=length)
    vector = chunked_reduce(a, b, operator, layout)
    scalar = scalar_reduce(a, b, operator, layout)
    assert vector == pytest.approx(scalar, rel=TOLERANCE[layout.name])


def test_tail_only_input_uses_scalar_arithmetic() -> None:
    a = FLOAT32_LAYOUT.load([1.0, 2.0, 3.0])
    b = FLOAT32_LAYOUT.load([4.0, 5.0, 6.0])
    assert chunked_reduce(a, b, MULTIPLY, FLOAT32_LAYOUT) == 32.0


def test_reductions_of_empty_inputs_are_zero() -> None:
    empty = FLOAT64_LAYOUT.load([])
    assert chunked_reduce(empty, empty, SQUARED_DIFFERENCE, FLOAT64_LAYOUT) == 0.0
    assert scalar_reduce(empty, empty, SQUARED_DIFFERENCE, FLOAT64_LAYOUT) == 0.0


@pytest.mark.parametrize("operator", OPERATORS, ids=lambda op: op.name)
def test_operators_agree_on_arrays_and_scalars(operator: ElementwiseOperator) -> None:
    left = np.array([1.5, -2.0], dtype=np.float32)
    right = np.array([-0.5, 3.0], dtype=np.float32)
    lanes = operator(left, right)
    assert lanes.dtype == np.float32
    for index in range(2):
        scalar = operator(left[index], right[index])
        assert isinstance(scalar, np.float32)
        assert scalar == lanes[index]
