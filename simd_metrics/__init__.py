"""Dot product and L1/L2 distance kernels with chunked lane reduction."""

from __future__ import annotations

from .calc import same_dimension
from .capabilities import (
    BACKEND_ENV_VAR,
    Backend,
    CapabilityReport,
    default_backend,
    probe_cpu_features,
    resolve_backend,
)
from .errors import (
    DimensionMismatch,
    InvalidVectorShape,
    MetricsError,
    UnsupportedElementType,
)
from .lanes import FLOAT32_LAYOUT, FLOAT64_LAYOUT, LaneLayout, layout_for
from .metrics import (
    FLOAT32,
    FLOAT64,
    VectorMetrics,
    dot_product,
    euclidean_distance,
    manhattan_distance,
    metrics_for,
)

__all__ = [
    "BACKEND_ENV_VAR",
    "Backend",
    "CapabilityReport",
    "default_backend",
    "probe_cpu_features",
    "resolve_backend",
    "DimensionMismatch",
    "InvalidVectorShape",
    "MetricsError",
    "UnsupportedElementType",
    "FLOAT32_LAYOUT",
    "FLOAT64_LAYOUT",
    "LaneLayout",
    "layout_for",
    "FLOAT32",
    "FLOAT64",
    "VectorMetrics",
    "dot_product",
    "euclidean_distance",
    "manhattan_distance",
    "metrics_for",
    "same_dimension",
]
