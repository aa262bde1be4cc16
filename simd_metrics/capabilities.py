"""Hardware capability probe and backend selection.

numpy compiles its ufunc loops for several instruction sets and picks the
best one at import time. The dispatch table it exposes tells us whether the
running CPU has usable vector registers. The probe runs once per process and
its result is cached; the backend preference is read from the
``SIMD_METRICS_BACKEND`` environment variable the first time it is needed.
"""

from __future__ import annotations

import enum
import importlib
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional

__all__ = [
    "BACKEND_ENV_VAR",
    "VECTOR_FEATURES",
    "Backend",
    "CapabilityReport",
    "probe_cpu_features",
    "resolve_backend",
    "default_backend",
]

logger = logging.getLogger(__name__)

BACKEND_ENV_VAR = "SIMD_METRICS_BACKEND"

# x86, ARM, POWER and IBM Z feature names as reported by numpy's dispatcher.
VECTOR_FEATURES: tuple[str, ...] = (
    "AVX512F",
    "AVX2",
    "AVX",
    "SSE2",
    "ASIMD",
    "NEON",
    "VSX",
    "VX",
)

_FEATURE_TABLE_MODULES: tuple[str, ...] = (
    "numpy._core._multiarray_umath",
    "numpy.core._multiarray_umath",
)


class Backend(str, enum.Enum):
    """Reduction path used by :class:`~simd_metrics.metrics.VectorMetrics`."""

    VECTOR = "vector"
    SCALAR = "scalar"


@dataclass(frozen=True, slots=True)
class CapabilityReport:
    """Vector features detected on the running CPU."""

    features: tuple[str, ...]
    source: Optional[str]

    @property
    def has_vector_unit(self) -> bool:
        """Return ``True`` when at least one vector feature was detected."""

        return bool(self.features)

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serialisable view of the report."""

        return {
            "features": list(self.features),
            "source": self.source,
            "has_vector_unit": self.has_vector_unit,
        }


def _load_feature_table() -> tuple[Mapping[str, bool], Optional[str]]:
    for module_name in _FEATURE_TABLE_MODULES:
        try:
            module = importlib.import_module(module_name)
        except ImportError:
            logger.debug("CPU feature table not available from %s", module_name)
            continue
        table = getattr(module, "__cpu_features__", None)
        if isinstance(table, Mapping):
            return table, module_name
    return {}, None


@lru_cache(maxsize=None)
def probe_cpu_features() -> CapabilityReport:
    """Inspect numpy's runtime dispatch table for vector instruction sets."""

    table, source = _load_feature_table()
    features = tuple(name for name in VECTOR_FEATURES if table.get(name))
    report = CapabilityReport(features=features, source=source)
    if source is None:
        logger.debug("No CPU feature table found; assuming scalar hardware")
    return report


def resolve_backend(preference: str | Backend) -> Backend:
    """Map ``"auto"``, ``"vector"`` or ``"scalar"`` to a :class:`Backend`."""

    if isinstance(preference, Backend):
        return preference
    normalised = str(preference).strip().lower()
    if normalised == "auto":
        if probe_cpu_features().has_vector_unit:
            return Backend.VECTOR
        return Backend.SCALAR
    try:
        return Backend(normalised)
    except ValueError as exc:
        raise ValueError(
            f"Unsupported backend '{preference}'. Use one of: auto, vector, scalar."
        ) from exc


@lru_cache(maxsize=None)
def default_backend() -> Backend:
    """Return the process-wide backend, resolved once from the environment."""

    preference = os.environ.get(BACKEND_ENV_VAR, "auto")
    backend = resolve_backend(preference)
    logger.info(
        "Using %s reduction path (%s=%s)", backend.value, BACKEND_ENV_VAR, preference
    )
    return backend
