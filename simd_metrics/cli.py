"""Diagnostic command line for the metric kernels.

Prints the detected CPU capabilities as JSON. When ``--left`` and ``--right``
are given, also evaluates ``--metric`` on both reduction paths so the two can
be compared on the running machine.
"""

from __future__ import annotations

import argparse
import json
import logging
from typing import Dict, List, Sequence

from .capabilities import Backend, default_backend, probe_cpu_features
from .errors import MetricsError
from .lanes import SUPPORTED_LAYOUTS
from .metrics import metrics_for

logger = logging.getLogger(__name__)

METRICS = ("dot", "manhattan", "euclidean")

_METHODS: Dict[str, str] = {
    "dot": "dot_product",
    "manhattan": "manhattan_distance",
    "euclidean": "euclidean_distance",
}


def _parse_vector(raw: str) -> List[float]:
    entries = [segment.strip() for segment in raw.split(",") if segment.strip()]
    try:
        return [float(entry) for entry in entries]
    except ValueError as exc:
        raise ValueError(f"Vector components must be numbers: '{raw}'") from exc


def build_report(
    *,
    metric: str | None = None,
    left: Sequence[float] | None = None,
    right: Sequence[float] | None = None,
    dtype: str = "float32",
) -> Dict[str, object]:
    """Return the capability report, with metric values when vectors are given."""

    report: Dict[str, object] = {
        "capabilities": probe_cpu_features().to_dict(),
        "default_backend": default_backend().value,
    }
    if left is None or right is None:
        return report
    if metric not in _METHODS:
        raise ValueError(f"Unsupported metric '{metric}'. Use one of: {', '.join(METRICS)}.")

    metrics = metrics_for(dtype)
    results: Dict[str, float] = {}
    for backend in Backend:
        method = getattr(metrics.with_backend(backend), _METHODS[metric])
        results[backend.value] = float(method(left, right))
    report.update(
        {
            "metric": metric,
            "dtype": metrics.layout.name,
            "chunk_width": metrics.layout.chunk_width,
            "results": results,
        }
    )
    return report


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Report vector capabilities and evaluate metric kernels"
    )
    parser.add_argument("--metric", choices=METRICS, default="dot")
    parser.add_argument(
        "--dtype",
        choices=sorted(SUPPORTED_LAYOUTS),
        default="float32",
        help="Element type used for both vectors (default: float32)",
    )
    parser.add_argument("--left", help="Comma separated components of vector A")
    parser.add_argument("--right", help="Comma separated components of vector B")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level, logging.WARNING))

    if (args.left is None) != (args.right is None):
        logger.error("--left and --right must be given together")
        return 2

    try:
        left = _parse_vector(args.left) if args.left is not None else None
        right = _parse_vector(args.right) if args.right is not None else None
        report = build_report(
            metric=args.metric, left=left, right=right, dtype=args.dtype
        )
    except (MetricsError, ValueError) as exc:
        logger.error("Metric evaluation failed: %s", exc)
        return 2

    print(json.dumps(report, indent=2))
    return 0
