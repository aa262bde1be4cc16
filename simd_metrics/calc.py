"""Shape checks shared by the metric kernels."""

from __future__ import annotations

import logging
from typing import Sized

from .errors import DimensionMismatch

logger = logging.getLogger(__name__)

__all__ = ["same_dimension"]


def same_dimension(a: Sized, b: Sized) -> None:
    """Raise :class:`DimensionMismatch` unless ``a`` and ``b`` have equal length."""

    left, right = len(a), len(b)
    if left != right:
        logger.debug("Rejecting vector pair with lengths %d and %d", left, right)
        raise DimensionMismatch(left, right)
