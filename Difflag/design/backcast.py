# Difflag/design/backcast.py
from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np

from ..errors import InvalidLagRangeError, PreconditionViolationError
from ..utils import to_numpy_1d
from .specs import BackcastConfig

logger = logging.getLogger(__name__)


def ma_weights(q: int, u: float) -> np.ndarray:
    """Weights for a q-term moving average: u * linear + (1 - u) * flat."""
    if q < 1:
        raise InvalidLagRangeError(f"moving average needs q >= 1, got {q}")
    ww = np.arange(1, q + 1, dtype=float)
    w1 = ww / ww.sum()
    w2 = np.full(q, 1.0 / q)
    return w1 * u + w2 * (1.0 - u)


def weighted_backcast(y: Any, config: Optional[BackcastConfig] = None, i: int = 0) -> float:
    """
    Predict the value just before index i of y by a weighted average of the q values
    starting at i, read backwards in time (the earliest value gets the largest weight
    when weights are linear).
    """
    config = config or BackcastConfig()
    y = to_numpy_1d(y)
    q = int(config.q)
    if i < 0 or len(y) < i + q:
        raise PreconditionViolationError(
            f"backcast from index {i} needs {q} values, series has {len(y)}"
        )
    yy = y[i : i + q][::-1]
    return float(np.dot(ma_weights(q, config.u), yy))


def backfill(xe: Any, config: Optional[BackcastConfig] = None) -> np.ndarray:
    """
    Replace the zero prefix of an exogenous column by backcast values.

    A 0.0 is prepended first, so the prefix always has at least one cell; the prefix
    is filled right to left (each fill may use the cell filled before it) and the
    prepended cell is dropped again. An all-zero column is returned unchanged.
    """
    xe_j = np.concatenate([[0.0], to_numpy_1d(xe, "xe")])
    nonzero = np.flatnonzero(xe_j != 0.0)
    if len(nonzero) == 0:
        return xe_j[1:]

    ii = int(nonzero[0])
    logger.debug("backfill: from index ii=%d", ii)
    for i in range(ii - 1, -1, -1):
        xe_j[i] = weighted_backcast(xe_j, config, i)
    return xe_j[1:]
