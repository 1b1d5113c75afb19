# Difflag/evaluation/horizons.py
from __future__ import annotations

import logging
from typing import Any, List, Union

import numpy as np
import pandas as pd

from ..errors import PreconditionViolationError
from ..utils import to_numpy_1d, to_numpy_2d
from .qof import DiagnosableModel

logger = logging.getLogger(__name__)


def test_forecast(
    model: DiagnosableModel,
    y: Any,
    yf: Any,
    p: int,
) -> Union[pd.DataFrame, np.ndarray]:
    """
    Score the forecast matrix yf against the actual series y for every horizon.

    For horizon k = 1 .. h (yf columns: actual, h1 .. hh, t) the actual tail y[p+k:] is
    paired with the first n-p-k entries of forecast column k, the model's degrees of
    freedom are reset to (p, n-p-(k+1)) and model.diagnose scores the pair.

    Returns one QoF row per horizon: a DataFrame indexed by h when the model returns
    pandas Series, otherwise a stacked 2-D array.
    """
    y = to_numpy_1d(y)
    yf = to_numpy_2d(yf, "yf")
    n = len(y)
    h = yf.shape[1] - 2
    if h < 1:
        raise PreconditionViolationError(
            f"test_forecast: forecast matrix needs at least 3 columns, got {yf.shape[1]}"
        )
    if p < 0 or p + h >= n:
        raise PreconditionViolationError(
            f"test_forecast: p={p} with {h} horizons leaves no actual values in a series of length {n}"
        )
    if yf.shape[0] < n - p - 1:
        raise PreconditionViolationError(
            f"test_forecast: forecast matrix has {yf.shape[0]} rows, need at least {n - p - 1}"
        )

    rows: List[Any] = []
    for k in range(1, h + 1):
        y_ = y[p + k :]
        yf_ = yf[: n - p - k, k]
        logger.debug("test_forecast: h=%d, len(y_)=%d, len(yf_)=%d", k, len(y_), len(yf_))
        model.reset_degrees_of_freedom(p, n - p - (k + 1))
        rows.append(model.diagnose(y_, yf_))

    if all(isinstance(r, pd.Series) for r in rows):
        return pd.DataFrame(rows, index=pd.RangeIndex(1, h + 1, name="h"))
    return np.vstack([np.asarray(r, dtype=float) for r in rows])


test_forecast.__test__ = False  # type: ignore[attr-defined]
