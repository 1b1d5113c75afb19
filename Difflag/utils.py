# Difflag/utils.py
from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd

from .errors import PreconditionViolationError


def to_numpy_1d(y: Any, name: str = "y") -> np.ndarray:
    """Fresh float copy of a 1-D series (list, ndarray or pd.Series)."""
    if isinstance(y, pd.Series):
        y = y.to_numpy()
    arr = np.array(y, dtype=float, copy=True)
    if arr.ndim != 1:
        raise PreconditionViolationError(f"{name} must be one-dimensional, got shape {arr.shape}")
    return arr


def to_numpy_2d(x: Any, name: str = "x") -> np.ndarray:
    """Fresh float copy of a 2-D table; a 1-D input is read as a single column."""
    if isinstance(x, (pd.DataFrame, pd.Series)):
        x = x.to_numpy()
    arr = np.array(x, dtype=float, copy=True)
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise PreconditionViolationError(f"{name} must be two-dimensional, got shape {arr.shape}")
    return arr


def require_length(y: np.ndarray, min_len: int, what: str) -> None:
    if len(y) < min_len:
        raise PreconditionViolationError(
            f"{what} requires at least {min_len} values, got {len(y)}"
        )
