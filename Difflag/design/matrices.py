# Difflag/design/matrices.py
from __future__ import annotations

import logging
from functools import partial
from typing import Any, Optional, Tuple

import numpy as np
import pandas as pd

from ..errors import InvalidLagRangeError, PreconditionViolationError, SizeMismatchError
from ..utils import require_length, to_numpy_1d, to_numpy_2d
from .backcast import weighted_backcast
from .specs import SENTINEL, BackcastFn, DesignConfig

logger = logging.getLogger(__name__)

TREND_NAMES = ("const", "lin", "quad", "sin", "cos")


# ---------------------------
# Helpers
# ---------------------------
def _check_positive(value: int, name: str) -> int:
    if int(value) < 1:
        raise InvalidLagRangeError(f"{name} must be >= 1, got {value}")
    return int(value)


def _prepend_backcast(y: np.ndarray, backcast: Optional[BackcastFn]) -> np.ndarray:
    fn = backcast or weighted_backcast
    return np.concatenate([[float(fn(y))], y])


def future_target_mask(n: int, hh: int) -> np.ndarray:
    """
    Validity mask matching the response matrix of build_matrix_4ts(y, lags, hh) for a
    series of length n: cell (t, j) is True iff y[t+1+j] exists.
    """
    t = np.arange(n - 1).reshape(-1, 1)
    j = np.arange(hh).reshape(1, -1)
    return (t + 1 + j) < n


# ---------------------------
# Endogenous lag matrices
# ---------------------------
def build_matrix_4ts(
    y: Any,
    lags: int,
    hh: Optional[int] = None,
    backcast: Optional[BackcastFn] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Build the predictor matrix xx and the response yy for lag-based forecasting.

    y is prepended with one backcast value b (yb = [b] ++ y). Row t (t = 0 .. n-2) of xx
    holds yb[max(0, t+1-j)] for j = lags-1 .. 0, i.e. the window ending at y[t] in
    increasing recency, clamped at the backcast value before time 0. The first
    observation is never a target, so xx and yy have n-1 rows.

    hh=None (recursive models):  yy[t] = y[t+1]
    hh=int  (direct models):     yy[t, j] = y[t+1+j], or SENTINEL (-0.0) past the end
    """
    y = to_numpy_1d(y)
    lags = _check_positive(lags, "lags")
    require_length(y, 2, "build_matrix_4ts")

    n = len(y)
    mm = n - 1
    yb = _prepend_backcast(y, backcast)

    xx = np.empty((mm, lags), dtype=float)
    for t in range(mm):
        for j in range(lags):
            xx[t, lags - 1 - j] = yb[max(0, t + 1 - j)]

    if hh is None:
        yy = y[1:].copy()
        logger.debug("build_matrix_4ts: xx.shape=%s, yy.shape=%s", xx.shape, yy.shape)
        return xx, yy

    hh = _check_positive(hh, "hh")
    yy = np.full((mm, hh), SENTINEL, dtype=float)
    for t in range(mm):
        for j in range(hh):
            if t + 1 + j < n:
                yy[t, j] = y[t + 1 + j]
    logger.debug("build_matrix_4ts: xx.shape=%s, yy.shape=%s", xx.shape, yy.shape)
    return xx, yy


def build_design(y: Any, config: DesignConfig) -> Tuple[np.ndarray, np.ndarray]:
    """Run build_matrix_4ts from a DesignConfig."""
    backcast = config.backcast
    if backcast is None:
        backcast = partial(weighted_backcast, config=config.backcast_config)

    return build_matrix_4ts(y, config.lags, config.hh, backcast)


def build_lag_matrix(y: Any, p: int, backcast: Optional[BackcastFn] = None) -> np.ndarray:
    """
    Lag columns for lags p .. 1 (oldest first), one row per time point of y.

    Row t holds yb[max(0, t-j)] in column p-j, where yb is y itself, or y prepended with
    one backcast value when a backcast provider is given.
    """
    y = to_numpy_1d(y)
    p = _check_positive(p, "p")
    yb = _prepend_backcast(y, backcast) if backcast is not None else y

    x = np.empty((len(y), p), dtype=float)
    for t in range(len(y)):
        for j in range(1, p + 1):
            x[t, p - j] = yb[max(0, t - j)]
    return x


def build_trend_matrix(m: int, spec: int, lwave: float = 7.0) -> np.ndarray:
    """
    Trend columns for m time points:
      spec 0 none, 1 constant, 2 + linear t/m, 3 + quadratic, 4 + sine, 5 + cosine.
    lwave is the wavelength (distance between peaks) of the sine/cosine terms.
    """
    if not 0 <= spec <= len(TREND_NAMES):
        raise PreconditionViolationError(f"trend spec must be in 0..{len(TREND_NAMES)}, got {spec}")

    x = np.zeros((m, spec), dtype=float)
    t = np.arange(m, dtype=float)
    m2 = m / 2.0
    w = 2.0 * np.pi / lwave

    if spec >= 1:
        x[:, 0] = 1.0
    if spec >= 2:
        x[:, 1] = t / m
    if spec >= 3:
        x[:, 2] = (t - m2) ** 2 / m2**2
    if spec >= 4:
        x[:, 3] = np.sin(t * w)
    if spec == 5:
        x[:, 4] = np.cos(t * w)
    return x


# ---------------------------
# Exogenous lag matrices
# ---------------------------
def build_matrix_4ts_exo(ex: Any, lags: int, elag1: int, elag2: int) -> np.ndarray:
    """
    Build a predictor matrix from one exogenous series using the lag window
    [elag1, elag2) of width w = elag2 - elag1.

    Row i - elag1 (i = elag1 .. n-1) holds ex[max(0, i-elag1-j)] in column w-1-j, so the
    first elag1 responses are cut out. lags (the endogenous lag count) does not enter
    the construction; it is kept so exogenous and endogenous builders share a signature.
    """
    ex = to_numpy_1d(ex, "ex")
    w = elag2 - elag1
    if w < 1:
        raise InvalidLagRangeError(
            f"build_matrix_4ts_exo: min exo lag {elag1} must be smaller than max exo lag {elag2}"
        )
    if elag1 < 0 or elag1 > len(ex):
        raise PreconditionViolationError(
            f"build_matrix_4ts_exo: elag1={elag1} outside a series of length {len(ex)}"
        )

    xx = np.empty((len(ex) - elag1, w), dtype=float)
    for i in range(elag1, len(ex)):
        for j in range(w):
            xx[i - elag1, w - 1 - j] = ex[max(i - elag1 - j, 0)]
    return xx


def build_tensor_4ts(
    y: Any,
    ex: Any,
    lags: int,
    h: int = 1,
    el: Optional[int] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Collect and lag-expand the endogenous series and every exogenous column into a
    'time x lags x variables' input tensor, plus a 'time x horizons' target matrix.

    Variable 0 is y, variables 1..k are the columns of ex. el is the first exogenous
    lag (defaults to h), e.g. weekly exogenous data that is not itself forecasted
    cannot feed lag 1 into a week-two forecast. Rows m = len(y) - el.

      xx[i, j, 0] = y[max(0, i-el-j)]
      xx[i, j, k] = ex[max(0, i-el-j), k-1]
      yy[i, j]    = y[max(0, i-el-j)]

    NOTE: yy mirrors the backward-looking input clamp instead of indexing future values
    (y[i+j] style). This is the established behavior and is kept as is; flatten xx
    (xx.reshape(m, -1)) for models that do not take tensor input.
    """
    y = to_numpy_1d(y)
    ex = to_numpy_2d(ex, "ex")
    if len(y) != ex.shape[0]:
        raise SizeMismatchError(
            f"build_tensor_4ts: endo and exo variable sizes do not match: "
            f"len(y) = {len(y)} != ex rows = {ex.shape[0]}"
        )
    lags = _check_positive(lags, "lags")
    h = _check_positive(h, "h")
    el = h if el is None else int(el)
    if el < 0 or el > len(y):
        raise PreconditionViolationError(
            f"build_tensor_4ts: first exo lag el={el} outside a series of length {len(y)}"
        )

    m = len(y) - el
    k = ex.shape[1]
    xx = np.empty((m, lags, 1 + k), dtype=float)
    for i in range(m):
        for j in range(lags):
            src = max(i - el - j, 0)
            xx[i, j, 0] = y[src]
            xx[i, j, 1:] = ex[src, :]

    yy = np.empty((m, h), dtype=float)
    for i in range(m):
        for j in range(h):
            yy[i, j] = y[max(i - el - j, 0)]

    logger.debug("build_tensor_4ts: xx.shape=%s, yy.shape=%s", xx.shape, yy.shape)
    return xx, yy


# ---------------------------
# Labeled views
# ---------------------------
def forecast_matrix_frame(yf: Any) -> pd.DataFrame:
    """Label a forecast matrix: 'actual', 'h1' .. 'hh', 't'."""
    yf = to_numpy_2d(yf, "yf")
    if yf.shape[1] < 3:
        raise PreconditionViolationError(
            f"forecast matrix needs at least 3 columns, got {yf.shape[1]}"
        )
    h = yf.shape[1] - 2
    columns = ["actual"] + [f"h{k}" for k in range(1, h + 1)] + ["t"]
    df = pd.DataFrame(yf, columns=columns)
    df["t"] = df["t"].astype(int)
    return df
