# Difflag/differencing/transforms.py
from __future__ import annotations

import logging
import operator
from typing import Any, Union

import numpy as np

from ..errors import PreconditionViolationError, SizeMismatchError
from ..utils import require_length, to_numpy_1d, to_numpy_2d
from .orders import DiffOrder

logger = logging.getLogger(__name__)

OrderLike = Union[int, DiffOrder]


# ---------------------------
# Forward differencing
# ---------------------------
def diff(y: Any, d: OrderLike = 1) -> np.ndarray:
    """
    Take the d-th simple difference of the position series y.

    A new array (length n-d) is returned even for d=0, so the original is preserved.
    Element i of the result is the d-th finite difference ending at original index i+d.
    """
    order = DiffOrder.coerce(d, "diff")
    y = to_numpy_1d(y)
    require_length(y, order + 1, f"diff of order {int(order)}")
    logger.debug("diff: len(y)=%d, d=%d", len(y), order)

    if order is DiffOrder.ORDER0:
        return y
    if order is DiffOrder.ORDER1:
        return y[1:] - y[:-1]
    return y[2:] - 2.0 * y[1:-1] + y[:-2]


def undiff(v: Any, y0: float) -> np.ndarray:
    """
    Undifference a velocity series by adding each difference to the previous value.
    Inverse of diff(., 1) given the first original value y0; result has length len(v)+1.
    """
    v = to_numpy_1d(v, "v")
    logger.debug("undiff: len(v)=%d, y0=%s", len(v), y0)

    y = np.empty(len(v) + 1, dtype=float)
    y[0] = float(y0)
    for t in range(1, len(y)):
        y[t] = v[t - 1] + y[t - 1]
    return y


# ---------------------------
# Backforming (anchored to actuals)
# ---------------------------
def backform(vp: Any, y: Any, d: OrderLike = 1) -> np.ndarray:
    """
    Transform predicted differenced values back to the original scale using the
    ACTUAL series y as anchor at every step (rather than the model's own accumulated
    predictions, as undiff does), so prediction errors do not compound.

    The result always has len(y) values; the first d are taken verbatim from y.
    For d=0 a copy of vp is returned.
    """
    order = DiffOrder.coerce(d, "backform")
    vp = to_numpy_1d(vp, "vp")
    y = to_numpy_1d(y)
    logger.debug("backform: len(vp)=%d, len(y)=%d, d=%d", len(vp), len(y), order)

    if order is DiffOrder.ORDER0:
        return vp

    n = len(y)
    require_length(y, order, f"backform of order {int(order)}")
    if len(vp) < n - order:
        raise SizeMismatchError(
            f"backform: need at least len(y)-d = {n - order} predicted values, got {len(vp)}"
        )

    yp = np.empty(n, dtype=float)
    if order is DiffOrder.ORDER1:
        yp[0] = y[0]
        yp[1:] = vp[: n - 1] + y[: n - 1]
        return yp

    yp[0], yp[1] = y[0], y[1]
    yp[2:] = vp[: n - 2] + 2.0 * y[1 : n - 1] - y[: n - 2]
    return yp


def transform_back(vf: Any, y: Any, d: OrderLike) -> np.ndarray:
    """
    Back-transform every horizon column of a (differenced) forecast matrix.

    Layout of vf and of the result: column 0 actual, columns 1..h forecasts for
    horizons 1..h, last column the time index. The actual series is extended by one
    trailing zero so the last row has a defined anchor; column 0 of the result holds
    that extended series.
    """
    order = DiffOrder.coerce(d, "transform_back")
    vf = to_numpy_2d(vf, "vf")
    y = to_numpy_1d(y)

    rows, cols = vf.shape
    if cols < 3:
        raise PreconditionViolationError(
            f"transform_back: forecast matrix needs actual, >=1 horizon and time columns, got {cols} columns"
        )
    yy = np.append(y, 0.0)
    if len(yy) != rows:
        raise SizeMismatchError(
            f"transform_back: len(y)+1 = {len(yy)} must equal the forecast matrix row count {rows}"
        )

    h = cols - 2
    logger.debug("transform_back: rows=%d, h=%d, d=%d", rows, h, order)

    yf = np.zeros((rows, cols), dtype=float)
    yf[:, 0] = yy
    for k in range(1, h + 1):
        yf[:, k] = backform(vf[:, k], yy, order)
    yf[:, h + 1] = np.arange(rows, dtype=float)
    return yf


def transform_back_from(vh: Any, y: Any, d: OrderLike, t: int) -> np.ndarray:
    """
    Back-transform the horizon vector vh of differenced forecasts made from time t,
    anchored to the d actual values immediately preceding t (y[t-d .. t-1]).
    Returns one value per horizon.
    """
    order = DiffOrder.coerce(d, "transform_back_from")
    vh = to_numpy_1d(vh, "vh")
    if order is DiffOrder.ORDER0:
        return vh

    y = to_numpy_1d(y)
    try:
        t = operator.index(t)
    except TypeError as exc:
        raise PreconditionViolationError(
            f"transform_back_from: time point t must be an integer, got {t!r}"
        ) from exc
    if t < order or t > len(y):
        raise PreconditionViolationError(
            f"transform_back_from: time point t={t} needs {int(order)} preceding actual values "
            f"inside a series of length {len(y)}"
        )

    yh = np.concatenate([y[t - order : t], vh])
    if order is DiffOrder.ORDER1:
        for i in range(1, len(yh)):
            yh[i] += yh[i - 1]
    else:
        for i in range(2, len(yh)):
            yh[i] += 2.0 * yh[i - 1] - yh[i - 2]
    return yh[int(order):]


# ---------------------------
# Recovery check
# ---------------------------
def differ(u: Any, v: Any, scale: float = 1e-9) -> int:
    """
    Count the points where two series differ by more than mean(u) * scale.
    Handy to verify that a series was recovered, e.g. undiff(diff(y), y[0]) vs y.
    """
    u = to_numpy_1d(u, "u")
    v = to_numpy_1d(v, "v")
    if len(u) != len(v):
        raise SizeMismatchError(f"differ: requires len(u) = {len(u)} == len(v) = {len(v)}")

    tol = abs(float(np.mean(u))) * scale if len(u) else 0.0
    bad = np.flatnonzero(np.abs(u - v) > tol)
    for t in bad:
        logger.debug("differ at t=%d: %s vs %s", t, u[t], v[t])
    logger.debug("differ: found %d points that differ", len(bad))
    return int(len(bad))
