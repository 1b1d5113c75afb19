# Difflag/evaluation/qof.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import numpy as np
import pandas as pd

from ..errors import PreconditionViolationError, SizeMismatchError
from ..utils import to_numpy_1d

logger = logging.getLogger(__name__)

QOF_NAMES = ("rSq", "rSqBar", "sse", "mse", "rmse", "mae", "smape", "m")


@runtime_checkable
class DiagnosableModel(Protocol):
    """What test_forecast needs from a model: degrees-of-freedom reset + diagnose."""

    def reset_degrees_of_freedom(self, dfm: float, df: float) -> None: ...

    def diagnose(self, actual: np.ndarray, forecast: np.ndarray) -> Any: ...


@dataclass
class QoFDiagnoser:
    """
    Quality-of-fit bookkeeping for a fitted model.

    Fields
    ------
    dfm:
        Degrees of freedom taken by the model (number of parameters / lags).
    df:
        Degrees of freedom left for the error.
    """
    dfm: float = 0.0
    df: float = 0.0

    @property
    def r_df(self) -> float:
        """Ratio of total to error degrees of freedom (dfm + 1 when df <= 1)."""
        if self.df > 1.0:
            return (self.dfm + self.df) / self.df
        return self.dfm + 1.0

    def reset_degrees_of_freedom(self, dfm: float, df: float) -> None:
        self.dfm = float(dfm)
        self.df = float(df)
        logger.debug("reset_degrees_of_freedom: dfm=%s, df=%s", self.dfm, self.df)

    def diagnose(self, actual: Any, forecast: Any) -> pd.Series:
        y = to_numpy_1d(actual, "actual")
        yp = to_numpy_1d(forecast, "forecast")
        if len(y) != len(yp):
            raise SizeMismatchError(f"diagnose: len(actual) = {len(y)} != len(forecast) = {len(yp)}")
        if len(y) == 0:
            raise PreconditionViolationError("diagnose: needs at least one actual/forecast pair")
        if self.dfm < 0 or self.df < 0:
            raise PreconditionViolationError(
                f"diagnose: degrees of freedom dfm = {self.dfm} and df = {self.df} must be non-negative"
            )

        m = len(y)
        e = y - yp
        sse = float(np.sum(e**2))
        sst = float(np.sum((y - y.mean()) ** 2))
        r_sq = 1.0 - sse / sst if sst > 0 else np.nan
        mse = sse / self.df if self.df > 0 else sse / m

        denom = np.abs(y) + np.abs(yp)
        nz = denom != 0
        smape = float(np.mean(200.0 * np.abs(e[nz]) / denom[nz])) if nz.any() else np.nan

        return pd.Series(
            {
                "rSq": r_sq,
                "rSqBar": 1.0 - (1.0 - r_sq) * self.r_df,
                "sse": sse,
                "mse": mse,
                "rmse": float(np.sqrt(mse)),
                "mae": float(np.mean(np.abs(e))),
                "smape": smape,
                "m": float(m),
            },
            index=list(QOF_NAMES),
        )
