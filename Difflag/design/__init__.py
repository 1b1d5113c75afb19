# Difflag/design/__init__.py
from .backcast import backfill, ma_weights, weighted_backcast
from .matrices import (
    build_design,
    build_lag_matrix,
    build_matrix_4ts,
    build_matrix_4ts_exo,
    build_tensor_4ts,
    build_trend_matrix,
    forecast_matrix_frame,
    future_target_mask,
)
from .specs import SENTINEL, BackcastConfig, DesignConfig

__all__ = [
    # matrices
    "build_matrix_4ts",
    "build_matrix_4ts_exo",
    "build_tensor_4ts",
    "build_design",
    "build_lag_matrix",
    "build_trend_matrix",
    "future_target_mask",
    "forecast_matrix_frame",
    # backcast
    "weighted_backcast",
    "ma_weights",
    "backfill",
    # specs
    "SENTINEL",
    "BackcastConfig",
    "DesignConfig",
]
