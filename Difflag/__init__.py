# Difflag/__init__.py

# -------------------------
# Differencing layer
# -------------------------
from .differencing import (
    DiffOrder,
    backform,
    diff,
    differ,
    transform_back,
    transform_back_from,
    undiff,
)

# -------------------------
# Design-matrix layer
# -------------------------
from .design import (
    SENTINEL,
    BackcastConfig,
    DesignConfig,
    backfill,
    build_design,
    build_lag_matrix,
    build_matrix_4ts,
    build_matrix_4ts_exo,
    build_tensor_4ts,
    build_trend_matrix,
    forecast_matrix_frame,
    future_target_mask,
    weighted_backcast,
)

# -------------------------
# Evaluation boundary
# -------------------------
from .evaluation import DiagnosableModel, QoFDiagnoser, test_forecast

from .errors import (
    DifflagError,
    InvalidLagRangeError,
    PreconditionViolationError,
    SizeMismatchError,
    UnsupportedOrderError,
)

__all__ = [
    # differencing
    "DiffOrder",
    "diff",
    "undiff",
    "backform",
    "transform_back",
    "transform_back_from",
    "differ",
    # design
    "SENTINEL",
    "BackcastConfig",
    "DesignConfig",
    "build_matrix_4ts",
    "build_matrix_4ts_exo",
    "build_tensor_4ts",
    "build_design",
    "build_lag_matrix",
    "build_trend_matrix",
    "future_target_mask",
    "forecast_matrix_frame",
    "weighted_backcast",
    "backfill",
    # evaluation
    "test_forecast",
    "DiagnosableModel",
    "QoFDiagnoser",
    # errors
    "DifflagError",
    "UnsupportedOrderError",
    "InvalidLagRangeError",
    "SizeMismatchError",
    "PreconditionViolationError",
]
