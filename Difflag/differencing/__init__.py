# Difflag/differencing/__init__.py
from .orders import DiffOrder
from .transforms import (
    backform,
    diff,
    differ,
    transform_back,
    transform_back_from,
    undiff,
)

__all__ = [
    "DiffOrder",
    "diff",
    "undiff",
    "backform",
    "transform_back",
    "transform_back_from",
    "differ",
]
