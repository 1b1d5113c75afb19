# Difflag/evaluation/__init__.py
from .horizons import test_forecast
from .qof import QOF_NAMES, DiagnosableModel, QoFDiagnoser

__all__ = [
    "test_forecast",
    "DiagnosableModel",
    "QoFDiagnoser",
    "QOF_NAMES",
]
