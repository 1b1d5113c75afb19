# Difflag/errors.py
from __future__ import annotations


class DifflagError(ValueError):
    """Base class for every failure raised by Difflag."""


class UnsupportedOrderError(DifflagError):
    """Differencing / back-transform order outside {0, 1, 2}."""

    def __init__(self, d: object, op: str = "diff") -> None:
        self.d = d
        self.op = op
        super().__init__(f"{op}: differencing order must be 0, 1 or 2, got {d!r}")


class InvalidLagRangeError(DifflagError):
    """A lag window (or lag / horizon count) has non-positive width."""


class SizeMismatchError(DifflagError):
    """Two inputs that must line up in time have different lengths."""


class PreconditionViolationError(DifflagError):
    """
    An input violates a documented precondition (e.g. a series shorter than d+1,
    a time point without enough anchors). Raised instead of reading out of bounds.
    """
