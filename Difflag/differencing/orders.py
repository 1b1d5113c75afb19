# Difflag/differencing/orders.py
from __future__ import annotations

from enum import IntEnum
from numbers import Integral
from typing import Union

from ..errors import UnsupportedOrderError


class DiffOrder(IntEnum):
    """
    Closed set of supported orders of simple (non-seasonal) differencing.

    diff:               position y  --> velocity v  --> acceleration a   (actual)
    backform / undiff:  position yp <-- velocity vp <-- acceleration ap  (predicted)
    """
    ORDER0 = 0
    ORDER1 = 1
    ORDER2 = 2

    @classmethod
    def coerce(cls, d: Union[int, "DiffOrder"], op: str = "diff") -> "DiffOrder":
        """Map an int onto the enum, rejecting anything outside {0, 1, 2}."""
        if isinstance(d, bool) or not isinstance(d, Integral):
            raise UnsupportedOrderError(d, op)
        try:
            return cls(int(d))
        except ValueError:
            raise UnsupportedOrderError(d, op) from None
