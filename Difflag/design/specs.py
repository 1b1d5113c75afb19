# Difflag/design/specs.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

import numpy as np

# Placeholder written into direct multi-horizon targets whose future value lies past
# the end of the series. Compare with np.signbit (or use future_target_mask), since
# -0.0 == 0.0 under plain equality.
SENTINEL: float = -0.0

BackcastFn = Callable[[np.ndarray], float]


@dataclass(frozen=True)
class BackcastConfig:
    """
    Weighted-moving-average backcast settings.

      q: number of leading observations averaged to extrapolate the value before time 0
      u: mix of linear (1.0) vs. flat (0.0) weights
    """
    q: int = 2
    u: float = 1.0


@dataclass(frozen=True)
class DesignConfig:
    """
    Declarative description of a design matrix build. No logic — just decisions.

    hh=None builds the single-horizon (recursive) response vector; an int builds the
    direct multi-horizon response matrix. backcast=None uses weighted_backcast with
    the given backcast_config.
    """
    lags: int = 1
    hh: Optional[int] = None
    backcast_config: BackcastConfig = field(default_factory=BackcastConfig)
    backcast: Optional[BackcastFn] = None
