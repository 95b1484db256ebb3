from __future__ import annotations
import math
from typing import MutableMapping

import numpy as np

from . import canon, utils
from .types import LineState


def percentile_scale(values, q: float = canon.SCALE_QUANTILE) -> float:
    """
    Reference scale for lines without a known capacity.

    Sorted ascending, the element at index floor(q * n) is returned (no
    interpolation). Non-finite values are ignored; an empty input gives 1.0.
    """
    arr = np.asarray(list(values), dtype=float)
    arr = np.sort(arr[np.isfinite(arr)])
    if arr.size == 0:
        return 1.0
    pos = min(int(math.floor(arr.size * q)), arr.size - 1)
    return float(arr[pos])


def finalize(
    states: MutableMapping[str, LineState],
) -> MutableMapping[str, LineState]:
    """
    Fill display utilisation for unknown-capacity lines and drop time keys.

    Lines whose util is 0 get |p_mw| / p95(|p_mw| over all lines), capped at
    canon.UTIL_MAX. This is a relative loading for rendering only, using the
    busiest 5% of flows as an implicit near-capacity reference. Lines with a
    known capacity keep their util. Mutates and returns `states`.
    """
    p95 = percentile_scale(abs(s.p_mw) for s in states.values())
    for s in states.values():
        if s.util == 0 and p95 > 0:
            s.util = utils.round_util(min(abs(s.p_mw) / p95, canon.UTIL_MAX))
        s.time_key = None
    return states
