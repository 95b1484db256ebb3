# flowmaplogic/utils.py
from __future__ import annotations
import math
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from . import canon

_UTIL_QUANTUM = Decimal(1).scaleb(-canon.UTIL_DECIMALS)


def to_number(value: Any) -> float:
    """
    Coerce a CSV cell to a float.

    Thousands separators and spaces are stripped; blank cells, unparseable
    text (including digit-group underscores such as "1_000") and non-finite
    results all become 0.0.
    """
    if value is None:
        return 0.0
    s = str(value).replace(",", "").replace(" ", "").strip()
    if not s or "_" in s:
        return 0.0
    try:
        n = float(s)
    except ValueError:
        return 0.0
    return n if math.isfinite(n) else 0.0


def round_util(x: float) -> float:
    """Round to canon.UTIL_DECIMALS from the float's exact value, ties away from zero."""
    d = Decimal(float(x)).quantize(_UTIL_QUANTUM, rounding=ROUND_HALF_UP)
    return float(d)


def to_jst(ts: Optional[datetime] = None) -> datetime:
    """Current time (or `ts`) as an aware datetime at UTC+9; naive input is taken as UTC+9."""
    if ts is None:
        return datetime.now(canon.JST)
    if ts.tzinfo is None:
        return ts.replace(tzinfo=canon.JST)
    return ts.astimezone(canon.JST)


def date_key(ts: datetime) -> str:
    """YYYYMMDD in JST, the API's `date` parameter."""
    return to_jst(ts).strftime("%Y%m%d")


def hour_key(ts: datetime) -> str:
    """YYYYMMDDHH in JST, used for hourly archive names."""
    return to_jst(ts).strftime("%Y%m%d%H")
