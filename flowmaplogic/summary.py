from __future__ import annotations

from . import formats
from .types import Snapshot, SnapshotSummary


def summarise(snapshot: Snapshot) -> SnapshotSummary:
    """Counts and extremes for one snapshot, used in the run log."""
    df = formats.to_frame(snapshot)
    if df.empty:
        return {
            "lines": 0,
            "known_capacity": 0,
            "estimated": 0,
            "overloaded": [],
            "max_util": 0.0,
            "max_util_line": None,
            "total_abs_mw": 0.0,
        }

    known = df["capacity_mw"] > 0
    over = df.loc[df["util"] > 1.0, "lineId"].tolist()
    pos = int(df["util"].to_numpy().argmax())

    return {
        "lines": int(len(df)),
        "known_capacity": int(known.sum()),
        "estimated": int((~known).sum()),
        "overloaded": [str(x) for x in over],
        "max_util": float(df["util"].iloc[pos]),
        "max_util_line": str(df["lineId"].iloc[pos]),
        "total_abs_mw": float(df["p_mw"].abs().sum()),
    }
