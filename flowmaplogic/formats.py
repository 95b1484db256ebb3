from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Mapping

import pandas as pd

from . import canon, utils
from .types import LinePayload, LineRecord, Snapshot, SnapshotPayload


def _js_number(x: float) -> float | int:
    # integral values are written as 40, not 40.0
    if isinstance(x, float) and x.is_integer():
        return int(x)
    return x


def line_payload(rec: LineRecord) -> LinePayload:
    return {
        "lineId": rec.line_id,
        "p_mw": _js_number(float(rec.p_mw)),
        "capacity_mw": _js_number(float(rec.capacity_mw)),
        "util": _js_number(float(rec.util)),
        "dir": int(rec.dir),
    }


def to_payload(snapshot: Snapshot) -> SnapshotPayload:
    """Snapshot -> {"ts": ..., "lines": [...]} as written to disk."""
    return {"ts": snapshot.ts, "lines": [line_payload(r) for r in snapshot.lines]}


def dumps(snapshot: Snapshot) -> str:
    return json.dumps(to_payload(snapshot), indent=2, ensure_ascii=False)


def from_payload(obj: Mapping[str, Any]) -> Snapshot:
    """Rebuild a Snapshot from a decoded payload (e.g. an archived hour)."""
    lines = tuple(
        LineRecord(
            line_id=str(d["lineId"]),
            p_mw=float(d["p_mw"]),
            capacity_mw=float(d["capacity_mw"]),
            util=float(d["util"]),
            dir=1 if int(d["dir"]) >= 0 else -1,
        )
        for d in obj.get("lines", [])
    )
    return Snapshot(
        generated_at=utils.to_jst(datetime.fromisoformat(str(obj["ts"]))),
        lines=lines,
    )


def loads(text: str) -> Snapshot:
    return from_payload(json.loads(text))


def to_frame(snapshot: Snapshot) -> pd.DataFrame:
    """
    Tabular view of a snapshot: one row per line, columns in wire order.

    The generation time is kept in `df.attrs["ts"]`.
    """
    rows = [line_payload(r) for r in snapshot.lines]
    df = pd.DataFrame.from_records(rows, columns=canon.LINE_FIELDS)
    df = df.astype(
        {"lineId": str, "p_mw": float, "capacity_mw": float, "util": float, "dir": int}
    )
    df.attrs["ts"] = snapshot.ts
    return df


def from_frame(df: pd.DataFrame, generated_at: datetime | None = None) -> Snapshot:
    missing = [c for c in canon.LINE_FIELDS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required column(s): {', '.join(missing)}")
    if generated_at is None and "ts" in df.attrs:
        generated_at = datetime.fromisoformat(df.attrs["ts"])
    lines = tuple(
        LineRecord(
            line_id=str(row.lineId),
            p_mw=float(row.p_mw),
            capacity_mw=float(row.capacity_mw),
            util=float(row.util),
            dir=1 if int(row.dir) >= 0 else -1,
        )
        for row in df[canon.LINE_FIELDS].itertuples(index=False)
    )
    return Snapshot(generated_at=utils.to_jst(generated_at), lines=lines)
