from __future__ import annotations
from datetime import datetime
from typing import Iterable, Mapping, Optional

from . import utils
from .types import LineRecord, LineState, Snapshot


def _record(s: LineState) -> LineRecord:
    return LineRecord(
        line_id=s.line_id,
        p_mw=s.p_mw,
        capacity_mw=s.capacity_mw,
        util=s.util,
        dir=s.dir,
    )


def assemble(
    states: Mapping[str, LineState] | Iterable[LineState],
    now: Optional[datetime] = None,
) -> Snapshot:
    """Package finalized states (order kept) with a UTC+9 generation time."""
    seq = states.values() if isinstance(states, Mapping) else states
    return Snapshot(
        generated_at=utils.to_jst(now),
        lines=tuple(_record(s) for s in seq),
    )


def archive_key(snapshot: Snapshot) -> str:
    """Hour bucket for the archival copy, YYYYMMDDHH."""
    return utils.hour_key(snapshot.generated_at)
