from __future__ import annotations

from . import canon, exceptions
from .types import Snapshot


def assert_snapshot(snapshot: Snapshot) -> None:
    """Raise SnapshotError if the snapshot breaks the output schema invariants."""
    err = exceptions.SnapshotError
    exceptions.require(
        snapshot.generated_at.utcoffset() == canon.JST.utcoffset(None),
        "Snapshot time must carry a +09:00 offset.",
        err,
    )
    seen: set[str] = set()
    for rec in snapshot.lines:
        if not rec.line_id:
            raise err("Blank lineId in snapshot.")
        if rec.line_id in seen:
            raise err(f"Duplicate lineId '{rec.line_id}'.")
        seen.add(rec.line_id)
        if rec.dir not in (1, -1):
            raise err(f"Invalid dir {rec.dir!r} for '{rec.line_id}'.")
        if rec.capacity_mw < 0:
            raise err(f"Negative capacity for '{rec.line_id}'.")
        if not (0.0 <= rec.util <= canon.UTIL_MAX):
            raise err(
                f"util {rec.util} for '{rec.line_id}' outside [0, {canon.UTIL_MAX}]."
            )
        if round(rec.util, canon.UTIL_DECIMALS) != rec.util:
            raise err(f"util {rec.util} for '{rec.line_id}' not rounded.")
