from __future__ import annotations
import threading
from typing import Iterable, Optional, Sequence

from . import canon, utils
from .detect import detect_fields
from .mapping import CanonicalResolver
from .types import FieldSpec, LineState, RawRecord


def _cell(record: RawRecord, col: Optional[str]):
    return record.get(col) if col is not None else None


def line_state_from_record(
    record: RawRecord,
    spec: FieldSpec,
    area: object,
    resolver: CanonicalResolver,
) -> Optional[LineState]:
    """Build the LineState for one row, or None when the row has no line name."""
    raw_name = _cell(record, spec.line_id)
    external = str(raw_name).strip() if raw_name is not None else ""
    if not external:
        return None

    raw_area = _cell(record, spec.area)
    area_tok = str(raw_area) if raw_area is not None else str(area)
    line_id = resolver.resolve(area_tok, external)

    p_mw = utils.to_number(_cell(record, spec.power))
    direction = 1 if p_mw >= 0 else -1

    if spec.capacity is not None:
        capacity_mw = utils.to_number(_cell(record, spec.capacity))
    else:
        capacity_mw = resolver.fallback_capacity(area_tok, external) or 0.0
    capacity_mw = max(float(capacity_mw), 0.0)

    # 0 marks "capacity unknown"; estimate.finalize fills these in later
    util = (
        utils.round_util(min(abs(p_mw) / capacity_mw, canon.UTIL_MAX))
        if capacity_mw > 0
        else 0.0
    )

    raw_time = _cell(record, spec.time)
    time_key = str(raw_time).strip() if raw_time is not None else ""

    return LineState(
        line_id=line_id,
        p_mw=p_mw,
        capacity_mw=capacity_mw,
        util=util,
        dir=direction,
        time_key=time_key,
    )


class SampleReducer:
    """
    Folds per-area batches into one LineState per canonical line id.

    One reducer owns one run's accumulation map. Merges are serialised with a
    lock so batches fetched in parallel can be added safely, but the
    tie-break below depends on the order batches are added in.

    Merge rule: a new sample replaces the stored one when
    `stored.time_key <= new.time_key` (string comparison), so equal keys are
    won by the sample processed last.
    """

    def __init__(self, resolver: Optional[CanonicalResolver] = None):
        self.resolver = resolver or CanonicalResolver.empty()
        self._states: dict[str, LineState] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._states)

    @property
    def states(self) -> dict[str, LineState]:
        return self._states

    def merge(self, state: LineState) -> None:
        prev = self._states.get(state.line_id)
        if prev is None or (prev.time_key or "") <= (state.time_key or ""):
            self._states[state.line_id] = state

    def add_batch(self, area: object, records: Sequence[RawRecord]) -> int:
        """Reduce one area's rows; returns how many rows produced a state."""
        if not records:
            return 0
        spec = detect_fields(records[0])
        used = 0
        with self._lock:
            for r in records:
                st = line_state_from_record(r, spec, area, self.resolver)
                if st is None:
                    continue
                self.merge(st)
                used += 1
        return used


def reduce_batches(
    batches: Iterable[tuple[object, Sequence[RawRecord]]],
    resolver: Optional[CanonicalResolver] = None,
) -> dict[str, LineState]:
    """Reduce (area, records) batches in the given order into canonical id -> LineState."""
    reducer = SampleReducer(resolver)
    for area, records in batches:
        reducer.add_batch(area, records)
    return reducer.states
