from __future__ import annotations
from typing import Iterable, Optional, Sequence

from . import canon
from .types import FieldSpec, RawRecord


def _first_key(
    keys: Sequence[tuple[str, str]], candidates: Iterable[str]
) -> Optional[str]:
    cands = tuple(candidates)
    for orig, low in keys:
        if any(c in low for c in cands):
            return orig
    return None


def detect_fields(record: RawRecord) -> FieldSpec:
    """
    Resolve which columns of a batch carry area, line id, power, capacity and time.

    Column naming drifts between areas and API versions, so each field is
    matched by substring against `canon.FIELD_CANDIDATES`:
      - keys are compared lowercased
      - the first key in the record's own order that contains any candidate wins
      - every field is resolved independently; a key may serve several fields
      - unmatched fields are None
    Only the first record of a batch is inspected.
    """
    keys = [(str(k), str(k).lower()) for k in record.keys()]
    found = {field: _first_key(keys, cands) for field, cands in canon.FIELD_CANDIDATES}
    return FieldSpec(**found)
