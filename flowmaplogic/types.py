from __future__ import annotations
from typing import Any, TypedDict, Literal, List, Dict, Optional, Mapping
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, Field

Direction = Literal[1, -1]

# One CSV row: column name -> raw value, in source column order
RawRecord = Mapping[str, str]


@dataclass(frozen=True)
class FieldSpec:
    """Resolved column names for one batch; None when a field was not found."""

    area: Optional[str] = None
    line_id: Optional[str] = None
    power: Optional[str] = None
    capacity: Optional[str] = None
    time: Optional[str] = None


## Mapping table
class MappingEntry(BaseModel):
    canonical: str
    capacity_mw: Optional[float] = None
    model_config = {"frozen": True}


class MappingFile(BaseModel):
    # keys are "<area>::<externalName>"; entries are validated one by one
    map: Dict[str, Any] = Field(default_factory=dict)


## Per-line state
@dataclass
class LineState:
    """
    Working record for one canonical line during a run.

    `time_key` is only used to pick the latest sample; it is cleared by
    estimate.finalize and never written out.
    """

    line_id: str
    p_mw: float
    capacity_mw: float
    util: float
    dir: Direction
    time_key: Optional[str] = ""


@dataclass(frozen=True)
class LineRecord:
    line_id: str
    p_mw: float
    capacity_mw: float
    util: float
    dir: Direction


@dataclass(frozen=True)
class Snapshot:
    generated_at: datetime  # tz-aware, UTC+9
    lines: tuple[LineRecord, ...]

    @property
    def ts(self) -> str:
        return self.generated_at.isoformat(timespec="milliseconds")


## Wire payloads
class LinePayload(TypedDict):
    lineId: str
    p_mw: float
    capacity_mw: float
    util: float
    dir: int


class SnapshotPayload(TypedDict):
    ts: str
    lines: List[LinePayload]


class SnapshotSummary(TypedDict):
    lines: int
    known_capacity: int
    estimated: int
    overloaded: List[str]
    max_util: float
    max_util_line: Optional[str]
    total_abs_mw: float
