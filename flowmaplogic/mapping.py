from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Mapping, Optional

from pydantic import ValidationError

from . import canon
from .exceptions import MappingError
from .types import MappingEntry, MappingFile

LOGGER = logging.getLogger(__name__)


def mapping_key(area: object, external: str) -> str:
    return f"{area}{canon.KEY_SEPARATOR}{external}"


class CanonicalResolver:
    """
    Read-only lookup from (area, external line name) to canonical line id.

    Keys are exact "<area>::<external>" strings. Unmapped names resolve to
    themselves so they still show up in the snapshot for later reconciliation.
    """

    def __init__(self, entries: Optional[Mapping[str, MappingEntry]] = None):
        self._entries: dict[str, MappingEntry] = dict(entries or {})

    @classmethod
    def empty(cls) -> "CanonicalResolver":
        return cls()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def entry(self, area: object, external: str) -> Optional[MappingEntry]:
        return self._entries.get(mapping_key(area, external))

    def resolve(self, area: object, external: str) -> str:
        e = self.entry(area, external)
        return (e.canonical if e is not None else None) or external

    def fallback_capacity(self, area: object, external: str) -> Optional[float]:
        e = self.entry(area, external)
        return e.capacity_mw if e is not None else None


def parse_mapping(obj: object) -> CanonicalResolver:
    """
    Validate a decoded mapping document ({"map": {...}}) into a resolver.

    A document that is not shaped like {"map": {...}} raises MappingError.
    Malformed entries are skipped with a single warning; the rest are kept.
    """
    if isinstance(obj, dict) and obj.get("map") is None:
        obj = {**obj, "map": {}}
    try:
        doc = MappingFile.model_validate(obj)
    except ValidationError as exc:
        raise MappingError(f"Invalid mapping document: {exc}") from exc

    entries: dict[str, MappingEntry] = {}
    bad: list[str] = []
    for key, raw in doc.map.items():
        try:
            entries[key] = MappingEntry.model_validate(raw)
        except ValidationError:
            bad.append(key)
    if bad:
        LOGGER.warning(
            "skipped %d malformed mapping entries: %s",
            len(bad),
            ", ".join(bad[:5]) + (" ..." if len(bad) > 5 else ""),
        )
    return CanonicalResolver(entries)


def load_mapping(path: str | Path) -> CanonicalResolver:
    """
    Load the mapping table from a JSON file.

    A missing file, bad JSON or a document of the wrong shape is logged as a
    warning and yields an empty resolver, so every line keeps its external name.
    """
    p = Path(path)
    try:
        resolver = parse_mapping(json.loads(p.read_text(encoding="utf-8")))
    except (OSError, ValueError, MappingError) as exc:
        LOGGER.warning(
            "mapping %s unavailable (%s); using external line names as-is", p, exc
        )
        return CanonicalResolver.empty()
    LOGGER.debug("loaded %d mapping entries from %s", len(resolver), p)
    return resolver
