from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from . import formats
from .exceptions import SinkError
from .types import Snapshot

LOGGER = logging.getLogger(__name__)


class Sink(Protocol):
    def write(self, snapshot: Snapshot, key: str) -> object: ...


class JsonDirectorySink:
    """Writes each snapshot as `<out_dir>/<key>.json`."""

    def __init__(self, out_dir: str | Path):
        self.out_dir = Path(out_dir)

    def path_for(self, key: str) -> Path:
        return self.out_dir / f"{key}.json"

    def write(self, snapshot: Snapshot, key: str) -> Path:
        path = self.path_for(key)
        try:
            self.out_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(formats.dumps(snapshot), encoding="utf-8")
        except OSError as exc:
            raise SinkError(f"Could not write {path}: {exc}") from exc
        LOGGER.debug("wrote %s", path)
        return path
