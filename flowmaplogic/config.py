from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from . import canon


@dataclass
class RunConfig:
    # Acquisition
    areas: Tuple[int, ...] = field(default_factory=lambda: canon.AREAS)
    base_url: str = canon.BASE_URL
    timeout_s: float = canon.DEFAULT_TIMEOUT_S
    max_workers: int = 1  # >1 downloads areas in parallel; reduction stays ordered

    # Mapping table and output location
    mapping_path: str = canon.MAPPING_PATH
    out_dir: str = canon.OUT_DIR


def default_config() -> RunConfig:
    return RunConfig()
