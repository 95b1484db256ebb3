from __future__ import annotations

import logging
from contextlib import ExitStack
from datetime import datetime
from typing import Optional

from . import canon, estimate, ingest, utils, validate
from .config import RunConfig, default_config
from .ingest import Fetcher
from .mapping import load_mapping
from .reduce import SampleReducer
from .sink import JsonDirectorySink, Sink
from .snapshot import archive_key, assemble
from .types import Snapshot

LOGGER = logging.getLogger(__name__)


def build_snapshot(
    config: RunConfig,
    *,
    fetch: Optional[Fetcher] = None,
    now: Optional[datetime] = None,
) -> Snapshot:
    """Fetch, reduce, finalize and assemble; nothing is written."""
    now = utils.to_jst(now)
    resolver = load_mapping(config.mapping_path)
    reducer = SampleReducer(resolver)

    with ExitStack() as stack:
        if fetch is None:
            # one HTTP session for the whole run, closed when the batches are done
            session = stack.enter_context(ingest.create_session())
            fetch = ingest.default_fetcher(
                base_url=config.base_url, session=session, timeout=config.timeout_s
            )
        batches = ingest.collect_batches(
            config.areas, utils.date_key(now), fetch, max_workers=config.max_workers
        )
        for area, records in batches:
            used = reducer.add_batch(area, records)
            LOGGER.debug("area %s: %d rows, %d lines so far", area, used, len(reducer))

    states = estimate.finalize(reducer.states)
    return assemble(states, now=now)


def run(
    config: Optional[RunConfig] = None,
    *,
    fetch: Optional[Fetcher] = None,
    sink: Optional[Sink] = None,
    now: Optional[datetime] = None,
) -> Snapshot:
    """
    One full run: build the snapshot, check it, and write it twice.

    Area and mapping failures only reduce coverage. A snapshot that fails
    validation or cannot be written raises (SnapshotError / SinkError).
    """
    cfg = config or default_config()
    snap = build_snapshot(cfg, fetch=fetch, now=now)
    validate.assert_snapshot(snap)

    sink = sink or JsonDirectorySink(cfg.out_dir)
    sink.write(snap, canon.LATEST_KEY)
    sink.write(snap, archive_key(snap))

    LOGGER.info("latest.json updated: %d lines", len(snap.lines))
    return snap
