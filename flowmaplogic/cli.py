from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from typing import Optional, Sequence

from . import pipeline, summary
from .config import RunConfig, default_config
from .exceptions import FMLError

LOGGER = logging.getLogger("flowmaplogic")


def _areas(value: str) -> tuple[int, ...]:
    try:
        return tuple(int(a) for a in value.split(",") if a.strip())
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid area list: {value!r}") from exc


def parse_args(argv: Optional[Sequence[str]] = None) -> tuple[RunConfig, str]:
    base = default_config()
    parser = argparse.ArgumentParser(
        prog="flowmaplogic",
        description="Fetch transmission-line flows, map them to canonical ids and write a JSON snapshot.",
    )
    parser.add_argument("--areas", type=_areas, default=base.areas,
                        help="Comma-separated area numbers (default: 1..10).")
    parser.add_argument("--base-url", default=base.base_url, help="CSV endpoint.")
    parser.add_argument("--mapping", default=base.mapping_path,
                        help="Line mapping JSON (default: %(default)s).")
    parser.add_argument("--out-dir", default=base.out_dir,
                        help="Directory for latest.json and hourly archives.")
    parser.add_argument("--timeout", type=float, default=base.timeout_s,
                        help="Per-request timeout in seconds.")
    parser.add_argument("--workers", type=int, default=base.max_workers,
                        help="Parallel downloads (default: %(default)s).")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)

    cfg = replace(
        base,
        areas=args.areas,
        base_url=args.base_url,
        mapping_path=args.mapping,
        out_dir=args.out_dir,
        timeout_s=args.timeout,
        max_workers=max(1, args.workers),
    )
    return cfg, args.log_level


def main(argv: Optional[Sequence[str]] = None) -> int:
    cfg, level = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        snap = pipeline.run(cfg)
    except (FMLError, OSError) as exc:
        LOGGER.error("run failed: %s", exc)
        return 1

    s = summary.summarise(snap)
    LOGGER.info(
        "%d lines (%d estimated), %d overloaded, max util %.3f (%s)",
        s["lines"],
        s["estimated"],
        len(s["overloaded"]),
        s["max_util"],
        s["max_util_line"],
    )
    return 0
