from . import (
    canon,
    types,
    utils,
    exceptions,
    detect,
    mapping,
    reduce,
    estimate,
    snapshot,
    validate,
    formats,
    summary,
    ingest,
    sink,
    config,
    pipeline,
)

__all__ = [
    "canon",
    "types",
    "utils",
    "exceptions",
    "detect",
    "mapping",
    "reduce",
    "estimate",
    "snapshot",
    "validate",
    "formats",
    "summary",
    "ingest",
    "sink",
    "config",
    "pipeline",
]
