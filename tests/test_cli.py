from flowmaplogic import cli, pipeline
from flowmaplogic.exceptions import SinkError
from flowmaplogic.snapshot import assemble
from flowmaplogic.types import LineState


def test_parse_args_overrides_defaults():
    cfg, level = cli.parse_args(
        ["--areas", "1,3", "--out-dir", "out", "--mapping", "m.json", "--workers", "4", "--log-level", "DEBUG"]
    )
    assert cfg.areas == (1, 3)
    assert cfg.out_dir == "out"
    assert cfg.mapping_path == "m.json"
    assert cfg.max_workers == 4
    assert level == "DEBUG"


def test_parse_args_defaults():
    cfg, level = cli.parse_args([])
    assert cfg.areas == tuple(range(1, 11))
    assert level == "INFO"


def test_main_success(monkeypatch, fixed_now):
    snap = assemble({"A": LineState("A", 5.0, 0.0, 1.0, 1, None)}, now=fixed_now)
    seen = {}

    def fake_run(cfg):
        seen["cfg"] = cfg
        return snap

    monkeypatch.setattr(pipeline, "run", fake_run)
    assert cli.main(["--areas", "2"]) == 0
    assert seen["cfg"].areas == (2,)


def test_main_fatal_returns_nonzero(monkeypatch):
    def fake_run(cfg):
        raise SinkError("disk full")

    monkeypatch.setattr(pipeline, "run", fake_run)
    assert cli.main([]) == 1
