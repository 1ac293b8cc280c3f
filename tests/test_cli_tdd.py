from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from tambola_gen.cli import app
from tambola_gen.version import __version__

runner = CliRunner()


def _run_args(tmp_path: Path, *extra: str) -> list:
    return [
        "run",
        "--out-cards",
        str(tmp_path / "cards.json"),
        "--out-report",
        str(tmp_path / "report.json"),
        "--log-level",
        "WARNING",
        "--colors",
        "never",
        *extra,
    ]


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_run_writes_artifacts_and_verify_accepts_them(tmp_path: Path):
    result = runner.invoke(app, _run_args(tmp_path, "--count", "6", "--seed", "42", "--show"))
    assert result.exit_code == 0, result.output

    cards = json.loads((tmp_path / "cards.json").read_text(encoding="utf-8"))
    assert len(cards["batches"]) == 1
    assert len(cards["batches"][0]["cards"]) == 6
    report = json.loads((tmp_path / "report.json").read_text(encoding="utf-8"))
    assert report["ok"] is True

    result = runner.invoke(app, ["verify", "--cards", str(tmp_path / "cards.json")])
    assert result.exit_code == 0
    assert "OK" in result.output


def test_run_several_batches_with_summary(tmp_path: Path):
    summary = tmp_path / "summary.csv"
    result = runner.invoke(
        app,
        _run_args(tmp_path, "--count", "2", "--batches", "3", "--seed", "1", "--summary-csv", str(summary)),
    )
    assert result.exit_code == 0, result.output
    cards = json.loads((tmp_path / "cards.json").read_text(encoding="utf-8"))
    assert [len(b["cards"]) for b in cards["batches"]] == [2, 2, 2]
    assert len(summary.read_text(encoding="utf-8").splitlines()) == 7


def test_run_too_many_cards_fails(tmp_path: Path):
    result = runner.invoke(app, _run_args(tmp_path, "--count", "7"))
    assert result.exit_code == 2
    assert not (tmp_path / "cards.json").exists()


def test_run_refuses_to_overwrite(tmp_path: Path):
    assert runner.invoke(app, _run_args(tmp_path, "--seed", "3")).exit_code == 0
    assert runner.invoke(app, _run_args(tmp_path, "--seed", "3")).exit_code == 1
    assert runner.invoke(app, _run_args(tmp_path, "--seed", "3", "--force")).exit_code == 0


def test_dry_run(tmp_path: Path):
    result = runner.invoke(app, _run_args(tmp_path, "--dry-run", "--strategy", "incremental"))
    assert result.exit_code == 0
    assert "Strategy: incremental" in result.output
    assert "Params hash: sha256:" in result.output


def test_verify_flags_tampered_file(tmp_path: Path):
    assert runner.invoke(app, _run_args(tmp_path, "--count", "2", "--seed", "9")).exit_code == 0
    path = tmp_path / "cards.json"
    data = json.loads(path.read_text(encoding="utf-8"))
    batch = data["batches"][0]["cards"]
    batch[1]["matrix"] = batch[0]["matrix"]
    path.write_text(json.dumps(data), encoding="utf-8")

    result = runner.invoke(app, ["verify", "--cards", str(path)])
    assert result.exit_code == 1
    assert "FAILED" in result.output
