from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.table import Table

from .card import Card
from .config import resolve_parameters
from .core import BuildParams
from .core.builder import generate_batches
from .errors import GenerationError
from .logging_setup import make_console, setup_logging
from .partition import column_buckets
from .serialize import build_run_meta, emit_cards_json, emit_report_json, emit_summary_csv, load_cards_json
from .verify import verify as verify_cards
from .version import __version__

app = typer.Typer(help="Tambola (housie) ticket generator CLI")
log = logging.getLogger(__name__)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(0)


@app.callback()
def common_options(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show application version and exit",
        callback=_show_version,
        is_eager=True,
    ),
) -> None:
    """Tambola ticket generator."""


def ticket_table(card: Card, title: str) -> Table:
    table = Table(title=title, show_header=False, show_lines=True)
    for _ in range(len(card.rows[0])):
        table.add_column(justify="center", min_width=3)
    for row in card.rows:
        table.add_row(*["" if value is None else str(value) for value in row])
    return table


@app.command()
def run(
    config: Optional[str] = typer.Option(None, "--config", help="Path to config file (YAML/JSON)"),
    count: Optional[int] = typer.Option(None, "--count", "-n", help="Tickets per batch (1..6)"),
    batches: Optional[int] = typer.Option(None, "--batches", help="Independent batches to generate"),
    strategy: Optional[str] = typer.Option(None, "--strategy", help="cells|incremental"),
    partition: Optional[str] = typer.Option(None, "--partition", help="variable|fixed"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Base seed (omit for OS entropy)"),
    engine: Optional[str] = typer.Option(None, "--engine", help="py_random|numpy_pcg64"),
    no_shortcut: bool = typer.Option(
        False, "--no-shortcut", help="Do not build the last ticket from the leftover pool"
    ),
    max_attempts: Optional[int] = typer.Option(
        None, "--max-attempts", help="Restart cap for the incremental strategy"
    ),
    out_cards: Optional[str] = typer.Option(None, "--out-cards", help="cards.json output path"),
    out_report: Optional[str] = typer.Option(None, "--out-report", help="report.json output path"),
    summary_csv: Optional[str] = typer.Option(None, "--summary-csv", help="Path to summary.csv (optional)"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Log file path"),
    colors: Optional[str] = typer.Option(None, "--colors", help="auto|always|never"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG|INFO|WARN|ERROR"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Resolve params and exit"),
    force: bool = typer.Option(False, "--force", help="Overwrite outputs if they exist"),
    no_mkdirs: bool = typer.Option(False, "--no-mkdirs", help="Do not create parent directories"),
    show: bool = typer.Option(False, "--show", help="Print the tickets as tables"),
) -> None:
    """Generate ticket batches and write cards/report artifacts."""

    cli_overrides: Dict[str, Any] = {
        key: value
        for key, value in {
            "count": count,
            "batches": batches,
            "strategy": strategy,
            "partition": partition,
            "max_attempts": max_attempts,
            "seed.value": seed,
            "seed.engine": engine,
            "out_cards": out_cards,
            "out_report": out_report,
            "summary_csv": summary_csv,
            "log_file": log_file,
            "colors": colors,
            "log_level": log_level,
        }.items()
        if value is not None
    }
    if no_shortcut:
        cli_overrides["shortcut_last"] = False

    resolved, params_hash, _cfg_path = resolve_parameters(
        config_path_str=config, cli_overrides=cli_overrides
    )

    setup_logging(
        level=str(resolved.get("log_level", "INFO")),
        log_file=resolved.get("log_file"),
        json_format=(str(resolved.get("log_format", "text")) == "json"),
        colors=str(resolved.get("colors", "auto")),
    )

    seed_cfg = resolved.get("seed") or {}
    seed_value = seed_cfg.get("value")
    params = BuildParams(
        count=int(resolved["count"]),
        strategy=str(resolved["strategy"]),
        partition=str(resolved["partition"]),
        seed=None if seed_value is None else int(seed_value),
        rng_engine=str(seed_cfg.get("engine", "py_random")),
        shortcut_last=bool(resolved["shortcut_last"]),
        max_attempts=int(resolved["max_attempts"]),
    )
    batch_count = int(resolved["batches"])

    if dry_run:
        typer.echo(f"Strategy: {params.strategy}")
        typer.echo(f"Partition: {params.partition}")
        typer.echo(f"Params hash: {params_hash}")
        raise typer.Exit(0)

    try:
        results = generate_batches(batch_count, params)
    except GenerationError as exc:
        log.error("Error generating tickets: %s", exc)
        typer.echo(f"Error generating tickets: {exc}", err=True)
        raise typer.Exit(code=2)
    except ValueError as exc:
        typer.echo(f"Invalid parameters: {exc}", err=True)
        raise typer.Exit(code=2)

    card_batches: List[List[Card]] = [result.cards for result in results]
    buckets = column_buckets(params.partition)
    reports = [verify_cards(cards, buckets=buckets) for cards in card_batches]
    report = {
        "params_hash": params_hash,
        "batches": reports,
        "ok": all(r["ok"] for r in reports),
    }

    run_meta = build_run_meta(
        app_version=__version__,
        params_hash=params_hash,
        seed=params.seed,
        rng_engine=params.rng_engine,
        strategy=params.strategy,
        partition=params.partition,
    )

    out_cards_path = Path(resolved["out_cards"])
    out_report_path = Path(resolved["out_report"])
    try:
        emit_cards_json(
            out_cards_path,
            batches=card_batches,
            run_meta=run_meta,
            mkdirs=(not no_mkdirs),
            overwrite=force,
        )
        emit_report_json(out_report_path, report=report, mkdirs=(not no_mkdirs), overwrite=force)
        if resolved.get("summary_csv"):
            emit_summary_csv(
                Path(resolved["summary_csv"]),
                batches=card_batches,
                mkdirs=(not no_mkdirs),
                overwrite=force,
            )
    except FileExistsError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)

    if show:
        console = make_console(str(resolved.get("colors", "auto")))
        for b_idx, cards in enumerate(card_batches, start=1):
            for c_idx, card in enumerate(cards, start=1):
                console.print(ticket_table(card, f"Batch {b_idx} / Ticket #{c_idx}"))

    total = sum(len(cards) for cards in card_batches)
    elapsed = sum(result.metrics.total_time for result in results)
    typer.echo(f"Generated {total} tickets in {len(card_batches)} batch(es) in {elapsed:.3f}s")
    typer.echo(f"Output files: {out_cards_path}, {out_report_path}")


@app.command()
def verify(
    cards: str = typer.Option(..., "--cards", help="Path to cards.json"),
    partition: str = typer.Option("variable", "--partition", help="variable|fixed"),
) -> None:
    """Re-check every ticket and cross-ticket uniqueness in a cards.json file."""
    batches = load_cards_json(Path(cards))
    buckets = column_buckets(partition)
    ok = True
    for b_idx, batch in enumerate(batches, start=1):
        report = verify_cards(batch, buckets=buckets)
        for entry in report["cards"]:
            if not entry["valid"]:
                typer.echo(f"batch {b_idx} card {entry['index'] + 1}: {'; '.join(entry['violations'])}")
        for number, owners in report["cross_card_duplicates"].items():
            typer.echo(f"batch {b_idx}: number {number} on cards {[i + 1 for i in owners]}")
        ok = ok and bool(report["ok"])
    typer.echo("OK" if ok else "FAILED")
    raise typer.Exit(code=0 if ok else 1)


def main(_argv: list[str] | None = None) -> int:
    try:
        app(standalone_mode=True)
        return 0
    except SystemExit as e:
        return int(e.code) if e.code is not None else 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
