from __future__ import annotations

import csv
import json
import platform
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .card import Card
from .uniqueness import batch_hash, card_hash, column_count_signature


def ensure_parent(path: Path, *, mkdirs: bool) -> None:
    parent = path.parent
    if not parent.exists() and mkdirs:
        parent.mkdir(parents=True, exist_ok=True)


def _refuse_overwrite(path: Path, overwrite: bool) -> None:
    if path.exists() and not overwrite:
        raise FileExistsError(
            f"Refusing to overwrite existing file without --force: {path}"
        )


def write_json(path: Path, data: object, *, mkdirs: bool, overwrite: bool) -> None:
    _refuse_overwrite(path, overwrite)
    ensure_parent(path, mkdirs=mkdirs)
    text = json.dumps(data, ensure_ascii=True, sort_keys=True, indent=2)
    path.write_text(text + "\n", encoding="utf-8")


def build_run_meta(
    *,
    app_version: str,
    params_hash: str,
    seed: Optional[int],
    rng_engine: str,
    strategy: str,
    partition: str,
) -> Dict[str, object]:
    return {
        "app_version": app_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "python_version": sys.version.split()[0],
        "platform": platform.system().lower(),
        "params_hash": params_hash,
        "seed": seed,
        "rng_engine": rng_engine,
        "strategy": strategy,
        "partition": partition,
        "hash_algorithm": "sha256",
    }


def batches_payload(batches: Sequence[Sequence[Card]]) -> List[Dict[str, object]]:
    out: List[Dict[str, object]] = []
    for b_idx, cards in enumerate(batches, start=1):
        entries = [
            {"id": str(idx), "matrix": card.to_matrix(), "card_hash": card_hash(card)}
            for idx, card in enumerate(cards, start=1)
        ]
        out.append({"id": str(b_idx), "cards": entries, "batch_hash": batch_hash(cards)})
    return out


def emit_cards_json(
    path: Path,
    *,
    batches: Sequence[Sequence[Card]],
    run_meta: Dict[str, object],
    mkdirs: bool,
    overwrite: bool,
) -> None:
    data = {"run_meta": run_meta, "batches": batches_payload(batches)}
    write_json(path, data, mkdirs=mkdirs, overwrite=overwrite)


def load_cards_json(path: Path) -> List[List[Card]]:
    """Read cards.json back into batches of cards."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict) or not isinstance(data.get("batches"), list):
        raise ValueError(f"{path}: expected an object with a 'batches' list")
    batches: List[List[Card]] = []
    for batch in data["batches"]:
        batches.append([Card.from_matrix(entry["matrix"]) for entry in batch.get("cards", [])])
    return batches


def emit_report_json(
    path: Path, *, report: Dict[str, object], mkdirs: bool, overwrite: bool
) -> None:
    write_json(path, report, mkdirs=mkdirs, overwrite=overwrite)


def emit_summary_csv(
    path: Path,
    *,
    batches: Sequence[Sequence[Card]],
    mkdirs: bool,
    overwrite: bool,
) -> None:
    _refuse_overwrite(path, overwrite)
    ensure_parent(path, mkdirs=mkdirs)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["batch", "card", "numbers", "row_counts", "column_counts", "card_hash"])
        for b_idx, cards in enumerate(batches, start=1):
            for c_idx, card in enumerate(cards, start=1):
                writer.writerow(
                    [
                        b_idx,
                        c_idx,
                        " ".join(str(n) for n in sorted(card.numbers())),
                        "-".join(str(k) for k in card.row_counts()),
                        column_count_signature(card),
                        card_hash(card),
                    ]
                )
