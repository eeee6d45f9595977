from __future__ import annotations

import argparse
import sys
from pathlib import Path

import pandas as pd
import requests
import yaml

from analog_notes.core.composite import make_composite_id
from analog_notes.core.config import load_processes
from analog_notes.core.notes.merger import MultiProcessMerger, timeline_to_frame
from analog_notes.core.notes.models import Process
from analog_notes.core.notes.resolver import MAX_FILM_COUNT, MIN_FILM_COUNT
from analog_notes.main import notes_api


def parse_film_count(s: str) -> int:
    """argparse type: integer film count within the application's 1..100 bound."""
    try:
        n = int(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"film count must be an integer: {s!r}") from e
    if not (MIN_FILM_COUNT <= n <= MAX_FILM_COUNT):
        raise argparse.ArgumentTypeError(
            f"film count must be within {MIN_FILM_COUNT}..{MAX_FILM_COUNT} (got {n})"
        )
    return n


def select_processes(processes: list[Process], names: list[str]) -> list[Process]:
    """Keep only the named notes (by name or id), in the order requested."""
    if not names:
        return processes
    out: list[Process] = []
    for name in names:
        hit = [p for p in processes if name in (p.name, p.id)]
        if not hit:
            raise ValueError(f"note not found: {name}")
        out.extend(hit)
    return out


def render_timeline(df: pd.DataFrame) -> str:
    cols = ["start_display", "process", "label", "duration_display"]
    return df[cols].to_string(index=False)


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Merge development notes into one timeline")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--notes", help="YAML file with a top-level `notes:` list")
    src.add_argument("--api", help="notes API base url, e.g. http://localhost:5000")
    ap.add_argument(
        "--note",
        action="append",
        default=[],
        help="note name/id to include (repeatable); with --api these are note ids",
    )
    ap.add_argument("--film-count", type=parse_film_count, default=1)
    ap.add_argument("--out", default=None, help="write the merged timeline as CSV")
    ap.add_argument(
        "--dry-run",
        action="store_true",
        help="CSVは書き出さず、タイムラインの表示のみ行う",
    )
    return ap


def load_input(args: argparse.Namespace) -> list[Process]:
    if args.api:
        if not args.note:
            raise ValueError("--api requires at least one --note id")
        return notes_api.fetch_notes(args.api, args.note)
    return select_processes(load_processes(Path(args.notes)), args.note)


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    try:
        processes = load_input(args)
    except (OSError, ValueError, yaml.YAMLError, requests.RequestException) as e:
        print(f"ERROR loading notes error={e}")
        return 1

    entries = MultiProcessMerger().merge(processes, args.film_count)
    df = timeline_to_frame(entries)

    ids = [p.id for p in processes if p.id]
    composite = make_composite_id(ids) if len(ids) == len(processes) >= 2 else "-"
    print(render_timeline(df))

    if args.out and not args.dry_run:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(out.as_posix(), index=False)
        print(
            f"OK: notes={len(processes)} film_count={args.film_count} "
            f"composite={composite} rows={len(df)} -> {out.as_posix()}"
        )
    else:
        print(
            f"DRY-RUN: notes={len(processes)} film_count={args.film_count} "
            f"composite={composite} rows={len(df)}"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
