from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from analog_notes.core.notes.models import Process, ProcessStep
from analog_notes.main import merge as merge_cli

SAMPLE = Path(__file__).resolve().parents[1] / "src" / "analog_notes" / "configs" / "sample_notes.yaml"


def test_main_writes_csv_timeline(tmp_path: Path, capsys) -> None:
    out_csv = tmp_path / "out" / "timeline.csv"

    rc = merge_cli.main(["--notes", str(SAMPLE), "--film-count", "5", "--out", str(out_csv)])

    assert rc == 0
    df = pd.read_csv(out_csv)
    assert len(df) == 8
    assert df["terminal"].sum() == 2
    first_dev = df[(df["process"] == "C-41 Developer Kit") & (df["label"] == "Developer")]
    assert first_dev["duration"].iloc[0] == 3.5
    assert df["start"].is_monotonic_increasing
    out = capsys.readouterr().out
    assert "OK: notes=2 film_count=5 composite=AC13BD24 rows=8" in out


def test_main_dry_run_does_not_write(tmp_path: Path, capsys) -> None:
    out_csv = tmp_path / "timeline.csv"

    rc = merge_cli.main(
        ["--notes", str(SAMPLE), "--note", "B&W Rodinal 1+50", "--out", str(out_csv), "--dry-run"]
    )

    assert rc == 0
    assert not out_csv.exists()
    out = capsys.readouterr().out
    assert "DRY-RUN: notes=1 film_count=1 composite=- rows=4" in out


def test_main_unknown_note_reports_error(capsys) -> None:
    rc = merge_cli.main(["--notes", str(SAMPLE), "--note", "missing"])

    assert rc == 1
    assert "ERROR loading notes error=note not found: missing" in capsys.readouterr().out


def test_main_uses_api_when_given(monkeypatch, capsys) -> None:
    fetched: list[tuple[str, list[str]]] = []

    def fake_fetch_notes(api_base: str, note_ids: list[str], cookies=None) -> list[Process]:
        fetched.append((api_base, note_ids))
        return [
            Process(name=f"n{i}", id=nid, steps=(ProcessStep(nid, 0, "Dev", 1.0),))
            for i, nid in enumerate(note_ids)
        ]

    monkeypatch.setattr(merge_cli.notes_api, "fetch_notes", fake_fetch_notes)

    rc = merge_cli.main(["--api", "http://dummy", "--note", "A1B2", "--note", "C3D4"])

    assert rc == 0
    assert fetched == [("http://dummy", ["A1B2", "C3D4"])]
    assert "composite=AC13BD24 rows=4" in capsys.readouterr().out


@pytest.mark.parametrize("bad", ["0", "101", "abc"])
def test_film_count_outside_bounds_is_rejected(bad: str) -> None:
    with pytest.raises(SystemExit):
        merge_cli.main(["--notes", str(SAMPLE), "--film-count", bad])


def test_main_null_notes_list_prints_empty_timeline(tmp_path: Path, capsys) -> None:
    notes = tmp_path / "notes.yaml"
    notes.write_text("notes:\n", encoding="utf-8")

    rc = merge_cli.main(["--notes", str(notes)])

    assert rc == 0
    assert "DRY-RUN: notes=0 film_count=1 composite=- rows=0" in capsys.readouterr().out


def test_main_null_index_is_loaded_in_position_order(tmp_path: Path, capsys) -> None:
    notes = tmp_path / "notes.yaml"
    notes.write_text(
        "notes:\n"
        "  - name: Fix\n"
        "    entries:\n"
        "      - {step: Fixer, time: 1, index: null}\n"
        "      - {step: Wash, time: 2, index: null}\n",
        encoding="utf-8",
    )

    rc = merge_cli.main(["--notes", str(notes)])

    assert rc == 0
    assert "rows=3" in capsys.readouterr().out


@pytest.mark.parametrize(
    "text, match",
    [
        ("notes:\n  - 42\n", "note: expected a mapping"),
        ("notes: [unclosed\n", "ERROR loading notes"),
    ],
)
def test_main_malformed_document_reports_error(
    tmp_path: Path, capsys, text: str, match: str
) -> None:
    notes = tmp_path / "notes.yaml"
    notes.write_text(text, encoding="utf-8")

    rc = merge_cli.main(["--notes", str(notes)])

    assert rc == 1
    out = capsys.readouterr().out
    assert "ERROR loading notes" in out
    assert match in out
