from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from analog_notes.core.notes.models import PeriodicRule, Process, ProcessStep, TimeOverride


def load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _require(d: dict[str, Any], key: str, where: str) -> Any:
    if d.get(key) is None:
        raise ValueError(f"{where}: missing required key '{key}'")
    return d[key]


def _ensure_mapping(d: Any, where: str) -> None:
    if not isinstance(d, dict):
        raise ValueError(f"{where}: expected a mapping, got {type(d).__name__}")


def _ensure_list(v: Any, where: str) -> None:
    if not isinstance(v, list):
        raise ValueError(f"{where}: expected a list, got {type(v).__name__}")


def _opt_float(v: Any) -> float | None:
    return None if v is None else float(v)


def parse_rule(d: dict[str, Any]) -> PeriodicRule:
    _ensure_mapping(d, "rule")
    interval = int(_require(d, "filmInterval", "rule"))
    if interval < 1:
        raise ValueError(f"rule: filmInterval must be >= 1 (got {interval})")
    return PeriodicRule(
        film_interval=interval,
        time_increment=float(d.get("timeIncrement") or 0.0),
    )


def parse_override(d: dict[str, Any]) -> TimeOverride:
    _ensure_mapping(d, "override")
    return TimeOverride(
        film_count_min=int(_require(d, "filmCountMin", "override")),
        film_count_max=int(_require(d, "filmCountMax", "override")),
        time=_opt_float(d.get("time")),
        step=d.get("step") or None,
        details=d.get("details") or None,
        temperature_min=_opt_float(d.get("temperatureMin")),
        temperature_max=_opt_float(d.get("temperatureMax")),
    )


def parse_step(d: dict[str, Any], position: int = 0) -> ProcessStep:
    _ensure_mapping(d, "entry")
    index = d.get("index")
    return ProcessStep(
        id=str(d.get("id") or ""),
        order=position if index is None else int(index),
        label=str(d.get("step") or ""),
        base_time_minutes=float(_require(d, "time", "entry")),
        details=str(d.get("details") or ""),
        temperature_min=_opt_float(d.get("temperatureMin")),
        temperature_max=_opt_float(d.get("temperatureMax")),
        rules=tuple(parse_rule(r) for r in d.get("rules") or []),
        overrides=tuple(parse_override(o) for o in d.get("overrides") or []),
    )


def parse_process(d: dict[str, Any]) -> Process:
    """One note document (the API's NoteDto shape) -> Process."""
    _ensure_mapping(d, "note")
    entries = d.get("entries") or []
    _ensure_list(entries, "note entries")
    return Process(
        name=str(_require(d, "name", "note")),
        id=str(d.get("id") or ""),
        steps=tuple(parse_step(e, i) for i, e in enumerate(entries)),
    )


def load_processes(path: str | Path) -> list[Process]:
    doc = load_yaml(path)
    _ensure_mapping(doc, "notes document")
    notes = doc.get("notes") or []
    _ensure_list(notes, "notes")
    return [parse_process(n) for n in notes]
