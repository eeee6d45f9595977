from __future__ import annotations

from typing import Any

import requests

from analog_notes.core.config import parse_process
from analog_notes.core.notes.models import Process


def api_get(api_base: str, path: str, params: dict | None = None, cookies: dict | None = None) -> Any:
    """GET against the notes API and return the decoded JSON body."""
    r = requests.get(f"{api_base}{path}", params=params, cookies=cookies, timeout=30)
    r.raise_for_status()
    return r.json()


def fetch_note(api_base: str, note_id: str, cookies: dict | None = None) -> Process:
    """Fetch one note with its entries, rules and overrides."""
    doc = api_get(api_base, f"/api/notes/{note_id}", cookies=cookies)
    return parse_process(doc)


def fetch_notes(api_base: str, note_ids: list[str], cookies: dict | None = None) -> list[Process]:
    return [fetch_note(api_base, nid, cookies=cookies) for nid in note_ids]
