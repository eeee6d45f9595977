from __future__ import annotations

from collections.abc import Sequence

ID_PREFIX_LEN = 4


def make_composite_id(note_ids: Sequence[str]) -> str:
    """
    Interleave the first 4 characters of each note id.
    ["A1B2", "C3D4"] -> "AC13BD24"
    """
    if len(note_ids) < 2:
        raise ValueError("at least two notes are required to merge")
    out: list[str] = []
    for i in range(ID_PREFIX_LEN):
        for note_id in note_ids:
            if i < len(note_id):
                out.append(note_id[i])
    return "".join(out)


def split_composite_id(composite_id: str, count: int) -> list[str]:
    """Inverse of make_composite_id for `count` ids of 4 characters."""
    if count < 2:
        raise ValueError("count must be >= 2")
    if len(composite_id) != count * ID_PREFIX_LEN:
        raise ValueError(
            f"composite id length {len(composite_id)} does not match {count} notes"
        )
    return [composite_id[i::count] for i in range(count)]
