from __future__ import annotations

from collections.abc import Sequence

from .models import TimeOverride


def next_override_range(overrides: Sequence[TimeOverride], span: int = 1) -> tuple[int, int]:
    """
    Range for a newly added override: the first one starts at film 1,
    later ones start right after the previous override's max.
    """
    if span < 1:
        raise ValueError("span must be >= 1")
    if not overrides:
        low = 1
    else:
        low = overrides[-1].film_count_max + 1
    return low, low + span - 1


def validate_overrides(overrides: Sequence[TimeOverride]) -> list[str]:
    """Describe inverted and overlapping ranges. Empty list when clean."""
    problems: list[str] = []
    for i, ov in enumerate(overrides):
        if ov.film_count_min > ov.film_count_max:
            problems.append(
                f"override[{i}] inverted range {ov.film_count_min}..{ov.film_count_max}"
            )
    ordered = sorted(enumerate(overrides), key=lambda x: x[1].film_count_min)
    for (i, a), (j, b) in zip(ordered, ordered[1:]):
        if b.film_count_min <= a.film_count_max:
            problems.append(f"override[{i}] overlaps override[{j}]")
    return problems
