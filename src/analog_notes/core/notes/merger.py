from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from analog_notes.core.timefmt import format_time_for_display

from .models import TERMINAL_LABEL, TERMINAL_STEP_ID, MergedTimelineEntry, Process
from .resolver import EffectiveTimeResolver

TIMELINE_COLUMNS = [
    "process",
    "step_id",
    "label",
    "start",
    "duration",
    "start_display",
    "duration_display",
    "terminal",
]


class MultiProcessMerger:
    """
    Interleave several processes that all start at minute 0.
      - steps inside one process run back to back in `order`
      - each process ends with an OUT row at its total duration
      - the combined list is stable-sorted by start time, so ties keep
        the order the processes were given in
    """

    def __init__(self, resolver: EffectiveTimeResolver | None = None):
        self.resolver = resolver or EffectiveTimeResolver()

    def merge(self, processes: Sequence[Process], film_count: int) -> list[MergedTimelineEntry]:
        entries: list[MergedTimelineEntry] = []
        for proc in processes:
            entries.extend(self._process_timeline(proc, film_count))
        return sorted(entries, key=lambda e: e.start_time_minutes)

    def _process_timeline(self, proc: Process, film_count: int) -> list[MergedTimelineEntry]:
        out: list[MergedTimelineEntry] = []
        cursor = 0.0
        for step in proc.ordered_steps():
            view = self.resolver.effective_step(step, film_count)
            out.append(
                MergedTimelineEntry(
                    process_name=proc.name,
                    step_id=step.id,
                    start_time_minutes=cursor,
                    duration_minutes=view.duration_minutes,
                    is_terminal=False,
                    label=view.label,
                    details=view.details,
                    temperature_min=view.temperature_min,
                    temperature_max=view.temperature_max,
                )
            )
            cursor += view.duration_minutes
        out.append(
            MergedTimelineEntry(
                process_name=proc.name,
                step_id=TERMINAL_STEP_ID,
                start_time_minutes=cursor,
                duration_minutes=0.0,
                is_terminal=True,
                label=TERMINAL_LABEL,
            )
        )
        return out


def merge(processes: Sequence[Process], film_count: int) -> list[MergedTimelineEntry]:
    return MultiProcessMerger().merge(processes, film_count)


def timeline_to_frame(entries: Sequence[MergedTimelineEntry]) -> pd.DataFrame:
    rows = [
        {
            "process": e.process_name,
            "step_id": e.step_id,
            "label": e.label,
            "start": e.start_time_minutes,
            "duration": e.duration_minutes,
            "start_display": format_time_for_display(e.start_time_minutes),
            "duration_display": format_time_for_display(e.duration_minutes),
            "terminal": e.is_terminal,
        }
        for e in entries
    ]
    return pd.DataFrame(rows, columns=TIMELINE_COLUMNS)
