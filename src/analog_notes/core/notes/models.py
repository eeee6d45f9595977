from __future__ import annotations

from dataclasses import dataclass, field

TERMINAL_STEP_ID = "__out__"
TERMINAL_LABEL = "OUT"


@dataclass(frozen=True)
class PeriodicRule:
    film_interval: int  # every N films
    time_increment: float  # minutes added per interval


@dataclass(frozen=True)
class TimeOverride:
    film_count_min: int
    film_count_max: int
    time: float | None  # absolute minutes; None leaves the duration to rule/base

    # optional replacements for the step view
    step: str | None = None
    details: str | None = None
    temperature_min: float | None = None
    temperature_max: float | None = None

    def contains(self, film_count: int) -> bool:
        return self.film_count_min <= film_count <= self.film_count_max


@dataclass(frozen=True)
class ProcessStep:
    id: str
    order: int
    label: str
    base_time_minutes: float

    details: str = ""
    temperature_min: float | None = None
    temperature_max: float | None = None

    rules: tuple[PeriodicRule, ...] = field(default_factory=tuple)
    overrides: tuple[TimeOverride, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Process:
    name: str
    steps: tuple[ProcessStep, ...] = field(default_factory=tuple)
    id: str = ""

    def ordered_steps(self) -> list[ProcessStep]:
        return sorted(self.steps, key=lambda s: s.order)


@dataclass(frozen=True)
class EffectiveStep:
    """Step as seen for one film count (override fields applied)."""

    step_id: str
    label: str
    details: str
    temperature_min: float | None
    temperature_max: float | None
    duration_minutes: float


@dataclass(frozen=True)
class MergedTimelineEntry:
    process_name: str
    step_id: str
    start_time_minutes: float
    duration_minutes: float
    is_terminal: bool

    label: str = ""
    details: str = ""
    temperature_min: float | None = None
    temperature_max: float | None = None
