from __future__ import annotations

import logging

from .models import EffectiveStep, ProcessStep, TimeOverride

logger = logging.getLogger(__name__)

MIN_FILM_COUNT = 1
MAX_FILM_COUNT = 100


def clamp_film_count(
    film_count: int, low: int = MIN_FILM_COUNT, high: int | None = None
) -> int:
    if film_count < low:
        return low
    if high is not None and film_count > high:
        return high
    return film_count


class EffectiveTimeResolver:
    """
    Effective duration of one step for a film count.

    Precedence:
      1. override whose [min, max] contains the film count (first match wins)
      2. override with the greatest max still below the film count
      3. first periodic rule: base + floor((n - 1) / interval) * increment
      4. base time
    An override without a time only replaces the label, details and
    temperatures; its duration comes from steps 3-4.
    Film counts below 1 are treated as 1.
    """

    def resolve(self, step: ProcessStep, film_count: int) -> float:
        n = self._normalize(film_count)
        return self._duration(step, n, self.select_override(step, n))

    def effective_step(self, step: ProcessStep, film_count: int) -> EffectiveStep:
        n = self._normalize(film_count)
        ov = self.select_override(step, n)
        label = step.label
        details = step.details
        t_min = step.temperature_min
        t_max = step.temperature_max
        if ov is not None:
            label = ov.step or label
            details = ov.details or details
            if ov.temperature_min is not None:
                t_min = ov.temperature_min
            if ov.temperature_max is not None:
                t_max = ov.temperature_max
        return EffectiveStep(
            step_id=step.id,
            label=label,
            details=details,
            temperature_min=t_min,
            temperature_max=t_max,
            duration_minutes=self._duration(step, n, ov),
        )

    @staticmethod
    def select_override(step: ProcessStep, film_count: int) -> TimeOverride | None:
        for ov in step.overrides:
            if ov.contains(film_count):
                return ov

        # gap after a defined range keeps the last value that ended before it
        best: TimeOverride | None = None
        for ov in step.overrides:
            if ov.film_count_max < film_count:
                if best is None or ov.film_count_max > best.film_count_max:
                    best = ov
        return best

    def _duration(self, step: ProcessStep, film_count: int, ov: TimeOverride | None) -> float:
        if ov is not None and ov.time is not None:
            return ov.time
        return self._rule_time(step, film_count)

    @staticmethod
    def _rule_time(step: ProcessStep, film_count: int) -> float:
        if not step.rules:
            return step.base_time_minutes
        if len(step.rules) > 1:
            logger.debug(
                "step %r has %d rules; only the first is applied", step.id, len(step.rules)
            )
        rule = step.rules[0]
        increments = (film_count - 1) // rule.film_interval
        return step.base_time_minutes + increments * rule.time_increment

    @staticmethod
    def _normalize(film_count: int) -> int:
        n = clamp_film_count(int(film_count))
        if n != film_count:
            logger.debug("film_count=%s clamped to %s", film_count, n)
        return n


_default = EffectiveTimeResolver()


def resolve(step: ProcessStep, film_count: int) -> float:
    return _default.resolve(step, film_count)
