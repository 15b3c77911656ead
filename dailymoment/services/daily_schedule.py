"""
Application service for resolving recurring daily events.

Events are configured once as named ``Span`` objects and resolved here
against concrete days. The service only walks over days and delegates the
time-of-day arithmetic to the domain layer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence

import pendulum
from pendulum import DateTime

from ..config import ALL_WEEKDAYS, AppConfig
from ..domain.exceptions import InvalidDateRangeError
from ..domain.moment import Span

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = {
    0: "Monday",
    1: "Tuesday",
    2: "Wednesday",
    3: "Thursday",
    4: "Friday",
    5: "Saturday",
    6: "Sunday",
}


@dataclass(frozen=True)
class ScheduledEvent:
    """A named span that repeats on the given weekdays (0=Monday)."""
    name: str
    span: Span
    weekdays: Sequence[int] = field(default_factory=lambda: tuple(ALL_WEEKDAYS))

    def occurs_on(self, day: date) -> bool:
        """Check if the event takes place on the given day."""
        return day.weekday() in self.weekdays


@dataclass(frozen=True)
class Occurrence:
    """
    An event resolved against one day.

    ``end`` lies before ``start`` when the event has a negative length.
    """
    name: str
    start: DateTime
    end: DateTime

    def duration_minutes(self) -> int:
        """Return the signed duration in minutes."""
        return int((self.end - self.start).total_seconds() / 60)

    def format_display(self) -> str:
        """
        Format the occurrence for display.
        Format: Weekday, YYYY-MM-DD | HH:MM - HH:MM name (N min.)
        """
        weekday = WEEKDAY_NAMES[self.start.weekday()]
        date_str = self.start.format("YYYY-MM-DD")
        time_str = f"{self.start.format('HH:mm')} - {self.end.format('HH:mm')}"
        return f"{weekday}, {date_str} | {time_str} {self.name} ({self.duration_minutes()} min.)"


class DailyScheduleService:
    """
    Resolves a fixed set of recurring events for single days or day ranges.
    """

    def __init__(self, events: Sequence[ScheduledEvent]) -> None:
        self._events = list(events)

    @classmethod
    def from_config(cls, config: AppConfig) -> "DailyScheduleService":
        """Build the service from a loaded schedule file."""
        events = [
            ScheduledEvent(
                name=event.name,
                span=event.to_span(config.timezone),
                weekdays=tuple(event.weekdays),
            )
            for event in config.events
        ]
        logger.debug("Loaded %d scheduled event(s)", len(events))
        return cls(events)

    @property
    def events(self) -> List[ScheduledEvent]:
        return list(self._events)

    def find_event(self, name: str) -> Optional[ScheduledEvent]:
        """Find an event by its name (case-insensitive)."""
        for event in self._events:
            if event.name.lower() == name.lower():
                return event
        return None

    def resolve_day(self, day: date) -> List[Occurrence]:
        """
        Resolve every event that takes place on the given day.

        Returns:
            Occurrences ordered by start time, then by name
        """
        occurrences = [
            Occurrence(name=event.name, start=event.span.start(day), end=event.span.end(day))
            for event in self._events
            if event.occurs_on(day)
        ]
        occurrences.sort(key=lambda occurrence: (occurrence.start, occurrence.name))
        return occurrences

    def resolve_range(self, first_day: date, last_day: date) -> List[Occurrence]:
        """
        Resolve events for every day from ``first_day`` to ``last_day``.

        Args:
            first_day: First day of the range (inclusive)
            last_day: Last day of the range (inclusive)

        Returns:
            Occurrences of all days ordered by start time

        Raises:
            InvalidDateRangeError: If last_day is before first_day
        """
        first = pendulum.date(first_day.year, first_day.month, first_day.day)
        last = pendulum.date(last_day.year, last_day.month, last_day.day)
        if last < first:
            raise InvalidDateRangeError(f"Last day {last} must not be before first day {first}")

        occurrences: List[Occurrence] = []
        for day in pendulum.interval(first, last).range("days"):
            occurrences.extend(self.resolve_day(day))

        occurrences.sort(key=lambda occurrence: (occurrence.start, occurrence.name))
        return occurrences
