"""Events and the event calendar for multi-event season planning.

Supports A/B/C priorities (e.g. A-race 70.3 in September, B-race olympic
in June, C-race sprint in May).

Reference:
    Mujika (2010). Intense training: the key to optimal performance
    before and during the taper. Scand J Med Sci Sports 20(s2):24-31.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import date

from season_engine.exceptions import InvalidEventError
from season_engine.models.enums import Discipline, EventPriority


def parse_priority(value: EventPriority | str) -> EventPriority:
    """Parse ``"A"``/``"b"``/EventPriority into an EventPriority.

    Raises:
        InvalidEventError: If the value is not one of A, B, C.
    """
    if isinstance(value, EventPriority):
        return value
    if isinstance(value, str) and value.strip().upper() in EventPriority.__members__:
        return EventPriority[value.strip().upper()]
    raise InvalidEventError(f"Malformed event priority: {value!r}")


@dataclass(frozen=True)
class Event:
    """A future race on the calendar.

    Use ``Event.create()`` for user input so that validation runs; the
    planner assumes every Event it sees has passed it.
    """

    event_id: str
    name: str
    event_date: date
    priority: EventPriority
    discipline: Discipline = Discipline.OTHER
    distance_km: float | None = None
    event_type: str = ""

    @classmethod
    def create(
        cls,
        event_id: str,
        name: str,
        event_date: date,
        priority: EventPriority | str,
        today: date,
        discipline: Discipline = Discipline.OTHER,
        distance_km: float | None = None,
        event_type: str = "",
    ) -> Event:
        """Validate and build an event.

        Raises:
            InvalidEventError: If the date is before *today* or the
                priority is malformed.
        """
        if event_date < today:
            raise InvalidEventError(
                f"Event {name!r} is dated {event_date.isoformat()}, "
                f"before {today.isoformat()}"
            )
        if distance_km is not None and distance_km < 0:
            raise InvalidEventError(f"Event {name!r} has a negative distance")
        return cls(
            event_id=event_id,
            name=name,
            event_date=event_date,
            priority=parse_priority(priority),
            discipline=discipline,
            distance_km=distance_km,
            event_type=event_type,
        )

    def with_priority(self, priority: EventPriority | str) -> Event:
        """Return a re-ranked copy. Priority is the only user-editable field."""
        return dataclasses.replace(self, priority=parse_priority(priority))


@dataclass(frozen=True)
class EventCalendar:
    """Frozen calendar of events with query helpers.

    Entries are stored sorted chronologically, ties broken by priority
    (A first). Use ``from_events()`` to build from unsorted inputs.
    """

    events: tuple[Event, ...] = field(default_factory=tuple)

    # -- Factory ----------------------------------------------------------

    @classmethod
    def from_events(cls, *events: Event) -> EventCalendar:
        """Create an EventCalendar with events in chronological order."""
        ordered = tuple(sorted(events, key=lambda e: (e.event_date, e.priority)))
        return cls(events=ordered)

    # -- Query helpers ----------------------------------------------------

    def __len__(self) -> int:
        return len(self.events)

    def by_priority(self, priority: EventPriority) -> tuple[Event, ...]:
        return tuple(e for e in self.events if e.priority == priority)

    def main_event(self) -> Event | None:
        """The furthest-out A event, or the last event if there is no A."""
        a_events = self.by_priority(EventPriority.A)
        if a_events:
            return a_events[-1]
        return self.events[-1] if self.events else None

    def next_event(self, as_of: date) -> Event | None:
        """Return the next event on or after *as_of*, any priority."""
        for event in self.events:
            if event.event_date >= as_of:
                return event
        return None

    def events_in_range(self, start: date, end: date) -> tuple[Event, ...]:
        """Return all events whose date falls in [start, end] inclusive."""
        return tuple(e for e in self.events if start <= e.event_date <= end)

    def upcoming(self, as_of: date) -> EventCalendar:
        """Calendar restricted to events on or after *as_of*."""
        return EventCalendar(
            events=tuple(e for e in self.events if e.event_date >= as_of)
        )

    def until(self, last_day: date) -> EventCalendar:
        """Calendar restricted to events on or before *last_day*."""
        return EventCalendar(
            events=tuple(e for e in self.events if e.event_date <= last_day)
        )
