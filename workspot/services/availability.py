"""
Availability resolution for a single desk on a single date.

Pure functions over snapshots supplied by the caller: the published opening
hours of a business for the day, and the reservations already held on the
desk. Nothing here touches the database or raises; malformed input degrades
to "nothing bookable".

All times are whole hours of the day. Stored ``time`` values and
``"HH:MM:SS"`` strings are converted once, through ``to_hour``, at the
boundary.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Iterable, List, Optional, Sequence, Set, Tuple

CANCELLED = "cancelled"

Interval = Tuple[int, int]


def to_hour(value) -> Optional[int]:
    """
    Convert a time-of-day value to an integer hour, truncating minutes.

    Accepts ``datetime.time``, ``datetime.datetime``, ``"HH:MM"`` or
    ``"HH:MM:SS"`` strings and plain integers in ``[0, 24]`` (24 being a
    closing hour of midnight). Anything else returns None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (datetime, time)):
        return value.hour
    if isinstance(value, int):
        return value if 0 <= value <= 24 else None
    if isinstance(value, str):
        head = value.strip().split(":", 1)[0]
        if not head.isdecimal():
            return None
        hour = int(head)
        return hour if 0 <= hour <= 24 else None
    return None


@dataclass(frozen=True)
class OpeningHours:
    """
    Open/close window a business publishes for one date, in whole hours.

    Either bound may be None when the stored value could not be read; such a
    window has no bookable hours.
    """
    open_hour: Optional[int]
    close_hour: Optional[int]

    @classmethod
    def from_times(cls, open_time, close_time) -> "OpeningHours":
        return cls(open_hour=to_hour(open_time), close_hour=to_hour(close_time))

    def is_valid(self) -> bool:
        return (
            _is_hour(self.open_hour)
            and _is_hour(self.close_hour)
            and self.open_hour < self.close_hour
        )


@dataclass(frozen=True)
class ReservationInterval:
    """
    A booked half-open range ``[start_hour, end_hour)`` on one desk and date.
    """
    desk_id: int
    day: date
    start_hour: int
    end_hour: int
    status: str = "confirmed"

    @property
    def blocks(self) -> bool:
        """Whether this reservation takes hours away from the desk."""
        return (
            self.status != CANCELLED
            and _is_hour(self.start_hour)
            and _is_hour(self.end_hour)
            and self.start_hour < self.end_hour
        )

    def as_interval(self) -> Interval:
        return (self.start_hour, self.end_hour)


@dataclass(frozen=True)
class DayAvailability:
    """What a customer can pick for one desk on one date."""
    open_hour: Optional[int]
    close_hour: Optional[int]
    start_hours: List[int] = field(default_factory=list)
    free_start_hours: List[int] = field(default_factory=list)
    booked_hours: List[int] = field(default_factory=list)

    @property
    def is_open(self) -> bool:
        return bool(self.start_hours)


def _is_hour(value) -> bool:
    """An integer hour of the day, 24 allowed as a closing bound."""
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 24


def enumerate_start_hours(hours: OpeningHours) -> List[int]:
    """Every hour from opening up to, but not including, closing."""
    if not hours.is_valid():
        return []
    return list(range(hours.open_hour, hours.close_hour))


def booked_hours(reservations: Iterable[ReservationInterval]) -> Set[int]:
    """Integer hours covered by the blocking reservations."""
    booked: Set[int] = set()
    for reservation in reservations:
        if reservation.blocks:
            booked.update(range(reservation.start_hour, reservation.end_hour))
    return booked


def filter_booked_hours(
    start_hours: Sequence[int],
    reservations: Iterable[ReservationInterval],
) -> List[int]:
    """Drop start hours already taken by a reservation, keeping order."""
    booked = booked_hours(reservations)
    return [hour for hour in start_hours if hour not in booked]


def max_duration(
    start_hour: int,
    close_hour: int,
    reservations: Iterable[ReservationInterval],
) -> int:
    """
    Longest booking, in hours, that can begin at ``start_hour``.

    Scans forward until closing time or the first booked hour, whichever
    comes first. A start hour at or past closing, or an hour outside
    the day, yields 0.
    """
    if not (_is_hour(start_hour) and _is_hour(close_hour)):
        return 0
    if start_hour >= close_hour:
        return 0

    booked = booked_hours(reservations)
    for hour in range(start_hour + 1, close_hour):
        if hour in booked:
            return hour - start_hour
    return close_hour - start_hour


def overlaps(candidate: Interval, existing: Interval) -> bool:
    """Half-open overlap test; touching endpoints do not overlap."""
    return candidate[0] < existing[1] and candidate[1] > existing[0]


def is_available(
    desk_id: int,
    day: date,
    start: int,
    end: int,
    existing: Iterable[ReservationInterval],
) -> bool:
    """
    True when no live reservation on the same desk and date overlaps
    ``[start, end)``. A malformed or out-of-range candidate is never available.
    """
    if not (_is_hour(start) and _is_hour(end)) or start >= end:
        return False

    for reservation in existing:
        if reservation.desk_id != desk_id or reservation.day != day:
            continue
        if not reservation.blocks:
            continue
        if overlaps((start, end), reservation.as_interval()):
            return False
    return True


def day_availability(
    hours: Optional[OpeningHours],
    reservations: Iterable[ReservationInterval],
) -> DayAvailability:
    """Combine opening hours and reservations into the selectable view."""
    if hours is None:
        return DayAvailability(open_hour=None, close_hour=None)

    reservations = list(reservations)
    start_hours = enumerate_start_hours(hours)
    booked = booked_hours(reservations)

    return DayAvailability(
        open_hour=hours.open_hour,
        close_hour=hours.close_hour,
        start_hours=start_hours,
        free_start_hours=filter_booked_hours(start_hours, reservations),
        booked_hours=sorted(hour for hour in booked if hour in start_hours),
    )
