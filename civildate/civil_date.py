from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timezone, tzinfo

from .clock import Clock, get_clock, resolve_timezone
from .errors import InvalidArgumentError, ParseError
from .modifier import parse_modifier
from .settings import CANONICAL_FORMAT

# Appended to both text and pattern so a parsed value can never carry a time.
_MIDNIGHT_TEXT = " 00:00:00"
_MIDNIGHT_PATTERN = " %H:%M:%S"
_END_OF_DAY = time(23, 59, 59)


@dataclass(frozen=True, eq=False, repr=False)
class CivilDate:
    """A calendar day with no time of day and no timezone.

    Internally a plain `datetime.date`; whenever a time is needed (formatting,
    timestamps) the day is rendered as midnight UTC. Instances are immutable
    and every transformation returns a new one.
    """

    value: date

    DEFAULT_FORMAT = CANONICAL_FORMAT

    def __post_init__(self) -> None:
        v = self.value
        if isinstance(v, datetime):
            object.__setattr__(self, "value", v.date())
        elif not isinstance(v, date):
            raise TypeError(f"CivilDate expects a date, got {type(v).__name__}")

    # -- construction -----------------------------------------------------

    @classmethod
    def parse(cls, text: str, pattern: str = CANONICAL_FORMAT) -> "CivilDate":
        """Parse `text` with a strptime pattern.

        Raises ParseError when the text does not match the pattern or does not
        denote a real calendar day (2021-02-29, 2020-04-31, ...).
        """
        if not isinstance(text, str):
            raise ParseError(repr(text), pattern, "not a string")
        try:
            dt = datetime.strptime(text + _MIDNIGHT_TEXT, pattern + _MIDNIGHT_PATTERN)
        except (ValueError, re.error) as e:
            raise ParseError(text, pattern, str(e)) from e
        return cls(dt.date())

    @classmethod
    def in_timezone(
        cls,
        tz: tzinfo | str,
        instant: datetime | None = None,
        *,
        clock: Clock | None = None,
    ) -> "CivilDate":
        """Return the calendar date it is in `tz` at `instant` (default: now).

        Naive instants are read as UTC.
        """
        if instant is None:
            instant = (clock or get_clock()).now()
        elif instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        return cls(instant.astimezone(resolve_timezone(tz)).date())

    @classmethod
    def today(cls, *, clock: Clock | None = None) -> "CivilDate":
        return cls.in_timezone(timezone.utc, clock=clock)

    @classmethod
    def from_date(cls, d: date) -> "CivilDate":
        return cls(d)

    @classmethod
    def from_datetime(cls, dt: datetime) -> "CivilDate":
        """The wall-clock date shown by `dt`, in its own timezone."""
        return cls(dt.date())

    @classmethod
    def from_timestamp(cls, timestamp: int | float) -> "CivilDate":
        return cls(datetime.fromtimestamp(timestamp, tz=timezone.utc).date())

    # -- conversion -------------------------------------------------------

    def to_date(self) -> date:
        return self.value

    def to_datetime(self) -> datetime:
        """Midnight UTC of this day, as an aware datetime."""
        return datetime.combine(self.value, time.min, tzinfo=timezone.utc)

    def to_timestamp(self) -> int:
        return int(self.to_datetime().timestamp())

    # -- formatting -------------------------------------------------------

    def format(self, pattern: str = CANONICAL_FORMAT) -> str:
        if pattern == CANONICAL_FORMAT:
            # isoformat() zero-pads years below 1000, strftime("%Y") may not.
            return self.value.isoformat()
        return self.to_datetime().strftime(pattern)

    def __str__(self) -> str:
        return self.value.isoformat()

    def __repr__(self) -> str:
        return f"CivilDate({str(self)!r})"

    # -- calendar fields --------------------------------------------------

    @property
    def year(self) -> int:
        return self.value.year

    @property
    def month(self) -> int:
        return self.value.month

    @property
    def day(self) -> int:
        return self.value.day

    def days_in_month(self) -> int:
        return calendar.monthrange(self.value.year, self.value.month)[1]

    def is_last_day_of_month(self) -> bool:
        return self.value.day == self.days_in_month()

    # -- comparison -------------------------------------------------------

    def compare(self, other: "CivilDate") -> int:
        """Three-way comparison on the canonical string (-1, 0 or 1)."""
        if not isinstance(other, CivilDate):
            raise InvalidArgumentError(f"Cannot compare CivilDate with {type(other).__name__}")
        a, b = str(self), str(other)
        return (a > b) - (a < b)

    def equals(self, other: "CivilDate") -> bool:
        return self.compare(other) == 0

    def is_before(self, other: "CivilDate") -> bool:
        return self.compare(other) < 0

    def is_before_or_equal_to(self, other: "CivilDate") -> bool:
        return self.compare(other) <= 0

    def is_after(self, other: "CivilDate") -> bool:
        return self.compare(other) > 0

    def is_after_or_equal_to(self, other: "CivilDate") -> bool:
        return self.compare(other) >= 0

    def is_between(self, start: "CivilDate", end: "CivilDate") -> bool:
        """Strictly between start and end (bounds excluded)."""
        return self.is_after(start) and self.is_before(end)

    def is_between_or_equal_to(self, start: "CivilDate", end: "CivilDate") -> bool:
        return self.is_after_or_equal_to(start) and self.is_before_or_equal_to(end)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CivilDate):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(str(self))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CivilDate):
            return NotImplemented
        return self.is_before(other)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, CivilDate):
            return NotImplemented
        return self.is_before_or_equal_to(other)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, CivilDate):
            return NotImplemented
        return self.is_after(other)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, CivilDate):
            return NotImplemented
        return self.is_after_or_equal_to(other)

    # -- modification -----------------------------------------------------

    def modify(self, expression: str) -> "CivilDate":
        """Return a new date moved by a relative expression.

        Accepts day/week/month/year offsets ("+2 days", "-1 month",
        "3 weeks ago") and the month idioms "first day of ..." and
        "last day of ...". Month and year offsets overflow like a naive
        calendar step (2020-01-31 "+1 month" is 2020-03-02); use
        CalendarStepper for clamped month arithmetic. Day and week offsets are
        applied after a "first/last day of" anchor.

        Raises InvalidModifierError for tokens outside the vocabulary and
        DateOutOfRangeError when the result is outside years 1..9999.
        """
        return CivilDate(parse_modifier(expression).apply(self.value))

    # -- timezone projection ----------------------------------------------

    def starts_at(self, tz: tzinfo | str) -> datetime:
        """Local midnight of this day in `tz`."""
        return _localize(datetime.combine(self.value, time.min), resolve_timezone(tz))

    def ends_at(self, tz: tzinfo | str) -> datetime:
        """Local 23:59:59 of this day in `tz`."""
        return _localize(datetime.combine(self.value, _END_OF_DAY), resolve_timezone(tz))


def _localize(wall: datetime, zone: tzinfo) -> datetime:
    # Round-tripping through UTC moves a wall time that falls in a DST gap
    # onto a real instant; existing wall times are unchanged.
    aware = wall.replace(tzinfo=zone)
    return aware.astimezone(timezone.utc).astimezone(zone)

