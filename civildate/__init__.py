"""Day-granularity civil dates and calendar-correct month/year arithmetic.

A `CivilDate` is a calendar day, never an instant: it has no time of day and
its timezone only matters when projecting it onto a 24h window
(`starts_at`/`ends_at`) or when deriving it from an instant (`in_timezone`).
"""

from .calendar_stepper import CalendarStepper
from .civil_date import CivilDate
from .clock import Clock, FixedClock, SystemClock, TimezoneProvider
from .date_range import DateRange
from .errors import (
    CivilDateError,
    ConversionError,
    DateOutOfRangeError,
    EmptyValueError,
    InvalidArgumentError,
    InvalidModifierError,
    MalformedValueError,
    NotNormalizableValueError,
    ParseError,
    UnknownPatternError,
    UnknownTimezoneError,
    UnsupportedLocaleError,
)
from .settings import CANONICAL_FORMAT, Settings
