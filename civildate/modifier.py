"""Relative date modification restricted to calendar units.

Expressions such as "+2 days", "-1 month", "3 weeks ago" or
"last day of previous month" are parsed once into a `Modifier` instruction
and then applied to plain `datetime.date` values. Only day, week, month and
year units exist here: sub-day units make no sense for a civil date, so
anything outside the vocabulary below is rejected with the offending tokens.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from functools import lru_cache

from .errors import DateOutOfRangeError, InvalidModifierError

VOCABULARY = frozenset(
    {
        "day",
        "days",
        "week",
        "weeks",
        "month",
        "months",
        "year",
        "years",
        "last",
        "first",
        "ago",
        "this",
        "of",
        "previous",
    }
)

TOKEN_RE = re.compile(r"[+-]?\d+|[a-z]+|\S", re.IGNORECASE)
NUMBER_RE = re.compile(r"[+-]?\d+")


class Unit(Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


UNITS = {
    "day": Unit.DAY,
    "days": Unit.DAY,
    "week": Unit.WEEK,
    "weeks": Unit.WEEK,
    "month": Unit.MONTH,
    "months": Unit.MONTH,
    "year": Unit.YEAR,
    "years": Unit.YEAR,
}

# "<word> <unit>" shorthands and the amount they stand for.
RELATIVE_WORDS = {"this": 0, "first": 1, "last": -1, "previous": -1}


class Anchor(Enum):
    FIRST_DAY_OF_MONTH = "first"
    LAST_DAY_OF_MONTH = "last"


@dataclass(frozen=True)
class Step:
    amount: int
    unit: Unit

    def negated(self) -> "Step":
        return Step(-self.amount, self.unit)


@dataclass(frozen=True)
class Modifier:
    """A parsed modify() expression."""

    steps: tuple[Step, ...] = ()
    anchor: Anchor | None = None

    def totals(self) -> tuple[int, int, int]:
        """Return (years, months, days) summed over all steps."""
        years = months = days = 0
        for s in self.steps:
            if s.unit is Unit.YEAR:
                years += s.amount
            elif s.unit is Unit.MONTH:
                months += s.amount
            elif s.unit is Unit.WEEK:
                days += 7 * s.amount
            else:
                days += s.amount
        return years, months, days

    def apply(self, d: date) -> date:
        """Apply to a date.

        Years and months shift the (year, month) fields first. The anchor, if
        any, then picks the day; otherwise the original day-of-month is kept
        and overflows into the following month when the target month is too
        short (2020-01-31 +1 month -> 2020-03-02). Days and weeks go last, so
        they also move an anchored day ("first day of this month +1 day" is
        the 2nd).

        Raises DateOutOfRangeError when the result falls outside years 1..9999.
        """
        years, months, days = self.totals()
        y, m = divmod((d.year + years) * 12 + (d.month - 1) + months, 12)
        m += 1

        try:
            if self.anchor is Anchor.FIRST_DAY_OF_MONTH:
                out = date(y, m, 1)
            elif self.anchor is Anchor.LAST_DAY_OF_MONTH:
                out = date(y, m, calendar.monthrange(y, m)[1])
            else:
                out = date(y, m, 1) + timedelta(days=d.day - 1)

            if days:
                out = out + timedelta(days=days)
        except (OverflowError, ValueError) as e:
            raise DateOutOfRangeError(d.isoformat(), str(e)) from e
        return out


def tokenize(expression: str) -> list[str]:
    return TOKEN_RE.findall(expression.lower())


def _unsupported(tokens: list[str]) -> tuple[str, ...]:
    bad: list[str] = []
    for t in tokens:
        if NUMBER_RE.fullmatch(t) or t in VOCABULARY:
            continue
        if t not in bad:
            bad.append(t)
    return tuple(bad)


def parse_modifier(expression: str) -> Modifier:
    """Parse an expression into a Modifier, or raise InvalidModifierError."""
    if not isinstance(expression, str):
        raise InvalidModifierError(repr(expression), reason=f"expected a string, got {type(expression).__name__}")
    return _parse_modifier(expression)


@lru_cache(maxsize=256)
def _parse_modifier(expression: str) -> Modifier:
    tokens = tokenize(expression)
    if not tokens:
        raise InvalidModifierError(expression)

    bad = _unsupported(tokens)
    if bad:
        raise InvalidModifierError(expression, bad)

    steps: list[Step] = []
    anchor: Anchor | None = None
    i = 0
    n = len(tokens)

    def fail(at: int, why: str) -> InvalidModifierError:
        tok = tokens[at] if at < n else ""
        return InvalidModifierError(expression, (tok,) if tok else (), reason=f"{why} at {tok or 'end'!r}")

    while i < n:
        tok = tokens[i]

        # first day of / last day of
        if (
            tok in ("first", "last")
            and i + 2 < n
            and tokens[i + 1] == "day"
            and tokens[i + 2] == "of"
        ):
            if anchor is not None:
                raise fail(i, "duplicate day-of anchor")
            anchor = Anchor.FIRST_DAY_OF_MONTH if tok == "first" else Anchor.LAST_DAY_OF_MONTH
            i += 3
            continue

        if NUMBER_RE.fullmatch(tok):
            if i + 1 >= n or tokens[i + 1] not in UNITS:
                raise fail(i + 1, "expected a unit")
            steps.append(Step(int(tok), UNITS[tokens[i + 1]]))
            i += 2
            continue

        if tok in RELATIVE_WORDS:
            if i + 1 >= n or tokens[i + 1] not in UNITS:
                raise fail(i + 1, "expected a unit")
            steps.append(Step(RELATIVE_WORDS[tok], UNITS[tokens[i + 1]]))
            i += 2
            continue

        if tok == "ago":
            if not steps:
                raise fail(i, "nothing to negate")
            steps = [s.negated() for s in steps]
            i += 1
            continue

        raise fail(i, "unexpected token")

    return Modifier(steps=tuple(steps), anchor=anchor)
