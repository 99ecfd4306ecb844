from __future__ import annotations

from datetime import date

import pytest

from civildate import CivilDate, CivilDateError, DateOutOfRangeError, InvalidModifierError
from civildate.modifier import Anchor, Modifier, Step, Unit, parse_modifier


@pytest.mark.parametrize(
    "expr,expected",
    [
        ("+1 day", "2020-01-16"),
        ("-1 day", "2020-01-14"),
        ("+2 days", "2020-01-17"),
        ("3 days ago", "2020-01-12"),
        ("+1 week", "2020-01-22"),
        ("-2 weeks", "2020-01-01"),
        ("+1 month", "2020-02-15"),
        ("-1 month", "2019-12-15"),
        ("+1 year", "2021-01-15"),
        ("last day", "2020-01-14"),
        ("previous month", "2019-12-15"),
        ("this month", "2020-01-15"),
        ("first day of this month", "2020-01-01"),
        ("last day of this month", "2020-01-31"),
        ("last day of previous month", "2019-12-31"),
        ("first day of +1 month", "2020-02-01"),
        ("+1 month +1 day", "2020-02-16"),
        ("+1DAY", "2020-01-16"),
    ],
)
def test_modify(expr: str, expected: str) -> None:
    assert str(CivilDate.parse("2020-01-15").modify(expr)) == expected


@pytest.mark.parametrize(
    "expr,bad",
    [
        ("+1 second", ("second",)),
        ("+1 hour +2 minutes", ("hour", "minutes")),
        ("next month", ("next",)),
        ("+1 day; drop", (";", "drop")),
    ],
)
def test_rejects_tokens_outside_vocabulary(expr: str, bad: tuple[str, ...]) -> None:
    with pytest.raises(InvalidModifierError) as ei:
        CivilDate.parse("2020-01-15").modify(expr)
    assert ei.value.tokens == bad
    for tok in bad:
        assert tok in str(ei.value)


@pytest.mark.parametrize("expr", ["", "   ", "of this month", "+1", "ago", "day +1", "last day of last day of"])
def test_rejects_malformed_expressions(expr: str) -> None:
    with pytest.raises(InvalidModifierError):
        parse_modifier(expr)


def test_parsed_instruction_shape() -> None:
    m = parse_modifier("last day of previous month")
    assert m == Modifier(steps=(Step(-1, Unit.MONTH),), anchor=Anchor.LAST_DAY_OF_MONTH)
    assert parse_modifier("2 weeks ago").totals() == (0, 0, -14)


def test_ago_negates_everything_before_it() -> None:
    assert parse_modifier("+1 year +2 months ago").totals() == (-1, -2, 0)


def test_apply_wraps_years() -> None:
    assert parse_modifier("+1 month").apply(date(2020, 12, 31)) == date(2021, 1, 31)
    assert parse_modifier("-1 month").apply(date(2020, 1, 31)) == date(2019, 12, 31)
    assert parse_modifier("-13 months").apply(date(2020, 1, 1)) == date(2018, 12, 1)


@pytest.mark.parametrize(
    "start,expr",
    [
        (date(9999, 12, 31), "+1 day"),
        (date(9999, 12, 15), "+1 month"),
        (date(1, 1, 1), "-1 year"),
        (date(1, 1, 1), "last day of previous month"),
        (date(2020, 1, 15), "+99999999999999999999 days"),
    ],
)
def test_out_of_range_results_raise_typed_error(start: date, expr: str) -> None:
    with pytest.raises(DateOutOfRangeError) as ei:
        CivilDate(start).modify(expr)
    assert isinstance(ei.value, CivilDateError)
    assert isinstance(ei.value.__cause__, (OverflowError, ValueError))


@pytest.mark.parametrize("expr", [None, 1, b"+1 day"])
def test_non_string_expression(expr: object) -> None:
    with pytest.raises(InvalidModifierError):
        CivilDate.parse("2020-01-15").modify(expr)  # type: ignore[arg-type]


def test_day_offsets_apply_after_anchor() -> None:
    d = CivilDate.parse("2020-01-15")
    assert str(d.modify("first day of this month +1 day")) == "2020-01-02"
    assert str(d.modify("last day of this month -1 day")) == "2020-01-30"
