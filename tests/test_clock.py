from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from civildate import CivilDate, FixedClock, SystemClock, UnknownTimezoneError
from civildate.clock import TimezoneProvider, get_clock, resolve_timezone, set_clock, set_timezone_provider


def test_fixed_clock_reads_naive_as_utc() -> None:
    assert FixedClock(datetime(2020, 1, 1, 12)).now() == datetime(2020, 1, 1, 12, tzinfo=timezone.utc)


def test_system_clock_is_aware() -> None:
    assert SystemClock().now().tzinfo is not None


def test_set_clock_is_used_by_today() -> None:
    prev = set_clock(FixedClock(datetime(2019, 12, 27, 23, 0, tzinfo=timezone.utc)))
    try:
        assert str(CivilDate.today()) == "2019-12-27"
        assert str(CivilDate.in_timezone("Europe/Paris")) == "2019-12-28"
    finally:
        set_clock(prev)
    assert get_clock() is prev


def test_timezone_provider() -> None:
    assert TimezoneProvider().get("UTC") is timezone.utc
    assert str(TimezoneProvider().get("Europe/Paris")) == "Europe/Paris"
    assert resolve_timezone(timezone.utc) is timezone.utc
    with pytest.raises(UnknownTimezoneError):
        TimezoneProvider().get("Not/AZone")


class _AlwaysTokyo(TimezoneProvider):
    def get(self, name: str) -> timezone:
        return timezone(timedelta(hours=9), "JST")


def test_set_timezone_provider() -> None:
    prev = set_timezone_provider(_AlwaysTokyo())
    try:
        instant = datetime(2019, 12, 27, 16, 0, tzinfo=timezone.utc)
        assert str(CivilDate.in_timezone("Somewhere/Else", instant)) == "2019-12-28"
    finally:
        set_timezone_provider(prev)
