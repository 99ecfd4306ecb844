from __future__ import annotations

import dataclasses

import pytest

from civildate import CivilDate, DateRange


def test_constructor_keeps_references() -> None:
    start = CivilDate.parse("2021-01-01")
    end = CivilDate.parse("2021-02-28")
    r = DateRange(start, end)
    assert r.start is start
    assert r.end is end


def test_inverted_range_is_allowed() -> None:
    r = DateRange(CivilDate.parse("2021-02-28"), CivilDate.parse("2021-01-01"))
    assert r.end.is_before(r.start)


def test_frozen() -> None:
    r = DateRange(CivilDate.parse("2021-01-01"), CivilDate.parse("2021-02-28"))
    with pytest.raises(dataclasses.FrozenInstanceError):
        r.start = CivilDate.parse("2020-01-01")  # type: ignore[misc]
