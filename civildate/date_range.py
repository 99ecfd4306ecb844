from __future__ import annotations

from dataclasses import dataclass

from .civil_date import CivilDate


@dataclass(frozen=True)
class DateRange:
    """A start/end pair of dates.

    No ordering is enforced: `end` may precede `start`.
    """

    start: CivilDate
    end: CivilDate
