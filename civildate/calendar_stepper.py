"""Calendar-coherent month and year stepping.

`CivilDate.modify("+1 month")` is a naive step: 2020-01-31 becomes
2020-03-02, which skips February entirely, and chaining it drifts the day
of month. The stepper corrects both:

    add_month(2020-01-31)  -> 2020-02-29   (never more than one month)
    add_month(2020-06-30)  -> 2020-07-31   (last day stays the last day)
    add_year(2020-02-29)   -> 2021-02-28

`add_month_with_reference` keeps repeated monthly stepping anchored to the
day of month of a reference date, so twelve steps from 2020-01-31 land on
2021-01-31 instead of 2021-01-28.
"""

from __future__ import annotations

import logging

from .civil_date import CivilDate

logger = logging.getLogger(__name__)

# Longest month (31) minus shortest (28): a naive step never overshoots more.
MAX_CORRECTION_DAYS = 3


def _step_back_into(candidate: CivilDate, expected_month: int) -> CivilDate:
    """Subtract days until `candidate` falls in `expected_month`."""
    for _ in range(MAX_CORRECTION_DAYS):
        if candidate.month == expected_month:
            return candidate
        candidate = candidate.modify("-1 day")
    if candidate.month != expected_month:
        raise RuntimeError(f"Month correction did not converge on month {expected_month}: {candidate}")
    return candidate


class CalendarStepper:
    """Stateless month/year arithmetic on CivilDate."""

    def add_month(self, from_: CivilDate) -> CivilDate:
        """Move to the same day next month, at most one calendar month ahead."""
        expected = 1 if from_.month == 12 else from_.month + 1
        naive = from_.modify("+1 month")
        nxt = _step_back_into(naive, expected)
        if nxt != naive:
            logger.debug("add_month(%s): naive step %s corrected to %s", from_, naive, nxt)
        return self._keep_last_day(nxt, from_)

    def remove_month(self, from_: CivilDate) -> CivilDate:
        """Move to the same day last month, at most one calendar month back."""
        expected = 12 if from_.month == 1 else from_.month - 1
        naive = from_.modify("-1 month")
        prev = _step_back_into(naive, expected)
        if prev != naive:
            logger.debug("remove_month(%s): naive step %s corrected to %s", from_, naive, prev)
        return self._keep_last_day(prev, from_)

    def add_year(self, from_: CivilDate) -> CivilDate:
        """Move one year ahead; Feb 29 becomes Feb 28 in a common year."""
        naive = from_.modify("+1 year")
        nxt = _step_back_into(naive, from_.month)
        if nxt != naive:
            logger.debug("add_year(%s): naive step %s corrected to %s", from_, naive, nxt)
        return nxt

    def add_month_with_reference(self, reference: CivilDate, from_: CivilDate) -> CivilDate:
        """Step one month from `from_` while keeping `reference`'s day of month.

        The day is clamped to the length of the target month, and a reference
        on the last day of its month always yields the last day of the target
        month.
        """
        nxt = self.add_month(from_)
        day = min(reference.day, nxt.days_in_month())
        anchored = nxt.modify("first day of this month")
        if day > 1:
            anchored = anchored.modify(f"+{day - 1} days")
        return self._keep_last_day(anchored, reference)

    def _keep_last_day(self, result: CivilDate, reference: CivilDate) -> CivilDate:
        if reference.is_last_day_of_month():
            return result.modify("last day of this month")
        return result
