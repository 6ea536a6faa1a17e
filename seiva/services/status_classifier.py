"""
Student financial status classification.

A student's standing is a pure function of the billing periods they have
paid, the ordered list of periods in the academic cycle, and which of those
periods is current:

* nothing paid                              -> pending
* every period up to and including current  -> paid
* anything else                             -> late

Period identifiers that are not part of the academic list are ignored when
judging lateness (they are still kept on the student).
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence, Tuple

from seiva.models.enums import FinancialStatus
from seiva.schemas.base import period_key
from seiva.utils.time import today as utc_today

CALENDAR_MONTHS = (
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
)




def classify(
    paid_periods: Iterable[str],
    periods: Sequence[str],
    current_index: int,
) -> FinancialStatus:
    """
    Classify a set of paid periods.

    Args:
        paid_periods: Periods the student has paid, in any order, duplicates allowed
        periods: Canonical academic periods, in billing order
        current_index: Index into ``periods`` of the current period; ``-1`` means
            no period is due yet. Values past the end are clamped.

    Returns:
        FinancialStatus
    """
    paid = {period_key(p) for p in paid_periods}
    if not paid:
        return FinancialStatus.PENDING

    due = periods[: max(current_index, -1) + 1]
    if all(period_key(p) in paid for p in due):
        return FinancialStatus.PAID
    return FinancialStatus.LATE


def current_period_index(
    periods: Sequence[str],
    on: Optional[date] = None,
    override: Optional[str] = None,
) -> int:
    """
    Resolve which academic period is current.

    ``override`` names a period explicitly. Otherwise the calendar month of
    ``on`` (default: today, UTC) is used: a month inside the academic list maps
    to its index, a month before the first period means nothing is due (-1),
    and a month after the last period means the whole cycle is due.
    Period names that are not calendar months can only be selected through
    ``override``; without it, the whole cycle is considered due.
    """
    keys = [period_key(p) for p in periods]
    if override:
        try:
            return keys.index(period_key(override))
        except ValueError:
            raise ValueError(
                f"Unknown current period {override!r}; expected one of {list(periods)}"
            ) from None

    on = on or utc_today()
    month_name = CALENDAR_MONTHS[on.month - 1]
    if month_name in keys:
        return keys.index(month_name)

    month_numbers = [CALENDAR_MONTHS.index(k) + 1 for k in keys if k in CALENDAR_MONTHS]
    if not month_numbers:
        return len(periods) - 1
    if on.month < min(month_numbers):
        return -1
    # Past the end of the cycle, or a gap month inside it: the last period
    # that has already started is current.
    started = [i for i, k in enumerate(keys) if k in CALENDAR_MONTHS and CALENDAR_MONTHS.index(k) + 1 <= on.month]
    return max(started) if started else -1


@dataclass(frozen=True)
class StatusPolicy:
    """
    The academic calendar configuration the classifier is evaluated against.

    Without an explicit ``current_period`` the index is resolved from a date,
    kept in ``resolved_on``; ``rolled_over`` tells when that date's month has
    passed and the policy needs resolving again.
    """
    periods: Tuple[str, ...]
    current_index: int
    current_period: Optional[str] = None
    resolved_on: Optional[date] = None

    def classify(self, paid_periods: Iterable[str]) -> FinancialStatus:
        return classify(paid_periods, self.periods, self.current_index)

    def is_known_period(self, period: str) -> bool:
        return period_key(period) in {period_key(p) for p in self.periods}

    def rolled_over(self, on: date) -> bool:
        if self.current_period or self.resolved_on is None:
            return False
        return (on.year, on.month) != (self.resolved_on.year, self.resolved_on.month)

    def for_date(self, on: date) -> "StatusPolicy":
        return StatusPolicy.build(self.periods, on=on, current_period=self.current_period)

    @classmethod
    def build(
        cls,
        periods: Sequence[str],
        on: Optional[date] = None,
        current_period: Optional[str] = None,
    ) -> "StatusPolicy":
        on = on or utc_today()
        return cls(
            periods=tuple(periods),
            current_index=current_period_index(periods, on=on, override=current_period),
            current_period=current_period or None,
            resolved_on=on,
        )

    @classmethod
    def from_settings(cls, settings, on: Optional[date] = None) -> "StatusPolicy":
        """Build from ``ACADEMIC_PERIODS`` / ``CURRENT_PERIOD``."""
        return cls.build(settings.ACADEMIC_PERIODS, on=on, current_period=settings.CURRENT_PERIOD)
