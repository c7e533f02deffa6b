"""Utility functions for the time report system."""
from typing import Optional

from time_report.utilities.models import Date, DateRange


def create_date_range(
    first: Optional[Date] = None,
    last: Optional[Date] = None,
    today: Optional[Date] = None,
) -> DateRange:
    """
    Create the date range a report or generator should cover.

    Args:
        first: Optional first date
        last: Optional last date (ignored unless first is given)
        today: Reference date when no dates are given (defaults to today)

    Returns:
        Both dates given: that range (swapped if reversed).
        Only first given: the semimonth containing first.
        Nothing given: the semimonth containing today.
    """
    if first is not None and last is not None:
        if last < first:
            first, last = last, first
        return DateRange(first, last)
    if first is not None:
        return first.semimonth()
    return (today or Date.today()).semimonth()
