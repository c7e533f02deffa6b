"""Week bucketing and minute totals for billing reports."""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

import pandas as pd

from time_report.utilities import config
from time_report.utilities.errors import ReportError
from time_report.utilities.models import DateRange, DayEntry, Project, ReportMode

logger = logging.getLogger(__name__)

KEY_COLUMNS = ["day", "client", "code", "subcode"]
MINUTE_COLUMNS = ["week"] + KEY_COLUMNS + ["minutes"]


def billable_minutes(minutes: int) -> int:
    """Round minutes down to the billing increment."""
    return minutes - minutes % config.BILLING_INCREMENT_MINUTES


def _empty_minutes_frame() -> pd.DataFrame:
    frame = pd.DataFrame({column: pd.Series(dtype="object") for column in MINUTE_COLUMNS})
    frame["minutes"] = frame["minutes"].astype("int64")
    return frame


def build_minutes_frame(day_entries: Iterable[DayEntry]) -> pd.DataFrame:
    """
    Flatten day entries into one row per (week, day, project) with summed minutes.

    Args:
        day_entries: Entries to aggregate

    Returns:
        DataFrame with MINUTE_COLUMNS
    """
    rows = [
        {
            "week": entry.date.week_num,
            "day": entry.date.day_abbrev,
            "client": project_times.project.client,
            "code": project_times.project.code,
            "subcode": project_times.project.subcode,
            "minutes": project_times.total_minutes,
        }
        for entry in day_entries
        for project_times in entry.projects
    ]
    if not rows:
        return _empty_minutes_frame()

    frame = pd.DataFrame(rows, columns=MINUTE_COLUMNS)
    frame["minutes"] = frame["minutes"].astype("int64")
    return frame.groupby(["week"] + KEY_COLUMNS, as_index=False, sort=False)["minutes"].sum()


class WeekData:
    """Minutes keyed by (day abbreviation, project) for one week or the whole range."""

    def __init__(self, frame: pd.DataFrame | None = None):
        if frame is None or frame.empty:
            self.minutes = _empty_minutes_frame()[KEY_COLUMNS + ["minutes"]]
        else:
            self.minutes = (
                frame.groupby(KEY_COLUMNS, as_index=False, sort=False)["minutes"].sum()
            )
        self.minutes = self.minutes.assign(
            billable=self.minutes["minutes"] - self.minutes["minutes"] % config.BILLING_INCREMENT_MINUTES
        )

    def _project_mask(self, project: Project) -> pd.Series:
        return (
            (self.minutes["client"] == project.client)
            & (self.minutes["code"] == project.code)
            & (self.minutes["subcode"] == project.subcode)
        )

    def _sum(self, column: str, mask: pd.Series | None = None) -> int:
        values = self.minutes[column] if mask is None else self.minutes.loc[mask, column]
        return int(values.sum())

    def project_day_total(self, project: Project, day_name: str) -> int:
        return self._sum("minutes", self._project_mask(project) & (self.minutes["day"] == day_name))

    def project_total(self, project: Project) -> int:
        return self._sum("minutes", self._project_mask(project))

    def project_billable(self, project: Project) -> int:
        return self._sum("billable", self._project_mask(project))

    def day_total(self, day_name: str) -> int:
        return self._sum("minutes", self.minutes["day"] == day_name)

    def day_billable(self, day_name: str) -> int:
        return self._sum("billable", self.minutes["day"] == day_name)

    def week_total(self) -> int:
        return self._sum("minutes")

    def week_billable(self) -> int:
        return self._sum("billable")


@dataclass
class ReportData:
    """Everything needed to render a report."""
    dates: DateRange
    weeks: Dict[int, WeekData]
    totals: WeekData
    projects: List[Project] = field(default_factory=list)
    weekdays: int = 0

    @property
    def expected_minutes(self) -> int:
        return config.STANDARD_DAY_MINUTES * self.weekdays


def day_entries_in_range(dates: DateRange, day_entries: Iterable[DayEntry]) -> List[DayEntry]:
    """Return the entries dated within `dates`, sorted by date."""
    return sorted((entry for entry in day_entries if entry.date in dates), key=lambda e: e.date)


def adjust_day_entry_for_mode(day_entry: DayEntry, mode: ReportMode) -> DayEntry:
    if mode is ReportMode.SUMMARY:
        return day_entry.without_subcodes()
    return day_entry


def unique_projects(day_entries: Iterable[DayEntry]) -> List[Project]:
    """Sorted distinct projects across all entries."""
    return sorted({pt.project for entry in day_entries for pt in entry.projects})


def count_weekdays(day_entries: Sequence[DayEntry]) -> int:
    """
    Count entries falling on Monday-Friday, up to the last entry's date.

    Args:
        day_entries: Entries sorted by date

    Returns:
        Number of weekday entries
    """
    if not day_entries:
        return 0
    last_date = day_entries[-1].date
    return sum(1 for entry in day_entries if entry.date <= last_date and entry.date.is_weekday())


def compute_report_data(
    dates: DateRange,
    day_entries: Sequence[DayEntry],
    mode: ReportMode = ReportMode.DETAIL,
) -> ReportData:
    """
    Bucket entries by week and total their minutes.

    Rows are the projects of the whole ledger, not only those in the date
    range, so each week block lists the same projects.

    Args:
        dates: Report range
        day_entries: All parsed entries
        mode: DETAIL keeps subcodes, SUMMARY folds them into client,code

    Returns:
        ReportData with one WeekData per week touched by the range

    Raises:
        ReportError: If an entry falls in a week with no bucket
    """
    adjusted = [adjust_day_entry_for_mode(entry, mode) for entry in day_entries]
    in_range = day_entries_in_range(dates, adjusted)

    weeks: Dict[int, WeekData] = {date.week_num: WeekData() for date in dates}
    frame = build_minutes_frame(in_range)
    for week, week_frame in frame.groupby("week", sort=True):
        if week not in weeks:
            raise ReportError("report", f"no week data for week {week}")
        weeks[week] = WeekData(week_frame)

    data = ReportData(
        dates=dates,
        weeks=weeks,
        totals=WeekData(frame),
        projects=unique_projects(adjusted),
        weekdays=count_weekdays(in_range),
    )
    logger.debug(
        "Report data for %s: %d entries, %d weeks, %d projects",
        dates,
        len(in_range),
        len(weeks),
        len(data.projects),
    )
    return data
