"""Data models for the time report system."""
import datetime
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Tuple

from time_report.utilities import config
from time_report.utilities.errors import OverlappingTimeRangesError, TimeReportError

TIME_PATTERN = re.compile(r"(\d{2})(\d{2})")
DATE_PATTERN = re.compile(r"(\d{2})/(\d{2})/(\d{4})")
CLIENT_PATTERN = re.compile(r"[a-z]+")


# ============================================================================
# CALENDAR ARITHMETIC
# ============================================================================


def is_valid_time(hour: int, minute: int) -> bool:
    return 0 <= hour < 24 and 0 <= minute < 60


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if month in config.LONG_MONTHS:
        return 31
    if month in config.SHORT_MONTHS:
        return 30
    return 29 if is_leap_year(year) else 28


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def day_of_year(year: int, month: int, day: int) -> int:
    """Return the 1-based ordinal of the day within its year."""
    return day + sum(days_in_month(year, m) for m in range(1, month))


def is_valid_date(year: int, month: int, day: int) -> bool:
    return (
        config.MIN_YEAR <= year <= config.MAX_YEAR
        and 1 <= month <= 12
        and 1 <= day <= days_in_month(year, month)
    )


def _build_year_offsets() -> Dict[int, int]:
    offsets: Dict[int, int] = {}
    total = 0
    for year in range(config.MIN_YEAR, config.MAX_YEAR + 1):
        offsets[year] = total
        total += days_in_year(year)
    return offsets


_YEAR_OFFSETS = _build_year_offsets()


def day_number(year: int, month: int, day: int) -> int:
    """
    Count days since MIN_YEAR-01-01 (which is day 0, a Monday).

    Args:
        year: Year within [MIN_YEAR, MAX_YEAR]
        month: Month 1-12
        day: Day of month

    Returns:
        Consecutive day number
    """
    return _YEAR_OFFSETS[year] + day_of_year(year, month, day) - 1


# ============================================================================
# TIME OF DAY
# ============================================================================


@dataclass(frozen=True, order=True)
class Time:
    """A minute of the day, displayed as HHMM."""
    hour: int
    minute: int

    def __post_init__(self):
        if not is_valid_time(self.hour, self.minute):
            raise TimeReportError("time", f"not a valid time: {self.hour:02}{self.minute:02}")

    @classmethod
    def parse(cls, text: str) -> "Time":
        match = TIME_PATTERN.fullmatch(text.strip())
        if match is None:
            raise TimeReportError("time", f"cannot find time in {text!r}")
        return cls(int(match.group(1)), int(match.group(2)))

    @property
    def minute_of_day(self) -> int:
        return self.hour * 60 + self.minute

    def __str__(self) -> str:
        return f"{self.hour:02}{self.minute:02}"


@dataclass(frozen=True, order=True)
class TimeRange:
    """A half-open span of minutes within one day, start strictly before end."""
    start: Time
    end: Time

    def __post_init__(self):
        if self.start >= self.end:
            raise TimeReportError("time range", f"out of order time range {self.start}-{self.end}")

    @staticmethod
    def distinct(a: "TimeRange", b: "TimeRange") -> bool:
        """True when the ranges neither overlap nor are equal; touching ends are distinct."""
        if a == b:
            return False
        return a.end <= b.start or b.end <= a.start

    def duration(self) -> int:
        return self.end.minute_of_day - self.start.minute_of_day

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


def find_overlapping_time_ranges(time_ranges: Iterable[TimeRange]) -> Tuple[TimeRange, ...]:
    """
    Find every range that conflicts with at least one other range.

    Each range is compared against all ranges seen before it.

    Args:
        time_ranges: Ranges for a single project on a single day

    Returns:
        Sorted tuple of the conflicting ranges (empty when all are distinct)
    """
    seen: List[TimeRange] = []
    conflicts = set()
    for candidate in time_ranges:
        for previous in seen:
            if not TimeRange.distinct(previous, candidate):
                conflicts.add(previous)
                conflicts.add(candidate)
        seen.append(candidate)
    return tuple(sorted(conflicts))


# ============================================================================
# CALENDAR DATES
# ============================================================================


@dataclass(frozen=True, order=True)
class Date:
    """A calendar date between MIN_YEAR-01-01 and MAX_YEAR-12-31."""
    year: int
    month: int
    day: int

    def __post_init__(self):
        if not is_valid_date(self.year, self.month, self.day):
            raise TimeReportError(
                "date",
                f"not a valid date: {self.month:02}/{self.day:02}/{self.year:04}",
            )

    @classmethod
    def parse(cls, text: str) -> "Date":
        """Parse a MM/DD/YYYY string."""
        match = DATE_PATTERN.fullmatch(text.strip())
        if match is None:
            raise TimeReportError("date", f"cannot find date in {text!r}")
        return cls(int(match.group(3)), int(match.group(1)), int(match.group(2)))

    @classmethod
    def today(cls) -> "Date":
        now = datetime.date.today()
        return cls(now.year, now.month, now.day)

    @classmethod
    def min_date(cls) -> "Date":
        return cls(config.MIN_YEAR, 1, 1)

    @classmethod
    def max_date(cls) -> "Date":
        return cls(config.MAX_YEAR, 12, 31)

    @property
    def day_number(self) -> int:
        return day_number(self.year, self.month, self.day)

    @property
    def week_num(self) -> int:
        return self.day_number // 7

    @property
    def weekday_index(self) -> int:
        return self.day_number % 7

    @property
    def day_abbrev(self) -> str:
        return config.DAY_ABBREVIATIONS[self.weekday_index]

    @property
    def day_name(self) -> str:
        return config.DAY_NAMES[self.weekday_index]

    def is_monday(self) -> bool:
        return self.weekday_index == 0

    def is_sunday(self) -> bool:
        return self.weekday_index == 6

    def is_weekday(self) -> bool:
        return self.weekday_index < 5

    def next(self) -> "Date":
        if self.day < days_in_month(self.year, self.month):
            return replace(self, day=self.day + 1)
        if self.month < 12:
            return Date(self.year, self.month + 1, 1)
        if self.year < config.MAX_YEAR:
            return Date(self.year + 1, 1, 1)
        raise TimeReportError("date", f"no date after {self}")

    def prev(self) -> "Date":
        if self.day > 1:
            return replace(self, day=self.day - 1)
        if self.month > 1:
            return Date(self.year, self.month - 1, days_in_month(self.year, self.month - 1))
        if self.year > config.MIN_YEAR:
            return Date(self.year - 1, 12, 31)
        raise TimeReportError("date", f"no date before {self}")

    def minus_days(self, count: int) -> "Date":
        current = self
        for _ in range(count):
            current = current.prev()
        return current

    def this_monday(self) -> "Date":
        current = self
        while not current.is_monday():
            current = current.prev()
        return current

    def this_sunday(self) -> "Date":
        current = self
        while not current.is_sunday():
            current = current.next()
        return current

    def prev_monday(self) -> "Date":
        return self.prev().this_monday()

    def next_monday(self) -> "Date":
        return self.this_sunday().next()

    def iter_after(self) -> Iterator["Date"]:
        """Yield every date after this one up to the last supported date."""
        current = self
        while current != Date.max_date():
            current = current.next()
            yield current

    def semimonth(self) -> "DateRange":
        """Return the 1st-15th or 16th-last half of this date's month."""
        if self.day <= 15:
            return DateRange(Date(self.year, self.month, 1), Date(self.year, self.month, 15))
        last_day = days_in_month(self.year, self.month)
        return DateRange(Date(self.year, self.month, 16), Date(self.year, self.month, last_day))

    def __str__(self) -> str:
        return f"{self.month:02}/{self.day:02}/{self.year:04}"


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of consecutive dates; iterating it restarts from `first`."""
    first: Date
    last: Date

    def __post_init__(self):
        if self.first > self.last:
            raise TimeReportError("date range", f"{self.first} is after {self.last}")

    def __iter__(self) -> Iterator[Date]:
        current = self.first
        yield current
        while current != self.last:
            current = current.next()
            yield current

    def __len__(self) -> int:
        return self.last.day_number - self.first.day_number + 1

    def __contains__(self, date: object) -> bool:
        return isinstance(date, Date) and self.first <= date <= self.last

    def contains(self, date: Date) -> bool:
        return date in self

    def as_full_weeks(self) -> "DateRange":
        """Widen the range to start on a Monday and end on a Sunday."""
        return DateRange(self.first.this_monday(), self.last.this_sunday())

    def __str__(self) -> str:
        return f"{self.first} to {self.last}"


# ============================================================================
# PROJECTS AND ENTRIES
# ============================================================================


@dataclass(frozen=True, order=True)
class Project:
    """A billable client/code/subcode triple. An empty subcode means none."""
    client: str
    code: str
    subcode: str = ""

    def __post_init__(self):
        if CLIENT_PATTERN.fullmatch(self.client) is None:
            raise TimeReportError("project", f"client must be lowercase letters: {self.client!r}")

    @property
    def label(self) -> str:
        if self.subcode:
            return f"{self.client},{self.code},{self.subcode}"
        return f"{self.client},{self.code}"

    def without_subcode(self) -> "Project":
        return Project(self.client, self.code)

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class ProjectTimes:
    """All time ranges logged against one project on one day, sorted ascending."""
    project: Project
    time_ranges: Tuple[TimeRange, ...] = ()

    def __post_init__(self):
        ranges = tuple(sorted(self.time_ranges))
        conflicts = find_overlapping_time_ranges(ranges)
        if conflicts:
            raise OverlappingTimeRangesError(self.project.label, conflicts)
        object.__setattr__(self, "time_ranges", ranges)

    @property
    def total_minutes(self) -> int:
        return sum(time_range.duration() for time_range in self.time_ranges)


@dataclass(frozen=True)
class DayEntry:
    """One date line of the ledger and the project times logged under it."""
    date: Date
    projects: Tuple[ProjectTimes, ...] = ()
    # Line of the date line in the ledger, used to point an editor at it
    line_number: int = field(default=0, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "projects", tuple(self.projects))

    def without_subcodes(self) -> "DayEntry":
        projects = tuple(
            ProjectTimes(project_times.project.without_subcode(), project_times.time_ranges)
            for project_times in self.projects
        )
        return replace(self, projects=projects)


class ReportMode(Enum):
    DETAIL = "detail"
    SUMMARY = "summary"


@dataclass
class LedgerData:
    """Container for a parsed ledger."""
    day_entries: List[DayEntry] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    lines_read: int = 0
