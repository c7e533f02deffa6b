from __future__ import annotations

from time_report.utilities.models import Date, Project, ProjectTimes, Time, TimeRange


def date(y: int, m: int, d: int) -> Date:
    return Date(y, m, d)


def time_range(h1: int, m1: int, h2: int, m2: int) -> TimeRange:
    return TimeRange(Time(h1, m1), Time(h2, m2))


def project_times(client: str, code: str, *ranges: TimeRange, subcode: str = "") -> ProjectTimes:
    return ProjectTimes(Project(client, code, subcode), ranges)
