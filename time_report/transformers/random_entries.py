"""Synthetic ledger data for demos and tests."""
import random
from typing import Dict, Iterable, List

from time_report.utilities.models import DateRange, DayEntry, Project, ProjectTimes, Time, TimeRange

DEMO_PROJECTS = [
    Project("nasa", "navigation system"),
    Project("nasa", "saturn v launch"),
    Project("nasa", "astronaut recovery"),
    Project("nasa", "monkey training"),
    Project("nasa", "meeting"),
    Project("spacex", "elon meeting"),
    Project("spacex", "landing software"),
    Project("spacex", "navigation"),
    Project("spacex", "pr meeting"),
    Project("blue", "jeff meeting"),
    Project("blue", "aws interop"),
    Project("blue", "navigation fixes"),
    Project("carnival", "gps upgrade"),
    Project("carnival", "hull scrub"),
    Project("carnival", "lifeboat repairs"),
    Project("carnival", "band auditions"),
]

ANCHOR_TIMES = [Time(8, 0), Time(12, 0), Time(13, 0), Time(17, 0)]
LUNCH_HOUR = TimeRange(Time(12, 0), Time(13, 0))


def random_time(rng: random.Random) -> Time:
    """A random time in the morning (08-11h) or afternoon (13-16h)."""
    if rng.randrange(10) < 5:
        hour = 8 + rng.randrange(4)
    else:
        hour = 13 + rng.randrange(4)
    return Time(hour, rng.randrange(60))


def random_time_ranges(rng: random.Random) -> List[TimeRange]:
    """Split the working day at random times, leaving out the lunch hour."""
    times = set(ANCHOR_TIMES)
    for _ in range(2 + rng.randrange(5)):
        times.add(random_time(rng))
    ordered = sorted(times)
    ranges = [TimeRange(start, end) for start, end in zip(ordered, ordered[1:])]
    return [time_range for time_range in ranges if time_range != LUNCH_HOUR]


def random_project_times(rng: random.Random, time_ranges: Iterable[TimeRange]) -> List[ProjectTimes]:
    assigned: Dict[Project, List[TimeRange]] = {}
    for time_range in time_ranges:
        if not assigned or rng.randrange(4) == 0:
            project = rng.choice(DEMO_PROJECTS)
        else:
            project = rng.choice(list(assigned))
        assigned.setdefault(project, []).append(time_range)
    return [ProjectTimes(project, tuple(ranges)) for project, ranges in assigned.items()]


def random_day_entries(rng: random.Random, dates: DateRange) -> List[DayEntry]:
    """One random DayEntry per date in the range."""
    return [
        DayEntry(date, tuple(random_project_times(rng, random_time_ranges(rng))))
        for date in dates
    ]


def format_day_entries(day_entries: Iterable[DayEntry]) -> List[str]:
    """
    Render day entries in ledger syntax.

    Args:
        day_entries: Entries to render

    Returns:
        Ledger lines, with a blank line between days
    """
    lines: List[str] = []
    for entry in day_entries:
        if lines:
            lines.append("")
        lines.append(f"Date: {entry.date.day_name} {entry.date}")
        for project_times in entry.projects:
            times = ",".join(str(time_range) for time_range in project_times.time_ranges)
            lines.append(f"{project_times.project.label}: {times}")
    return lines
