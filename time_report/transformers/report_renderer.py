"""Fixed-width text rendering of weekly billing reports."""
import logging
from typing import Iterator, List, Sequence

from time_report.transformers.report_data import ReportData, WeekData, compute_report_data
from time_report.utilities import config
from time_report.utilities.errors import ReportError
from time_report.utilities.models import Date, DateRange, DayEntry, Project, ReportMode

logger = logging.getLogger(__name__)

PAD = " " * config.COLUMN_PAD


def render_time(minutes: int, hour_width: int) -> str:
    """
    Render minutes as H:MM with the hours right aligned.

    Args:
        minutes: Minutes to render
        hour_width: Minimum width of the hours field

    Returns:
        "-" right aligned in hour_width + 3 columns when minutes is zero
    """
    if minutes == 0:
        return "-".rjust(hour_width + 3)
    return f"{minutes // 60:>{hour_width}}:{minutes % 60:02}"


def render_delta(delta_minutes: int, hour_width: int) -> str:
    """Render a signed minute difference as +H:MM / -H:MM."""
    minutes = abs(delta_minutes)
    if minutes == 0:
        return "-".rjust(hour_width + 3)
    sign = "-" if delta_minutes < 0 else "+"
    return f"{sign}{minutes // 60:>{hour_width - 1}}:{minutes % 60:02}"


def create_project_labels(projects: Sequence[Project]) -> List[str]:
    """Left column labels for one week block, all padded to the same width."""
    labels = ["", "PROJECT"] + [project.label for project in projects] + ["TOTALS", "REPORT"]
    width = config.LABEL_PAD + max(len(label) for label in labels)
    return [label.ljust(width) for label in labels]


def week_days(monday: Date) -> Iterator[Date]:
    """Yield Monday through Sunday of the week starting at `monday`."""
    current = monday
    while True:
        yield current
        if current.is_sunday():
            return
        current = current.next()


def render_dates_line(monday: Date) -> str:
    cells = [f"{PAD}{day.month:02}/{day.day:02}" for day in week_days(monday)]
    return "".join(cells) + config.DATES_TRAILER


def render_times_line(monday: Date, project: Project, week_data: WeekData) -> str:
    cells = [
        PAD + render_time(week_data.project_day_total(project, day.day_abbrev), config.DAY_HOUR_WIDTH)
        for day in week_days(monday)
    ]
    total = render_time(week_data.project_total(project), config.TOTAL_HOUR_WIDTH)
    billable = render_time(week_data.project_billable(project), config.TOTAL_HOUR_WIDTH)
    return "".join(cells) + f"{PAD}{total}  {billable}"


def render_totals_line(monday: Date, week_data: WeekData) -> str:
    cells = [
        PAD + render_time(week_data.day_total(day.day_abbrev), config.DAY_HOUR_WIDTH)
        for day in week_days(monday)
    ]
    return "".join(cells) + PAD + render_time(week_data.week_total(), config.TOTAL_HOUR_WIDTH)


def render_billables_line(monday: Date, week_data: WeekData) -> str:
    cells = [
        PAD + render_time(week_data.day_billable(day.day_abbrev), config.DAY_HOUR_WIDTH)
        for day in week_days(monday)
    ]
    return "".join(cells) + PAD + render_time(week_data.week_billable(), config.TOTAL_HOUR_WIDTH)


def render_week(monday: Date, labels: List[str], projects: Sequence[Project], week_data: WeekData) -> List[str]:
    lines = [
        labels[0] + config.DAY_HEADER,
        labels[1] + render_dates_line(monday),
    ]
    for index, project in enumerate(projects, start=2):
        lines.append(labels[index] + render_times_line(monday, project, week_data))
    lines.append(labels[-2] + render_totals_line(monday, week_data))
    lines.append(labels[-1] + render_billables_line(monday, week_data))
    return lines


def render_grand_totals(projects: Sequence[Project], totals: WeekData, expected_minutes: int) -> List[str]:
    """
    Render the range-wide totals section.

    Args:
        projects: Report rows
        totals: Minutes for the whole date range
        expected_minutes: Standard-day minutes the billable total is compared to

    Returns:
        Lines starting with two blank separator lines
    """
    labels = ["PROJECT", "TOTALS", "REPORT", "DELTA"] + [p.label for p in projects]
    width = config.GRAND_TOTAL_LABEL_PAD + max(len(label) for label in labels)
    total_width = config.TOTAL_HOUR_WIDTH

    lines = ["", "", f"{'PROJECT':<{width}}{PAD}TOTALS{PAD}REPORT"]
    for project in projects:
        lines.append(
            f"{project.label:<{width}}{PAD}"
            f"{render_time(totals.project_total(project), total_width)}{PAD}"
            f"{render_time(totals.project_billable(project), total_width)}"
        )
    delta = totals.week_billable() - expected_minutes
    lines.append(f"{'TOTALS':<{width}}{PAD}{render_time(totals.week_total(), total_width)}")
    lines.append(f"{'REPORT':<{width}}{PAD}{render_time(totals.week_billable(), total_width)}")
    lines.append(f"{'DELTA':<{width}}{PAD}{render_delta(delta, total_width)}")
    return lines


def render_report_data(report_data: ReportData) -> List[str]:
    """
    Render one block per Monday-Sunday week followed by the grand totals.

    Raises:
        ReportError: If a week of the range has no bucket
    """
    lines: List[str] = []
    labels = create_project_labels(report_data.projects)
    for day in report_data.dates.as_full_weeks():
        if not day.is_monday():
            continue
        week_data = report_data.weeks.get(day.week_num)
        if week_data is None:
            raise ReportError("render_report_data", f"unable to find week data for week of {day}")
        if lines:
            lines.append("")
        lines.extend(render_week(day, labels, report_data.projects, week_data))
    lines.extend(render_grand_totals(report_data.projects, report_data.totals, report_data.expected_minutes))
    return lines


def create_report(
    dates: DateRange,
    day_entries: Sequence[DayEntry],
    mode: ReportMode = ReportMode.DETAIL,
) -> List[str]:
    """
    Build the billing report for a date range.

    Args:
        dates: Inclusive range to report on
        day_entries: All entries parsed from the ledger
        mode: DETAIL or SUMMARY

    Returns:
        Report lines without trailing newlines
    """
    report_data = compute_report_data(dates, day_entries, mode)
    lines = render_report_data(report_data)
    logger.debug("Rendered %d report lines", len(lines))
    return lines
