"""Ledger file reading and validation for the time report system."""
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from time_report.utilities import config
from time_report.utilities.errors import LedgerParseError, TimeReportError
from time_report.utilities.models import (
    Date,
    DayEntry,
    LedgerData,
    Project,
    ProjectTimes,
    Time,
    TimeRange,
)

logger = logging.getLogger(__name__)

COMMENT_PATTERN = re.compile(r"^(.*)\s*" + re.escape(config.COMMENT_MARKER) + r".*$")
DATE_LINE_PATTERN = re.compile(r"Date: [A-Za-z]+ (\d{2}/\d{2}/\d{4})")
TIME_LINE_PATTERN = re.compile(
    r"([a-z]+)"
    r",([-/A-Za-z0-9][-/ A-Za-z0-9]*?)"
    r"(?:,([-/A-Za-z0-9][-/ A-Za-z0-9]*?))?"
    r" *:(.*)"
)
TIMES_PATTERN = re.compile(
    r"\d{4}-\d{4}(?: *, *\d{4}-\d{4})*(?: *, *\d{4}-)?"
    r"|\d{4}-"
)
TIME_RANGE_PATTERN = re.compile(r"(\d{4})-(\d{4})")


@dataclass
class _OpenDay:
    """The day currently being filled in by time lines."""
    date: Date
    line_number: int
    projects: List[ProjectTimes] = field(default_factory=list)

    def to_entry(self) -> DayEntry:
        return DayEntry(self.date, tuple(self.projects), self.line_number)


def remove_comments(source: str) -> str:
    """
    Strip trailing `-- comment` suffixes until none remain.

    Args:
        source: Raw line text

    Returns:
        Trimmed text without comments
    """
    current = source.strip()
    while True:
        match = COMMENT_PATTERN.match(current)
        if match is None or match.group(1) == current:
            return current
        current = match.group(1).strip()


def parse_time_range(text: str) -> TimeRange:
    match = TIME_RANGE_PATTERN.fullmatch(text)
    if match is None:
        raise TimeReportError("time range", f"not a time range: {text!r}")
    return TimeRange(Time.parse(match.group(1)), Time.parse(match.group(2)))


def parse_time_ranges(times_text: str) -> Tuple[List[TimeRange], bool]:
    """
    Parse the comma separated `HHMM-HHMM` list of a time line.

    Args:
        times_text: Text after the label colon, e.g. "0800-1200,1300-"

    Returns:
        Tuple of (complete time ranges, whether a dangling `HHMM-` ended the list)

    Raises:
        TimeReportError: If a time or range is out of bounds
    """
    text = times_text.strip()
    time_ranges = [parse_time_range(match.group(0)) for match in TIME_RANGE_PATTERN.finditer(text)]
    return time_ranges, text.endswith("-")


def is_date_line(line: str) -> bool:
    return DATE_LINE_PATTERN.fullmatch(line) is not None


def parse_date_line(line: str) -> Date:
    """Parse a line such as `Date: Thursday 04/03/2025`."""
    match = DATE_LINE_PATTERN.fullmatch(line)
    if match is None:
        raise TimeReportError("date line", f"not a date line: {line!r}")
    return Date.parse(match.group(1))


def match_time_line(line: str) -> Optional[Tuple[Project, str]]:
    """
    Match the label of a time line.

    Args:
        line: Comment-free line text

    Returns:
        Tuple of (project, raw times text), or None when the label is not valid
    """
    match = TIME_LINE_PATTERN.fullmatch(line)
    if match is None:
        return None
    client, code, subcode, times_text = match.groups()
    project = Project(client, code.strip(), (subcode or "").strip())
    return project, times_text.strip()


def parse_lines(lines: Iterable[str], filename: Optional[str] = None) -> LedgerData:
    """
    Parse ledger lines into day entries and warnings.

    Grammar problems become warnings and parsing continues. Invalid values
    inside a well formed line, overlapping ranges and time lines before the
    first date line are fatal.

    Args:
        lines: Ledger text, one line per item
        filename: Source name used in error messages

    Returns:
        LedgerData with day entries in file order and warnings

    Raises:
        LedgerParseError: On the first fatal problem
    """
    data = LedgerData()
    open_day: Optional[_OpenDay] = None
    previous_date: Optional[Date] = None

    for line_number, raw_line in enumerate(lines, start=1):
        data.lines_read = line_number
        raw = raw_line.rstrip("\r\n")
        line = remove_comments(raw)

        if not line:
            continue
        if line == config.END_MARKER:
            logger.debug("End marker at line %d; ignoring the rest of the file", line_number)
            return _finish(data, None)

        try:
            if is_date_line(line):
                date = parse_date_line(line)
                if open_day is not None:
                    data.day_entries.append(open_day.to_entry())
                if previous_date is not None and date <= previous_date:
                    data.warnings.append(
                        f"line {line_number}: out of order dates: {date} follows {previous_date}"
                    )
                previous_date = date
                open_day = _OpenDay(date, line_number)
                continue

            matched = match_time_line(line)
            if matched is None or (matched[1] and TIMES_PATTERN.fullmatch(matched[1]) is None):
                data.warnings.append(f"line {line_number}: invalid line: {raw}")
                continue

            if open_day is None:
                raise LedgerParseError("time line before any dates", filename, line_number, raw)

            project, times_text = matched
            if not times_text:
                data.warnings.append(
                    f"line {line_number}: incomplete time line on {open_day.date}: {raw}"
                )
                continue

            time_ranges, incomplete = parse_time_ranges(times_text)
            if incomplete:
                data.warnings.append(
                    f"line {line_number}: incomplete time range on {open_day.date}: {raw}"
                )
            if time_ranges:
                open_day.projects.append(ProjectTimes(project, tuple(time_ranges)))
        except LedgerParseError:
            raise
        except TimeReportError as exc:
            raise LedgerParseError(str(exc), filename, line_number, raw) from exc

    return _finish(data, open_day)


def _finish(data: LedgerData, open_day: Optional[_OpenDay]) -> LedgerData:
    if open_day is not None:
        data.day_entries.append(open_day.to_entry())
    logger.debug(
        "Parsed %d lines: %d days, %d warnings",
        data.lines_read,
        len(data.day_entries),
        len(data.warnings),
    )
    return data


def parse_file(file_path: str | Path) -> LedgerData:
    """
    Parse a ledger file.

    Args:
        file_path: Path of the ledger

    Returns:
        LedgerData with day entries and warnings

    Raises:
        LedgerParseError: If the file cannot be read or holds fatal errors
    """
    path = Path(file_path)
    logger.info("Loading ledger %s", path)
    try:
        with path.open(encoding="utf-8") as handle:
            return parse_lines(handle, filename=str(path))
    except (OSError, UnicodeDecodeError) as exc:
        raise LedgerParseError(f"cannot read file: {exc}", filename=str(path)) from exc
