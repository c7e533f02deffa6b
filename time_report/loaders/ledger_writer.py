"""Appending new days to a ledger file."""
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Dict, List, Sequence

from time_report.utilities import config
from time_report.utilities.errors import TimeReportError
from time_report.utilities.models import Date, DayEntry, Project

logger = logging.getLogger(__name__)


def recent_projects(
    day_entries: Sequence[DayEntry],
    min_date: Date,
    max_to_return: int = config.RECENT_PROJECT_LIMIT,
) -> List[Project]:
    """
    Find projects logged on or after a date, most recently used first.

    Args:
        day_entries: Parsed ledger entries
        min_date: Oldest date to consider
        max_to_return: Maximum number of projects

    Returns:
        Distinct projects ordered by their last use, newest first
    """
    last_used: Dict[Project, Date] = {}
    for entry in day_entries:
        if entry.date < min_date:
            continue
        for project_times in entry.projects:
            project = project_times.project
            if project not in last_used or last_used[project] < entry.date:
                last_used[project] = entry.date
    ordered = sorted(last_used, key=lambda p: (last_used[p], p), reverse=True)
    return ordered[:max_to_return]


def validate_date(day_entries: Sequence[DayEntry], date: Date) -> None:
    """Refuse to add a day the ledger already has, or one older than its newest day."""
    existing = [entry.date for entry in day_entries if entry.date >= date]
    if existing:
        raise TimeReportError("append", f"ledger already has entries on or after {date}: {max(existing)}")


def create_date_block(prev_blank: bool, date: Date, projects: Sequence[Project]) -> str:
    """Text of a new day: a date line plus an empty time line per project."""
    pieces = [] if prev_blank else ["\n"]
    pieces.append(f"Date: {date.day_name} {date}\n")
    pieces.extend(f"{project.label}: \n" for project in projects)
    return "".join(pieces)


def append_to_file(file_path: str | Path, date: Date, projects: Sequence[Project]) -> None:
    """
    Add a day block to the ledger, above the END marker if there is one.

    The new content is written to a temp file beside the ledger which then
    replaces it, so the ledger is never left half written.

    Args:
        file_path: Ledger to update
        date: Date of the new block
        projects: Projects to pre-fill as empty time lines

    Raises:
        TimeReportError: If the ledger cannot be read or replaced
    """
    path = Path(file_path)
    temp_name = None
    try:
        with path.open(encoding="utf-8") as source, tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=config.TEMP_FILE_PREFIX,
            suffix=f"_{path.name}",
            delete=False,
        ) as target:
            temp_name = target.name
            appended = False
            prev_blank = True
            for raw_line in source:
                line = raw_line.rstrip("\r\n")
                trimmed = line.strip()
                if trimmed == config.END_MARKER and not appended:
                    target.write(create_date_block(prev_blank, date, projects))
                    target.write("\n")
                    appended = True
                target.write(line + "\n")
                prev_blank = not trimmed
            if not appended:
                target.write(create_date_block(prev_blank, date, projects))
        shutil.copymode(path, temp_name)
        os.replace(temp_name, path)
        temp_name = None
    except OSError as exc:
        raise TimeReportError("append_to_file", f"{path}: {exc}") from exc
    finally:
        if temp_name is not None and os.path.exists(temp_name):
            os.remove(temp_name)
    logger.info("Appended %s with %d project(s) to %s", date, len(projects), path)
