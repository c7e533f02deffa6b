"""Main orchestration for the report, append and random commands."""
import logging
import random
import time
from pathlib import Path
from typing import List, Optional

from time_report.extractors import log_reader
from time_report.loaders import ledger_writer
from time_report.transformers import random_entries, report_renderer
from time_report.utilities import config
from time_report.utilities.models import Date, DateRange, LedgerData, ReportMode

logger = logging.getLogger(__name__)


def load_ledger(file_path: str | Path) -> LedgerData:
    """
    Parse a ledger and log what was found.

    Args:
        file_path: Ledger to read

    Returns:
        LedgerData with entries and warnings
    """
    ledger = log_reader.parse_file(file_path)
    if ledger.warnings:
        logger.warning("Ledger %s has %d warning(s)", file_path, len(ledger.warnings))
    logger.info("Loaded %d dates from %s", len(ledger.day_entries), file_path)
    return ledger


def run_report(
    ledger: LedgerData,
    dates: DateRange,
    mode: ReportMode = ReportMode.DETAIL,
) -> List[str]:
    """
    Produce report lines for a parsed ledger.

    Args:
        ledger: Parsed ledger
        dates: Range to report on
        mode: DETAIL or SUMMARY

    Returns:
        Report lines
    """
    logger.info("=" * 70)
    logger.info("REPORTING %s (%s)", dates, mode.value)
    logger.info("=" * 70)

    start_time = time.time()
    lines = report_renderer.create_report(dates, ledger.day_entries, mode)
    logger.info("Report complete - %d lines in %.2f seconds", len(lines), time.time() - start_time)
    return lines


def run_append(file_path: str | Path, ledger: LedgerData, today: Optional[Date] = None) -> Date:
    """
    Add a block for today to the ledger, pre-filled with recent projects.

    Args:
        file_path: Ledger to update
        ledger: The ledger as currently parsed
        today: Date to append (defaults to today)

    Returns:
        The appended date
    """
    date = today or Date.today()
    ledger_writer.validate_date(ledger.day_entries, date)

    min_date = date.minus_days(config.RECENT_PROJECT_DAYS)
    projects = ledger_writer.recent_projects(ledger.day_entries, min_date, config.RECENT_PROJECT_LIMIT)
    logger.info("Appending %s with recent projects: %s", date, ", ".join(p.label for p in projects) or "none")
    ledger_writer.append_to_file(file_path, date, projects)
    return date


def run_random(dates: DateRange, seed: Optional[int] = None) -> List[str]:
    """
    Generate a synthetic ledger for a date range.

    Args:
        dates: Dates to generate
        seed: Seed for repeatable output

    Returns:
        Ledger lines
    """
    rng = random.Random(seed)
    day_entries = random_entries.random_day_entries(rng, dates)
    logger.info("Generated %d random days for %s", len(day_entries), dates)
    return random_entries.format_day_entries(day_entries)
