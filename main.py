"""Main entry point for the time report system."""
import argparse
import logging
import sys
from typing import List, Optional

from time_report.pipelines import pipeline
from time_report.utilities import config, utils
from time_report.utilities.errors import TimeReportError
from time_report.utilities.models import Date, ReportMode

logger = logging.getLogger(__name__)


def parse_date(date_str: str) -> Date:
    """Parse date string in MM/DD/YYYY format."""
    try:
        return Date.parse(date_str)
    except TimeReportError:
        raise argparse.ArgumentTypeError(f"Invalid date: {date_str}. Use MM/DD/YYYY")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Report billable time from a plain-text ledger",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Report the current semimonth
  python main.py report time.txt

  # Report the semimonth containing a date
  python main.py report time.txt 04/03/2025

  # Report a date range with subcodes folded into their projects
  python main.py report time.txt 04/01/2025 04/30/2025 --summary

  # Add today's date to the ledger
  python main.py append time.txt

  # Generate a demo ledger
  python main.py random 04/01/2025 04/15/2025 --seed 42
        """,
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=config.DEFAULT_LOG_LEVEL,
        help=f"Set logging level (default: {config.DEFAULT_LOG_LEVEL})",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    report = commands.add_parser("report", help="Print the billing report for a date range")
    report.add_argument("file", nargs="?", default=config.DEFAULT_LEDGER_FILE, help="Ledger file (default: $TIME_REPORT_FILE)")
    report.add_argument("first", nargs="?", type=parse_date, help="First date (MM/DD/YYYY)")
    report.add_argument("last", nargs="?", type=parse_date, help="Last date (MM/DD/YYYY)")
    report.add_argument(
        "--summary",
        action="store_true",
        help="Fold subcodes into their client,code project",
    )

    append = commands.add_parser("append", help="Add today's date to the ledger")
    append.add_argument("file", nargs="?", default=config.DEFAULT_LEDGER_FILE, help="Ledger file (default: $TIME_REPORT_FILE)")

    generate = commands.add_parser("random", help="Print a random ledger")
    generate.add_argument("first", nargs="?", type=parse_date, help="First date (MM/DD/YYYY)")
    generate.add_argument("last", nargs="?", type=parse_date, help="Last date (MM/DD/YYYY)")
    generate.add_argument("--seed", type=int, help="Seed for repeatable output")

    return parser


def command_report(args: argparse.Namespace) -> int:
    ledger = pipeline.load_ledger(args.file)
    for warning in ledger.warnings:
        print(f"warning: {warning}", file=sys.stderr)
    dates = utils.create_date_range(args.first, args.last)
    mode = ReportMode.SUMMARY if args.summary else ReportMode.DETAIL
    print(f"Reporting from {dates.first} to {dates.last}")
    for line in pipeline.run_report(ledger, dates, mode):
        print(line)
    return 0


def command_append(args: argparse.Namespace) -> int:
    ledger = pipeline.load_ledger(args.file)
    for warning in ledger.warnings:
        print(f"warning: {warning}", file=sys.stderr)
    date = pipeline.run_append(args.file, ledger)
    print(f"Added {date} to {args.file}")
    return 0


def command_random(args: argparse.Namespace) -> int:
    dates = utils.create_date_range(args.first, args.last)
    for line in pipeline.run_random(dates, args.seed):
        print(line)
    return 0


COMMANDS = {
    "report": command_report,
    "append": command_append,
    "random": command_random,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with CLI argument parsing."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATE_FORMAT,
    )

    if args.command in ("report", "append") and not args.file:
        parser.error("missing ledger file (pass FILE or set TIME_REPORT_FILE)")

    try:
        return COMMANDS[args.command](args)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130
    except TimeReportError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
