"""Exceptions raised by the time report system."""
from typing import Optional, Sequence


class TimeReportError(Exception):
    """Base error carrying the operation that failed and what went wrong."""

    def __init__(self, context: str, detail: str):
        super().__init__(context, detail)
        self.context = context
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.context}: {self.detail}"


class OverlappingTimeRangesError(TimeReportError):
    """Two or more time ranges for one project on one day overlap."""

    def __init__(self, context: str, conflicts: Sequence):
        self.conflicts = tuple(conflicts)
        listing = ",".join(str(c) for c in self.conflicts)
        super().__init__(context, f"overlapping time ranges [{listing}]")


class LedgerParseError(TimeReportError):
    """Fatal problem found while reading a ledger file."""

    def __init__(
        self,
        detail: str,
        filename: Optional[str] = None,
        line: Optional[int] = None,
        text: Optional[str] = None,
    ):
        super().__init__("parse", detail)
        self.filename = filename
        self.line = line
        self.text = text

    def __str__(self) -> str:
        pieces = ["Parse error"]
        if self.filename is not None:
            pieces.append(f" in {self.filename!r}")
        if self.line is not None:
            pieces.append(f" at line {self.line}")
        pieces.append(f": {self.detail}")
        if self.text is not None:
            pieces.append(f": {self.text!r}")
        return "".join(pieces)


class ReportError(TimeReportError):
    """Report data is internally inconsistent."""
