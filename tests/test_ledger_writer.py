from __future__ import annotations

import os
import stat

import pytest

from time_report.extractors.log_reader import parse_file
from time_report.loaders.ledger_writer import (
    append_to_file,
    create_date_block,
    recent_projects,
    validate_date,
)
from time_report.utilities.config import TEMP_FILE_PREFIX
from time_report.utilities.errors import TimeReportError
from time_report.utilities.models import DayEntry, Project

from tests.helpers import date, project_times, time_range

ABC = Project("abc", "xyz")
DEF = Project("def", "uvw")
GHI = Project("ghi", "rst", "ops")


def test_create_date_block():
    assert create_date_block(True, date(2025, 4, 8), [ABC, GHI]) == (
        "Date: Tuesday 04/08/2025\nabc,xyz: \nghi,rst,ops: \n"
    )
    assert create_date_block(False, date(2025, 4, 8), []) == "\nDate: Tuesday 04/08/2025\n"


def test_append_at_end_of_file(write_ledger, tmp_path):
    path = write_ledger("Date: Monday 04/07/2025\nabc,xyz: 0800-0900\n")

    append_to_file(path, date(2025, 4, 8), [ABC])

    assert path.read_text(encoding="utf-8") == (
        "Date: Monday 04/07/2025\nabc,xyz: 0800-0900\n"
        "\nDate: Tuesday 04/08/2025\nabc,xyz: \n"
    )
    assert [p.name for p in tmp_path.iterdir()] == ["time.txt"]


def test_append_above_end_marker(write_ledger):
    path = write_ledger("Date: Monday 04/07/2025\nabc,xyz: 0800-0900\n\nEND\nnotes\n")

    append_to_file(path, date(2025, 4, 8), [ABC, DEF])

    assert path.read_text(encoding="utf-8") == (
        "Date: Monday 04/07/2025\nabc,xyz: 0800-0900\n\n"
        "Date: Tuesday 04/08/2025\nabc,xyz: \ndef,uvw: \n\n"
        "END\nnotes\n"
    )


def test_appended_ledger_parses_back(write_ledger):
    path = write_ledger("Date: Monday 04/07/2025\nabc,xyz: 0800-0900\n")

    append_to_file(path, date(2025, 4, 8), [ABC])
    ledger = parse_file(path)

    assert [entry.date for entry in ledger.day_entries] == [date(2025, 4, 7), date(2025, 4, 8)]
    assert ledger.day_entries[1].line_number == 4
    assert ledger.warnings == ["line 5: incomplete time line on 04/08/2025: abc,xyz: "]


def test_day_appended_above_end_marker_is_dropped_on_parse(write_ledger):
    path = write_ledger("Date: Monday 04/07/2025\nabc,xyz: 0800-0900\nEND\n")

    append_to_file(path, date(2025, 4, 8), [])
    ledger = parse_file(path)

    # END discards the day still being filled in
    assert [entry.date for entry in ledger.day_entries] == [date(2025, 4, 7)]
    assert ledger.warnings == []


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_append_keeps_file_mode(write_ledger):
    path = write_ledger("Date: Monday 04/07/2025\n")
    os.chmod(path, 0o640)

    append_to_file(path, date(2025, 4, 8), [])

    assert stat.S_IMODE(os.stat(path).st_mode) == 0o640


def test_append_to_missing_file_leaves_no_temp_file(tmp_path):
    with pytest.raises(TimeReportError):
        append_to_file(tmp_path / "missing.txt", date(2025, 4, 8), [])
    assert not [p for p in tmp_path.iterdir() if p.name.startswith(TEMP_FILE_PREFIX)]


def test_recent_projects_newest_first():
    entries = [
        DayEntry(date(2025, 3, 1), (project_times("old", "job", time_range(8, 0, 9, 0)),)),
        DayEntry(
            date(2025, 4, 7),
            (
                project_times("abc", "xyz", time_range(8, 0, 9, 0)),
                project_times("def", "uvw", time_range(9, 0, 10, 0)),
            ),
        ),
        DayEntry(date(2025, 4, 8), (project_times("ghi", "rst", time_range(8, 0, 9, 0), subcode="ops"),)),
    ]

    assert recent_projects(entries, date(2025, 4, 1)) == [GHI, DEF, ABC]
    assert recent_projects(entries, date(2025, 4, 1), max_to_return=1) == [GHI]
    assert recent_projects(entries, date(2025, 4, 9)) == []


def test_validate_date():
    entries = [DayEntry(date(2025, 4, 7))]
    validate_date(entries, date(2025, 4, 8))
    with pytest.raises(TimeReportError):
        validate_date(entries, date(2025, 4, 7))
    with pytest.raises(TimeReportError):
        validate_date(entries, date(2025, 4, 6))
