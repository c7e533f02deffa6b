from __future__ import annotations

import pytest

import main
from time_report.utilities import config
from time_report.utilities.models import Date

LEDGER = "Date: Monday 04/07/2025\nabc,xyz: 0800-1200\nJunk here\n"


def test_random_command_is_repeatable(capsys):
    assert main.main(["random", "04/07/2025", "04/08/2025", "--seed", "5"]) == 0
    first = capsys.readouterr().out
    assert main.main(["random", "04/07/2025", "04/08/2025", "--seed", "5"]) == 0
    assert capsys.readouterr().out == first
    assert first.startswith("Date: Monday 04/07/2025\n")


def test_report_command(write_ledger, capsys):
    path = write_ledger(LEDGER)

    assert main.main(["report", str(path), "04/07/2025", "04/13/2025"]) == 0

    captured = capsys.readouterr()
    lines = captured.out.splitlines()
    assert lines[0] == "Reporting from 04/07/2025 to 04/13/2025"
    assert lines[3].startswith("abc,xyz        4:00")
    assert lines[-1] == "DELTA    " + "   " + "- 4:00"
    assert "warning: line 3: invalid line: Junk here" in captured.err


def test_report_with_single_date_uses_semimonth(write_ledger, capsys):
    path = write_ledger(LEDGER)
    assert main.main(["report", str(path), "04/20/2025"]) == 0
    assert capsys.readouterr().out.splitlines()[0] == "Reporting from 04/16/2025 to 04/30/2025"


def test_report_fails_on_fatal_parse_error(write_ledger, capsys):
    path = write_ledger("Date: Monday 04/07/2025\nabc,xyz: 0800-1000,0900-1100\n")

    assert main.main(["report", str(path), "04/07/2025", "04/13/2025"]) == 1

    err = capsys.readouterr().err
    assert err.startswith("error: Parse error in ")
    assert "at line 2" in err


def test_append_command(write_ledger, capsys):
    path = write_ledger(LEDGER)
    today = Date.today()

    assert main.main(["append", str(path)]) == 0

    assert f"Date: {today.day_name} {today}\n" in path.read_text(encoding="utf-8")
    assert capsys.readouterr().out.startswith(f"Added {today}")


def test_append_refuses_existing_date(write_ledger, capsys):
    today = Date.today()
    path = write_ledger(f"Date: {today.day_name} {today}\n")

    assert main.main(["append", str(path)]) == 1
    assert "error: append:" in capsys.readouterr().err


def test_ledger_file_is_required(monkeypatch):
    monkeypatch.setattr(config, "DEFAULT_LEDGER_FILE", None)
    with pytest.raises(SystemExit) as info:
        main.main(["report"])
    assert info.value.code == 2


def test_bad_date_argument_is_rejected(write_ledger):
    path = write_ledger(LEDGER)
    with pytest.raises(SystemExit):
        main.main(["report", str(path), "13/45/2025"])
