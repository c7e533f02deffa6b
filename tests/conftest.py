from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture()
def write_ledger(tmp_path: Path) -> Callable[..., Path]:
    def _write(content: str, name: str = "time.txt") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
