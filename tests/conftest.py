import json
import os
from pathlib import Path

import pytest

# Subprocess runs of the CLI report coverage when CI sets this up
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()


SQUARE_SOURCE = "to square :side repeat 4 [ forward :side right 90 ] end square 5"


@pytest.fixture  # type: ignore[misc]
def square_source() -> str:
    return SQUARE_SOURCE


@pytest.fixture  # type: ignore[misc]
def alias_file(tmp_path: Path) -> Path:
    path = tmp_path / "aliases.json"
    path.write_text(json.dumps({"fd,fw": "forward", "rt": "right"}), encoding="utf-8")
    return path


@pytest.fixture  # type: ignore[misc]
def logo_file(tmp_path: Path) -> Path:
    path = tmp_path / "square.logo"
    path.write_text(SQUARE_SOURCE + "\n", encoding="utf-8")
    return path
