from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner


def row(name: str, *, indent: int = 0, overall: float | None = None, line: float = 60.0) -> str:
    """Build one well-formed dump row."""
    first = f"{overall:.2f}" if overall is not None else "50.00"
    return f"{' ' * indent}{first} {line:.2f} 70.00 80.00 90.00 40.00 {name}"


SAMPLE_DUMP = "\n".join(
    [
        "75.23  82.15  68.90  91.45  88.20  79.60  top",
        "  60.00  70.00  50.00  80.00  40.00  55.00  core",
        "    95.00  97.50  90.00  99.00  100.00  93.00  alu",
        "    4.00  3.00  2.00  1.00  0.00  5.00  fpu",
        "",
        "  30.00  35.00  20.00  40.00  25.00  30.00  mem",
        "  garbage line",
        "100.00  100.00  100.00  100.00  100.00  100.00  tb",
    ]
)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Click CLI runner for invoking the command-line interface."""
    return CliRunner()


@pytest.fixture
def sample_dump() -> str:
    return SAMPLE_DUMP


@pytest.fixture
def hierarchy_file(tmp_path: Path) -> Callable[..., Path]:
    def write(content: str = SAMPLE_DUMP, *, filename: str = "hierarchy.txt") -> Path:
        path = tmp_path / filename
        path.write_text(content, encoding="utf-8")
        return path

    return write
