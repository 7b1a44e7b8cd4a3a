from __future__ import annotations

import json
from typing import TYPE_CHECKING

from covtree import __version__
from covtree.cli import EXIT_CONFIG, EXIT_DATAERR, EXIT_NOINPUT, cli
from tests.conftest import row

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from _pytest.monkeypatch import MonkeyPatch
    from click.testing import CliRunner

# --------------------------------------------------------------------------- #
# helpers                                                                     #
# --------------------------------------------------------------------------- #


def _run(runner: CliRunner, args: list[str]) -> tuple[int, str]:
    """Invoke the CLI and return *(exit_code, output)* for convenience."""
    result = runner.invoke(cli, args)
    return result.exit_code, result.output


# --------------------------------------------------------------------------- #
# tests                                                                       #
# --------------------------------------------------------------------------- #


def test_version(cli_runner: CliRunner) -> None:
    code, out = _run(cli_runner, ["--version"])
    assert code == 0
    assert __version__ in out

    code, out = _run(cli_runner, ["version"])
    assert code == 0
    assert out.strip() == __version__


def test_no_subcommand_prints_help(cli_runner: CliRunner) -> None:
    code, out = _run(cli_runner, [])
    assert code == 0
    assert "show" in out


def test_show_human(cli_runner: CliRunner, hierarchy_file: Callable[..., Path]) -> None:
    path = hierarchy_file()
    code, out = _run(cli_runner, ["show", str(path), "--no-color"])
    assert code == 0
    assert "Coverage Data" in out
    assert "75.2%" in out
    assert "\x1b[" not in out


def test_show_json_to_file(cli_runner: CliRunner, hierarchy_file: Callable[..., Path], tmp_path: Path) -> None:
    path = hierarchy_file()
    dest = tmp_path / "out" / "tree.json"
    code, _out = _run(cli_runner, ["show", str(path), "--format", "json", "--output", str(dest)])
    assert code == 0
    data = json.loads(dest.read_text(encoding="utf-8"))
    assert [n["name"] for n in data["nodes"] if n["depth"] == 1] == ["top", "tb"]


def test_show_depth_and_metrics(cli_runner: CliRunner, hierarchy_file: Callable[..., Path]) -> None:
    path = hierarchy_file()
    code, out = _run(cli_runner, ["show", str(path), "--no-color", "--depth", "1", "--metrics"])
    assert code == 0
    assert "alu" not in out
    assert "toggle 91.5" in out


def test_show_stats_reports_skipped_lines(cli_runner: CliRunner, hierarchy_file: Callable[..., Path]) -> None:
    path = hierarchy_file()
    code, out = _run(cli_runner, ["show", str(path), "--no-color", "--stats"])
    assert code == 0
    assert "6 node(s) from 8 line(s)" in out
    assert "1 short" in out


def test_show_link_template(cli_runner: CliRunner, hierarchy_file: Callable[..., Path]) -> None:
    path = hierarchy_file(row("top"))
    code, out = _run(cli_runner, ["show", str(path), "--no-color", "--link-template", "r/{path}.html"])
    assert code == 0
    assert "-> r/top.html" in out


def test_show_bad_link_template(cli_runner: CliRunner, hierarchy_file: Callable[..., Path]) -> None:
    path = hierarchy_file(row("top"))
    code, out = _run(cli_runner, ["show", str(path), "--link-template", "{nope}"])
    assert code == 2
    assert "--link-template" in out


def test_show_link_template_attribute_lookup(cli_runner: CliRunner, hierarchy_file: Callable[..., Path]) -> None:
    path = hierarchy_file(row("top"))
    code, out = _run(cli_runner, ["show", str(path), "--link-template", "{path.x}"])
    assert code == 2
    assert "--link-template" in out


def test_show_bad_link_template_in_config(
    cli_runner: CliRunner,
    hierarchy_file: Callable[..., Path],
    tmp_path: Path,
    monkeypatch: MonkeyPatch,
) -> None:
    monkeypatch.chdir(tmp_path)
    hierarchy_file(row("top"))
    (tmp_path / "pyproject.toml").write_text('[tool.covtree]\nlink_template = "{path.x}"\n', encoding="utf-8")
    code, out = _run(cli_runner, ["show"])
    assert code == EXIT_CONFIG
    assert "link template" in out


def test_show_tab_width(cli_runner: CliRunner, hierarchy_file: Callable[..., Path]) -> None:
    path = hierarchy_file("\n".join([row("top"), "\t" + row("core")]))
    code, out = _run(cli_runner, ["show", str(path), "--format", "json"])
    assert code == 0
    nodes = json.loads(out)["nodes"]
    assert [(n["path"], n["parent"]) for n in nodes] == [("top", ""), ("top.core", "top")]

    code, out = _run(cli_runner, ["show", str(path), "--format", "json", "--tab-width", "0"])
    assert code == 0
    assert [(n["path"], n["parent"]) for n in json.loads(out)["nodes"]] == [("top", ""), ("core", "")]


def test_show_missing_file(cli_runner: CliRunner, tmp_path: Path) -> None:
    code, out = _run(cli_runner, ["show", str(tmp_path / "missing.txt")])
    assert code == EXIT_NOINPUT
    assert "ERROR" in out


def test_show_discovers_default_file(
    cli_runner: CliRunner,
    hierarchy_file: Callable[..., Path],
    tmp_path: Path,
    monkeypatch: MonkeyPatch,
) -> None:
    monkeypatch.chdir(tmp_path)
    code, _out = _run(cli_runner, ["show"])
    assert code == EXIT_NOINPUT

    hierarchy_file()
    code, out = _run(cli_runner, ["show", "--no-color"])
    assert code == 0
    assert "top" in out


def test_show_uses_pyproject_settings(
    cli_runner: CliRunner,
    hierarchy_file: Callable[..., Path],
    tmp_path: Path,
    monkeypatch: MonkeyPatch,
) -> None:
    monkeypatch.chdir(tmp_path)
    hierarchy_file(row("top"), filename="dump.txt")
    (tmp_path / "pyproject.toml").write_text(
        '[tool.covtree]\nhierarchy = "dump.txt"\nlink_template = "{name}.html"\n',
        encoding="utf-8",
    )
    code, out = _run(cli_runner, ["show", "--no-color"])
    assert code == 0
    assert "-> top.html" in out


def test_show_bad_config(cli_runner: CliRunner, tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "pyproject.toml").write_text("[tool.covtree]\ntab_width = 'x'\n", encoding="utf-8")
    code, out = _run(cli_runner, ["show"])
    assert code == EXIT_CONFIG
    assert "tab_width" in out


def test_show_binary_input(cli_runner: CliRunner, tmp_path: Path) -> None:
    path = tmp_path / "blob.bin"
    path.write_bytes(b"\x00\x00")
    code, out = _run(cli_runner, ["show", str(path)])
    assert code == EXIT_DATAERR
    assert "ERROR" in out
