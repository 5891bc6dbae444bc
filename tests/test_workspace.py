"""Tests for the result aggregation helpers and the result formatters."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Sequence, Tuple

from pytest import mark, param

from modbump._errors import ReadVersionError
from modbump._output import format_json, format_results, format_table
from modbump._workspace import (
    ExecutionResult,
    Module,
    error_count,
    get_bumped_module_paths,
    get_first_successful_version,
    has_errors,
    success_count,
)


params = mark.parametrize


def _results(outcomes: Sequence[Tuple[bool, str]]) -> List[ExecutionResult]:
    results = []
    for i, (success, new_version) in enumerate(outcomes):
        module = Module(Path(f"/m{i}/.version"), f"m{i}")
        error = None if success else ReadVersionError(f"m{i} is broken")
        results.append(ExecutionResult(module, success, new_version, error))
    return results


@params(
    "outcomes,expected",
    [
        param([], "", id="empty"),
        param([(False, "1.0.0"), (False, "2.0.0")], "", id="all-failures"),
        param([(True, "1.0.1"), (True, "2.0.1")], "1.0.1", id="first"),
        param(
            [(False, "1.0.0"), (True, "2.0.1"), (True, "3.0.1")],
            "2.0.1",
            id="mixed",
        ),
        param([(True, ""), (True, "2.0.1")], "2.0.1", id="empty-version"),
    ],
)
def test_get_first_successful_version(
    outcomes: Sequence[Tuple[bool, str]], expected: str
) -> None:
    """Test that the first successful, non-empty version is returned."""
    assert get_first_successful_version(_results(outcomes)) == expected


def test_counts() -> None:
    """Test the success/error tallies."""
    results = _results([(True, "1.0.1"), (False, ""), (True, "1.0.1")])

    assert success_count(results) == 2
    assert error_count(results) == 1
    assert has_errors(results)
    assert not has_errors(results[:1])
    assert not has_errors([])
    assert get_bumped_module_paths(results) == [
        Path("/m0/.version"),
        Path("/m2/.version"),
    ]


def test_format_table() -> None:
    """Test that both successes and failures show up in the table."""
    results = _results([(True, "1.0.1"), (False, "")])
    table = format_table(results, "Bump Patch")
    lines = table.split("\n")

    assert lines[0] == "Bump Patch"
    assert lines[2].split() == ["MODULE", "STATUS", "VERSION", "DETAILS"]
    assert lines[3].split() == ["m0", "ok", "1.0.1"]
    assert lines[4].split()[:3] == ["m1", "FAILED", "-"]
    assert "m1 is broken" in lines[4]
    assert lines[5] == ""
    assert lines[-1] == "Completed: 1 succeeded, 1 failed"
    assert all(line == line.rstrip() for line in lines)

    # Every column starts at the same offset on every row.
    offset = lines[2].index("STATUS")
    assert lines[3][offset:].startswith("ok")
    assert lines[4][offset:].startswith("FAILED")


def test_format_table_verbatim_details() -> None:
    """Test that error details are never interpreted as console markup."""
    module = Module(Path("/api/.version"), "api")
    error = ReadVersionError("bad [bold]version[/bold] in :smile: file")
    results = [ExecutionResult(module, False, "", error)]

    table = format_table(results, "Bump Minor")

    assert "bad [bold]version[/bold] in :smile: file" in table


def test_format_json() -> None:
    """Test the JSON output format."""
    data = json.loads(
        format_json(_results([(True, "2.0.0"), (False, "")]), "Bump Major")
    )

    assert data["operation"] == "Bump Major"
    assert data["summary"] == {"failed": 1, "succeeded": 1}
    assert [r["module"] for r in data["results"]] == ["m0", "m1"]
    assert data["results"][0]["new_version"] == "2.0.0"
    assert data["results"][0]["error"] is None
    assert "m1 is broken" in data["results"][1]["error"]


def test_format_quiet() -> None:
    """Test that the quiet format only prints a summary."""
    results = _results([(True, "2.0.0"), (True, "2.0.0")])
    assert format_results(results, "quiet", "") == (
        "Success: 2 module(s) bumped"
    )


def test_module_from_path(tmp_path: Path) -> None:
    """Test that modules are named after their directory."""
    module_dir = tmp_path / "api"
    module_dir.mkdir()

    from_file = Module.from_path(module_dir / ".version")
    from_dir = Module.from_path(module_dir)

    assert from_file == from_dir
    assert from_dir.name == "api"
    assert from_dir.path == module_dir / ".version"
    assert from_dir.current_version == ""
