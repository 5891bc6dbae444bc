"""Renders execution results for the terminal."""

from __future__ import annotations

import io
import json
from typing import Any, Dict, Sequence

from rich.console import Console
from rich.table import Table

from ._constants import TABLE_WIDTH, OutputFormat
from ._workspace import ExecutionResult, error_count, success_count


def format_results(
    results: Sequence[ExecutionResult], fmt: OutputFormat, title: str
) -> str:
    """Renders @results using the @fmt output format."""
    if fmt == "json":
        return format_json(results, title)
    elif fmt == "quiet":
        return format_summary(results)
    else:
        return format_table(results, title)


def format_summary(results: Sequence[ExecutionResult]) -> str:
    """Returns a one-line summary of @results."""
    successes = success_count(results)
    errors = error_count(results)
    if errors:
        return f"Completed: {successes} succeeded, {errors} failed"
    return f"Success: {successes} module(s) bumped"


def format_table(results: Sequence[ExecutionResult], title: str) -> str:
    """Returns a plain-text table with one row per result."""
    table = Table(box=None, padding=(0, 2), pad_edge=False)
    table.add_column("MODULE", no_wrap=True)
    table.add_column("STATUS", no_wrap=True)
    table.add_column("VERSION", no_wrap=True)
    table.add_column("DETAILS", no_wrap=True)
    for r in results:
        table.add_row(
            r.module.name or str(r.module.path),
            "ok" if r.success else "FAILED",
            r.new_version or "-",
            "" if r.error is None else _first_line(r.error),
        )

    # Error messages are printed verbatim, so markup must stay disabled.
    console = Console(
        file=io.StringIO(),
        record=True,
        width=TABLE_WIDTH,
        markup=False,
        emoji=False,
        highlight=False,
    )
    console.print(title)
    console.print()
    console.print(table)
    console.print()
    console.print(format_summary(results))

    lines = console.export_text(styles=False).rstrip("\n").split("\n")
    return "\n".join(line.rstrip() for line in lines)


def _first_line(error: object) -> str:
    lines = [line for line in str(error).splitlines() if line.strip()]
    return lines[0].strip() if lines else ""


def format_json(results: Sequence[ExecutionResult], title: str) -> str:
    """Returns @results as a JSON document."""
    data: Dict[str, Any] = {
        "operation": title,
        "results": [
            dict(
                module=r.module.name,
                path=str(r.module.path),
                success=r.success,
                new_version=r.new_version,
                error=None if r.error is None else str(r.error),
                duration=round(r.duration, 6),
            )
            for r in results
        ],
        "summary": dict(
            succeeded=success_count(results), failed=error_count(results)
        ),
    }
    return json.dumps(data, sort_keys=True)
