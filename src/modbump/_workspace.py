"""Contains the Module, Operation, and ExecutionResult types.

Also home to the helpers that aggregate a list of execution results.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Protocol, Sequence, runtime_checkable

from eris import ErisError, Result
from pydantic.dataclasses import dataclass
from typist import PathLike

from ._constants import VERSION_FILE_NAME
from ._context import Context


class WorkspaceConfig:
    """Pydantic config for dataclasses that hold eris errors."""

    arbitrary_types_allowed = True


@dataclass
class Module:
    """An independently versioned unit, identified by its version file.

    The current_version attribute is for display only; the version file on
    disk is always authoritative.
    """

    path: Path
    name: str = ""
    current_version: str = ""

    @classmethod
    def from_path(
        cls, path: PathLike, *, current_version: str = ""
    ) -> "Module":
        """Builds a Module named after the directory holding @path.

        If @path is a directory, its .version file is used.
        """
        path = Path(path)
        if path.is_dir():
            path = path / VERSION_FILE_NAME
        name = path.resolve().parent.name or str(path.parent)
        return cls(path, name, current_version)


@runtime_checkable
class Operation(Protocol):
    """Something the executor can apply to each module of a workspace."""

    @property
    def name(self) -> str:
        """A short human-readable label (e.g. 'bump minor')."""

    def execute(self, ctx: Context, module: Module) -> Result[str, ErisError]:
        """Applies this operation to @module.

        Returns:
            Ok(new_version) if the operation succeeded.
                OR
            Err(ErisError), otherwise.
        """


@dataclass(frozen=True, config=WorkspaceConfig)
class ExecutionResult:
    """The outcome of running an Operation against one Module."""

    module: Module
    success: bool
    new_version: str = ""
    error: Optional[ErisError] = None
    duration: float = 0.0


def success_count(results: Sequence[ExecutionResult]) -> int:
    """Returns the number of successful results."""
    return sum(1 for r in results if r.success)


def error_count(results: Sequence[ExecutionResult]) -> int:
    """Returns the number of failed results."""
    return sum(1 for r in results if not r.success)


def has_errors(results: Sequence[ExecutionResult]) -> bool:
    """True if any module failed."""
    return any(not r.success for r in results)


def get_first_successful_version(results: Sequence[ExecutionResult]) -> str:
    """Returns the new version of the first successful result (or '').

    Dependency files are shared across the whole workspace, so this single
    version is what a workspace-wide dependency sync should use.
    """
    for r in results:
        if r.success and r.new_version:
            return r.new_version
    return ""


def get_bumped_module_paths(results: Sequence[ExecutionResult]) -> List[Path]:
    """Returns the version-file paths of every successful result."""
    return [r.module.path for r in results if r.success]
