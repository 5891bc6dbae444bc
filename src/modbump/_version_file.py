"""File-system access for version files.

The core never touches the OS directly. It goes through a FileSystem object
so that tests (and future backends) can substitute their own.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from eris import ErisError, Err, Ok, Result
from typist import PathLike

from ._constants import DEFAULT_FILE_PERM
from ._context import Context
from ._errors import ReadVersionError, WriteVersionError
from ._semver import SemVersion


@runtime_checkable
class FileSystem(Protocol):
    """The file operations needed to read and write version files.

    Implementations raise OSError when an operation fails.
    """

    def read_file(self, ctx: Context, path: PathLike) -> bytes:
        """Returns the contents of @path."""

    def write_file(
        self, ctx: Context, path: PathLike, data: bytes, perm: int
    ) -> None:
        """Replaces the contents of @path (created with @perm if missing)."""


class OSFileSystem:
    """FileSystem backed by the local disk."""

    def read_file(self, ctx: Context, path: PathLike) -> bytes:
        del ctx
        return Path(path).read_bytes()

    def write_file(
        self, ctx: Context, path: PathLike, data: bytes, perm: int
    ) -> None:
        del ctx
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, perm)
        with os.fdopen(fd, "wb") as f:
            f.write(data)


def read_version(
    fs: FileSystem, ctx: Context, path: PathLike
) -> Result[SemVersion, ErisError]:
    """Reads and parses the version stored in @path."""
    try:
        data = fs.read_file(ctx, path)
    except OSError as e:
        return Err(
            ReadVersionError(f"failed to read version from {path}: {e}")
        )

    version_r = SemVersion.parse(data.decode("utf-8", errors="replace"))
    if isinstance(version_r, Err):
        err: Err[Any, ErisError] = Err(
            ReadVersionError(
                f"failed to read version from {path}: {version_r.err()}"
            )
        )
        return err.chain(version_r)

    return version_r


def write_version(
    fs: FileSystem,
    ctx: Context,
    path: PathLike,
    version: SemVersion,
    *,
    perm: int = DEFAULT_FILE_PERM,
) -> Result[None, ErisError]:
    """Writes @version to @path followed by exactly one newline."""
    data = f"{str(version).strip()}\n".encode("utf-8")
    try:
        fs.write_file(ctx, path, data, perm)
    except OSError as e:
        return Err(
            WriteVersionError(f"failed to write version to {path}: {e}")
        )

    return Ok(None)
