"""Utility functions."""

from __future__ import annotations

import sys
from typing import Any, Dict, Iterable, List, Optional

from eris import ErisError, Err, Ok, Result
from logrus import Logger
import proctor
from typist import PathLike

from ._context import Context
from ._version_file import FileSystem, read_version
from ._workspace import Module


logger = Logger(__name__)


def build_modules(
    paths: Iterable[PathLike],
) -> Result[List[Module], ErisError]:
    """Turns version-file paths into Module objects.

    Two modules must never write to the same file, so giving the same version
    file twice is an error.
    """
    modules: List[Module] = []
    seen = set()
    for path in paths:
        module = Module.from_path(path)
        key = module.path.resolve()
        if key in seen:
            return Err(
                f"The {module.path} version file was given more than once."
            )
        seen.add(key)
        modules.append(module)
    return Ok(modules)


def get_info(
    fs: FileSystem, ctx: Context, modules: Iterable[Module]
) -> Dict[str, Any]:
    """Returns a dict describing the current version of each module."""
    result: Dict[str, Any] = {"modules": []}
    for module in modules:
        version: Optional[str] = None
        version_r = read_version(fs, ctx, module.path)
        if isinstance(version_r, Err):
            logger.warning(
                "Unable to read module version.",
                module=module.name,
                error=version_r.err().to_json(),
            )
        else:
            version = str(version_r.ok())

        result["modules"].append(dict(name=module.name, version=version))

    return result


def commit_version_files(
    paths: Iterable[PathLike], new_version: str
) -> Result[None, ErisError]:
    """Commits the bumped version files using git."""
    git_add_files = [str(p) for p in paths]
    logger.info(
        "Commiting the following files to version-control using git: %s",
        git_add_files,
    )

    git_add_r = proctor.safe_popen(["git", "add", *git_add_files])
    if isinstance(git_add_r, Err):
        err: Err[Any, ErisError] = Err("Unable to stage the version files.")
        return err.chain(git_add_r)

    git_commit_r = proctor.safe_popen(
        ["git", "commit", "-m", f"modbump: Bump version to {new_version}"],
        stdout=sys.stdout,
        stderr=sys.stderr,
    )
    if isinstance(git_commit_r, Err):
        err = Err("Unable to commit the version files.")
        return err.chain(git_commit_r)

    return Ok(None)


def create_tag(
    new_version: str, *, prefix: str, kind: str
) -> Result[str, ErisError]:
    """Creates an annotated git tag for @new_version and returns its name."""
    tag_name = f"{prefix}{new_version}"
    logger.info("Creating the %s git tag...", tag_name)

    git_tag_r = proctor.safe_popen(
        [
            "git",
            "tag",
            "-a",
            tag_name,
            "-m",
            f"Release {new_version} ({kind} bump)",
        ]
    )
    if isinstance(git_tag_r, Err):
        err: Err[Any, ErisError] = Err(
            f"Unable to create the {tag_name} git tag."
        )
        return err.chain(git_tag_r)

    return Ok(tag_name)
