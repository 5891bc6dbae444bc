"""Operations that the workspace executor can apply to modules."""

from __future__ import annotations

from typing import Optional

from eris import ErisError, Err, Ok, Result
from logrus import Logger

from ._bump import BumpDirective, BumpPolicy
from ._context import Context
from ._version_file import FileSystem, read_version, write_version
from ._workspace import Module


logger = Logger(__name__)


class BumpOperation:
    """Bumps the version stored in a module's version file.

    Instances hold configuration only (never module state), so one instance
    can be shared by every worker thread of a parallel run.
    """

    def __init__(
        self,
        fs: FileSystem,
        directive: BumpDirective,
        *,
        policy: Optional[BumpPolicy] = None,
    ) -> None:
        self.fs = fs
        self.directive = directive
        self.policy = BumpPolicy() if policy is None else policy

    @property
    def name(self) -> str:
        return f"bump {self.directive.kind}"

    def execute(self, ctx: Context, module: Module) -> Result[str, ErisError]:
        """Bumps @module's version file and returns the new version."""
        if e := ctx.err():
            return Err(e)

        current_r = read_version(self.fs, ctx, module.path)
        if isinstance(current_r, Err):
            return Err(current_r.err())

        current = current_r.ok()
        new_version_r = self.policy.next_version(current, self.directive)
        if isinstance(new_version_r, Err):
            return Err(new_version_r.err())

        new_version = new_version_r.ok()
        write_r = write_version(self.fs, ctx, module.path, new_version)
        if isinstance(write_r, Err):
            return Err(write_r.err())

        logger.debug(
            "Bumped %s from %s to %s.", module.path, current, new_version
        )
        module.current_version = str(new_version)
        return Ok(module.current_version)
