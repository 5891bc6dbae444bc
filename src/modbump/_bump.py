"""Logic for computing the next project version from a bump directive."""

from __future__ import annotations

import re
from typing import Any, Callable, Literal, Optional, cast

from eris import ErisError, Err, Ok, Result
from pydantic.dataclasses import dataclass

from ._errors import (
    AutoBumpFailedError,
    MissingLabelError,
    UnsupportedDirectiveError,
)
from ._semver import SemVersion, increment_pre_release


BumpKind = Literal["patch", "minor", "major", "release", "auto", "pre"]
BumpPart = Literal["major", "minor", "patch"]

AutoStrategy = Callable[[SemVersion], Result[SemVersion, ErisError]]


@dataclass(frozen=True)
class BumpDirective:
    """Describes a requested version transition.

    The kind is kept as a plain string so that unknown kinds coming from
    outside the CLI are rejected by BumpPolicy instead of at construction.
    """

    kind: str
    pre_release_label: Optional[str] = None
    build_metadata: Optional[str] = None
    preserve_metadata: bool = False


def default_auto_strategy(
    current: SemVersion,
) -> Result[SemVersion, ErisError]:
    """Picks the next version when the user asks for an 'auto' bump.

    * Pre-releases are promoted to their normal version (1.0.0-rc.2 -> 1.0.0).
    * 0.9.0 moves to 0.10.0 rather than 0.9.1.
    * Everything else gets a patch bump.
    """
    if current.pre_release:
        return Ok(SemVersion(current.major, current.minor, current.patch))

    if current.triplet == (0, 9, 0):
        return Ok(SemVersion(0, 10, 0))

    return Ok(bump_part(current, "patch"))


def bump_part(current: SemVersion, part: BumpPart) -> SemVersion:
    """Bumps one numeric part, resetting the lower ones (and any labels)."""
    if part == "major":
        return SemVersion(current.major + 1, 0, 0)
    elif part == "minor":
        return SemVersion(current.major, current.minor + 1, 0)
    else:
        return SemVersion(current.major, current.minor, current.patch + 1)


def extract_pre_release_base(pre_release: str) -> str:
    """Strips the trailing counter from a pre-release label.

    Examples: 'rc.1' -> 'rc', 'beta.2' -> 'beta', 'rc1' -> 'rc',
    'alpha' -> 'alpha'.
    """
    if m := re.match(r"^(?P<base>.*)\.[0-9]+$", pre_release):
        return m.group("base")

    if m := re.match(r"^(?P<base>.*[^0-9])[0-9]+$", pre_release):
        return m.group("base")

    return pre_release


class BumpPolicy:
    """Computes new versions from BumpDirective objects.

    Arguments:
        auto_strategy: Called to pick the next version for 'auto' bumps.
            Defaults to default_auto_strategy().
    """

    def __init__(
        self, auto_strategy: AutoStrategy = default_auto_strategy
    ) -> None:
        self.auto_strategy = auto_strategy

    def next_version(
        self, current: SemVersion, directive: BumpDirective
    ) -> Result[SemVersion, ErisError]:
        """Returns the version that @directive moves @current to."""
        kind = directive.kind
        label = directive.pre_release_label or ""

        if kind in ("patch", "minor", "major"):
            new_version = _replace(
                bump_part(current, cast(BumpPart, kind)), pre_release=label
            )
        elif kind == "release":
            new_version = SemVersion(
                current.major, current.minor, current.patch
            )
        elif kind == "auto":
            new_version_r = self.auto_strategy(current)
            if isinstance(new_version_r, Err):
                err: Err[Any, ErisError] = Err(
                    AutoBumpFailedError(
                        f"auto bump failed for version {current}"
                    )
                )
                return err.chain(new_version_r)

            new_version = new_version_r.ok()
            if label:
                new_version = _replace(new_version, pre_release=label)
        elif kind == "pre":
            pre_release_r = _next_pre_release(current, label)
            if isinstance(pre_release_r, Err):
                return Err(pre_release_r.err())

            new_version = SemVersion(
                current.major,
                current.minor,
                current.patch,
                pre_release_r.ok(),
            )
        else:
            return Err(
                UnsupportedDirectiveError(f"unknown bump type: {kind!r}")
            )

        return Ok(
            _replace(new_version, build=_next_build(current, directive))
        )


def _next_pre_release(
    current: SemVersion, label: str
) -> Result[str, ErisError]:
    if label:
        return Ok(increment_pre_release(current.pre_release, label))

    if current.pre_release:
        base = extract_pre_release_base(current.pre_release)
        return Ok(increment_pre_release(current.pre_release, base))

    return Err(
        MissingLabelError(
            f"current version ({current}) has no pre-release; a pre-release"
            " label must be given explicitly"
        )
    )


def _next_build(current: SemVersion, directive: BumpDirective) -> str:
    if directive.build_metadata:
        return directive.build_metadata
    if directive.preserve_metadata:
        return current.build
    return ""


def _replace(version: SemVersion, **changes: Any) -> SemVersion:
    fields = dict(
        major=version.major,
        minor=version.minor,
        patch=version.patch,
        pre_release=version.pre_release,
        build=version.build,
    )
    fields.update(changes)
    return SemVersion(**fields)
