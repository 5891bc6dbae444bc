"""Contains the SemVersion class definition and pre-release helpers.

Versions follow Semantic Versioning 2.0.0 (https://semver.org), with the
single extension that an optional leading 'v' is accepted when parsing.
"""

from __future__ import annotations

import re
from typing import List, Tuple

from eris import ErisError, Err, Ok, Result
from pydantic.dataclasses import dataclass

from ._constants import MAX_VERSION_LENGTH
from ._errors import InvalidFormatError


_VERSION_PATTERN = re.compile(
    r"^v?(?P<major>[^.+-]+)\.(?P<minor>[^.+-]+)\.(?P<patch>[^.+-]+)"
    r"(?:-(?P<pre>[0-9A-Za-z.-]+))?"
    r"(?:\+(?P<build>[0-9A-Za-z.-]+))?$"
)
_DIGITS_PATTERN = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class SemVersion:
    """An immutable semantic version (major.minor.patch-pre+build).

    Equality is structural (build metadata included), while ordering follows
    SemVer precedence and ignores build metadata entirely.
    """

    major: int
    minor: int
    patch: int
    pre_release: str = ""
    build: str = ""

    @classmethod
    def parse(cls, text: str) -> Result["SemVersion", ErisError]:
        """Parses a version string such as 'v1.2.3-rc.1+build.5'.

        Returns:
            Ok(SemVersion) if @text is a valid version string.
                OR
            Err(InvalidFormatError), otherwise.
        """
        text = text.strip()
        if len(text) > MAX_VERSION_LENGTH:
            return Err(
                InvalidFormatError(
                    "invalid version format: version string exceeds maximum"
                    f" length of {MAX_VERSION_LENGTH}"
                )
            )

        m = _VERSION_PATTERN.match(text)
        if not m:
            return Err(
                InvalidFormatError(f"invalid version format: {text!r}")
            )

        parts: List[int] = []
        for part_name in ["major", "minor", "patch"]:
            part = m.group(part_name)
            if not _DIGITS_PATTERN.fullmatch(part):
                return Err(
                    InvalidFormatError(
                        f"invalid version format: invalid {part_name} version:"
                        f" {part!r}"
                    )
                )
            parts.append(int(part))

        major, minor, patch = parts
        return Ok(
            cls(
                major,
                minor,
                patch,
                m.group("pre") or "",
                m.group("build") or "",
            )
        )

    def __str__(self) -> str:
        result = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre_release:
            result += f"-{self.pre_release}"
        if self.build:
            result += f"+{self.build}"
        return result

    @property
    def triplet(self) -> Tuple[int, int, int]:
        """The (major, minor, patch) numbers of this version."""
        return (self.major, self.minor, self.patch)

    def compare(self, other: SemVersion) -> int:
        """Returns -1, 0, or 1 if this version is lower, equal, or higher.

        Build metadata is never compared.
        """
        if c := _cmp(self.triplet, other.triplet):
            return c

        # A pre-release has lower precedence than its normal version.
        if not self.pre_release and not other.pre_release:
            return 0
        if not self.pre_release:
            return 1
        if not other.pre_release:
            return -1
        return compare_pre_release(self.pre_release, other.pre_release)

    def __lt__(self, other: SemVersion) -> bool:
        return self.compare(other) < 0

    def __le__(self, other: SemVersion) -> bool:
        return self.compare(other) <= 0

    def __gt__(self, other: SemVersion) -> bool:
        return self.compare(other) > 0

    def __ge__(self, other: SemVersion) -> bool:
        return self.compare(other) >= 0


def compare_pre_release(left: str, right: str) -> int:
    """Compares two dot-separated pre-release strings by SemVer precedence."""
    left_ids = left.split(".")
    right_ids = right.split(".")

    for left_id, right_id in zip(left_ids, right_ids):
        if c := _compare_identifier(left_id, right_id):
            return c

    # When every shared identifier is equal, the shorter list ranks lower.
    return _cmp(len(left_ids), len(right_ids))


def increment_pre_release(current: str, base: str) -> str:
    """Increments the numeric suffix of a pre-release label.

    The separator style of @current is preserved:

        >>> increment_pre_release("rc.1", "rc")
        'rc.2'
        >>> increment_pre_release("rc-1", "rc")
        'rc-2'
        >>> increment_pre_release("rc1", "rc")
        'rc2'
        >>> increment_pre_release("rc", "rc")
        'rc.1'
        >>> increment_pre_release("beta.4", "rc")
        'rc.1'
    """
    first = f"{base}.1"
    if not current.startswith(base):
        return first

    suffix = current[len(base) :]
    if not suffix:
        return first

    if suffix[0] in ".-":
        sep, number = suffix[0], suffix[1:]
    else:
        sep, number = "", suffix

    if not _DIGITS_PATTERN.fullmatch(number):
        return first

    return f"{base}{sep}{int(number) + 1}"


def _compare_identifier(left: str, right: str) -> int:
    left_is_num = _is_numeric_identifier(left)
    right_is_num = _is_numeric_identifier(right)

    if left_is_num and right_is_num:
        return _cmp(int(left), int(right))
    if left_is_num:
        return -1
    if right_is_num:
        return 1
    return _cmp(left, right)


def _is_numeric_identifier(identifier: str) -> bool:
    # Numeric identifiers MUST NOT include leading zeroes (unless exactly "0").
    if len(identifier) > 1 and identifier[0] == "0":
        return False
    return bool(_DIGITS_PATTERN.fullmatch(identifier))


def _cmp(left: object, right: object) -> int:
    return (left > right) - (left < right)  # type: ignore[operator]
