"""The error types that modbump functions wrap in eris Err() results."""

from __future__ import annotations

from eris import ErisError


class InvalidFormatError(ErisError):
    """A version string is malformed, oversized, or has a non-numeric part."""


class UnsupportedDirectiveError(ErisError):
    """The requested bump kind is not one we know how to apply."""


class MissingLabelError(ErisError):
    """A 'pre' bump was requested but no pre-release label can be resolved."""


class AutoBumpFailedError(ErisError):
    """The auto-bump strategy returned an error."""


class ReadVersionError(ErisError):
    """A module's version file could not be read or parsed."""


class WriteVersionError(ErisError):
    """A module's version file could not be written."""


class CanceledError(ErisError):
    """The context was cancelled."""


class DeadlineExceededError(ErisError):
    """The context's deadline passed."""


class ExecutorMisuseError(ErisError):
    """The executor was called with a missing operation or module list."""


class OperationFailedError(ErisError):
    """An operation raised an exception instead of returning an Err()."""
