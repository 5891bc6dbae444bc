"""Contains constant variables."""

from __future__ import annotations

from typing import Final, Literal


OutputFormat = Literal["table", "json", "quiet"]

# Version strings longer than this are rejected before any regex matching.
MAX_VERSION_LENGTH: Final = 128

DEFAULT_FILE_PERM: Final = 0o644
VERSION_FILE_NAME: Final = ".version"

# Result tables are rendered to text at this width (columns never wrap).
TABLE_WIDTH: Final = 200

PROJECT_NAME: Final = "modbump"
