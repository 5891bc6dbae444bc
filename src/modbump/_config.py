"""Command-line tool for bumping the versions of one or many modules.

Each module is tracked by its own version file, which holds a single semantic
version (e.g. '1.2.3' or '2.0.0-rc.1+build.5').

Examples:
    # Bump the patch version stored in the .version file.
    modbump bump patch .version

    # Bump the minor version of two modules in parallel, without committing.
    modbump bump minor -p -n api/.version web/.version

    # Move to the next release candidate (e.g. 1.3.0-rc.1 -> 1.3.0-rc.2).
    modbump bump pre api/.version

    # Start a new pre-release series on the next major version.
    modbump bump major --pre alpha api/.version

    # Promote a pre-release to a normal release, keeping build metadata.
    modbump bump release --preserve-meta api/.version

    # Print the current version of each module as JSON.
    modbump info api/.version web/.version
"""

# NOTE: The above docstring is used by clack for the command-line --help
#   message. This module is used to define clack configuration classes and the
#   clack parser function.
from __future__ import annotations

from pathlib import Path
from typing import Any, List, Literal, Optional, Sequence

import clack
from typist import literal_to_list

from ._bump import BumpKind
from ._constants import OutputFormat


BumpCommand = Literal["bump"]
InfoCommand = Literal["info"]
Command = Literal[BumpCommand, InfoCommand]  # available CLI sub-commands


class Config(clack.Config):
    """Base configuration class."""

    command: Command

    # --- CONFIG
    fail_fast: bool = False
    format: OutputFormat = "table"
    max_workers: Optional[int] = None
    parallel: bool = False
    tag_prefix: str = "v"
    timeout: Optional[float] = None


class BumpConfig(Config):
    """Config for the 'bump' subcommand."""

    command: BumpCommand

    # --- ARGS
    kind: BumpKind
    paths: List[Path]

    # --- OPTIONS
    commit_changes: bool = True
    create_tag: bool = False
    meta: Optional[str] = None
    pre: Optional[str] = None
    preserve_meta: bool = False
    quiet: bool = False


class InfoConfig(Config):
    """Config for the 'info' subcommand."""

    command: InfoCommand

    # --- ARGS
    paths: List[Path]


def clack_parser(argv: Sequence[str]) -> dict[str, Any]:
    """Parses @argv into a dict of config values for clack."""
    parser = clack.Parser()
    new_command = clack.new_command_factory(parser)

    ### setup the 'bump' subcommand...
    bump_parser = new_command(
        "bump",
        help=(
            "Bump the version stored in each PATH version file by applying"
            " the same KIND of bump to every one of them."
        ),
    )

    choices = literal_to_list(BumpKind)
    bump_parser.add_argument(
        "kind",
        metavar="KIND",
        choices=choices,
        help=(
            "The kind of version bump to apply. Choose from one of"
            f" {choices}."
        ),
    )
    bump_parser.add_argument(
        "paths",
        metavar="PATH",
        nargs="+",
        type=Path,
        help="The version files of the modules that should be bumped.",
    )
    bump_parser.add_argument(
        "--pre",
        help=(
            "A pre-release label (e.g. 'rc') to attach to the new version."
            " Required by the 'pre' KIND when the current version is not"
            " already a pre-release."
        ),
    )
    bump_parser.add_argument(
        "--meta", help="Build metadata to attach to the new version."
    )
    bump_parser.add_argument(
        "--preserve-meta",
        action="store_true",
        help="Carry any existing build metadata over to the new version.",
    )
    bump_parser.add_argument(
        "-p",
        "--parallel",
        action="store_true",
        help="Bump every module concurrently instead of one at a time.",
    )
    bump_parser.add_argument(
        "-F",
        "--fail-fast",
        action="store_true",
        help="Do not start bumping any more modules once one has failed.",
    )
    bump_parser.add_argument(
        "-w",
        "--max-workers",
        type=int,
        help=(
            "The maximum number of worker threads used by --parallel. Defaults"
            " to one thread per module."
        ),
    )
    bump_parser.add_argument(
        "-T",
        "--timeout",
        type=float,
        help="Give up on modules that have not been bumped after N seconds.",
    )
    bump_parser.add_argument(
        "-f",
        "--format",
        choices=literal_to_list(OutputFormat),
        help="How the per-module results are printed.",
    )
    bump_parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only print a one-line summary of the results.",
    )
    bump_parser.add_argument(
        "-n",
        "--no-commit",
        dest="commit_changes",
        action="store_false",
        help=(
            "Specify this option if you do NOT want to commit these changes"
            " using git."
        ),
    )
    bump_parser.add_argument(
        "-t",
        "--tag",
        dest="create_tag",
        action="store_true",
        help=(
            "Create a git tag for the new version after committing. The tag"
            " name is the new version prefixed by the 'tag_prefix' option."
        ),
    )

    ### setup the 'info' subcommand...
    info_parser = new_command(
        "info",
        help="Print the current version of each module as JSON.",
    )
    info_parser.add_argument(
        "paths",
        metavar="PATH",
        nargs="+",
        type=Path,
        help="The version files of the modules to report on.",
    )

    args = parser.parse_args(argv[1:])
    kwargs = clack.filter_cli_args(args)

    return kwargs
