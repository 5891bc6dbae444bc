"""This file contains shared fixtures and pytest hooks.

https://docs.pytest.org/en/6.2.x/fixture.html#conftest-py-sharing-fixtures-across-multiple-files
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Callable, List, Sequence

from clack.types import ClackConfigFile
from pytest import fixture

from modbump._workspace import Module


if TYPE_CHECKING:  # fixes pytest warning
    from clack.pytest_plugin import MakeConfigFile


pytest_plugins = ["clack.pytest_plugin"]

DEFAULT_CONFIG = {
    "fail_fast": False,
    "parallel": False,
    "tag_prefix": "v",
}

MakeModules = Callable[[Sequence[str]], List[Module]]


@fixture(name="make_modules")
def make_modules_fixture(tmp_path: Path) -> MakeModules:
    """Returns a function that creates one module per given version.

    Each module lives in its own directory (m0, m1, ...) with a .version file.
    """

    def make_modules(versions: Sequence[str]) -> List[Module]:
        modules = []
        for i, version in enumerate(versions):
            module_dir = tmp_path / f"m{i}"
            module_dir.mkdir()
            version_file = module_dir / ".version"
            version_file.write_text(f"{version}\n")
            modules.append(Module.from_path(version_file))
        return modules

    return make_modules


@fixture(name="default_config_file")
def default_config_file_fixture(
    make_config_file: MakeConfigFile,
) -> ClackConfigFile:
    """Returns the path to a config file with default contents."""
    return make_config_file("modbump_test_config", **DEFAULT_CONFIG)
