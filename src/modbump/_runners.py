"""Contains the clack runner functions."""

from __future__ import annotations

import json

from eris import Err
from logrus import Logger

from ._bump import BumpDirective
from ._config import BumpConfig, Config, InfoConfig
from ._context import Context, background
from ._executor import Executor
from ._helpers import (
    build_modules,
    commit_version_files,
    create_tag,
    get_info,
)
from ._operations import BumpOperation
from ._output import format_results, format_summary
from ._version_file import OSFileSystem
from ._workspace import (
    error_count,
    get_bumped_module_paths,
    get_first_successful_version,
    has_errors,
)


logger = Logger(__name__)


def run_bump(cfg: BumpConfig) -> int:
    """Clack runner for the 'bump' subcommand."""
    modules_r = build_modules(cfg.paths)
    if isinstance(modules_r, Err):
        logger.error(
            "Invalid module list.", error=modules_r.err().to_json()
        )
        return 1

    modules = modules_r.ok()
    directive = BumpDirective(
        cfg.kind,
        pre_release_label=cfg.pre,
        build_metadata=cfg.meta,
        preserve_metadata=cfg.preserve_meta,
    )
    operation = BumpOperation(OSFileSystem(), directive)
    executor = Executor(
        parallel=cfg.parallel,
        fail_fast=cfg.fail_fast,
        max_workers=cfg.max_workers,
    )

    results_r = executor.run(_new_context(cfg), modules, operation)
    if isinstance(results_r, Err):
        logger.error(
            "Unable to run the bump operation.",
            error=results_r.err().to_json(),
        )
        return 1

    results = results_r.ok()
    if cfg.quiet:
        print(format_summary(results))
    else:
        print(format_results(results, cfg.format, operation.name.title()))

    if has_errors(results):
        logger.error("%d module(s) failed.", error_count(results))
        return 1

    new_version = get_first_successful_version(results)
    if not new_version:
        logger.warning("No modules were bumped.")
        return 0

    if not cfg.commit_changes:
        if cfg.create_tag:
            logger.warning(
                "Not creating a git tag since --no-commit was specified."
            )
        return 0

    commit_r = commit_version_files(
        get_bumped_module_paths(results), new_version
    )
    if isinstance(commit_r, Err):
        logger.error(
            "Unable to commit the bumped version files.",
            error=commit_r.err().to_json(),
        )
        return 1

    if cfg.create_tag:
        tag_r = create_tag(new_version, prefix=cfg.tag_prefix, kind=cfg.kind)
        if isinstance(tag_r, Err):
            logger.error(
                "Unable to tag the new version.", error=tag_r.err().to_json()
            )
            return 1

        logger.info("Created the %s git tag.", tag_r.ok())

    return 0


def run_info(cfg: InfoConfig) -> int:
    """Clack runner for the 'info' subcommand."""
    modules_r = build_modules(cfg.paths)
    if isinstance(modules_r, Err):
        logger.error(
            "Invalid module list.", error=modules_r.err().to_json()
        )
        return 1

    data = get_info(OSFileSystem(), _new_context(cfg), modules_r.ok())
    print(json.dumps(data, sort_keys=True))
    return 0


def _new_context(cfg: Config) -> Context:
    ctx = background()
    if cfg.timeout is not None:
        ctx = ctx.with_timeout(cfg.timeout)
    return ctx
