"""Contains the Executor, which applies one Operation across many modules.

Modules own disjoint resources (one version file each), so they can be
processed in any order or concurrently. The only shared state during a
parallel run is the result list, which is only ever touched by the
collecting thread, and the fail-fast flag (a threading.Event).

Fail-fast never cancels work that has already started: once a failure is
observed, units that have not started yet are skipped, while in-flight units
run to completion and still report a result.

The context is checked before each unit starts. The first unit that finds it
done is recorded as failed with the context's error, and every unit after it
is skipped without a result, in both sequential and parallel runs.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
import threading
import time
from typing import Dict, List, Optional, Sequence

from eris import ErisError, Err, Ok, Result
from logrus import Logger

from ._context import Context
from ._errors import ExecutorMisuseError, OperationFailedError
from ._workspace import ExecutionResult, Module, Operation, error_count


logger = Logger(__name__)


class Executor:
    """Runs an Operation over a list of modules.

    Arguments:
        parallel: Process every module in its own worker thread instead of
            one after another.
        fail_fast: Stop starting new modules after the first failure.
        max_workers: Caps the worker threads used by parallel runs. By
            default there is one thread per module.
    """

    def __init__(
        self,
        *,
        parallel: bool = False,
        fail_fast: bool = False,
        max_workers: Optional[int] = None,
    ) -> None:
        self.parallel = parallel
        self.fail_fast = fail_fast
        self.max_workers = max_workers

    def run(
        self,
        ctx: Context,
        modules: Optional[Sequence[Module]],
        operation: Optional[Operation],
    ) -> Result[List[ExecutionResult], ErisError]:
        """Applies @operation to every module in @modules.

        Individual module failures are reported via ExecutionResult.error and
        never cause this method to return an Err().

        Returns:
            Ok(results) with one result per attempted module. Sequential runs
            preserve the order of @modules; parallel runs make no ordering
            guarantees.
                OR
            Err(ExecutorMisuseError) if @operation or @modules is None, or if
            max_workers is not a positive number.
        """
        if operation is None:
            return Err(ExecutorMisuseError("no operation was provided"))
        if modules is None:
            return Err(ExecutorMisuseError("no module list was provided"))
        if self.max_workers is not None and self.max_workers < 1:
            return Err(
                ExecutorMisuseError(
                    f"max_workers must be at least 1 (got {self.max_workers})"
                )
            )

        logger.info(
            "Running '%s' on %d module(s) (%s).",
            operation.name,
            len(modules),
            "parallel" if self.parallel else "sequential",
        )
        if self.parallel and modules:
            results = self._run_parallel(ctx, modules, operation)
        else:
            results = self._run_sequential(ctx, modules, operation)

        logger.info(
            "Finished '%s': %d attempted, %d failed.",
            operation.name,
            len(results),
            error_count(results),
        )
        return Ok(results)

    def _run_sequential(
        self, ctx: Context, modules: Sequence[Module], operation: Operation
    ) -> List[ExecutionResult]:
        results: List[ExecutionResult] = []
        for module in modules:
            if e := ctx.err():
                logger.warning(
                    "Context is done. Not starting any more modules.",
                    module=str(module.path),
                )
                results.append(_failure(module, e))
                break

            result = _execute(ctx, module, operation)
            results.append(result)
            if self.fail_fast and not result.success:
                logger.warning(
                    "Stopping after the first failure (fail-fast).",
                    module=str(module.path),
                )
                break

        return results

    def _run_parallel(
        self, ctx: Context, modules: Sequence[Module], operation: Operation
    ) -> List[ExecutionResult]:
        failed = threading.Event()
        context_failed = threading.Event()
        context_lock = threading.Lock()

        def claim_context_failure() -> bool:
            # Only the first unit to see a done context reports it.
            with context_lock:
                if context_failed.is_set():
                    return False
                context_failed.set()
                return True

        def work(module: Module) -> Optional[ExecutionResult]:
            # Units that never got started produce no result at all.
            if self.fail_fast and failed.is_set():
                return None

            if e := ctx.err():
                failed.set()
                if claim_context_failure():
                    return _failure(module, e)
                return None

            result = _execute(ctx, module, operation)
            if not result.success:
                failed.set()
            return result

        max_workers = self.max_workers or len(modules)
        results: List[ExecutionResult] = []
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures: Dict[Future[Optional[ExecutionResult]], Module] = {}
            for module in modules:
                if self.fail_fast and failed.is_set():
                    break
                if e := ctx.err():
                    if claim_context_failure():
                        results.append(_failure(module, e))
                    break
                futures[pool.submit(work, module)] = module

            for future in as_completed(futures):
                result = future.result()
                if result is not None:
                    results.append(result)

        skipped = len(modules) - len(results)
        if skipped:
            logger.warning(
                "%d module(s) were never started.",
                skipped,
                fail_fast=self.fail_fast,
                context_error=str(ctx.err() or ""),
            )

        return results


def _execute(
    ctx: Context, module: Module, operation: Operation
) -> ExecutionResult:
    logger.debug("Running '%s' on %s...", operation.name, module.path)
    start = time.monotonic()
    try:
        new_version_r = operation.execute(ctx, module)
    except Exception as e:
        logger.error(
            "Operation raised an exception.",
            operation=operation.name,
            module=str(module.path),
            error=repr(e),
        )
        new_version_r = Err(
            OperationFailedError(
                f"'{operation.name}' raised an exception on {module.path}:"
                f" {e!r}"
            )
        )
    duration = time.monotonic() - start

    if isinstance(new_version_r, Err):
        return _failure(module, new_version_r.err(), duration=duration)

    return ExecutionResult(
        module, True, new_version_r.ok(), None, duration=duration
    )


def _failure(
    module: Module, error: ErisError, *, duration: float = 0.0
) -> ExecutionResult:
    logger.debug("Module %s failed: %s", module.path, error)
    return ExecutionResult(module, False, "", error, duration=duration)
