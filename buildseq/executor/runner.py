from __future__ import annotations

import logging

from buildseq.report import Reporter
from buildseq.tasks.types import Operation

from .process import ProcessExecutor
from .types import NEVER_STARTED, ExecutionError, ExecutionResult, TaskError

logger = logging.getLogger(__name__)


class TaskRunner:
    def __init__(self, executor: ProcessExecutor, reporter: Reporter):
        self.executor = executor
        self.reporter = reporter

    def run(self, operation: Operation) -> ExecutionResult:
        label = operation.task.tag
        display = self.reporter.start_live_display(label)
        exit_code = NEVER_STARTED
        error: TaskError | None = None

        try:
            exit_code = self.executor.execute(operation)
        except TaskError as exc:
            error = exc
        except Exception as exc:
            logger.debug("Unexpected error while running %s", label, exc_info=True)
            error = ExecutionError(f"{label}: {exc}")
            error.__cause__ = exc
        except BaseException:
            # Interrupted: still leave a readable transcript behind.
            elapsed = self.reporter.stop_live_display(display)
            self.reporter.print_final_result(label, False, elapsed)
            raise

        # Both loops must be joined before the final line is written.
        elapsed = self.reporter.stop_live_display(display)
        success = error is None and exit_code == 0
        self.reporter.print_final_result(label, success, elapsed)

        if error is not None:
            logger.info("%s failed: %s", label, error)
        elif not success:
            logger.info("%s exited with code %s", label, exit_code)

        return ExecutionResult(operation.task, success, exit_code, elapsed, error)
