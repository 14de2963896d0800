from __future__ import annotations

import logging
from collections.abc import Sequence

from buildseq.config.types import ConfigError
from buildseq.tasks import TaskFactory, Variant, parse_task
from buildseq.tasks.types import Operation, Task

from .runner import TaskRunner
from .types import ExecutionResult, SequenceResult

logger = logging.getLogger(__name__)


class Sequencer:
    def __init__(self, factory: TaskFactory, runner: TaskRunner, variant: Variant):
        self.factory = factory
        self.runner = runner
        self.variant = variant

    def plan(self, task_ids: Sequence[str]) -> list[Operation]:
        if len(task_ids) == 0:
            raise ConfigError("No tasks given")

        # Every id is checked before anything runs.
        tasks = [parse_task(tid) for tid in task_ids]
        return [self.factory.resolve(task, self.variant) for task in tasks]

    def run(self, task_ids: Sequence[str]) -> SequenceResult:
        operations = self.plan(task_ids)
        results: list[ExecutionResult] = []
        skipped: list[Task] = []

        for position, operation in enumerate(operations):
            result = self.runner.run(operation)
            results.append(result)

            if not result.success:
                skipped = [op.task for op in operations[position + 1 :]]
                if skipped:
                    logger.info(
                        "Stopping after %s, skipping %s",
                        operation.task.tag,
                        ", ".join(task.tag for task in skipped),
                    )
                break

        return SequenceResult(results, skipped)
