from __future__ import annotations

from dataclasses import dataclass, field

from buildseq.tasks.types import Task

# exit_code reported for a task whose process was never spawned
NEVER_STARTED = -1


class TaskError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class ArgumentResolutionError(TaskError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class ExecutionError(TaskError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


@dataclass(frozen=True)
class ExecutionResult:
    task: Task
    success: bool
    exit_code: int
    elapsed_seconds: int
    error: TaskError | None = None


@dataclass(frozen=True)
class SequenceResult:
    results: list[ExecutionResult]
    skipped: list[Task] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return all(result.success for result in self.results)

    @property
    def failed(self) -> ExecutionResult | None:
        for result in self.results:
            if not result.success:
                return result
        return None
