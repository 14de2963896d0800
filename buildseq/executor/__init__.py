from .process import ProcessExecutor
from .runner import TaskRunner
from .sequencer import Sequencer
from .types import (
    NEVER_STARTED,
    ArgumentResolutionError,
    ExecutionError,
    ExecutionResult,
    SequenceResult,
    TaskError,
)

__all__ = [
    "ProcessExecutor",
    "TaskRunner",
    "Sequencer",
    "NEVER_STARTED",
    "ArgumentResolutionError",
    "ExecutionError",
    "ExecutionResult",
    "SequenceResult",
    "TaskError",
]
