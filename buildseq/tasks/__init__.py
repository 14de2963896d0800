from .types import ArgumentResolver, ArtifactNotFoundError, Operation, Task, Variant
from .artifacts import ApkLocator, LogFileLocator
from .factory import TaskFactory, parse_task, parse_variant

__all__ = [
    "ArgumentResolver",
    "ArtifactNotFoundError",
    "Operation",
    "Task",
    "Variant",
    "ApkLocator",
    "LogFileLocator",
    "TaskFactory",
    "parse_task",
    "parse_variant",
]
