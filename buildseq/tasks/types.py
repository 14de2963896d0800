from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

ArgumentResolver = Callable[[], str]


class Task(Enum):
    CLEAN = "clean"
    BUILD = "build"
    CHECK = "check"
    INSTALL = "install"
    DIST = "dist"
    SHOW_LOG = "show-log"

    @property
    def tag(self) -> str:
        return self.value


class Variant(Enum):
    DEBUG = "debug"
    RELEASE = "release"

    @property
    def gradle_suffix(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class Operation:
    task: Task
    command: str
    # Evaluated by the executor right before spawning, never at construction.
    argument: ArgumentResolver | None = None
    redirect: bool = False


class ArtifactNotFoundError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
