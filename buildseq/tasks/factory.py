from __future__ import annotations

import logging
from typing import Callable

from buildseq.config.types import BuildConfig, ConfigError

from .artifacts import ApkLocator, LogFileLocator
from .types import Operation, Task, Variant

logger = logging.getLogger(__name__)

# "{variant}" expands to the capitalized variant name, e.g. assembleRelease.
DEFAULT_COMMANDS: dict[Task, str] = {
    Task.CLEAN: "./gradlew clean",
    Task.BUILD: "./gradlew assemble{variant}",
    Task.CHECK: "./gradlew ktlint detekt",
    Task.INSTALL: "adb install -r",
    Task.DIST: "./gradlew bundle{variant}",
    Task.SHOW_LOG: "cat",
}

_VARIANT_ALIASES = {
    "d": Variant.DEBUG,
    "debug": Variant.DEBUG,
    "r": Variant.RELEASE,
    "release": Variant.RELEASE,
}


def parse_task(text: str) -> Task:
    tag = text.strip().lower()
    for task in Task:
        if task.tag == tag:
            return task

    known = "|".join(task.tag for task in Task)
    raise ConfigError(f"Unknown task '{text}'. Use [{known}]")


def parse_variant(text: str) -> Variant:
    try:
        return _VARIANT_ALIASES[text.strip().lower()]
    except KeyError:
        raise ConfigError(f"Unknown build variant '{text}'. Use [d|r]") from None


class TaskFactory:
    def __init__(self, config: BuildConfig | None = None, *, redirect: bool = False):
        self.config = config or BuildConfig()
        self.redirect = redirect

    def resolve(self, task: Task, variant: Variant) -> Operation:
        builder = _BUILDERS[task]
        operation = builder(self, variant)
        logger.debug("Resolved %s (%s): %s", task.tag, variant.value, operation.command)
        return operation

    def command_for(self, task: Task, variant: Variant) -> str:
        if self.config.has_override(task.tag, variant.value):
            template = self.config.get_override(task.tag, variant.value)
        else:
            template = DEFAULT_COMMANDS[task]
        return template.replace("{variant}", variant.gradle_suffix)

    def _plain(self, task: Task, variant: Variant) -> Operation:
        return Operation(task, self.command_for(task, variant), redirect=self.redirect)


def _clean(factory: TaskFactory, variant: Variant) -> Operation:
    return factory._plain(Task.CLEAN, variant)


def _build(factory: TaskFactory, variant: Variant) -> Operation:
    return factory._plain(Task.BUILD, variant)


def _check(factory: TaskFactory, variant: Variant) -> Operation:
    return factory._plain(Task.CHECK, variant)


def _install(factory: TaskFactory, variant: Variant) -> Operation:
    return Operation(
        Task.INSTALL,
        factory.command_for(Task.INSTALL, variant),
        argument=ApkLocator(factory.config.artifacts_dir, variant),
        redirect=factory.redirect,
    )


def _dist(factory: TaskFactory, variant: Variant) -> Operation:
    return factory._plain(Task.DIST, variant)


def _show_log(factory: TaskFactory, variant: Variant) -> Operation:
    # Printing the log is the whole point, so never redirect it into itself.
    return Operation(
        Task.SHOW_LOG,
        factory.command_for(Task.SHOW_LOG, variant),
        argument=LogFileLocator(factory.config.log_file),
        redirect=False,
    )


_BUILDERS: dict[Task, Callable[[TaskFactory, Variant], Operation]] = {
    Task.CLEAN: _clean,
    Task.BUILD: _build,
    Task.CHECK: _check,
    Task.INSTALL: _install,
    Task.DIST: _dist,
    Task.SHOW_LOG: _show_log,
}
