from __future__ import annotations

import logging
import shlex
import subprocess

from buildseq.log import LogSink
from buildseq.tasks.types import Operation

from .types import ArgumentResolutionError, ExecutionError

logger = logging.getLogger(__name__)


class ProcessExecutor:
    def __init__(self, log_sink: LogSink | None = None):
        self.log_sink = log_sink

    def execute(self, operation: Operation) -> int:
        tag = operation.task.tag
        try:
            args = shlex.split(operation.command)
        except ValueError as exc:
            raise ExecutionError(f"{tag}: cannot parse command: {exc}") from exc

        if not args:
            raise ExecutionError(f"{tag}: empty command")

        if operation.argument is not None:
            try:
                args.append(operation.argument())
            except Exception as exc:
                raise ArgumentResolutionError(f"{tag}: {exc}") from exc

        stdout = None
        stderr = None
        if operation.redirect and self.log_sink is not None:
            try:
                self.log_sink.append(f"{tag}: {shlex.join(args)}")
                stdout = self.log_sink.redirect_target()
            except OSError as exc:
                raise ExecutionError(
                    f"{tag}: cannot open log file {self.log_sink.path}: {exc}"
                ) from exc
            stderr = subprocess.STDOUT

        logger.debug("Spawning %s", args)
        try:
            # run() waits for the child on every path, killing it if interrupted.
            completed = subprocess.run(
                args,
                stdout=stdout,
                stderr=stderr,
                check=False,
            )
        except OSError as exc:
            raise ExecutionError(f"{tag}: cannot start '{args[0]}': {exc}") from exc

        logger.debug("%s exited with code %s", tag, completed.returncode)
        return completed.returncode
