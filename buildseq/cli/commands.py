from __future__ import annotations

import argparse
import logging
import sys

from buildseq.config import BuildConfig, ConfigError, find_config, load_config
from buildseq.executor import (
    ProcessExecutor,
    SequenceResult,
    Sequencer,
    TaskRunner,
)
from buildseq.log import LogSink
from buildseq.report import Reporter
from buildseq.tasks import TaskFactory, parse_variant

from .args import build_parser

logger = logging.getLogger(__name__)


def run_cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.debug)

    try:
        return cmd_run(args)

    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    except KeyboardInterrupt:
        return 130


def main() -> None:
    raise SystemExit(run_cli())


def cmd_run(args: argparse.Namespace) -> int:
    config = _load(args.config)
    variant = parse_variant(args.variant)
    factory = TaskFactory(config, redirect=args.quiet)

    with LogSink(config.log_file) as log_sink:
        runner = TaskRunner(ProcessExecutor(log_sink), Reporter())
        result = Sequencer(factory, runner, variant).run(args.tasks)

    _print_result(result)
    return 0 if result.success else 1


def _load(path: str | None) -> BuildConfig:
    if path is not None:
        return load_config(path)

    found = find_config()
    if found is None:
        logger.debug("No config file found, using built-in commands")
        return BuildConfig()

    logger.debug("Using config file %s", found)
    return load_config(found)


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _print_result(rr: SequenceResult) -> None:
    # stdout holds only the task lines; details go to stderr.
    failed = rr.failed
    if failed is None:
        return

    if failed.error is not None:
        print(str(failed.error), file=sys.stderr)
    else:
        print(f"{failed.task.tag}: exit code = {failed.exit_code}", file=sys.stderr)

    for task in rr.skipped:
        print(f"SKIP {task.tag}", file=sys.stderr)
