from __future__ import annotations

import argparse

from buildseq.tasks import Task


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="buildseq",
        description="Run build tasks in order with live progress",
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Path to config file (default: buildseq.yml in the working directory, if any)",
    )
    parser.add_argument(
        "-v",
        "--variant",
        default="debug",
        help="Set build variant [d|r]",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Silent mode: append task output to the log file",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log internals to stderr",
    )
    parser.add_argument(
        "tasks",
        nargs="+",
        metavar="TASK",
        help=f"Tasks to perform, in order [{'|'.join(task.tag for task in Task)}]",
    )

    return parser
