from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import IO

logger = logging.getLogger(__name__)


class LogSink:
    """Append-only build log that task output can be redirected into.

    The file is opened lazily on the first ``append`` so that a run which
    never redirects anything leaves no log behind.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._handle: IO[str] | None = None

    def __enter__(self) -> LogSink:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def append(self, marker: str) -> None:
        handle = self._open()
        stamp = datetime.now().isoformat(timespec="seconds")
        handle.write(f"\n===== {stamp} {marker} =====\n")
        # The subprocess writes through the same descriptor.
        handle.flush()

    def redirect_target(self) -> IO[str]:
        return self._open()

    def close(self) -> None:
        if self._handle is None:
            return
        self._handle.close()
        self._handle = None

    def _open(self) -> IO[str]:
        if self._handle is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._handle = self.path.open("a", encoding="utf-8")
            logger.debug("Opened build log %s", self.path)
        return self._handle
