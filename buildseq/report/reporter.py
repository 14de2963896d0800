"""Live single-line progress display for the task that is currently running.

While a task runs, two background loops share one ``ReporterState``: the
animator redraws the line every ``ANIMATION_PERIOD_S`` and the timer bumps
the elapsed counter every ``TIMER_PERIOD_S``. ``Reporter.stop_live_display``
cancels both and joins them before anything else touches the line.
"""

from __future__ import annotations

import logging
import sys
import threading
from dataclasses import dataclass
from typing import IO, Callable

logger = logging.getLogger(__name__)

CLEAR_LINE = "\r\x1b[2K"
FRAME_WIDTH = 3
LABEL_WIDTH = 8
ACTIVE_MARK = "="
SUCCESS_MARK = "✓"
FAILURE_MARK = "✗"
ANIMATION_PERIOD_S = 0.15
TIMER_PERIOD_S = 1.0


def format_duration(seconds: int) -> str:
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


class ReporterState:
    def __init__(self, label: str, width: int = FRAME_WIDTH) -> None:
        if width < 2:
            raise ValueError(f"Frame width must be at least 2, got {width}")

        self.label = label.ljust(LABEL_WIDTH)
        self.width = width
        self.index = 0
        self.increasing = True
        self.frame = [" "] * width
        self._elapsed = 0
        self._lock = threading.Lock()

    @property
    def elapsed_seconds(self) -> int:
        with self._lock:
            return self._elapsed

    def tick_second(self) -> None:
        with self._lock:
            self._elapsed += 1

    def advance(self) -> None:
        if self.increasing and self.index == self.width - 1:
            self.increasing = False
        elif not self.increasing and self.index == 0:
            self.increasing = True

        self.index += 1 if self.increasing else -1

    def render(self) -> str:
        self.frame = [" "] * self.width
        self.frame[self.index] = ACTIVE_MARK
        elapsed = format_duration(self.elapsed_seconds)
        return f"{CLEAR_LINE}[{''.join(self.frame)}] {self.label} {elapsed}"


class LoopHandle:
    """Cancellation token and join point for one periodic background loop."""

    def __init__(
        self,
        name: str,
        period_s: float,
        step: Callable[[], None],
        *,
        immediate: bool = False,
    ) -> None:
        self.name = name
        self.period_s = period_s
        self._step = step
        self._immediate = immediate
        self._cancel = threading.Event()
        self._thread = threading.Thread(target=self._loop, name=name, daemon=True)

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def start(self) -> LoopHandle:
        self._thread.start()
        return self

    def cancel(self) -> None:
        self._cancel.set()

    def join(self) -> None:
        self._thread.join()

    def _loop(self) -> None:
        if self._immediate and not self._cancel.is_set():
            self._step()

        # wait() returns True as soon as cancel() is called.
        while not self._cancel.wait(self.period_s):
            self._step()


class ProgressAnimator:
    def __init__(
        self,
        state: ReporterState,
        stream: IO[str],
        period_s: float = ANIMATION_PERIOD_S,
    ) -> None:
        self.state = state
        self.stream = stream
        self.period_s = period_s

    def redraw(self) -> None:
        self.stream.write(self.state.render())
        self.stream.flush()

    def tick(self) -> None:
        self.redraw()
        self.state.advance()

    def start(self) -> LoopHandle:
        handle = LoopHandle("progress-animator", self.period_s, self.tick, immediate=True)
        return handle.start()


class ElapsedTimer:
    def __init__(self, state: ReporterState, period_s: float = TIMER_PERIOD_S) -> None:
        self.state = state
        self.period_s = period_s

    def start(self) -> LoopHandle:
        handle = LoopHandle("elapsed-timer", self.period_s, self.state.tick_second)
        return handle.start()


@dataclass(frozen=True)
class LiveDisplay:
    state: ReporterState
    animator: LoopHandle
    timer: LoopHandle


class Reporter:
    def __init__(
        self,
        stream: IO[str] | None = None,
        *,
        frame_width: int = FRAME_WIDTH,
        animation_period_s: float = ANIMATION_PERIOD_S,
        timer_period_s: float = TIMER_PERIOD_S,
    ) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.frame_width = frame_width
        self.animation_period_s = animation_period_s
        self.timer_period_s = timer_period_s
        self._live: LiveDisplay | None = None

    @property
    def live(self) -> bool:
        return self._live is not None

    def start_live_display(self, label: str) -> LiveDisplay:
        if self._live is not None:
            raise RuntimeError(
                f"Live display already running for '{self._live.state.label.strip()}'"
            )

        state = ReporterState(label, self.frame_width)
        timer = ElapsedTimer(state, self.timer_period_s).start()
        animator = ProgressAnimator(state, self.stream, self.animation_period_s).start()
        self._live = LiveDisplay(state, animator, timer)
        logger.debug("Live display started for %s", label)
        return self._live

    def stop_live_display(self, display: LiveDisplay) -> int:
        display.animator.cancel()
        display.timer.cancel()
        display.animator.join()
        display.timer.join()

        if self._live is display:
            self._live = None

        elapsed = display.state.elapsed_seconds
        logger.debug("Live display stopped after %ss", elapsed)
        return elapsed

    def print_final_result(self, label: str, success: bool, elapsed_seconds: int) -> None:
        mark = SUCCESS_MARK if success else FAILURE_MARK
        self.stream.write(
            f"{CLEAR_LINE}[{mark.center(self.frame_width)}] "
            f"{label.ljust(LABEL_WIDTH)} {format_duration(elapsed_seconds)}\n"
        )
        self.stream.flush()
