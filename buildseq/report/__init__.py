from .reporter import (
    ElapsedTimer,
    LiveDisplay,
    LoopHandle,
    ProgressAnimator,
    Reporter,
    ReporterState,
    format_duration,
)

__all__ = [
    "ElapsedTimer",
    "LiveDisplay",
    "LoopHandle",
    "ProgressAnimator",
    "Reporter",
    "ReporterState",
    "format_duration",
]
