"""Lazy argument resolvers used by operations that need a file on disk."""

from __future__ import annotations

import logging
from pathlib import Path

from .types import ArtifactNotFoundError, Variant

logger = logging.getLogger(__name__)


class ApkLocator:
    """Find the most recently built APK for a variant.

    Gradle writes APKs to ``<artifacts_dir>/<variant>/``; when several are
    present (splits, flavors) the newest one wins.
    """

    def __init__(self, artifacts_dir: str | Path, variant: Variant) -> None:
        self.artifacts_dir = Path(artifacts_dir)
        self.variant = variant

    def __call__(self) -> str:
        folder = self.artifacts_dir / self.variant.value
        if not folder.is_dir():
            raise ArtifactNotFoundError(f"Build output directory not found: {folder}")

        apks = sorted(folder.rglob("*.apk"), key=lambda p: (p.stat().st_mtime, p.name))
        if not apks:
            raise ArtifactNotFoundError(f"No APK found in {folder}")

        logger.debug("Resolved %s APK: %s", self.variant.value, apks[-1])
        return str(apks[-1])


class LogFileLocator:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def __call__(self) -> str:
        if not self.path.is_file():
            raise ArtifactNotFoundError(f"No log file yet: {self.path}")
        return str(self.path)
