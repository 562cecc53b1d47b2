from __future__ import annotations

import asyncio
import shutil
from collections.abc import Mapping
from pathlib import Path

from filelock import FileLock
from loguru import logger

from screen_recorder.domain.ports.artifact_store_port import ArtifactStorePort


class LocalArtifactStore(ArtifactStorePort):
    """Archives build artifacts by copying them into the build's archive directory."""

    def __init__(self, archive_dir: Path) -> None:
        self.archive_dir = archive_dir

    @property
    def root(self) -> Path:
        return self.archive_dir

    def _lock_path(self) -> Path:
        return self.archive_dir / ".lock"

    def _artifact_path(self, logical_name: str) -> Path:
        path = (self.archive_dir / logical_name).resolve()
        if not path.is_relative_to(self.archive_dir.resolve()):
            raise ValueError(f"Artifact name escapes the archive: {logical_name}")
        return path

    async def archive(self, workspace: Path, artifacts: Mapping[str, str]) -> None:
        self.archive_dir.mkdir(parents=True, exist_ok=True)

        lock = FileLock(self._lock_path())
        with lock:
            for logical_name, relative_path in artifacts.items():
                source = workspace / relative_path
                target = self._artifact_path(logical_name)
                target.parent.mkdir(parents=True, exist_ok=True)
                await asyncio.to_thread(shutil.copyfile, source, target)
                logger.info("Archived {} -> {}", source, target)

    def archived_length(self, logical_name: str) -> int:
        path = self._artifact_path(logical_name)
        if not path.is_file():
            return 0
        return path.stat().st_size

    def url_for(self, logical_name: str) -> str:
        return self._artifact_path(logical_name).as_uri()
