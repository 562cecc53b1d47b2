"""Recorder settings persisted as JSON under the recorder home."""

import json
import os
from pathlib import Path
from typing import TypeVar

from filelock import FileLock
from loguru import logger
from pydantic import BaseModel, ValidationError

from screen_recorder.domain.value_objects.recorder_settings import GlobalSettings, JobSettings

T = TypeVar("T", bound=BaseModel)

HOME_ENV_VAR = "SCREEN_RECORDER_HOME"


def get_default_home() -> Path:
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".screen_recorder"


class SettingsStore:
    """Loads and saves global and per-job recorder settings.

    Layout:
        <home>/config.json       global settings
        <home>/jobs/<job>.json   per-job settings
    """

    def __init__(self, home: Path | None = None) -> None:
        self.home = home or get_default_home()

    def _global_path(self) -> Path:
        return self.home / "config.json"

    def _job_path(self, job_name: str) -> Path:
        return self.home / "jobs" / f"{job_name}.json"

    def _lock_path(self) -> Path:
        return self.home / ".settings.lock"

    def load_global(self) -> GlobalSettings:
        return self._load(self._global_path(), GlobalSettings)

    def load_job(self, job_name: str) -> JobSettings:
        return self._load(self._job_path(job_name), JobSettings)

    def save_global(self, settings: GlobalSettings) -> Path:
        return self._save(self._global_path(), settings)

    def save_job(self, job_name: str, settings: JobSettings) -> Path:
        return self._save(self._job_path(job_name), settings)

    def _load(self, path: Path, model: type[T]) -> T:
        if not path.exists():
            return model()
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            return model.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Failed to load settings from {path}, using defaults: {e}")
            return model()

    def _save(self, path: Path, settings: BaseModel) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with FileLock(self._lock_path()):
            with open(path, "w", encoding="utf-8") as f:
                json.dump(settings.model_dump(), f, indent=2)
        logger.info(f"Saved settings to {path}")
        return path
