import shlex
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

from screen_recorder.domain.entities.build_context import BuildContext
from screen_recorder.domain.ports.build_logger_port import BuildLoggerPort
from screen_recorder.domain.value_objects.recorder_settings import RecorderTimings

FAKE_CAPTURE_TOOL = Path(__file__).parent / "fixtures" / "fake_capture.py"


class CollectingBuildLogger(BuildLoggerPort):
    """Build logger that keeps every line for assertions."""

    def __init__(self) -> None:
        self.lines: list[tuple[str, str]] = []
        self.links: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.lines.append(("info", message))

    def warning(self, message: str) -> None:
        self.lines.append(("warning", message))

    def error(self, message: str) -> None:
        self.lines.append(("error", message))

    def hyperlink(self, url: str, text: str) -> None:
        self.links.append((url, text))

    @property
    def text(self) -> str:
        return "\n".join(message for _, message in self.lines)


@pytest.fixture
def build_logger() -> CollectingBuildLogger:
    return CollectingBuildLogger()


@pytest.fixture
def fast_timings() -> RecorderTimings:
    return RecorderTimings(warmup_s=0, drain_s=0.05, stop_timeout_s=5, read_timeout_s=5)


@pytest.fixture
def build_context(tmp_path: Path) -> BuildContext:
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    return BuildContext(
        job_name="JOB",
        build_number=7,
        workspace=workspace,
        home=tmp_path / "home",
    )


@pytest.fixture
def fake_capture_command() -> Callable[..., str]:
    """Command template running the fake capture tool with the given flags."""

    def _command(*flags: str) -> str:
        return shlex.join([sys.executable, str(FAKE_CAPTURE_TOOL), *flags])

    return _command
