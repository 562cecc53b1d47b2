from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from screen_recorder.application.dto.active_recording import ActiveRecording
from screen_recorder.application.services.artifact_finalizer import ArtifactFinalizer
from screen_recorder.application.use_cases.finalize_recording import FinalizeRecording
from screen_recorder.domain.entities.teardown_outcome import (
    ArchivedArtifact,
    NeverStarted,
    NoArtifactProduced,
)
from screen_recorder.domain.value_objects.capture_spec import CaptureSpec
from screen_recorder.domain.value_objects.recorder_enums import SupervisorState
from screen_recorder.infrastructure.persistence.local_artifact_store import LocalArtifactStore
from screen_recorder.infrastructure.process.process_supervisor import ProcessSupervisor
from screen_recorder.infrastructure.process.stream_drain import StreamDrainError


@pytest.fixture
def mock_supervisor() -> MagicMock:
    supervisor = MagicMock(spec=ProcessSupervisor)
    supervisor.is_alive.return_value = True
    supervisor.request_stop = AsyncMock(return_value=True)
    supervisor.read_output = AsyncMock(return_value=("stderr text\n", "a\nb\nc\n"))
    supervisor.release = AsyncMock()
    supervisor.state = SupervisorState.RUNNING
    return supervisor


@pytest.fixture
def recording(build_context) -> ActiveRecording:
    output = str(build_context.workspace / "JOB_7.mp4")
    now = datetime.now(UTC)
    return ActiveRecording(
        command="ffmpeg -i :0.0",
        started_at=now,
        spec=CaptureSpec(
            command="ffmpeg -i :0.0",
            argv=("ffmpeg", "-i", ":0.0", output),
            output_path=output,
            created_at=now,
        ),
    )


@pytest.fixture
def use_case(mock_supervisor, build_context, build_logger) -> FinalizeRecording:
    finalizer = ArtifactFinalizer(LocalArtifactStore(build_context.archive_dir), build_logger)
    return FinalizeRecording(mock_supervisor, finalizer, build_logger)


def _produce_video(workspace: Path, size: int = 1000) -> Path:
    path = workspace / "JOB_7.mp4"
    path.write_bytes(b"\0" * size)
    return path


class TestFinalizeRecording:
    async def test_never_launched_reports_launch_error(self, use_case, mock_supervisor, build_context) -> None:
        recording = ActiveRecording(
            command="ffmpeg", started_at=datetime.now(UTC), launch_error="No such file"
        )

        outcome = await use_case.execute(recording, build_context)

        assert outcome == NeverStarted(diagnostics="No such file")
        mock_supervisor.request_stop.assert_not_called()
        mock_supervisor.release.assert_awaited_once()

    async def test_dead_process_collects_diagnostics(
        self, use_case, mock_supervisor, recording, build_context, build_logger
    ) -> None:
        mock_supervisor.is_alive.return_value = False

        outcome = await use_case.execute(recording, build_context)

        assert isinstance(outcome, NeverStarted)
        assert outcome.diagnostics == "stderr text\nb\nc\n"
        assert "Video recording failed: " in build_logger.text
        mock_supervisor.request_stop.assert_not_called()

    async def test_stopped_without_file_is_no_artifact(
        self, use_case, mock_supervisor, recording, build_context
    ) -> None:
        outcome = await use_case.execute(recording, build_context)

        assert isinstance(outcome, NoArtifactProduced)
        mock_supervisor.request_stop.assert_awaited_once()
        mock_supervisor.read_output.assert_awaited_once()

    async def test_stopped_with_file_archives(
        self, use_case, mock_supervisor, recording, build_context
    ) -> None:
        mock_supervisor.request_stop.side_effect = lambda: _produce_video(build_context.workspace)

        outcome = await use_case.execute(recording, build_context)

        assert isinstance(outcome, ArchivedArtifact)
        assert outcome.record.verified
        assert not (build_context.workspace / "JOB_7.mp4").exists()
        assert (build_context.archive_dir / "JOB_7.mp4").exists()
        mock_supervisor.read_output.assert_not_called()

    async def test_drain_failure_is_swallowed(
        self, use_case, mock_supervisor, recording, build_context, build_logger
    ) -> None:
        mock_supervisor.read_output.side_effect = StreamDrainError("stderr closed")

        outcome = await use_case.execute(recording, build_context)

        assert outcome == NoArtifactProduced(diagnostics="")
        assert "stderr closed" in build_logger.text

    async def test_unexpected_error_becomes_outcome_and_releases(
        self, use_case, mock_supervisor, recording, build_context
    ) -> None:
        def _fail() -> None:
            mock_supervisor.state = SupervisorState.STOPPED
            raise RuntimeError("disk full")

        mock_supervisor.request_stop.side_effect = _fail

        outcome = await use_case.execute(recording, build_context)

        assert outcome == NoArtifactProduced(diagnostics="disk full")
        mock_supervisor.release.assert_awaited_once()

    async def test_release_failure_does_not_escape(
        self, use_case, mock_supervisor, recording, build_context
    ) -> None:
        mock_supervisor.release.side_effect = OSError("bad fd")

        outcome = await use_case.execute(recording, build_context)

        assert isinstance(outcome, NoArtifactProduced)
