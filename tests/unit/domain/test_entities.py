from datetime import UTC, datetime
from pathlib import Path

import pytest
from pydantic import TypeAdapter, ValidationError

from screen_recorder.domain.entities.build_context import BuildContext
from screen_recorder.domain.entities.teardown_outcome import (
    ArchivedArtifact,
    ArchiveRecord,
    NeverStarted,
    NoArtifactProduced,
    TeardownOutcome,
)
from screen_recorder.domain.value_objects.capture_spec import CaptureSpec
from screen_recorder.domain.value_objects.recorder_enums import OutcomeKind
from screen_recorder.domain.value_objects.recorder_settings import JobSettings


class TestArchiveRecord:
    def test_verified_when_sizes_match(self) -> None:
        assert ArchiveRecord(logical_name="a.mp4", archived_size=10, workspace_size=10).verified

    def test_not_verified_on_mismatch(self) -> None:
        assert not ArchiveRecord(logical_name="a.mp4", archived_size=4, workspace_size=10).verified


class TestTeardownOutcome:
    def test_parses_by_kind(self) -> None:
        adapter = TypeAdapter(TeardownOutcome)

        outcome = adapter.validate_python({"kind": "never_started", "diagnostics": "boom"})

        assert isinstance(outcome, NeverStarted)
        assert outcome.diagnostics == "boom"

    def test_each_variant_carries_its_kind(self) -> None:
        now = datetime.now(UTC)
        archived = ArchivedArtifact(
            record=ArchiveRecord(logical_name="a.mp4", archived_size=1, workspace_size=1),
            started_at=now,
            stopped_at=now,
        )

        assert archived.kind == OutcomeKind.ARCHIVED_ARTIFACT
        assert NoArtifactProduced().kind == OutcomeKind.NO_ARTIFACT_PRODUCED
        assert NeverStarted().kind == OutcomeKind.NEVER_STARTED


class TestBuildContext:
    def test_environment_layers_build_variables_over_inherited(self, tmp_path: Path) -> None:
        context = BuildContext(
            job_name="JOB",
            build_number=7,
            workspace=tmp_path,
            home=tmp_path / "home",
            build_url="http://ci/job/JOB/7/",
            inherited_env={"JOB_NAME": "stale", "PATH": "/bin"},
        )

        env = context.environment()

        assert env["JOB_NAME"] == "JOB"
        assert env["BUILD_NUMBER"] == "7"
        assert env["WORKSPACE"] == str(tmp_path)
        assert env["JENKINS_HOME"] == str(tmp_path / "home")
        assert env["BUILD_URL"] == "http://ci/job/JOB/7/"
        assert env["PATH"] == "/bin"

    def test_archive_dir_layout(self, tmp_path: Path) -> None:
        context = BuildContext(job_name="JOB", build_number=7, workspace=tmp_path, home=tmp_path)

        assert context.archive_dir == tmp_path / "jobs" / "JOB" / "builds" / "7" / "archive"


class TestCaptureSpec:
    def test_is_immutable(self) -> None:
        spec = CaptureSpec(
            command="ffmpeg", argv=("ffmpeg", "out.mp4"), output_path="out.mp4", created_at=datetime.now(UTC)
        )

        with pytest.raises(ValidationError):
            spec.output_path = "other.mp4"  # type: ignore[misc]

    def test_relative_output_resolves_against_workspace(self, tmp_path: Path) -> None:
        spec = CaptureSpec(
            command="ffmpeg", argv=("ffmpeg", "7.mp4"), output_path="7.mp4", created_at=datetime.now(UTC)
        )

        assert spec.output_file(tmp_path) == tmp_path / "7.mp4"


class TestJobSettings:
    def test_fail_on_error_defaults_to_true(self) -> None:
        assert JobSettings().fail_on_error is True

    def test_null_fail_on_error_means_true(self) -> None:
        assert JobSettings.model_validate({"fail_on_error": None}).fail_on_error is True

    def test_null_command_means_default(self) -> None:
        assert JobSettings.model_validate({"command": None}).command == ""
