from datetime import UTC, datetime

from loguru import logger

from screen_recorder.application.dto.active_recording import ActiveRecording
from screen_recorder.domain.entities.build_context import BuildContext
from screen_recorder.domain.ports.build_logger_port import BuildLoggerPort
from screen_recorder.domain.ports.content_policy_port import ContentPolicyPort
from screen_recorder.domain.services.command_resolver import (
    CommandResolutionError,
    resolve_capture_spec,
    resolve_command,
)
from screen_recorder.domain.value_objects.recorder_settings import GlobalSettings, JobSettings
from screen_recorder.infrastructure.process.process_supervisor import (
    ProcessLaunchError,
    ProcessSupervisor,
)


class RecordingAbortedError(Exception):
    """Recording could not start and the job is configured to fail on that."""

    def __init__(self, command: str, reason: str) -> None:
        self.command = command
        self.reason = reason
        super().__init__(f"Screen recording failed to start: {reason}")


class StartRecording:
    """Use case for launching the capture process before the build step runs."""

    def __init__(
        self,
        supervisor: ProcessSupervisor,
        content_policy: ContentPolicyPort,
        build_logger: BuildLoggerPort,
    ) -> None:
        self.supervisor = supervisor
        self.content_policy = content_policy
        self.build_logger = build_logger

    async def execute(
        self,
        context: BuildContext,
        job: JobSettings,
        global_settings: GlobalSettings,
    ) -> ActiveRecording:
        """Launch the recording.

        Raises RecordingAbortedError only when the launch fails and
        job.fail_on_error is set; otherwise a failed launch is logged and the
        build continues without a recording. Any other error raised once the
        process is running releases it before propagating.
        """
        env = context.environment()
        recording = ActiveRecording(
            command=resolve_command(job, global_settings, env),
            started_at=datetime.now(UTC),
        )

        if context.build_url:
            self.build_logger.info(context.build_url)
        self._ensure_archive_dir(context)

        try:
            recording.spec = resolve_capture_spec(job, global_settings, env, context.build_number)
            await self.supervisor.start(recording.spec, cwd=context.workspace)
        except (CommandResolutionError, ProcessLaunchError) as e:
            recording.launch_error = str(e)
            self.build_logger.error(str(e))
            if job.fail_on_error:
                raise RecordingAbortedError(recording.manual_command, str(e)) from e
            return recording

        # The video starts once the warm-up is over and the process is running
        recording.started_at = datetime.now(UTC)

        try:
            self._enable_embedded_video()
            logger.info("Recording {} to {}", context.job_name, recording.spec.output_path)
        except Exception:
            logger.exception("Setup failed after the capture process started")
            await self.supervisor.release()
            raise
        return recording

    def _ensure_archive_dir(self, context: BuildContext) -> None:
        try:
            context.archive_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.build_logger.error(f"Can't create {context.archive_dir}: {e}")

    def _enable_embedded_video(self) -> None:
        change = self.content_policy.extend_media_src()
        if change is None:
            return
        old, new = change
        self.build_logger.info(
            "Enabling embedded video: adding media-src 'self' to the directory content policy"
        )
        self.build_logger.info(f"Old value: {old}")
        self.build_logger.info(f"New value: {new}")
