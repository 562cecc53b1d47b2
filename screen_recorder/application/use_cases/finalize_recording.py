from datetime import UTC, datetime

from loguru import logger

from screen_recorder.application.dto.active_recording import ActiveRecording
from screen_recorder.application.services.artifact_finalizer import ArtifactFinalizer
from screen_recorder.domain.entities.build_context import BuildContext
from screen_recorder.domain.entities.teardown_outcome import (
    ArchivedArtifact,
    NeverStarted,
    NoArtifactProduced,
    TeardownOutcome,
)
from screen_recorder.domain.ports.build_logger_port import BuildLoggerPort
from screen_recorder.domain.services.diagnostics import build_failure_report
from screen_recorder.domain.value_objects.recorder_enums import SupervisorState
from screen_recorder.infrastructure.process.process_supervisor import ProcessSupervisor
from screen_recorder.infrastructure.process.stream_drain import StreamDrainError


class FinalizeRecording:
    """Use case for stopping the capture process after the build step.

    Never raises: every failure becomes the best outcome still reachable,
    and the process is always released.
    """

    def __init__(
        self,
        supervisor: ProcessSupervisor,
        finalizer: ArtifactFinalizer,
        build_logger: BuildLoggerPort,
    ) -> None:
        self.supervisor = supervisor
        self.finalizer = finalizer
        self.build_logger = build_logger

    async def execute(self, recording: ActiveRecording, context: BuildContext) -> TeardownOutcome:
        outcome: TeardownOutcome
        try:
            outcome = await self._tear_down(recording, context)
        except Exception as e:
            logger.exception("Teardown of recording failed")
            self.build_logger.error(f"ScreenRecorder: {e}")
            if self.supervisor.state == SupervisorState.STOPPED:
                outcome = NoArtifactProduced(diagnostics=str(e))
            else:
                outcome = NeverStarted(diagnostics=str(e))
        finally:
            try:
                await self.supervisor.release()
            except Exception:
                logger.exception("Failed to release capture process")

        logger.info("Recording teardown finished: {}", outcome.kind.value)
        return outcome

    async def _tear_down(self, recording: ActiveRecording, context: BuildContext) -> TeardownOutcome:
        spec = recording.spec
        if not recording.launched or spec is None:
            return NeverStarted(diagnostics=recording.launch_error or "")

        output_file = spec.output_file(context.workspace)

        if not self.supervisor.is_alive():
            diagnostics = "" if output_file.exists() else await self._collect_diagnostics()
            return NeverStarted(diagnostics=diagnostics)

        stopped_at = datetime.now(UTC)
        await self.supervisor.request_stop()

        if not output_file.exists():
            return NoArtifactProduced(diagnostics=await self._collect_diagnostics())

        return await self.finalizer.finalize(
            spec, context.workspace, recording.started_at, stopped_at
        )

    async def _collect_diagnostics(self) -> str:
        """Best-effort failure report from the captured pipes."""
        try:
            stderr_text, stdout_text = await self.supervisor.read_output()
        except StreamDrainError as e:
            logger.warning("Could not read capture output: {}", e)
            self.build_logger.warning(f"ScreenRecorder: could not read capture output: {e}")
            return ""

        report = build_failure_report(stderr_text, stdout_text)
        self.build_logger.error("Video recording failed: ")
        self.build_logger.info(report)
        return report
