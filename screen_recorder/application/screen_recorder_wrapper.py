from collections.abc import Awaitable, Callable

from loguru import logger

from screen_recorder.application.dto.active_recording import ActiveRecording
from screen_recorder.application.services.artifact_finalizer import ArtifactFinalizer
from screen_recorder.application.services.policy_gate import PolicyGate
from screen_recorder.application.use_cases.finalize_recording import FinalizeRecording
from screen_recorder.application.use_cases.start_recording import StartRecording
from screen_recorder.domain.entities.build_context import BuildContext
from screen_recorder.domain.ports.artifact_store_port import ArtifactStorePort
from screen_recorder.domain.ports.build_logger_port import BuildLoggerPort
from screen_recorder.domain.ports.content_policy_port import ContentPolicyPort
from screen_recorder.domain.value_objects.recorder_settings import (
    GlobalSettings,
    JobSettings,
    RecorderTimings,
)
from screen_recorder.infrastructure.persistence.local_artifact_store import LocalArtifactStore
from screen_recorder.infrastructure.process.process_supervisor import ProcessSupervisor


class ScreenRecorderWrapper:
    """Records the screen for the duration of one build step.

    One instance per build step: the supervisor it owns is single-use.
    """

    def __init__(
        self,
        context: BuildContext,
        job: JobSettings,
        global_settings: GlobalSettings,
        build_logger: BuildLoggerPort,
        content_policy: ContentPolicyPort,
        timings: RecorderTimings | None = None,
        artifact_store: ArtifactStorePort | None = None,
        supervisor: ProcessSupervisor | None = None,
    ) -> None:
        self.context = context
        self.job = job
        self.global_settings = global_settings
        self.build_logger = build_logger
        self.supervisor = supervisor or ProcessSupervisor(timings)
        store = artifact_store or LocalArtifactStore(context.archive_dir)

        self._start = StartRecording(self.supervisor, content_policy, build_logger)
        self._finalize = FinalizeRecording(
            self.supervisor, ArtifactFinalizer(store, build_logger), build_logger
        )
        self._gate = PolicyGate(build_logger)

    async def set_up(self) -> ActiveRecording:
        """Start recording; raises RecordingAbortedError if the build must not run."""
        return await self._start.execute(self.context, self.job, self.global_settings)

    async def tear_down(self, recording: ActiveRecording) -> bool:
        """Stop and archive the recording; False means the build should fail."""
        outcome = await self._finalize.execute(recording, self.context)
        return self._gate.decide(outcome, self.job.fail_on_error, recording.manual_command)

    async def run(self, work: Callable[[], Awaitable[bool]]) -> bool:
        recording = await self.set_up()
        try:
            work_ok = await work()
        finally:
            teardown_ok = await self.tear_down(recording)
        logger.info("Build step ok={}, recording ok={}", work_ok, teardown_ok)
        return work_ok and teardown_ok
