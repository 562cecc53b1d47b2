from screen_recorder.domain.entities.teardown_outcome import (
    ArchivedArtifact,
    TeardownOutcome,
)
from screen_recorder.domain.ports.build_logger_port import BuildLoggerPort


class PolicyGate:
    """Turns a teardown outcome into the pass/fail reported to the host."""

    def __init__(self, build_logger: BuildLoggerPort) -> None:
        self.build_logger = build_logger

    def decide(
        self,
        outcome: TeardownOutcome,
        fail_on_error: bool,
        manual_command: str,
    ) -> bool:
        if isinstance(outcome, ArchivedArtifact):
            return True

        self.build_logger.warning(
            f"ScreenRecorder: video recording failed, try to run '{manual_command}' "
            "on the command line, in the target system"
        )
        if fail_on_error:
            self.build_logger.error(
                "ScreenRecorder: video recording failed, fail the job "
                "due to fail_on_error = true (see job config)"
            )
            return False

        self.build_logger.warning(
            "ScreenRecorder: video recording failed, don't fail the job "
            "due to fail_on_error = false (see job config)"
        )
        return True
