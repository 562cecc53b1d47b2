from dataclasses import dataclass
from datetime import datetime

from screen_recorder.domain.value_objects.capture_spec import CaptureSpec


@dataclass
class ActiveRecording:
    """What setup hands to teardown for one wrapped build step."""

    command: str
    started_at: datetime
    spec: CaptureSpec | None = None
    launch_error: str | None = None

    @property
    def launched(self) -> bool:
        return self.spec is not None and self.launch_error is None

    @property
    def manual_command(self) -> str:
        """Command line to suggest when the recording failed."""
        return self.spec.command_line if self.spec else self.command
