from screen_recorder.domain.value_objects.capture_spec import CaptureSpec
from screen_recorder.domain.value_objects.recorder_enums import (
    OutcomeKind,
    SupervisorState,
)
from screen_recorder.domain.value_objects.recorder_settings import (
    DEFAULT_FFMPEG_COMMAND,
    DEFAULT_OUTPUT_TEMPLATE,
    GlobalSettings,
    JobSettings,
    RecorderTimings,
)

__all__ = [
    "DEFAULT_FFMPEG_COMMAND",
    "DEFAULT_OUTPUT_TEMPLATE",
    "CaptureSpec",
    "GlobalSettings",
    "JobSettings",
    "OutcomeKind",
    "RecorderTimings",
    "SupervisorState",
]
