from screen_recorder.infrastructure.process.process_supervisor import (
    QUIT_COMMAND,
    InvalidStateTransition,
    ProcessHandle,
    ProcessLaunchError,
    ProcessSupervisor,
)
from screen_recorder.infrastructure.process.stream_drain import StreamDrain, StreamDrainError

__all__ = [
    "QUIT_COMMAND",
    "InvalidStateTransition",
    "ProcessHandle",
    "ProcessLaunchError",
    "ProcessSupervisor",
    "StreamDrain",
    "StreamDrainError",
]
