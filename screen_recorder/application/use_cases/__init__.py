from screen_recorder.application.use_cases.finalize_recording import FinalizeRecording
from screen_recorder.application.use_cases.start_recording import (
    RecordingAbortedError,
    StartRecording,
)

__all__ = ["FinalizeRecording", "RecordingAbortedError", "StartRecording"]
