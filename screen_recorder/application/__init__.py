from screen_recorder.application.screen_recorder_wrapper import ScreenRecorderWrapper
from screen_recorder.application.use_cases.start_recording import RecordingAbortedError

__all__ = ["RecordingAbortedError", "ScreenRecorderWrapper"]
