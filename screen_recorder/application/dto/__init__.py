from screen_recorder.application.dto.active_recording import ActiveRecording

__all__ = ["ActiveRecording"]
