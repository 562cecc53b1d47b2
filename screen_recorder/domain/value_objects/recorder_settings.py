from pydantic import BaseModel, field_validator

DEFAULT_FFMPEG_COMMAND = "ffmpeg -video_size 1920x1080 -framerate 25 -f x11grab -i :0.0"
DEFAULT_OUTPUT_TEMPLATE = "${WORKSPACE}/${JOB_NAME}_${BUILD_NUMBER}.mp4"


class GlobalSettings(BaseModel):
    default_command: str = DEFAULT_FFMPEG_COMMAND


class JobSettings(BaseModel):
    command: str = ""
    fail_on_error: bool = True
    output_path_template: str = DEFAULT_OUTPUT_TEMPLATE

    @field_validator("fail_on_error", mode="before")
    @classmethod
    def _none_means_fail(cls, value: object) -> object:
        return True if value is None else value

    @field_validator("command", mode="before")
    @classmethod
    def _none_means_empty(cls, value: object) -> object:
        return "" if value is None else value

    def effective_command(self, global_settings: GlobalSettings) -> str:
        """Job command, falling back to the global default when blank."""
        if self.command and self.command.strip():
            return self.command
        return global_settings.default_command


class RecorderTimings(BaseModel, frozen=True):
    """Fixed delays standing in for readiness and flush signals.

    warmup_s lets a virtual display come up before the capture tool starts.
    drain_s gives the tool time to finalize the container after the quit line;
    long recordings need more. Neither is exact completion detection.
    """

    warmup_s: float = 3.0
    drain_s: float = 1.0
    stop_timeout_s: float = 10.0
    read_timeout_s: float = 5.0
