from screen_recorder.domain.services.command_resolver import (
    CommandResolutionError,
    resolve_capture_spec,
    resolve_command,
    resolve_output_path,
)
from screen_recorder.domain.services.diagnostics import build_failure_report
from screen_recorder.domain.services.macro_expander import expand_macros

__all__ = [
    "CommandResolutionError",
    "build_failure_report",
    "expand_macros",
    "resolve_capture_spec",
    "resolve_command",
    "resolve_output_path",
]
