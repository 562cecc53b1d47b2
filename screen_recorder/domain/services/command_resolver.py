import shlex
from collections.abc import Mapping
from datetime import UTC, datetime

from screen_recorder.domain.services.macro_expander import expand_macros, has_unresolved_macro
from screen_recorder.domain.value_objects.capture_spec import CaptureSpec
from screen_recorder.domain.value_objects.recorder_settings import GlobalSettings, JobSettings

# Substitution of a missing value leaves this marker in the path
NULL_MARKER = "null"


class CommandResolutionError(ValueError):
    """The configured command cannot be turned into an argument list."""


def fallback_output_path(build_number: int) -> str:
    return f"{build_number}.mp4"


def resolve_output_path(template: str, env: Mapping[str, str], build_number: int) -> str:
    """Expand the output template, falling back to <build>.mp4 when unusable."""
    path = expand_macros(template or "", env).strip()
    if not path or NULL_MARKER in path.lower() or has_unresolved_macro(path):
        return fallback_output_path(build_number)
    return path


def resolve_command(job: JobSettings, global_settings: GlobalSettings, env: Mapping[str, str]) -> str:
    return expand_macros(job.effective_command(global_settings), env)


def resolve_capture_spec(
    job: JobSettings,
    global_settings: GlobalSettings,
    env: Mapping[str, str],
    build_number: int,
    now: datetime | None = None,
) -> CaptureSpec:
    """Build the capture command with the output path as its last argument.

    Macros are expanded before tokenizing, so quoted values survive intact.
    """
    command = resolve_command(job, global_settings, env)
    output_path = resolve_output_path(job.output_path_template, env, build_number)

    try:
        tokens = shlex.split(command)
    except ValueError as e:
        raise CommandResolutionError(f"Cannot parse capture command '{command}': {e}") from e
    if not tokens:
        raise CommandResolutionError("Capture command is empty")

    return CaptureSpec(
        command=command,
        argv=(*tokens, output_path),
        output_path=output_path,
        created_at=now or datetime.now(UTC),
    )
