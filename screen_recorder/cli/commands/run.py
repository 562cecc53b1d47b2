import asyncio
import os
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from screen_recorder.application.screen_recorder_wrapper import ScreenRecorderWrapper
from screen_recorder.application.use_cases.start_recording import RecordingAbortedError
from screen_recorder.cli.build_logger import ConsoleBuildLogger
from screen_recorder.cli.theme import theme
from screen_recorder.domain.entities.build_context import BuildContext
from screen_recorder.domain.value_objects.recorder_settings import RecorderTimings
from screen_recorder.infrastructure.persistence.settings_store import SettingsStore
from screen_recorder.infrastructure.security.content_policy import ProcessContentPolicy

console = Console(highlight=False)

_DEFAULT_TIMINGS = RecorderTimings()


def run_build(
    command: list[str] = typer.Argument(..., help="Build command, given after --"),
    job: str = typer.Option(..., "--job", "-j", help="Job name"),
    build: int = typer.Option(..., "--build", "-b", help="Build number"),
    workspace: Path | None = typer.Option(None, "--workspace", "-w", help="Workspace (default: cwd)"),
    capture_command: str | None = typer.Option(
        None, "--command", "-c", help="Capture command (overrides job and default setting)"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output path template"),
    fail_on_error: bool | None = typer.Option(
        None,
        "--fail-on-error/--no-fail-on-error",
        help="Fail the build when recording fails (default: job setting)",
    ),
    warmup: float = typer.Option(_DEFAULT_TIMINGS.warmup_s, "--warmup", help="Seconds before launch"),
    drain: float = typer.Option(_DEFAULT_TIMINGS.drain_s, "--drain", help="Seconds to flush after quit"),
    home: Path | None = typer.Option(None, "--home", help="Recorder home directory"),
    build_url: str = typer.Option("", "--build-url", help="URL of this build, logged at setup"),
) -> None:
    """Run a build command while recording the screen."""
    store = SettingsStore(home)
    overrides: dict[str, object] = {}
    if capture_command is not None:
        overrides["command"] = capture_command
    if output is not None:
        overrides["output_path_template"] = output
    if fail_on_error is not None:
        overrides["fail_on_error"] = fail_on_error

    job_settings = store.load_job(job).model_copy(update=overrides)
    context = BuildContext(
        job_name=job,
        build_number=build,
        workspace=(workspace or Path.cwd()).resolve(),
        home=store.home,
        build_url=build_url,
        inherited_env=dict(os.environ),
    )
    wrapper = ScreenRecorderWrapper(
        context=context,
        job=job_settings,
        global_settings=store.load_global(),
        build_logger=ConsoleBuildLogger(console),
        content_policy=ProcessContentPolicy(),
        timings=RecorderTimings(
            warmup_s=warmup,
            drain_s=drain,
            stop_timeout_s=_DEFAULT_TIMINGS.stop_timeout_s,
            read_timeout_s=_DEFAULT_TIMINGS.read_timeout_s,
        ),
    )

    exit_code = asyncio.run(_run_wrapped(wrapper, command, context.workspace))
    raise typer.Exit(exit_code)


async def _run_wrapped(wrapper: ScreenRecorderWrapper, command: list[str], cwd: Path) -> int:
    try:
        ok = await wrapper.run(lambda: run_build_command(command, cwd))
    except RecordingAbortedError as e:
        console.print(f"[{theme.ERROR}]{escape(str(e))}[/]")
        console.print(f"[{theme.DIM}]Try running '{escape(e.command)}' on this machine.[/]")
        return 1

    if ok:
        console.print(f"[{theme.SUCCESS}]Build finished[/]")
        return 0
    console.print(f"[{theme.ERROR}]Build failed[/]")
    return 1


async def run_build_command(command: list[str], cwd: Path) -> bool:
    """The wrapped unit of work: run the build command to completion."""
    try:
        proc = await asyncio.create_subprocess_exec(*command, cwd=str(cwd))
    except OSError as e:
        logger.error("Failed to start build command {}: {}", command, e)
        console.print(f"[{theme.ERROR}]Cannot run {escape(' '.join(command))}: {escape(str(e))}[/]")
        return False
    returncode = await proc.wait()
    logger.info("Build command exited with {}", returncode)
    return returncode == 0
