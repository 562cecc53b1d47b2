import asyncio
import contextlib
import os
import signal
from collections.abc import Awaitable, Callable
from pathlib import Path

from loguru import logger

from screen_recorder.domain.value_objects.capture_spec import CaptureSpec
from screen_recorder.domain.value_objects.recorder_enums import SupervisorState
from screen_recorder.domain.value_objects.recorder_settings import RecorderTimings
from screen_recorder.infrastructure.process.stream_drain import StreamDrain

# Interactive quit key understood by ffmpeg and similar capture tools
QUIT_COMMAND = "q"

_ALLOWED_TRANSITIONS: dict[SupervisorState, set[SupervisorState]] = {
    SupervisorState.NOT_STARTED: {SupervisorState.RUNNING, SupervisorState.FAILED_TO_START},
    SupervisorState.RUNNING: {SupervisorState.STOPPING_REQUESTED, SupervisorState.STOPPED},
    SupervisorState.STOPPING_REQUESTED: {SupervisorState.STOPPED},
    SupervisorState.STOPPED: set(),
    SupervisorState.FAILED_TO_START: set(),
}


class ProcessLaunchError(Exception):
    """The capture process could not be created."""

    def __init__(self, command_line: str, reason: str) -> None:
        self.command_line = command_line
        self.reason = reason
        super().__init__(reason)


class InvalidStateTransition(Exception):
    def __init__(self, current: SupervisorState, target: SupervisorState) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot move supervisor from {current.value} to {target.value}")


class ProcessHandle:
    """Running capture process together with its three pipes."""

    def __init__(
        self,
        process: asyncio.subprocess.Process,
        stderr: StreamDrain,
        stdout: StreamDrain,
    ) -> None:
        self.process = process
        self.stderr = stderr
        self.stdout = stdout
        self._quit_sent = False

    @property
    def pid(self) -> int:
        return self.process.pid

    def is_alive(self) -> bool:
        return self.process.returncode is None

    def start_draining(self) -> None:
        self.stderr.start()
        self.stdout.start()

    async def send_quit(self) -> bool:
        """Write the quit line once, flush and close stdin."""
        if self._quit_sent:
            return False
        stdin = self.process.stdin
        if stdin is None or stdin.is_closing():
            return False
        self._quit_sent = True
        stdin.write((QUIT_COMMAND + os.linesep).encode("ascii"))
        await stdin.drain()
        await self.close_stdin()
        return True

    async def close_stdin(self) -> None:
        stdin = self.process.stdin
        if stdin is None or stdin.is_closing():
            return
        stdin.close()
        with contextlib.suppress(BrokenPipeError, ConnectionResetError):
            await stdin.wait_closed()

    async def wait(self, timeout: float) -> bool:
        """Wait for exit; True if the process is gone."""
        if not self.is_alive():
            return True
        try:
            await asyncio.wait_for(self.process.wait(), timeout=timeout)
        except TimeoutError:
            return False
        return True

    async def terminate(self, timeout: float) -> None:
        # Capture tools may spawn helpers; signal the whole group
        try:
            os.killpg(os.getpgid(self.pid), signal.SIGTERM)
        except (ProcessLookupError, OSError):
            with contextlib.suppress(ProcessLookupError):
                self.process.terminate()
        if await self.wait(timeout):
            return
        logger.warning("Capture process {} ignored SIGTERM, killing", self.pid)
        with contextlib.suppress(ProcessLookupError):
            self.process.kill()
        await self.process.wait()

    async def close(self, timeout: float) -> None:
        try:
            with contextlib.suppress(BrokenPipeError, ConnectionResetError):
                await self.close_stdin()
            if self.is_alive():
                await self.terminate(timeout)
        finally:
            await self.stderr.close()
            await self.stdout.close()


class ProcessSupervisor:
    """Owns one capture process from launch to reaping.

    NOT_STARTED -> RUNNING -> STOPPING_REQUESTED -> STOPPED, or
    NOT_STARTED -> FAILED_TO_START when the launch fails.
    """

    def __init__(
        self,
        timings: RecorderTimings | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.timings = timings or RecorderTimings()
        self._sleep = sleep
        self._state = SupervisorState.NOT_STARTED
        self._handle: ProcessHandle | None = None

    @property
    def state(self) -> SupervisorState:
        return self._state

    @property
    def handle(self) -> ProcessHandle | None:
        return self._handle

    def _transition(self, target: SupervisorState) -> None:
        if target not in _ALLOWED_TRANSITIONS[self._state]:
            raise InvalidStateTransition(self._state, target)
        logger.debug("Supervisor {} -> {}", self._state.value, target.value)
        self._state = target

    async def start(self, spec: CaptureSpec, cwd: Path) -> ProcessHandle:
        if self._state != SupervisorState.NOT_STARTED:
            raise InvalidStateTransition(self._state, SupervisorState.RUNNING)

        # Give a virtual display (Xvnc, Xvfb) time to accept connections
        await self._sleep(self.timings.warmup_s)

        try:
            process = await asyncio.create_subprocess_exec(
                *spec.argv,
                cwd=str(cwd),
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                start_new_session=True,
            )
        except (OSError, ValueError) as e:
            self._transition(SupervisorState.FAILED_TO_START)
            logger.error("Failed to launch '{}': {}", spec.command_line, e)
            raise ProcessLaunchError(spec.command_line, str(e)) from e

        handle = ProcessHandle(
            process,
            stderr=StreamDrain("stderr", process.stderr),
            stdout=StreamDrain("stdout", process.stdout),
        )
        handle.start_draining()
        self._handle = handle
        self._transition(SupervisorState.RUNNING)
        logger.info("Capture process started (pid {}): {}", handle.pid, spec.command_line)
        return handle

    def is_alive(self) -> bool:
        return self._handle is not None and self._handle.is_alive()

    async def request_stop(self) -> bool:
        """Ask the running process to quit and give it time to finalize output.

        Returns True if the quit line was delivered. Calling again after the
        first request is a no-op.
        """
        if self._state != SupervisorState.RUNNING or self._handle is None:
            logger.debug("Stop not requested, supervisor is {}", self._state.value)
            return False
        handle = self._handle
        self._transition(SupervisorState.STOPPING_REQUESTED)

        delivered = False
        if handle.is_alive():
            try:
                delivered = await handle.send_quit()
            except (BrokenPipeError, ConnectionResetError) as e:
                logger.warning("Capture process {} closed stdin before quit: {}", handle.pid, e)

        # Fixed flush allowance; larger recordings need longer to finalize
        await self._sleep(self.timings.drain_s)

        if not await handle.wait(self.timings.stop_timeout_s):
            logger.warning(
                "Capture process {} still running {}s after quit, terminating",
                handle.pid,
                self.timings.stop_timeout_s,
            )
            await handle.terminate(self.timings.stop_timeout_s)

        self._transition(SupervisorState.STOPPED)
        return delivered

    async def read_output(self) -> tuple[str, str]:
        """Return (stderr, stdout) text once both pipes reach end-of-stream."""
        if self._handle is None:
            return "", ""
        timeout = self.timings.read_timeout_s
        stderr_text = await self._handle.stderr.read_text(timeout)
        stdout_text = await self._handle.stdout.read_text(timeout)
        return stderr_text, stdout_text

    async def release(self) -> None:
        """Close every pipe and reap the process, on every exit path."""
        if self._handle is None:
            return
        try:
            await self._handle.close(self.timings.stop_timeout_s)
        finally:
            if self._state == SupervisorState.RUNNING:
                self._transition(SupervisorState.STOPPED)
            logger.debug("Capture process {} released", self._handle.pid)
