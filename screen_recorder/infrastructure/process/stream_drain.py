import asyncio
import contextlib

from loguru import logger

CHUNK_SIZE = 64 * 1024
# Progress output of a long recording is unbounded; keep the tail
DEFAULT_LIMIT_BYTES = 1024 * 1024


class StreamDrainError(Exception):
    """A captured stream could not be read to completion."""


class StreamDrain:
    """Continuously reads one pipe of the capture process into a bounded buffer.

    Reading in the background keeps the child from blocking on a full pipe
    while it records; the text is materialized only after the process exits.
    """

    def __init__(
        self,
        name: str,
        stream: asyncio.StreamReader | None,
        limit_bytes: int = DEFAULT_LIMIT_BYTES,
    ) -> None:
        self.name = name
        self._stream = stream
        self._limit = limit_bytes
        self._buffer = bytearray()
        self._task: asyncio.Task[None] | None = None
        self.truncated = False

    def start(self) -> None:
        if self._stream is None or self._task is not None:
            return
        self._task = asyncio.create_task(self._pump(self._stream), name=f"drain-{self.name}")

    async def _pump(self, stream: asyncio.StreamReader) -> None:
        while True:
            chunk = await stream.read(CHUNK_SIZE)
            if not chunk:
                break
            self._buffer.extend(chunk)
            overflow = len(self._buffer) - self._limit
            if overflow > 0:
                del self._buffer[:overflow]
                self.truncated = True

    async def read_text(self, timeout: float) -> str:
        """Wait for end-of-stream and return everything read, decoded as UTF-8."""
        if self._task is None:
            raise StreamDrainError(f"{self.name} is not being captured")
        try:
            await asyncio.wait_for(asyncio.shield(self._task), timeout=timeout)
        except TimeoutError as e:
            raise StreamDrainError(f"Timed out after {timeout}s reading {self.name}") from e
        except Exception as e:
            raise StreamDrainError(f"Failed to read {self.name}: {e}") from e
        return self._buffer.decode("utf-8", errors="replace")

    async def close(self) -> None:
        task = self._task
        if task is None:
            return
        if not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        elif not task.cancelled() and task.exception() is not None:
            logger.debug("Drain of {} ended with error: {}", self.name, task.exception())
