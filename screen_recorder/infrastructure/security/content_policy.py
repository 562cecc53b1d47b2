import os
from collections.abc import MutableMapping

from loguru import logger

from screen_recorder.domain.ports.content_policy_port import ContentPolicyPort

# Process-wide policy applied when archived build files are served
DIRECTORY_CSP_PROPERTY = "DIRECTORY_BROWSER_CSP"
MEDIA_SRC_DIRECTIVE = "media-src"
MEDIA_SRC_EXTENSION = ";media-src 'self';"


class ProcessContentPolicy(ContentPolicyPort):
    """Content-security-policy held in process-wide properties.

    Widening is check-then-set: repeated calls never duplicate the directive,
    but two recorders widening concurrently may race.
    """

    def __init__(
        self,
        properties: MutableMapping[str, str] | None = None,
        key: str = DIRECTORY_CSP_PROPERTY,
    ) -> None:
        self._properties = os.environ if properties is None else properties
        self.key = key

    def current(self) -> str:
        return self._properties.get(self.key, "")

    def has_media_src(self) -> bool:
        return MEDIA_SRC_DIRECTIVE in self.current()

    def extend_media_src(self) -> tuple[str, str] | None:
        if self.has_media_src():
            return None
        old = self.current()
        new = old + MEDIA_SRC_EXTENSION
        self._properties[self.key] = new
        logger.debug("{} widened: '{}' -> '{}'", self.key, old, new)
        return old, new
