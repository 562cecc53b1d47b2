from abc import ABC, abstractmethod


class ContentPolicyPort(ABC):
    """Process-wide content-security-policy used when serving archived files."""

    @abstractmethod
    def current(self) -> str: ...

    @abstractmethod
    def has_media_src(self) -> bool: ...

    @abstractmethod
    def extend_media_src(self) -> tuple[str, str] | None:
        """Widen the policy to allow same-origin media.

        Returns (old, new) when the policy changed, None when media-src was
        already present. Check-then-set, not atomic across threads.
        """
