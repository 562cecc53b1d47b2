from abc import ABC, abstractmethod


class BuildLoggerPort(ABC):
    """Port for the build console the operator reads."""

    @abstractmethod
    def info(self, message: str) -> None: ...

    @abstractmethod
    def warning(self, message: str) -> None: ...

    @abstractmethod
    def error(self, message: str) -> None: ...

    @abstractmethod
    def hyperlink(self, url: str, text: str) -> None:
        """Emit a clickable link labeled with text."""
