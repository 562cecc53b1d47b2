from loguru import logger
from rich.console import Console
from rich.style import Style
from rich.text import Text

from screen_recorder.cli.theme import theme
from screen_recorder.domain.ports.build_logger_port import BuildLoggerPort


class ConsoleBuildLogger(BuildLoggerPort):
    """Writes the build log to a rich console and mirrors it into loguru."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def info(self, message: str) -> None:
        logger.info(message)
        self.console.print(Text(message))

    def warning(self, message: str) -> None:
        logger.warning(message)
        self.console.print(Text(message, style=theme.WARNING))

    def error(self, message: str) -> None:
        logger.error(message)
        self.console.print(Text(message, style=theme.ERROR_BOLD))

    def hyperlink(self, url: str, text: str) -> None:
        logger.info("{} ({})", text, url)
        self.console.print(Text(text, style=Style.parse(theme.LINK) + Style(link=url)))
