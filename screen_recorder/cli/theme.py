"""CLI theme configuration - all colors in one place.

Colors use Rich markup syntax (e.g., "green", "bold red", "dim italic").
"""


class Theme:
    """Terminal color theme for the screen-recorder CLI and build log."""

    SUCCESS = "green"
    ERROR = "red"
    ERROR_BOLD = "bold red"
    WARNING = "yellow"
    INFO = "cyan"
    DIM = "grey62"
    LINK = "underline cyan"


theme = Theme()
