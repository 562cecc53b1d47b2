import os


def _split_lines(text: str, separator: str) -> list[str]:
    # Trailing empty pieces carry no information
    parts = text.split(separator)
    while parts and parts[-1] == "":
        parts.pop()
    return parts


def build_failure_report(stderr_text: str, stdout_text: str, separator: str = os.linesep) -> str:
    """Combine the full error text with the tail of the output text.

    Capture tools often print their final statistics or the actual error
    summary on stdout, so the last two stdout lines are appended.
    """
    report = stderr_text
    lines = _split_lines(stdout_text, separator)
    if len(lines) > 1:
        report += lines[-2] + separator
    if lines:
        report += lines[-1] + separator
    return report
