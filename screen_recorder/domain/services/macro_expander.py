import re
from collections.abc import Mapping

# $NAME or ${NAME}; unknown names are left as written
MACRO_PATTERN = re.compile(r"\$([A-Za-z0-9_]+|\{[A-Za-z0-9_.]+\})")


def expand_macros(template: str, env: Mapping[str, str]) -> str:
    """Replace every known $NAME / ${NAME} reference in template."""

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name.startswith("{"):
            name = name[1:-1]
        value = env.get(name)
        return match.group(0) if value is None else value

    return MACRO_PATTERN.sub(_replace, template)


def has_unresolved_macro(text: str) -> bool:
    return "${" in text
