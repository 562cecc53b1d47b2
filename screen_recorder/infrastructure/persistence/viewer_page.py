import asyncio
import os
from html import escape
from pathlib import Path

import aiofiles
from loguru import logger

VIEWER_POLICY = "default-src 'self'; script-src 'self'"

_VIEWER_TEMPLATE = """<html>
<head>
<meta http-equiv="Content-Security-Policy" content="{policy}">
<meta http-equiv="X-Content-Security-Policy" content="{policy}">
<meta http-equiv="X-WebKit-CSP" content="{policy}">
<title>{title}</title>
</head>

<body>
<video src="{src}" controls>
</video>
</body>

</html>"""


def render_viewer_page(title: str, video_src: str) -> str:
    return _VIEWER_TEMPLATE.format(
        policy=VIEWER_POLICY,
        title=escape(title),
        src=escape(video_src, quote=True),
    )


def viewer_name_for(artifact_name: str) -> str:
    return f"{Path(artifact_name).stem}.html"


async def write_viewer_page(archive_dir: Path, artifact_name: str) -> Path:
    """Write the player page next to the archived video and return its path.

    The page is staged under a hidden name and swapped in; an existing
    viewer is either kept intact or fully replaced.
    """
    archive_dir.mkdir(parents=True, exist_ok=True)
    path = archive_dir / viewer_name_for(artifact_name)
    staging = archive_dir / f".{path.name}.partial"

    try:
        async with aiofiles.open(staging, mode="w", encoding="utf-8") as f:
            await f.write(render_viewer_page(artifact_name, artifact_name))
        await asyncio.to_thread(os.replace, staging, path)
    except OSError:
        staging.unlink(missing_ok=True)
        raise

    logger.debug("Viewer page written: {}", path)
    return path
