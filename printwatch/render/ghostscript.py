"""
Ghostscript renderer.

Requires: Ghostscript (gswin64c / gswin32c on Windows, gs elsewhere)
Prints through the mswinpr2 device, which hands the rendered pages to the
Windows spooler.
"""

import asyncio
import logging
import os
import shutil
from typing import Optional, Sequence

from printwatch.errors import RenderFailedError, RendererMissingError
from .base import Renderer, RenderResult

logger = logging.getLogger(__name__)

# Searched in order; the first hit wins
DEFAULT_SEARCH_PATHS = (
    r"C:\Program Files\gs\gs10.06.0\bin\gswin64c.exe",
    r"C:\Program Files (x86)\gs\gs10.06.0\bin\gswin32c.exe",
    "gswin64c.exe",
    "gs",
)


def find_executable(search_paths: Sequence[str]) -> Optional[str]:
    """Return the first search path that is on PATH or exists on disk."""
    for path in search_paths:
        if shutil.which(path):
            return path
        if os.path.isfile(path):
            return path
    return None


class GhostscriptRenderer(Renderer):
    """
    Renderer that shells out to Ghostscript.

    Config options:
        renderer_paths: ordered list of executables/paths to try
    """

    def __init__(self, config: Optional[dict] = None):
        super().__init__(config)
        self.search_paths = list(self.config.get("renderer_paths") or DEFAULT_SEARCH_PATHS)

    def locate(self) -> Optional[str]:
        return find_executable(self.search_paths)

    async def render(self, args: list[str]) -> RenderResult:
        executable = self.locate()
        if executable is None:
            raise RendererMissingError(self.search_paths)

        logger.info(f"Running {executable} with {len(args)} arguments")
        logger.debug(f"Ghostscript args: {args}")

        try:
            proc = await asyncio.create_subprocess_exec(
                executable, *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as e:
            logger.error(f"Failed to start {executable}: {e}")
            raise RenderFailedError(None, str(e)) from e

        output, _ = await proc.communicate()

        return RenderResult(
            exit_code=proc.returncode,
            output=output.decode(errors="replace")
        )
