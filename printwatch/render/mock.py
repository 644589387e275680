import logging
from typing import Optional

from .base import Renderer, RenderResult

logger = logging.getLogger(__name__)


class MockRenderer(Renderer):
    """
    Mock renderer for development and tests without Ghostscript.

    Config options:
        installed: whether locate() finds the renderer (default: True)
        exit_code: exit status returned by render() (default: 0)
        output: combined output returned by render()
    """

    def __init__(self, config: Optional[dict] = None):
        super().__init__(config)
        self.installed = self.config.get("installed", True)
        self.exit_code = self.config.get("exit_code", 0)
        self.output = self.config.get("output", "")
        self.calls: list[list[str]] = []

    def locate(self) -> Optional[str]:
        return "mock-gs" if self.installed else None

    def set_result(self, exit_code: int, output: str = "") -> None:
        """Allow tests to set the next render outcome."""
        self.exit_code = exit_code
        self.output = output

    async def render(self, args: list[str]) -> RenderResult:
        self.calls.append(list(args))
        logger.info(f"[MOCK] Rendered {args[-1] if args else '<nothing>'} (exit {self.exit_code})")
        return RenderResult(exit_code=self.exit_code, output=self.output)
