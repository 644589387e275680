from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class RenderResult:
    exit_code: int
    output: str = ""

    @property
    def success(self) -> bool:
        return self.exit_code == 0


class Renderer(ABC):
    """Abstract base class for document renderers."""

    def __init__(self, config: Optional[dict] = None):
        self.config = config or {}
        self.search_paths: list[str] = []

    @abstractmethod
    def locate(self) -> Optional[str]:
        """Return the renderer executable to use, or None if not installed."""
        pass

    @abstractmethod
    async def render(self, args: list[str]) -> RenderResult:
        """Run the renderer with the given arguments."""
        pass
