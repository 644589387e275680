from .base import Renderer, RenderResult
from .command import build_args
from .options import ColorMode, DuplexEdge, PaperSize, PrintOptions

__all__ = [
    "ColorMode",
    "DuplexEdge",
    "PaperSize",
    "PrintOptions",
    "RenderResult",
    "Renderer",
    "build_args",
]
