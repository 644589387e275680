"""
Print options value object.

Wire vocabulary (HTTP settings, CLI flags):
    paper_size:   a4 | letter | legal | a5   (empty -> a4)
    color:        color | monochrome         (empty -> color)
    double_sided: true | false
    duplex_mode:  vertical (long edge) | horizontal (short edge)
    copies:       <= 0 -> 1
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class PaperSize(Enum):
    A4 = "a4"
    LETTER = "letter"
    LEGAL = "legal"
    A5 = "a5"


class ColorMode(Enum):
    COLOR = "color"
    MONOCHROME = "monochrome"


class DuplexEdge(Enum):
    LONG_EDGE = "vertical"
    SHORT_EDGE = "horizontal"


@dataclass(frozen=True)
class PrintOptions:
    # A str here is a size we don't recognize; it prints as A4
    paper_size: Union[PaperSize, str] = PaperSize.A4
    color: ColorMode = ColorMode.COLOR
    duplex: bool = False
    duplex_edge: DuplexEdge = DuplexEdge.LONG_EDGE
    copies: int = 1

    def __post_init__(self):
        if self.copies <= 0:
            object.__setattr__(self, "copies", 1)

    @classmethod
    def from_settings(
        cls,
        paper_size: str = "",
        color: str = "",
        double_sided: bool = False,
        duplex_mode: str = "",
        copies: int = 1
    ) -> "PrintOptions":
        """Create from wire-format settings, applying defaults."""
        paper_key = (paper_size or PaperSize.A4.value).strip().lower()
        try:
            paper: Union[PaperSize, str] = PaperSize(paper_key)
        except ValueError:
            paper = paper_size

        if (color or "").strip().lower() == ColorMode.MONOCHROME.value:
            color_mode = ColorMode.MONOCHROME
        else:
            color_mode = ColorMode.COLOR

        if (duplex_mode or "").strip().lower() == DuplexEdge.SHORT_EDGE.value:
            edge = DuplexEdge.SHORT_EDGE
        else:
            edge = DuplexEdge.LONG_EDGE

        return cls(
            paper_size=paper,
            color=color_mode,
            duplex=bool(double_sided),
            duplex_edge=edge,
            copies=copies if copies is not None else 1,
        )

    def to_dict(self) -> dict:
        """Return options in wire format."""
        paper = self.paper_size.value if isinstance(self.paper_size, PaperSize) else self.paper_size
        return {
            "paper_size": paper,
            "color": self.color.value,
            "double_sided": self.duplex,
            "duplex_mode": self.duplex_edge.value,
            "copies": self.copies,
        }
