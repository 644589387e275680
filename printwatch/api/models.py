from typing import Optional

from pydantic import BaseModel, Field

from printwatch.render.options import PrintOptions


class PrintSettings(BaseModel):
    paper_size: str = ""       # a4, letter, legal, a5
    color: str = ""            # color, monochrome
    double_sided: bool = False
    duplex_mode: str = ""      # vertical, horizontal
    copies: Optional[int] = 0  # null or <= 0 means 1

    def to_options(self) -> PrintOptions:
        return PrintOptions.from_settings(
            paper_size=self.paper_size,
            color=self.color,
            double_sided=self.double_sided,
            duplex_mode=self.duplex_mode,
            copies=self.copies,
        )


class PrintRequest(BaseModel):
    file_name: str = Field(min_length=1)
    printer: Optional[str] = None
    settings: PrintSettings = Field(default_factory=PrintSettings)
