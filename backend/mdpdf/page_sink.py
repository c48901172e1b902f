from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

from fpdf import FPDF

FontKind = Literal["regular", "bold", "mono"]
Color = tuple[float, float, float]

BLACK: Color = (0.0, 0.0, 0.0)

# Core fonts only: WinAnsi encoded, no font files needed.
_CORE_FONTS: dict[str, tuple[str, str]] = {
    "regular": ("Helvetica", ""),
    "bold": ("Helvetica", "B"),
    "mono": ("Courier", ""),
}


@dataclass(frozen=True)
class FontHandle:
    family: str
    style: str = ""


class PageSink(Protocol):
    """Drawing surface used by the layout engine.

    Coordinates are PDF points with the origin at the bottom-left corner of
    the page; ``y`` of a text run is its baseline.
    """

    page_width: float
    page_height: float

    def add_page(self) -> None: ...

    def load_font(self, kind: FontKind) -> FontHandle: ...

    def text_width(self, text: str, font: FontHandle, size: float) -> float: ...

    def draw_text(self, text: str, *, x: float, y: float, font: FontHandle, size: float, color: Color = BLACK) -> None: ...

    def draw_rect(
        self,
        *,
        x: float,
        y: float,
        width: float,
        height: float,
        fill: Color,
        border: Color,
        border_width: float,
    ) -> None: ...

    def to_bytes(self) -> bytes: ...


def _rgb255(color: Color) -> tuple[int, int, int]:
    r, g, b = color
    return round(r * 255), round(g * 255), round(b * 255)


class FpdfPageSink:
    """``PageSink`` backed by fpdf2 in point units.

    fpdf2 measures ``y`` downwards from the top edge, so every call flips the
    vertical axis. Page breaks belong to the layout engine, which is why
    fpdf2's automatic breaking is switched off.
    """

    def __init__(self, *, page_format: str = "A4", title: str | None = None, creator: str = "github-md-pdf") -> None:
        self.pdf = FPDF(orientation="portrait", unit="pt", format=page_format)
        self.pdf.set_auto_page_break(auto=False)
        self.pdf.set_margins(0, 0, 0)
        self.pdf.set_creator(creator)
        if title:
            self.pdf.set_title(title)
        self.page_width = float(self.pdf.w)
        self.page_height = float(self.pdf.h)

    @property
    def page_count(self) -> int:
        return self.pdf.page_no()

    def add_page(self) -> None:
        self.pdf.add_page()

    def load_font(self, kind: FontKind) -> FontHandle:
        family, style = _CORE_FONTS[kind]
        return FontHandle(family=family, style=style)

    def _use_font(self, font: FontHandle, size: float) -> None:
        self.pdf.set_font(font.family, font.style, size)

    def text_width(self, text: str, font: FontHandle, size: float) -> float:
        self._use_font(font, size)
        return float(self.pdf.get_string_width(text))

    def draw_text(self, text: str, *, x: float, y: float, font: FontHandle, size: float, color: Color = BLACK) -> None:
        self._use_font(font, size)
        self.pdf.set_text_color(*_rgb255(color))
        self.pdf.text(x, self.page_height - y, text)

    def draw_rect(
        self,
        *,
        x: float,
        y: float,
        width: float,
        height: float,
        fill: Color,
        border: Color,
        border_width: float,
    ) -> None:
        self.pdf.set_fill_color(*_rgb255(fill))
        self.pdf.set_draw_color(*_rgb255(border))
        self.pdf.set_line_width(border_width)
        self.pdf.rect(x, self.page_height - y - height, width, height, style="DF")

    def to_bytes(self) -> bytes:
        output = self.pdf.output()
        if isinstance(output, (bytes, bytearray)):
            return bytes(output)
        return str(output).encode("latin-1", "replace")
