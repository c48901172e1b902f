from __future__ import annotations

from dataclasses import dataclass

import pytest

from mdpdf.layout import LayoutEngine, RenderContext
from mdpdf.page_sink import BLACK, Color, FontHandle, FpdfPageSink


@dataclass(frozen=True)
class TextRun:
    text: str
    x: float
    y: float
    font: FontHandle
    size: float
    page: int


@dataclass(frozen=True)
class RectOp:
    x: float
    y: float
    width: float
    height: float
    page: int


class RecordingSink(FpdfPageSink):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.texts: list[TextRun] = []
        self.rects: list[RectOp] = []

    def draw_text(self, text: str, *, x: float, y: float, font: FontHandle, size: float, color: Color = BLACK) -> None:
        self.texts.append(TextRun(text=text, x=x, y=y, font=font, size=size, page=self.page_count))
        super().draw_text(text, x=x, y=y, font=font, size=size, color=color)

    def draw_rect(self, *, x: float, y: float, width: float, height: float, fill: Color, border: Color, border_width: float) -> None:
        self.rects.append(RectOp(x=x, y=y, width=width, height=height, page=self.page_count))
        super().draw_rect(x=x, y=y, width=width, height=height, fill=fill, border=border, border_width=border_width)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def engine(sink: RecordingSink) -> LayoutEngine:
    return LayoutEngine(RenderContext.create(sink))


@pytest.fixture
def render(sink: RecordingSink, engine: LayoutEngine):
    def _render(markdown: str) -> RecordingSink:
        engine.render(markdown)
        return sink

    return _render


@pytest.fixture
def make_engine():
    def _make() -> tuple[RecordingSink, LayoutEngine]:
        sink = RecordingSink()
        return sink, LayoutEngine(RenderContext.create(sink))

    return _make
