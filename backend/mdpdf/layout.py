from __future__ import annotations

import math
from dataclasses import dataclass, field

from .classify import Blank, Bullet, CodeFence, Heading, LineKind, OrderedItem, Paragraph, classify_line, is_code_fence, split_lines
from .logging_utils import get_logger
from .page_sink import BLACK, Color, FontHandle, FpdfPageSink, PageSink
from .wrapping import wrap_code_lines, wrap_greedy

log = get_logger(__name__)

# Byte 0x95 is the bullet glyph in the WinAnsi encoding of the core fonts.
BULLET_MARKER = "\x95 "


@dataclass(frozen=True)
class LayoutSettings:
    margin: float = 50
    line_gap: float = 4
    bottom_margin: float = 60
    body_size: float = 10
    heading_sizes: tuple[float, float, float, float] = (16, 14, 12, 11)
    heading_gap_before: float = 2
    heading_gap_after_major: float = 6
    heading_gap_after_minor: float = 4
    blank_gap: float = 6
    code_size: float = 9
    code_line_gap: float = 2
    code_padding_x: float = 8
    code_padding_y: float = 6
    code_fill: Color = (0.96, 0.96, 0.96)
    code_border: Color = (0.85, 0.85, 0.85)
    code_border_width: float = 1
    code_color: Color = (0.15, 0.15, 0.15)
    text_color: Color = BLACK

    def heading_size(self, level: int) -> float:
        return self.heading_sizes[min(max(level, 1), 4) - 1]


@dataclass
class Cursor:
    page_width: float
    page_height: float
    margin: float
    line_gap: float
    x: float = 0.0
    y: float = 0.0

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    def reset(self) -> None:
        self.x = self.margin
        self.y = self.page_height - self.margin


@dataclass(frozen=True)
class Fonts:
    regular: FontHandle
    bold: FontHandle
    mono: FontHandle


@dataclass
class RenderContext:
    sink: PageSink
    fonts: Fonts
    cursor: Cursor
    settings: LayoutSettings = field(default_factory=LayoutSettings)
    pages: int = 0

    @classmethod
    def create(cls, sink: PageSink, settings: LayoutSettings | None = None) -> "RenderContext":
        settings = settings or LayoutSettings()
        fonts = Fonts(
            regular=sink.load_font("regular"),
            bold=sink.load_font("bold"),
            mono=sink.load_font("mono"),
        )
        cursor = Cursor(
            page_width=sink.page_width,
            page_height=sink.page_height,
            margin=settings.margin,
            line_gap=settings.line_gap,
        )
        return cls(sink=sink, fonts=fonts, cursor=cursor, settings=settings)

    def measure(self, text: str, font: FontHandle, size: float) -> float:
        return self.sink.text_width(text, font, size)


class LayoutEngine:
    """Lays out Markdown lines onto fixed-size pages.

    Fenced code is buffered until its closing fence, every other line is
    classified and drawn at once. The engine never fails on odd input:
    unknown syntax is drawn as a paragraph and a dangling fence is flushed
    at the end of the document.
    """

    def __init__(self, ctx: RenderContext) -> None:
        self.ctx = ctx
        self._in_code = False
        self._code_buffer: list[str] = []

    def new_page(self) -> None:
        self.ctx.sink.add_page()
        self.ctx.pages += 1
        self.ctx.cursor.reset()

    def _ensure_room(self) -> None:
        if self.ctx.cursor.y < self.ctx.settings.bottom_margin:
            self.new_page()

    def render(self, markdown: str) -> None:
        self.new_page()
        for raw in split_lines(markdown):
            self.feed(raw)
        self.finish()

    def feed(self, raw: str) -> None:
        if self._in_code:
            if is_code_fence(raw):
                self.render_code_block(self._code_buffer)
                self._code_buffer = []
                self._in_code = False
            else:
                self._code_buffer.append(raw)
            return
        self.dispatch(classify_line(raw))

    def finish(self) -> None:
        if self._in_code and self._code_buffer:
            self.render_code_block(self._code_buffer)
        self._code_buffer = []
        self._in_code = False

    def dispatch(self, kind: LineKind) -> None:
        if isinstance(kind, CodeFence):
            self._in_code = True
            self._code_buffer = []
        elif isinstance(kind, Heading):
            self.render_heading(kind.level, kind.text)
        elif isinstance(kind, Bullet):
            self.render_list_item(BULLET_MARKER, kind.text)
        elif isinstance(kind, OrderedItem):
            self.render_list_item(kind.label, kind.text)
        elif isinstance(kind, Blank):
            self.ctx.cursor.y -= self.ctx.settings.blank_gap
        elif isinstance(kind, Paragraph):
            self.draw_wrapped(kind.text, self.ctx.fonts.regular, self.ctx.settings.body_size)
        else:
            raise TypeError(f"Unhandled line kind: {kind!r}")

    def draw_wrapped(self, text: str, font: FontHandle, size: float, color: Color | None = None) -> int:
        ctx = self.ctx
        cursor = ctx.cursor
        # Measured from x, so indented list text stops at the right margin too.
        max_width = cursor.page_width - cursor.margin - cursor.x
        lines = wrap_greedy(text, font, size, max_width, ctx.measure)
        for line in lines:
            self._ensure_room()
            ctx.sink.draw_text(line, x=cursor.x, y=cursor.y, font=font, size=size, color=color or ctx.settings.text_color)
            cursor.y -= size + cursor.line_gap
        return len(lines)

    def render_heading(self, level: int, text: str) -> None:
        settings = self.ctx.settings
        major = level <= 2
        if major:
            self.ctx.cursor.y -= settings.heading_gap_before
        self.draw_wrapped(text, self.ctx.fonts.bold, settings.heading_size(level))
        self.ctx.cursor.y -= settings.heading_gap_after_major if major else settings.heading_gap_after_minor

    def render_list_item(self, marker: str, text: str) -> None:
        ctx = self.ctx
        cursor = ctx.cursor
        size = ctx.settings.body_size
        font = ctx.fonts.regular
        marker_width = ctx.measure(marker, font, size)
        self._ensure_room()
        ctx.sink.draw_text(marker, x=cursor.x, y=cursor.y, font=font, size=size, color=ctx.settings.text_color)
        saved_x = cursor.x
        cursor.x += marker_width
        if not self.draw_wrapped(text, font, size):
            cursor.y -= size + cursor.line_gap
        cursor.x = saved_x

    def render_code_block(self, buffer: list[str]) -> int:
        """Draw buffered code lines as page-sized chunks; returns the chunk count."""
        ctx = self.ctx
        cursor = ctx.cursor
        s = ctx.settings
        row = s.code_size + s.code_line_gap
        wrapped = wrap_code_lines(buffer, ctx.fonts.mono, s.code_size, cursor.content_width - 2 * s.code_padding_x, ctx.measure)

        chunks = 0
        i = 0
        fresh_page = False
        while i < len(wrapped):
            max_lines = math.floor((cursor.y - s.bottom_margin - 2 * s.code_padding_y) / row)
            if max_lines < 1 and not fresh_page:
                self.new_page()
                fresh_page = True
                continue
            # A page too short for one row still gets one per chunk.
            max_lines = max(max_lines, 1)
            fresh_page = False

            chunk = wrapped[i : i + max_lines]
            inner_height = len(chunk) * s.code_size + (len(chunk) - 1) * s.code_line_gap
            total_height = inner_height + 2 * s.code_padding_y
            ctx.sink.draw_rect(
                x=cursor.x,
                y=cursor.y - total_height,
                width=cursor.content_width,
                height=total_height,
                fill=s.code_fill,
                border=s.code_border,
                border_width=s.code_border_width,
            )
            y = cursor.y - s.code_padding_y - s.code_size
            for line in chunk:
                ctx.sink.draw_text(line, x=cursor.x + s.code_padding_x, y=y, font=ctx.fonts.mono, size=s.code_size, color=s.code_color)
                y -= row
            cursor.y -= total_height + cursor.line_gap
            i += len(chunk)
            chunks += 1
        return chunks


def render_markdown_to_pdf(markdown: str, title: str | None = None, *, settings: LayoutSettings | None = None) -> bytes:
    sink = FpdfPageSink(title=title)
    ctx = RenderContext.create(sink, settings)
    LayoutEngine(ctx).render(markdown)
    data = sink.to_bytes()
    log.debug("Rendered %d page(s), %d bytes", ctx.pages, len(data))
    return data
