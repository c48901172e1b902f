from __future__ import annotations

from typing import Callable, Iterable

from .page_sink import FontHandle
from .sanitize import sanitize_for_pdf

Measure = Callable[[str, FontHandle, float], float]

TAB_EXPANSION = "  "


def wrap_greedy(text: str, font: FontHandle, size: float, max_width: float, measure: Measure) -> list[str]:
    """Greedy word wrap of proportional text.

    A word wider than ``max_width`` on its own is emitted alone and unsplit.
    Empty or whitespace-only input gives no lines.
    """
    lines: list[str] = []
    line = ""
    for word in text.split():
        candidate = f"{line} {word}" if line else word
        if measure(candidate, font, size) <= max_width:
            line = candidate
            continue
        if line:
            lines.append(line)
        line = word
    if line:
        lines.append(line)
    return lines


def wrap_monospace(src: str, font: FontHandle, size: float, max_width: float, measure: Measure) -> list[str]:
    """Character wrap of one code line, keeping its spacing intact.

    Blank lines come back as a single space so they still take up a row.
    """
    text = sanitize_for_pdf((src or "").replace("\t", TAB_EXPANSION))
    if not text:
        return [" "]

    lines: list[str] = []
    line = ""
    width = 0.0
    for ch in text:
        w = measure(ch, font, size)
        if width + w <= max_width:
            line += ch
            width += w
            continue
        if line:
            lines.append(line)
        line = ch
        width = w
    if line:
        lines.append(line)
    return lines or [" "]


def wrap_code_lines(src_lines: Iterable[str], font: FontHandle, size: float, max_width: float, measure: Measure) -> list[str]:
    out: list[str] = []
    for ln in src_lines:
        out.extend(wrap_monospace(ln, font, size, max_width, measure))
    return out
