from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from .sanitize import sanitize

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.*)$")
_BULLET_RE = re.compile(r"^\s*[-*]\s+(.*)$")
_ORDERED_RE = re.compile(r"^\s*(\d+)\.\s+(.*)$")
CODE_FENCE = "```"


@dataclass(frozen=True)
class Heading:
    level: int
    text: str


@dataclass(frozen=True)
class Bullet:
    text: str


@dataclass(frozen=True)
class OrderedItem:
    label: str
    text: str


@dataclass(frozen=True)
class CodeFence:
    pass


@dataclass(frozen=True)
class Blank:
    pass


@dataclass(frozen=True)
class Paragraph:
    text: str


LineKind = Union[Heading, Bullet, OrderedItem, CodeFence, Blank, Paragraph]


def is_code_fence(raw: str) -> bool:
    return raw.strip().startswith(CODE_FENCE)


def classify_line(raw: str) -> LineKind:
    """Classify one Markdown line; the first matching rule wins.

    Fence detection looks at the raw line. Every other rule matches against
    the HTML-stripped, font-sanitized text, which is also what the returned
    kind carries.
    """
    if is_code_fence(raw):
        return CodeFence()

    clean = sanitize(raw)

    match = _HEADING_RE.match(clean)
    if match:
        return Heading(level=len(match.group(1)), text=match.group(2))

    match = _BULLET_RE.match(clean)
    if match:
        return Bullet(text=match.group(1))

    match = _ORDERED_RE.match(clean)
    if match:
        return OrderedItem(label=f"{match.group(1)}. ", text=match.group(2))

    if not clean.strip():
        return Blank()
    return Paragraph(text=clean)


def split_lines(markdown: str) -> list[str]:
    return str(markdown or "").replace("\r\n", "\n").split("\n")
