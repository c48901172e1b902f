from __future__ import annotations

import re

# Highest codepoint the WinAnsi/Latin-1 core fonts can show.
MAX_CODEPOINT = 0x00FF

_ENTITY_REPLACEMENTS = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&#x27;", "'"),
)
_SPAN_RE = re.compile(r"<span\b[^>]*>(.*?)</span>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"</?[^>]+>")
_PUNCT_REPLACEMENTS = {
    "\u201c": '"',
    "\u201d": '"',
    "\u2018": "'",
    "\u2019": "'",
    "\u2013": "-",
    "\u2014": "-",
    "\u2026": "...",
    "\u00a0": " ",
    "\u200b": "",
    "\u200d": "",
    "\ufe0f": "",
}
_EMOJI_RE = re.compile("[\U0001F000-\U0001FAFF\U0001F1E6-\U0001F1FF\u2600-\u27bf]")


def decode_entities(text: str) -> str:
    out = text
    for entity, repl in _ENTITY_REPLACEMENTS:
        out = out.replace(entity, repl)
    return out


def strip_html_keep_text(text: str) -> str:
    """Unwrap ``<span>`` elements, drop every other tag, then decode entities."""
    out = _SPAN_RE.sub(r"\1", text)
    out = _TAG_RE.sub("", out)
    return decode_entities(out)


def sanitize_for_pdf(text: str) -> str:
    """Reduce ``text`` to what the single-byte core fonts can draw.

    Smart punctuation becomes ASCII, emoji and pictographs are removed, and
    anything else above ``MAX_CODEPOINT`` is replaced with ``?`` so the loss
    stays visible in the output.
    """
    if not text:
        return ""
    out = text
    for key, val in _PUNCT_REPLACEMENTS.items():
        out = out.replace(key, val)
    out = _EMOJI_RE.sub("", out)
    return "".join(ch if ord(ch) <= MAX_CODEPOINT else "?" for ch in out)


def sanitize(text: str) -> str:
    return sanitize_for_pdf(strip_html_keep_text(text or ""))
