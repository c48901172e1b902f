from __future__ import annotations

import pytest

from mdpdf.sanitize import MAX_CODEPOINT, decode_entities, sanitize, sanitize_for_pdf, strip_html_keep_text

SAMPLES = [
    "",
    "plain ascii",
    "\u201cquoted\u201d and \u2018single\u2019",
    "dash \u2013 and \u2014 wait \u2026",
    "nbsp\u00a0here",
    "party \U0001F389 time \u2705 \U0001F1FA\U0001F1F8",
    "\u4e2d\u6587 and \u0416",
    "caf\u00e9 \u00fc ber",
    "<span>ok</span> &amp; more",
]


def test_decode_entities() -> None:
    assert decode_entities("&lt;tag&gt; &amp; &quot;q&quot; &#39;a&#x27;&nbsp;b") == "<tag> & \"q\" 'a' b"


def test_strip_html_unwraps_spans_and_drops_other_tags() -> None:
    assert strip_html_keep_text('<span class="x">Hello</span> <b>world</b><br/>') == "Hello world"


def test_strip_html_multiline_span() -> None:
    assert strip_html_keep_text("<SPAN style='c'>a\nb</SPAN>") == "a\nb"


def test_strip_html_decodes_after_stripping() -> None:
    assert strip_html_keep_text("a &lt;b&gt; c") == "a <b> c"


def test_smart_punctuation_becomes_ascii() -> None:
    assert sanitize_for_pdf("\u201chi\u201d \u2018x\u2019") == "\"hi\" 'x'"
    assert sanitize_for_pdf("a\u2013b\u2014c\u2026") == "a-b-c..."
    assert sanitize_for_pdf("a\u00a0b") == "a b"


def test_emoji_removed_not_replaced() -> None:
    assert sanitize_for_pdf("ok \U0001F600!") == "ok !"
    assert sanitize_for_pdf("\u2705 done") == " done"
    assert sanitize_for_pdf("flag \U0001F1E9\U0001F1EA") == "flag "
    assert sanitize_for_pdf("heart\u2764\ufe0f") == "heart"


def test_unsupported_characters_become_question_marks() -> None:
    assert sanitize_for_pdf("\u4e2d\u6587") == "??"
    assert sanitize_for_pdf("caf\u00e9") == "caf\u00e9"


@pytest.mark.parametrize("text", SAMPLES)
def test_output_stays_in_font_range(text: str) -> None:
    assert all(ord(ch) <= MAX_CODEPOINT for ch in sanitize(text))
    assert all(ord(ch) <= MAX_CODEPOINT for ch in sanitize_for_pdf(text))


@pytest.mark.parametrize("text", SAMPLES)
def test_sanitize_for_pdf_is_idempotent(text: str) -> None:
    once = sanitize_for_pdf(text)
    assert sanitize_for_pdf(once) == once


def test_sanitize_is_idempotent_on_markup_free_text() -> None:
    once = sanitize("\u201cSmart\u201d text\u2014with <i>tags</i> and \U0001F680")
    assert once == "\"Smart\" text-with tags and "
    assert sanitize(once) == once


def test_sanitize_handles_empty_and_none() -> None:
    assert sanitize("") == ""
    assert sanitize(None) == ""  # type: ignore[arg-type]
