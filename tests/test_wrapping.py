from __future__ import annotations

import pytest

from mdpdf.page_sink import FontHandle, FpdfPageSink
from mdpdf.wrapping import wrap_code_lines, wrap_greedy, wrap_monospace

FONT = FontHandle("Courier")


def per_char(text: str, font: FontHandle, size: float) -> float:
    return float(len(text))


def test_greedy_packs_words() -> None:
    assert wrap_greedy("aaa bbb ccc", FONT, 10, 7, per_char) == ["aaa bbb", "ccc"]


def test_greedy_collapses_whitespace_runs() -> None:
    assert wrap_greedy("  a   b\tc  ", FONT, 10, 100, per_char) == ["a b c"]


def test_greedy_keeps_overwide_word_alone() -> None:
    assert wrap_greedy("hi supercalifragilistic yo", FONT, 10, 5, per_char) == ["hi", "supercalifragilistic", "yo"]


def test_greedy_exact_fit_stays_on_line() -> None:
    assert wrap_greedy("ab cd", FONT, 10, 5, per_char) == ["ab cd"]


@pytest.mark.parametrize("text", ["", "   ", "\t\n"])
def test_greedy_empty_input_gives_no_lines(text: str) -> None:
    assert wrap_greedy(text, FONT, 10, 50, per_char) == []


@pytest.mark.parametrize("max_width", [40.0, 120.0, 250.0, 495.28])
def test_greedy_respects_width_with_real_metrics(max_width: float) -> None:
    sink = FpdfPageSink()
    font = sink.load_font("regular")
    text = (
        "The quick brown fox jumps over the lazy dog while an extraordinarily-long-hyphenated-token "
        "tries to break the layout, and WWWWWWWWWWWWWWWW glyphs are wide but iiii ones are narrow."
    )
    lines = wrap_greedy(text, font, 10, max_width, sink.text_width)
    assert " ".join(lines) == " ".join(text.split())
    for line in lines:
        assert sink.text_width(line, font, 10) <= max_width or len(line.split()) == 1


def test_monospace_wraps_by_character() -> None:
    assert wrap_monospace("abcdefgh", FONT, 9, 3, per_char) == ["abc", "def", "gh"]


def test_monospace_preserves_spacing_and_expands_tabs() -> None:
    assert wrap_monospace("a  b", FONT, 9, 10, per_char) == ["a  b"]
    assert wrap_monospace("\tx = 1", FONT, 9, 20, per_char) == ["  x = 1"]


def test_monospace_blank_line_keeps_a_row() -> None:
    assert wrap_monospace("", FONT, 9, 10, per_char) == [" "]


def test_monospace_overwide_character_alone() -> None:
    assert wrap_monospace("ab", FONT, 9, 0.5, per_char) == ["a", "b"]


def test_monospace_sanitizes_font_range_only() -> None:
    assert wrap_monospace("<b>&amp;\u4e2d", FONT, 9, 100, per_char) == ["<b>&amp;?"]


def test_code_lines_concatenate_in_order() -> None:
    assert wrap_code_lines(["ab", "", "cdef"], FONT, 9, 2, per_char) == ["ab", " ", "cd", "ef"]
