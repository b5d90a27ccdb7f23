# topmark:header:start
#
#   project      : SrcTrim
#   file         : test_patcher.py
#   file_relpath : tests/core/test_patcher.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the pure truncation transforms."""

from __future__ import annotations

import pytest

from srctrim.core.errors import (
    MalformedInputError,
    MarkerNotFoundError,
    NothingToDoError,
    TrailerConflictError,
)
from srctrim.core.patcher import (
    Anchor,
    MarkerPolicy,
    Occurrences,
    dedupe_sections,
    ensure_terminal_statement,
    find_marker_offsets,
    find_second_occurrence_line,
    truncate_at_balanced_block,
    truncate_before_line,
)
from srctrim.core.scanner import ScanMode

TERMINAL = "module.exports = app;"


# --- block mode ---


def test_block_cuts_after_outer_brace() -> None:
    result = truncate_at_balanced_block("pre MARK{ x { y } z } post", "MARK", "T")
    assert result.text == "pre MARK{ x { y } z }\n\nT"
    assert result.cut_point == 21
    assert result.anchors == (Anchor(offset=4, line=1),)
    assert result.selected == Anchor(offset=4, line=1)
    assert result.changed


def test_block_is_idempotent() -> None:
    first = truncate_at_balanced_block("pre MARK{ x { y } z } post", "MARK", "T")
    second = truncate_at_balanced_block(first.text, "MARK", "T")
    assert second.text == first.text
    assert not second.changed


def test_block_output_holds_marker_once() -> None:
    buffer = "a();\nMARK(x => {\n  y();\n});\nMARK(z => {\n});\nstray();\n"
    result = truncate_at_balanced_block(buffer, "MARK", "listen();")
    assert result.text.count("MARK") == 2
    again = truncate_at_balanced_block(result.text, "MARK", "listen();")
    assert again.text.count("listen();") == 1


def test_block_last_occurrence_wins_by_default() -> None:
    buffer = "MARK{a}\nMARK{b}\nrest"
    result = truncate_at_balanced_block(buffer, "MARK", "T")
    assert result.text == "MARK{a}\nMARK{b}\n\nT"
    assert result.selected == Anchor(offset=8, line=2)
    assert len(result.anchors) == 2


def test_block_first_policy() -> None:
    buffer = "MARK{a}\nMARK{b}\nrest"
    result = truncate_at_balanced_block(buffer, "MARK", "T", policy=MarkerPolicy.FIRST)
    assert result.text == "MARK{a}\n\nT"
    assert result.selected == Anchor(offset=0, line=1)


def test_block_lexical_scan_skips_string_braces() -> None:
    buffer = 'MARK { a = "}"; } tail'
    naive = truncate_at_balanced_block(buffer, "MARK", "T")
    lexical = truncate_at_balanced_block(buffer, "MARK", "T", scan_mode=ScanMode.LEXICAL)
    assert naive.text == 'MARK { a = "}\n\nT'
    assert lexical.text == 'MARK { a = "}"; }\n\nT'


def test_block_marker_missing() -> None:
    with pytest.raises(MarkerNotFoundError) as exc_info:
        truncate_at_balanced_block("no anchor here", "MARK", "T")
    assert exc_info.value.marker == "MARK"


def test_block_never_balances() -> None:
    with pytest.raises(MalformedInputError) as exc_info:
        truncate_at_balanced_block("x MARK { {", "MARK", "T")
    assert exc_info.value.marker_offset == 2
    assert exc_info.value.depth == 2
    assert exc_info.value.anchors == (Anchor(offset=2, line=1),)


def test_block_trailer_containing_marker_is_rejected() -> None:
    with pytest.raises(TrailerConflictError):
        truncate_at_balanced_block("MARK{}", "MARK", "MARK{}")


def test_block_empty_marker() -> None:
    with pytest.raises(ValueError):
        truncate_at_balanced_block("MARK{}", "", "T")


def test_find_marker_offsets_includes_overlapping_matches() -> None:
    assert find_marker_offsets("aaaa", "aa") == [0, 1, 2]
    assert find_marker_offsets("abc", "x") == []


def test_block_last_policy_anchors_on_rightmost_match() -> None:
    buffer = "x {{{ a }}} tail"
    result = truncate_at_balanced_block(buffer, "{{", "T")
    assert [a.offset for a in result.anchors] == [2, 3]
    assert result.selected == Anchor(offset=buffer.rfind("{{"), line=1)
    assert result.cut_point == 10
    assert result.text == "x {{{ a }}\n\nT"


# --- line mode ---


def test_second_occurrence_indices() -> None:
    lines = ["A", "MARK one", "B", "MARK two", "C"]
    assert find_second_occurrence_line(lines, "MARK") == Occurrences(1, 3)
    assert truncate_before_line(lines, 3, "T") == "A\nMARK one\nB\n\nT"


def test_second_occurrence_stops_at_second_match() -> None:
    assert find_second_occurrence_line(["MARK", "MARK", "MARK"], "MARK") == (0, 1)


def test_second_occurrence_with_alternative_phrases() -> None:
    lines = ["x", "// ГЛАВНАЯ СТРАНИЦА", "y", "// Главная страница"]
    occ = find_second_occurrence_line(lines, ("ГЛАВНАЯ СТРАНИЦА", "Главная страница"))
    assert occ == Occurrences(1, 3)


def test_second_occurrence_missing() -> None:
    assert find_second_occurrence_line(["a", "b"], "MARK") == Occurrences(None, None)
    assert find_second_occurrence_line(["MARK", "b"], "MARK") == Occurrences(0, None)


@pytest.mark.parametrize("phrase", ["", (), ("ok", "")])
def test_second_occurrence_rejects_empty_phrase(phrase: str | tuple[str, ...]) -> None:
    with pytest.raises(ValueError):
        find_second_occurrence_line(["a"], phrase)


def test_truncate_before_line_refuses_without_second_index() -> None:
    with pytest.raises(NothingToDoError):
        truncate_before_line(["a", "MARK"], None, "T")


def test_truncate_before_line_trims_trailing_blank_lines() -> None:
    assert truncate_before_line(["a", "", "  ", "MARK"], 3, "T") == "a\n\nT"


def test_dedupe_sections() -> None:
    buffer = "A\nMARK one\nB\nMARK two\nC"
    result = dedupe_sections(buffer, "MARK", "T")
    assert result.text == "A\nMARK one\nB\n\nT"
    assert result.anchors == (Anchor(offset=2, line=2), Anchor(offset=13, line=4))
    assert result.cut_point == 13
    assert buffer[13:].startswith("MARK two")


def test_dedupe_rerun_is_a_no_op() -> None:
    first = dedupe_sections("A\nMARK one\nB\nMARK two\nC", "MARK", "T")
    with pytest.raises(NothingToDoError):
        dedupe_sections(first.text, "MARK", "T")


def test_dedupe_trailer_mentioning_phrase_is_not_a_duplicate() -> None:
    trailer = "// MARK\nlisten();"
    first = dedupe_sections("A\nMARK one\nB\nMARK two\nC\n", "MARK", trailer)
    assert first.text == "A\nMARK one\nB\n\n// MARK\nlisten();"
    with pytest.raises(NothingToDoError):
        dedupe_sections(first.text + "\n", "MARK", trailer)


def test_dedupe_phrase_only_in_applied_trailer() -> None:
    trailer = "// MAIN\nlisten();"
    with pytest.raises(NothingToDoError, match="Already ends with the trailer"):
        dedupe_sections("a();\n\n" + trailer, "MAIN", trailer)


def test_dedupe_phrase_absent() -> None:
    with pytest.raises(MarkerNotFoundError):
        dedupe_sections("a\nb\n", ("X", "Y"), "T")


def test_dedupe_single_occurrence() -> None:
    with pytest.raises(NothingToDoError, match="line 2") as exc_info:
        dedupe_sections("a\nMARK\nb", "MARK", "T")
    assert exc_info.value.anchors == (Anchor(offset=2, line=2),)


# --- terminal statement ---


def test_terminal_already_last_is_unchanged() -> None:
    buffer = f"a();\n{TERMINAL}\n"
    result = ensure_terminal_statement(buffer, TERMINAL)
    assert result.text == buffer
    assert not result.changed
    assert result.selected == Anchor(offset=5, line=2)


def test_terminal_drops_garbage_after_last_occurrence() -> None:
    buffer = f"a();\n{TERMINAL}\njunk();\n"
    result = ensure_terminal_statement(buffer, TERMINAL)
    assert result.text == f"a();\n{TERMINAL}"
    assert result.cut_point == 5 + len(TERMINAL)
    assert ensure_terminal_statement(result.text, TERMINAL).text == result.text


def test_terminal_appended_when_missing() -> None:
    result = ensure_terminal_statement("a();\n", TERMINAL)
    assert result.text == f"a();\n\n{TERMINAL}"
    assert result.anchors == ()
    assert ensure_terminal_statement("", TERMINAL).text == TERMINAL


def test_terminal_blank_is_rejected() -> None:
    with pytest.raises(ValueError):
        ensure_terminal_statement("a", "  ")
