"""
Tests for greedy text wrapping.
"""

import pytest

from chatcomic.text_wrap import wrap


SAMPLES = [
    "the quick brown fox jumps over the lazy dog",
    "hello there how are you doing today my friend",
    "a bb ccc dddd eeeee ffffff ggggggg hhhhhhhh",
    "short",
]


class TestWrap:
    """Test wrap()."""

    def test_fits_on_one_line(self):
        """Test text shorter than the budget is returned whole."""
        assert wrap("hello", 13) == ["hello"]

    def test_breaks_at_last_space(self):
        """Test lines break at the last space within the budget."""
        assert wrap("the quick brown fox", 10) == ["the quick", "brown fox"]

    def test_space_exactly_at_budget(self):
        """Test a space right at the budget is used as the break."""
        assert wrap("abcd efgh", 4) == ["abcd", "efgh"]

    def test_long_word_is_split_hard(self):
        """Test a word longer than the budget is split at the budget."""
        assert wrap("abcdefghij", 4) == ["abcd", "efgh", "ij"]

    def test_long_word_between_short_ones(self):
        """Test hard splitting resumes normal wrapping afterwards."""
        assert wrap("hi abcdefgh yo", 4) == ["hi", "abcd", "efgh", "yo"]

    def test_leading_spaces_skipped(self):
        """Test spaces at the start of a line are dropped."""
        assert wrap("  hi there", 5) == ["hi", "there"]

    def test_width_clamped_to_one(self):
        """Test a budget below 1 behaves like 1."""
        assert wrap("ab", 0) == ["a", "b"]
        assert wrap("ab", -5) == ["a", "b"]

    @pytest.mark.parametrize("text", ["", " ", "     "])
    def test_blank_input(self, text):
        """Test empty and blank text produce no lines."""
        assert wrap(text, 10) == []

    @pytest.mark.parametrize("text", SAMPLES)
    @pytest.mark.parametrize("width", [5, 8, 13, 26])
    def test_lines_within_budget(self, text, width):
        """Test no line exceeds the budget."""
        for line in wrap(text, width):
            assert len(line) <= width
            assert line

    @pytest.mark.parametrize("text", SAMPLES)
    @pytest.mark.parametrize("width", [8, 13, 26])
    def test_rewrap_is_stable(self, text, width):
        """Test wrapping the rejoined lines gives the same lines."""
        lines = wrap(text, width)
        assert wrap(" ".join(lines), width) == lines

    @pytest.mark.parametrize("text", SAMPLES)
    def test_no_characters_lost(self, text):
        """Test rejoining the lines with spaces restores the text."""
        assert " ".join(wrap(text, 13)) == text
