"""Tests for text measurement and wrapping."""

import pytest

from orderdocs.text_metrics import FontSpec, TextMeasurer, truncate_text


WORDS = [
    "cleaner", "gallon", "hazardous", "pack", "of", "four", "industrial", "floor",
    "stripper", "x", "degreaser", "concentrate", "bleach", "germicidal", "liners",
]


class TestFontSpec:
    """Test suite for FontSpec."""

    def test_font_name_resolves_aliases(self):
        assert FontSpec("Arial", "B", 10).font_name == "Helvetica-Bold"
        assert FontSpec("Times", "BI", 10).font_name == "Times-BoldItalic"
        assert FontSpec("Helvetica").font_name == "Helvetica"

    def test_with_style_normalizes(self):
        font = FontSpec("Helvetica", "", 9).with_style("ib")
        assert font.style == "BI"
        assert font.size == 9


class TestTextMeasurer:
    """Test suite for TextMeasurer."""

    def setup_method(self):
        self.measurer = TextMeasurer()
        self.font = FontSpec("Helvetica", "", 10)

    def test_measure_is_font_size_in_mm(self):
        assert self.measurer.measure("anything", self.font) == pytest.approx(10 * 25.4 / 72)

    def test_width_of_empty_text_is_zero(self):
        assert self.measurer.width("", self.font) == 0.0

    def test_width_depends_on_glyphs_and_style(self):
        assert self.measurer.width("WWWW", self.font) > self.measurer.width("iiii", self.font)
        bold = self.font.with_style("B")
        assert self.measurer.width("Total", bold) > self.measurer.width("Total", self.font)

    @pytest.mark.parametrize("text", ["", "   ", "\n\n", " \t "])
    def test_wrap_blank_text_returns_no_lines(self, text):
        assert self.measurer.wrap(text, self.font, 50) == []

    def test_wrap_fits_on_one_line(self):
        assert self.measurer.wrap("Industrial Cleaner", self.font, 100) == ["Industrial Cleaner"]

    def test_wrap_breaks_at_word_boundaries(self):
        lines = self.measurer.wrap("one two three four five six seven eight", self.font, 20)
        assert len(lines) > 1
        for line in lines:
            assert self.measurer.width(line, self.font) <= 20

    def test_overlong_token_gets_its_own_line(self):
        token = "SUPERCALIFRAGILISTICEXPIALIDOCIOUS"
        lines = self.measurer.wrap(f"a {token} b", self.font, 15)
        assert lines == ["a", token, "b"]

    def test_explicit_newlines_start_new_lines(self):
        lines = self.measurer.wrap("first\nsecond\n\nfourth", self.font, 200)
        assert lines == ["first", "second", "", "fourth"]

    def test_wrap_property_random_text(self, rng):
        """Lines fit the width (unless one token) and rejoin to the original words."""
        for _ in range(50):
            n_words = int(rng.integers(1, 30))
            words = [WORDS[int(i)] for i in rng.integers(0, len(WORDS), size=n_words)]
            text = " ".join(words)
            max_width = float(rng.uniform(5, 80))

            lines = self.measurer.wrap(text, self.font, max_width)

            assert " ".join(lines).split() == words
            for line in lines:
                if " " in line:
                    assert self.measurer.width(line, self.font) <= max_width

    def test_wrapped_height(self):
        text = "one two three four five six seven eight"
        lines = self.measurer.wrap(text, self.font, 20)
        assert self.measurer.wrapped_height(text, self.font, 20) == pytest.approx(
            len(lines) * self.measurer.measure(text, self.font)
        )
        assert self.measurer.wrapped_height(text, self.font, 20, line_height=5) == pytest.approx(len(lines) * 5)


class TestTruncateText:
    """Test suite for truncate_text."""

    def test_short_text_unchanged(self):
        font = FontSpec()
        assert truncate_text("Total", 100, font) == "Total"

    def test_long_text_gets_ellipsis(self):
        font = FontSpec()
        measurer = TextMeasurer()
        result = truncate_text("A very long footer line that will not fit", 30, font, measurer)
        assert result.endswith("...")
        assert measurer.width(result, font) <= 30
