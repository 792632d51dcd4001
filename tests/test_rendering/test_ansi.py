"""Tests for ANSI escape sequences conversion."""

import pytest
from rich.style import Style

from nbrender.rendering.ansi import ansi_to_html, style_attributes


class TestAnsiToHtml:
    """Tests for ansi_to_html function."""

    def test_plain_text_is_escaped(self):
        """Test text without escapes is only HTML-escaped."""
        assert ansi_to_html("a < b & c") == "a &lt; b &amp; c"

    def test_foreground_color(self):
        """Test a colored chunk becomes a span."""
        assert ansi_to_html("\x1b[31mred\x1b[0m plain") == '<span class="ansi-red-fg">red</span> plain'

    def test_combined_codes(self):
        """Test several codes in one sequence."""
        assert ansi_to_html("\x1b[1;32mok\x1b[0m") == '<span class="ansi-green-fg ansi-bold">ok</span>'

    def test_background_and_underline(self):
        assert ansi_to_html("\x1b[41;4mx") == '<span class="ansi-red-bg ansi-underline">x</span>'

    def test_intense_color(self):
        assert ansi_to_html("\x1b[91mx") == '<span class="ansi-red-intense-fg">x</span>'

    def test_reset_without_parameters(self):
        """Test ESC[m resets the style."""
        assert ansi_to_html("\x1b[34ma\x1b[mb") == '<span class="ansi-blue-fg">a</span>b'

    def test_256_colors(self):
        """Test palette colors above 15 become inline styles."""
        assert ansi_to_html("\x1b[38;5;196mx") == '<span style="color: rgb(255, 0, 0)">x</span>'

    def test_256_colors_basic_range(self):
        """Test the first 16 palette colors use the basic classes."""
        assert ansi_to_html("\x1b[38;5;9mx") == '<span class="ansi-red-intense-fg">x</span>'

    def test_rgb_background(self):
        """Test RGB colors are kept, not misread as other codes."""
        assert ansi_to_html("\x1b[48;2;1;4;1my") == '<span style="background-color: rgb(1, 4, 1)">y</span>'

    def test_non_sgr_sequences_are_dropped(self):
        """Test cursor control sequences are removed."""
        assert ansi_to_html("\x1b[2Kdone") == "done"

    def test_newlines_are_kept(self):
        """Test line breaks, including a trailing one, are preserved."""
        assert ansi_to_html("0\n1\n") == "0\n1\n"

    def test_style_spans_lines(self):
        """Test a style set on one line applies to the next."""
        assert ansi_to_html("\x1b[32ma\nb\x1b[0m") == (
            '<span class="ansi-green-fg">a</span>\n<span class="ansi-green-fg">b</span>'
        )

    def test_traceback(self):
        """Test a typical IPython traceback line."""
        text = "\x1b[0;31mValueError\x1b[0m: bad <input>"

        assert ansi_to_html(text) == '<span class="ansi-red-fg">ValueError</span>: bad &lt;input&gt;'


class TestStyleAttributes:
    """Tests for style_attributes function."""

    @pytest.mark.parametrize(
        "style,expected",
        [
            (Style(), {}),
            (Style(color="bright_cyan"), {"class": "ansi-cyan-intense-fg"}),
            (Style(bgcolor="white", bold=True), {"class": "ansi-white-bg ansi-bold"}),
            (Style(color="#102030"), {"style": "color: rgb(16, 32, 48)"}),
            (Style(color="default"), {}),
        ],
    )
    def test_attributes(self, style, expected):
        assert style_attributes(style) == expected
