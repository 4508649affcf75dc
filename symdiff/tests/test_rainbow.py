import io

import pytest
from rich.color import Color
from rich.console import Console
from rich.style import Style

from symdiff.errors import ParseError
from symdiff.rainbow import RAINBOW, rainbow_parens


def _paren_colors(text):
    return [(span.start, span.style) for span in text.spans]


class TestRainbowParens:
    def test_plain_text_is_unchanged(self):
        s = "( + ( * 3 ( ^ x 2 ) ) 1 )"

        assert rainbow_parens(s).plain == s

    def test_pairs_share_the_color_of_their_depth(self):
        text = rainbow_parens("( a ( b ) )")

        outer = Style(color=Color.from_ansi(RAINBOW[1]))
        inner = Style(color=Color.from_ansi(RAINBOW[2]))
        assert _paren_colors(text) == [(0, outer), (4, inner), (8, inner), (10, outer)]

    def test_palette_wraps_around(self):
        palette = (1, 2)
        text = rainbow_parens("((()))", palette)

        colors = [span.style.color.number for span in text.spans]
        assert colors == [2, 1, 2, 2, 1, 2]

    def test_atoms_are_not_styled(self):
        assert rainbow_parens("42").spans == []

    @pytest.mark.parametrize("s", ["(", ")", "( a ) )", "(( a )"])
    def test_mismatched_parens(self, s):
        with pytest.raises(ParseError):
            rainbow_parens(s)

    def test_empty_palette(self):
        with pytest.raises(ValueError):
            rainbow_parens("( a )", ())

    def test_terminal_gets_256_color_escapes(self):
        console = Console(
            file=io.StringIO(), force_terminal=True, color_system="256", soft_wrap=True
        )

        console.print(rainbow_parens("( ^ x 2 )"))

        output = console.file.getvalue()
        assert "\x1b[38;5;124m(" in output
        assert "^ x 2" in output

    def test_headless_console_prints_plain_text(self, console):
        console.print(rainbow_parens("( ^ x 2 )"))

        assert console.file.getvalue() == "( ^ x 2 )\n"
