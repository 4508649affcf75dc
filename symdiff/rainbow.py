from typing import Sequence

from rich.color import Color
from rich.style import Style
from rich.text import Text

from .errors import ParseError

# 256 colour palette indices, cycled by nesting depth
RAINBOW = (19, 124, 202, 11, 34, 51)


def rainbow_parens(s: str, palette: Sequence[int] = RAINBOW) -> Text:
    """Colour each matching pair of parens by its nesting depth.

    The plain text is unchanged; the console decides whether the styles
    become escape codes, so piped output stays plain.
    """
    if not palette:
        raise ValueError("need to specify colors")
    styles = [Style(color=Color.from_ansi(code)) for code in palette]

    out = Text()
    depth = 0
    for ch in s:
        if ch == "(":
            depth += 1
            out.append(ch, style=styles[depth % len(styles)])
        elif ch == ")":
            if depth == 0:
                raise ParseError(f"mismatched parentheses in {s!r}")
            out.append(ch, style=styles[depth % len(styles)])
            depth -= 1
        else:
            out.append(ch)
    if depth > 0:
        raise ParseError(f"mismatched parentheses in {s!r}")
    return out
