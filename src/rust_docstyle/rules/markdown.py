"""Character-level markdown scanner for bracket references and inline code.

The scanner walks docstring content once, left to right.  A backtick toggles
the inline-code state; outside inline code, ``[`` opens a bracket span whose
display text is collected up to the first ``]``.  A span immediately followed
by ``(...)`` is an inline link, one followed by ``[...]`` is a reference-style
link whose label is consumed and never reported, anything else is a
standalone reference.  Only display text is ever handed to the bracket rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

INLINE = "inline"
REFERENCE = "reference"
STANDALONE = "standalone"


@dataclass(frozen=True)
class BracketSpan:
    """Display text of one bracket group and the position of its opening ``[``."""

    text: str
    line: int
    column: int
    link_style: str  # "inline" | "reference" | "standalone"

    @property
    def has_backticks(self) -> bool:
        return "`" in self.text


class _Cursor:
    """Position-tracking iterator over docstring content."""

    def __init__(
        self,
        content: str,
        line: int,
        column: int,
        origins: Sequence[tuple[int, int]] = (),
    ) -> None:
        self.content = content
        self.index = 0
        self.row = 0
        self.origins = origins
        self.base_line = line
        self.base_column = column
        self.line, self.column = self._row_start()

    def _row_start(self) -> tuple[int, int]:
        if self.row < len(self.origins):
            return self.origins[self.row]
        return self.base_line + self.row, self.base_column

    def peek(self) -> str | None:
        if self.index < len(self.content):
            return self.content[self.index]
        return None

    def advance(self) -> str:
        char = self.content[self.index]
        self.index += 1
        if char == "\n":
            self.row += 1
            self.line, self.column = self._row_start()
        else:
            self.column += 1
        return char

    def consume_until(self, closer: str) -> tuple[str, bool]:
        """Consume characters up to and including *closer*; report whether it was found."""
        collected: list[str] = []
        while self.peek() is not None:
            char = self.advance()
            if char == closer:
                return "".join(collected), True
            collected.append(char)
        return "".join(collected), False


def iter_bracket_spans(
    content: str,
    line: int = 1,
    column: int = 1,
    *,
    origins: Sequence[tuple[int, int]] = (),
) -> Iterator[BracketSpan]:
    """Yield every bracket span outside inline code.

    *origins* gives the source ``(line, column)`` of each content line.  Lines
    it does not cover are placed one per row after *line*, starting at
    *column*.
    """
    cursor = _Cursor(content, line, column, origins)
    in_code = False

    while cursor.peek() is not None:
        start_line, start_column = cursor.line, cursor.column
        char = cursor.advance()

        if char == "`":
            in_code = not in_code
            continue
        if in_code or char != "[":
            continue

        text, closed = cursor.consume_until("]")
        if not closed:
            return

        link_style = STANDALONE
        follower = cursor.peek()
        if follower == "(":
            cursor.advance()
            cursor.consume_until(")")
            link_style = INLINE
        elif follower == "[":
            cursor.advance()
            cursor.consume_until("]")
            link_style = REFERENCE

        yield BracketSpan(text=text, line=start_line, column=start_column, link_style=link_style)


def remove_markdown_links(text: str) -> str:
    """Replace ``[text](url)`` with ``text``; other brackets are kept verbatim."""
    result: list[str] = []
    index = 0
    while index < len(text):
        char = text[index]
        if char != "[":
            result.append(char)
            index += 1
            continue

        close = text.find("]", index + 1)
        if close == -1:
            result.append(text[index:])
            break

        link_text = text[index + 1 : close]
        if close + 1 < len(text) and text[close + 1] == "(":
            end = text.find(")", close + 2)
            result.append(link_text)
            index = len(text) if end == -1 else end + 1
        else:
            result.append(f"[{link_text}]")
            index = close + 1
    return "".join(result)
