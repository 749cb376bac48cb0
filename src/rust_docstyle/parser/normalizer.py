"""Doc normalizer: strip comment and attribute syntax from raw documentation.

Blank lines at the start, middle, and end of a doc block are kept; the
blank-line rules depend on seeing them.
"""

from __future__ import annotations

import re

OUTER_LINE = "///"
INNER_LINE = "//!"
OUTER_BLOCK = "/**"
INNER_BLOCK = "/*!"
BLOCK_END = "*/"

# #[doc = ...] and #![doc = ...]; group 1 is the literal including quotes.
_DOC_ATTR_RE = re.compile(r"^#\s*!?\s*\[\s*doc\s*=\s*(.*?)\s*\]\s*$", re.DOTALL)
_RAW_STRING_RE = re.compile(r'^r(#*)"(.*)"\1$', re.DOTALL)


def is_outer_line_doc(text: str) -> bool:
    """``/// text`` but not ``//// text``."""
    stripped = text.lstrip()
    return stripped.startswith(OUTER_LINE) and not stripped.startswith("////")


def is_inner_line_doc(text: str) -> bool:
    return text.lstrip().startswith(INNER_LINE)


def is_outer_block_doc(text: str) -> bool:
    """``/** text */`` but not ``/*** text */`` or the empty ``/**/``."""
    stripped = text.lstrip()
    return (
        stripped.startswith(OUTER_BLOCK)
        and not stripped.startswith("/***")
        and not stripped.startswith("/**/")
    )


def is_inner_block_doc(text: str) -> bool:
    return text.lstrip().startswith(INNER_BLOCK)


# (content, line, column): a normalized line and the 1-based source position
# of its first character.
DocLine = tuple[str, int, int]


def _line_doc(text: str, marker: str, line: int, column: int) -> list[DocLine]:
    rest = text[len(marker) :]
    content = rest.lstrip()
    return [(content, line, column + len(marker) + len(rest) - len(content))]


def _block_doc(text: str, opener: str, line: int, column: int) -> list[DocLine]:
    body = text[len(opener) :]
    if body.endswith(BLOCK_END):
        body = body[: -len(BLOCK_END)]

    rows = list(enumerate(body.split("\n")))
    # The opener and closer lines are syntax, not content.
    if len(rows) > 1 and not rows[0][1].strip():
        rows = rows[1:]
    if len(rows) > 1 and not rows[-1][1].strip():
        rows = rows[:-1]

    lines: list[DocLine] = []
    for offset, raw in rows:
        content = raw.lstrip().lstrip("*").lstrip()
        indent = len(raw) - len(content)
        start = column + len(opener) + indent if offset == 0 else 1 + indent
        lines.append((content.rstrip(), line + offset, start))
    return lines


def comment_lines(text: str, line: int = 1, column: int = 1) -> list[DocLine]:
    """Normalize one doc comment that starts at *line*/*column*.

    Returns an empty list for anything that is not a doc comment.
    """
    stripped = text.strip()
    column += len(text) - len(text.lstrip())
    for marker in (OUTER_LINE, INNER_LINE):
        if stripped.startswith(marker):
            return _line_doc(stripped, marker, line, column)
    for opener in (OUTER_BLOCK, INNER_BLOCK):
        if stripped.startswith(opener):
            return _block_doc(stripped, opener, line, column)
    return []


def normalize_comment(text: str) -> list[str]:
    """Normalize one doc comment node into content lines."""
    return [content for content, _line, _column in comment_lines(text)]


def _string_literal_body(literal: str) -> tuple[str, int] | None:
    """Return the body of a Rust string literal, not unescaped, and its offset."""
    raw = _RAW_STRING_RE.match(literal)
    if raw is not None:
        return raw.group(2), raw.start(2)

    if not literal.startswith('"'):
        return None
    escaped = False
    for index, char in enumerate(literal[1:], start=1):
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == '"':
            return literal[1:index], 1
    return None


def _payload_span(text: str) -> tuple[str, int] | None:
    match = _DOC_ATTR_RE.match(text)
    if match is None:
        return None
    body = _string_literal_body(match.group(1))
    if body is None:
        return None
    payload, offset = body
    return payload, match.start(1) + offset


def doc_attribute_lines(text: str, line: int = 1, column: int = 1) -> list[DocLine] | None:
    """Split the payload of a doc attribute starting at *line*/*column* into lines.

    Returns ``None`` when *text* is not a ``#[doc = "..."]`` attribute.
    """
    span = _payload_span(text.strip())
    if span is None:
        return None
    payload, start = span
    start += len(text) - len(text.lstrip())

    prefix = text[:start]
    line += prefix.count("\n")
    if "\n" in prefix:
        column = start - prefix.rfind("\n")
    else:
        column += start

    return [
        (content, line + offset, column if offset == 0 else 1)
        for offset, content in enumerate(payload.split("\n"))
    ]


def doc_attribute_payload(text: str) -> str | None:
    """Extract the string payload of a ``#[doc = "..."]`` attribute.

    Returns ``None`` for other attributes, including ``#[doc(hidden)]`` and
    ``#[doc = include_str!(...)]`` where no literal is present.
    """
    span = _payload_span(text.strip())
    return None if span is None else span[0]


def is_inner_attribute(text: str) -> bool:
    return bool(re.match(r"^#\s*!", text.lstrip()))
