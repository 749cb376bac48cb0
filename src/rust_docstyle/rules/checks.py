"""Docstring style checks.

Every check is a pure function of one :class:`Docstring` returning a list of
violations.  Checks never call each other and never mutate the docstring;
each one guards its own precondition (documented content, function-only, ...).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rust_docstyle.model import Severity, Violation
from rust_docstyle.rules.markdown import iter_bracket_spans, remove_markdown_links
from rust_docstyle.rules.mood import is_not_imperative, suggested_form

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rust_docstyle.model import Docstring
    from rust_docstyle.rules.markdown import BracketSpan

TERMINAL_PUNCTUATION = (".", "!", "?")

# Types so common in Rust docs that an intra-doc link adds nothing.
COMMON_TYPES: frozenset[str] = frozenset(
    {"Option", "Result", "Vec", "Box", "Rc", "Arc", "Some", "None", "Ok", "Err"}
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _violation(docstring: Docstring, rule: str, message: str, severity: Severity) -> Violation:
    return Violation(
        rule=rule,
        message=message,
        line=docstring.line,
        column=docstring.column,
        severity=severity,
    )


def summary_line(docstring: Docstring) -> str | None:
    """Return the first non-empty line, stripped."""
    for line in docstring.content.split("\n"):
        if line.strip():
            return line.strip()
    return None


def looks_like_signature(line: str) -> bool:
    """Heuristic: does *line* read like a call signature rather than prose?

    Requires parentheses (outside markdown links) plus either a ``->`` arrow
    or a lowercase/underscore first character.  Prose such as "Uses the
    foo() helper" slips through; "Wraps a (lazy) value" does not fire
    because it starts uppercase.
    """
    text = remove_markdown_links(line).lstrip()
    if "(" not in text or ")" not in text:
        return False
    return "->" in text or (bool(text) and (text[0].islower() or text[0] == "_"))


def looks_like_code(text: str) -> bool:
    """Heuristic: a Rust path (``a::b``) or a PascalCase identifier."""
    trimmed = text.strip()
    if "::" in trimmed:
        return True
    if not trimmed or not trimmed[0].isupper():
        return False
    has_lower = any(char.islower() for char in trimmed)
    has_upper_after_first = any(char.isupper() for char in trimmed[1:])
    return has_lower and has_upper_after_first


def _bracket_spans(docstring: Docstring) -> Iterator[BracketSpan]:
    return iter_bracket_spans(
        docstring.content, docstring.line, docstring.column, origins=docstring.origins
    )


def _missing_separator_index(lines: list[str]) -> int | None:
    """Return the index of the first description line glued to the summary.

    With a blank line that separates two paragraphs, the summary paragraph
    must be a single line.  Without one, a second line is only treated as a
    description when the first line already ends a sentence; a summary
    wrapped over two lines that ends its first line with a period is a known
    false positive.
    """
    non_empty = [index for index, line in enumerate(lines) if line.strip()]
    if len(non_empty) < 2:
        return None
    start = non_empty[0]

    separator = next(
        (
            index
            for index in range(start + 1, non_empty[-1])
            if not lines[index].strip()
        ),
        None,
    )
    if separator is not None:
        return start + 1 if separator > start + 1 else None

    if lines[start].strip().endswith(TERMINAL_PUNCTUATION):
        return start + 1
    return None


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def check_missing(docstring: Docstring) -> list[Violation]:
    """D100-D104, R101-R103: public declarations must be documented."""
    if not docstring.is_public or not docstring.is_missing:
        return []
    kind = docstring.target_kind
    return [
        _violation(
            docstring,
            kind.missing_doc_code,
            f"Missing docstring in public {kind.label}",
            Severity.ERROR,
        )
    ]


def check_leading_blank(docstring: Docstring) -> list[Violation]:
    """D201: no blank line before the summary."""
    if docstring.is_missing or not docstring.content.startswith("\n"):
        return []
    return [
        _violation(
            docstring,
            "D201",
            f"No blank lines allowed before {docstring.target_kind.label} docstring",
            Severity.ERROR,
        )
    ]


def check_trailing_blank(docstring: Docstring) -> list[Violation]:
    """D202: no blank line closing the doc block."""
    if docstring.is_missing or not docstring.content.endswith("\n"):
        return []
    return [
        Violation(
            rule="D202",
            message=f"No blank lines allowed after {docstring.target_kind.label} docstring",
            line=docstring.position(docstring.content.count("\n"))[0],
            column=docstring.column,
            severity=Severity.ERROR,
        )
    ]


def check_summary_separation(docstring: Docstring) -> list[Violation]:
    """D205: one blank line between the summary and the description."""
    if docstring.is_missing:
        return []
    index = _missing_separator_index(docstring.content.split("\n"))
    if index is None:
        return []
    return [
        Violation(
            rule="D205",
            message="1 blank line required between summary line and description",
            line=docstring.position(index)[0],
            column=docstring.column,
            severity=Severity.ERROR,
        )
    ]


def check_backslashes(docstring: Docstring) -> list[Violation]:
    """D301: escaped backslashes in multi-line docs."""
    if not docstring.is_multiline or "\\\\" not in docstring.content:
        return []
    return [
        _violation(
            docstring,
            "D301",
            "Consider using raw strings for docstrings with backslashes",
            Severity.WARNING,
        )
    ]


def check_summary_ending(docstring: Docstring, *, strict: bool = False) -> list[Violation]:
    """D400: the summary ends with a period (or ``!``/``?`` unless *strict*)."""
    summary = summary_line(docstring)
    if summary is None:
        return []
    if strict:
        if summary.endswith("."):
            return []
        message = "First line should end with a period"
    else:
        if summary.endswith(TERMINAL_PUNCTUATION):
            return []
        message = "First line should end with a period, question mark, or exclamation point"
    return [_violation(docstring, "D400", message, Severity.ERROR)]


def check_strict_summary_ending(docstring: Docstring) -> list[Violation]:
    return check_summary_ending(docstring, strict=True)


def check_imperative_mood(docstring: Docstring) -> list[Violation]:
    """D401: the summary starts with an imperative verb."""
    summary = summary_line(docstring)
    if summary is None:
        return []
    first_word = summary.split()[0]
    if not is_not_imperative(first_word):
        return []

    message = "First line should be in imperative mood"
    suggestion = suggested_form(first_word)
    if suggestion is not None:
        message += f" (perhaps '{suggestion}', not '{first_word}')"
    return [_violation(docstring, "D401", message, Severity.WARNING)]


def check_signature(docstring: Docstring) -> list[Violation]:
    """D402: function summaries must not restate the signature."""
    if not docstring.target_kind.is_function_like():
        return []
    summary = summary_line(docstring)
    if summary is None or not looks_like_signature(summary):
        return []
    return [
        _violation(
            docstring,
            "D402",
            "First line should not be the function's signature",
            Severity.ERROR,
        )
    ]


def check_capitalization(docstring: Docstring) -> list[Violation]:
    """D403: the first word of the summary is capitalized."""
    summary = summary_line(docstring)
    if summary is None or summary[0].isupper():
        return []
    return [
        _violation(
            docstring,
            "D403",
            "First word of the first line should be properly capitalized",
            Severity.ERROR,
        )
    ]


def check_code_references(docstring: Docstring) -> list[Violation]:
    """D405: bracketed code references need backticks inside the brackets."""
    violations: list[Violation] = []
    for span in _bracket_spans(docstring):
        if span.has_backticks or not looks_like_code(span.text):
            continue
        text = span.text.strip()
        violations.append(
            Violation(
                rule="D405",
                message=(
                    "Markdown link text looks like code but lacks backticks: "
                    f"[{text}] should be [`{text}`]"
                ),
                line=span.line,
                column=span.column,
                severity=Severity.WARNING,
            )
        )
    return violations


def check_common_types(docstring: Docstring) -> list[Violation]:
    """D406: common std types are written as inline code, not bare links."""
    violations: list[Violation] = []
    for span in _bracket_spans(docstring):
        text = span.text.strip()
        if span.has_backticks or text not in COMMON_TYPES:
            continue
        violations.append(
            Violation(
                rule="D406",
                message=f"Common Rust type should use backticks: [{text}] should be [`{text}`]",
                line=span.line,
                column=span.column,
                severity=Severity.WARNING,
            )
        )
    return violations
