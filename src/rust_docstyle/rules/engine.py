"""Rule engine: the fixed rule table and docstring evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rust_docstyle.model import DeclarationKind, Severity
from rust_docstyle.rules import checks

if TYPE_CHECKING:
    from collections.abc import Callable

    from rust_docstyle.model import Docstring, Violation


@dataclass(frozen=True)
class Rule:
    """One entry of the rule table."""

    codes: tuple[str, ...]
    description: str
    severity: Severity
    check: Callable[[Docstring], list[Violation]]


_MISSING_CODES: tuple[str, ...] = tuple(
    sorted({kind.missing_doc_code for kind in DeclarationKind})
)


def _build_rules(*, strict_summary_period: bool) -> tuple[Rule, ...]:
    ending = (
        checks.check_strict_summary_ending
        if strict_summary_period
        else checks.check_summary_ending
    )
    return (
        Rule(
            _MISSING_CODES,
            "Public declarations must be documented",
            Severity.ERROR,
            checks.check_missing,
        ),
        Rule(
            ("D201",),
            "No blank lines before the docstring",
            Severity.ERROR,
            checks.check_leading_blank,
        ),
        Rule(
            ("D202",),
            "No blank lines after the docstring",
            Severity.ERROR,
            checks.check_trailing_blank,
        ),
        Rule(
            ("D205",),
            "1 blank line between summary line and description",
            Severity.ERROR,
            checks.check_summary_separation,
        ),
        Rule(
            ("D301",),
            "Avoid escaped backslashes in docstrings",
            Severity.WARNING,
            checks.check_backslashes,
        ),
        Rule(("D400",), "First line ends with terminal punctuation", Severity.ERROR, ending),
        Rule(
            ("D401",),
            "First line is in imperative mood",
            Severity.WARNING,
            checks.check_imperative_mood,
        ),
        Rule(
            ("D402",),
            "First line is not the function's signature",
            Severity.ERROR,
            checks.check_signature,
        ),
        Rule(("D403",), "First word is capitalized", Severity.ERROR, checks.check_capitalization),
        Rule(
            ("D405",),
            "Code references in brackets use backticks",
            Severity.WARNING,
            checks.check_code_references,
        ),
        Rule(
            ("D406",),
            "Common Rust types use backticks, not bare links",
            Severity.WARNING,
            checks.check_common_types,
        ),
    )


@dataclass(frozen=True)
class RuleEngine:
    """Stateless, immutable battery of docstring checks."""

    rules: tuple[Rule, ...]

    def check(self, docstring: Docstring) -> list[Violation]:
        """Run every rule over *docstring* and return violations in rule order."""
        violations: list[Violation] = []
        for rule in self.rules:
            violations.extend(rule.check(docstring))
        return violations


DEFAULT_ENGINE = RuleEngine(_build_rules(strict_summary_period=False))
STRICT_ENGINE = RuleEngine(_build_rules(strict_summary_period=True))


def get_engine(*, strict_summary_period: bool = False) -> RuleEngine:
    """Return the shared engine for the requested D400 variant."""
    return STRICT_ENGINE if strict_summary_period else DEFAULT_ENGINE
