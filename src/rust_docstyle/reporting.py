"""Reporting: severity filtering, text/JSON formatters, and the rule table."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rust_docstyle.model import Severity

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from rust_docstyle.model import Violation
    from rust_docstyle.rules.engine import RuleEngine


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class FileReport:
    """Violations reported for one file after severity filtering."""

    path: Path
    violations: list[Violation] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------


def filter_violations(violations: Iterable[Violation], *, show_warnings: bool) -> list[Violation]:
    """Drop warnings unless *show_warnings* is set."""
    return [v for v in violations if show_warnings or v.severity is Severity.ERROR]


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


def format_text(report: FileReport) -> str:
    """Format a FileReport as one line per violation.

    Example::

        src/lib.rs:3:1 error [D103]: Missing docstring in public function

    Returns an empty string when there are no violations.
    """
    return "\n".join(f"{report.path}{violation}" for violation in report.violations)


def format_json(report: FileReport) -> str:
    """Format a FileReport as a pretty-printed JSON object."""
    output: dict[str, object] = {
        "file": str(report.path),
        "violations": [violation.to_dict() for violation in report.violations],
    }
    return json.dumps(output, indent=2)


FORMATTERS = {
    "text": format_text,
    "json": format_json,
}


def rule_rows(engine: RuleEngine) -> list[tuple[str, str, str]]:
    """Return ``(codes, severity, description)`` rows describing *engine*."""
    return [
        (", ".join(rule.codes), rule.severity.value, rule.description) for rule in engine.rules
    ]
