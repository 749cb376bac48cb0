"""Tests for rust_docstyle.reporting."""

from __future__ import annotations

import json
from pathlib import Path

from rust_docstyle.model import Severity, Violation
from rust_docstyle.reporting import (
    FORMATTERS,
    FileReport,
    filter_violations,
    format_json,
    format_text,
    rule_rows,
)
from rust_docstyle.rules.engine import DEFAULT_ENGINE

_ERROR = Violation("D103", "Missing docstring in public function", 3, 1, Severity.ERROR)
_WARNING = Violation("D401", "First line should be in imperative mood", 7, 5, Severity.WARNING)


class TestViolation:
    def test_str(self) -> None:
        assert str(_ERROR) == ":3:1 error [D103]: Missing docstring in public function"

    def test_to_dict(self) -> None:
        assert _WARNING.to_dict() == {
            "rule": "D401",
            "message": "First line should be in imperative mood",
            "line": 7,
            "column": 5,
            "severity": "warning",
        }


class TestFilterViolations:
    def test_warnings_hidden_by_default(self) -> None:
        assert filter_violations([_ERROR, _WARNING], show_warnings=False) == [_ERROR]

    def test_warnings_shown_on_request(self) -> None:
        assert filter_violations([_ERROR, _WARNING], show_warnings=True) == [_ERROR, _WARNING]


class TestFormatters:
    def test_text(self) -> None:
        report = FileReport(path=Path("src/lib.rs"), violations=[_ERROR, _WARNING])
        assert format_text(report).splitlines() == [
            "src/lib.rs:3:1 error [D103]: Missing docstring in public function",
            "src/lib.rs:7:5 warning [D401]: First line should be in imperative mood",
        ]

    def test_text_empty(self) -> None:
        assert format_text(FileReport(path=Path("lib.rs"))) == ""

    def test_json(self) -> None:
        report = FileReport(path=Path("lib.rs"), violations=[_ERROR])
        data = json.loads(format_json(report))
        assert data["file"] == "lib.rs"
        assert data["violations"] == [_ERROR.to_dict()]

    def test_json_empty(self) -> None:
        data = json.loads(format_json(FileReport(path=Path("lib.rs"))))
        assert data == {"file": "lib.rs", "violations": []}

    def test_registry(self) -> None:
        assert set(FORMATTERS) == {"text", "json"}


def test_rule_rows() -> None:
    rows = rule_rows(DEFAULT_ENGINE)
    assert len(rows) == len(DEFAULT_ENGINE.rules)
    codes = [row[0] for row in rows]
    assert codes[0] == "D100, D101, D102, D103, D104, R101, R102, R103"
    assert ("D401", "warning", "First line is in imperative mood") in rows
