"""Analyzer orchestrator: parse a file, locate docs, run the rule engine."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from rust_docstyle.errors import IoFailure, SyntaxFailure
from rust_docstyle.parser.declarations import iter_declarations
from rust_docstyle.parser.language import parse_source
from rust_docstyle.parser.locator import locate_docstring, locate_package_docstring
from rust_docstyle.rules.engine import DEFAULT_ENGINE

if TYPE_CHECKING:
    from rust_docstyle.model import Docstring, Violation
    from rust_docstyle.rules.engine import RuleEngine

logger = logging.getLogger(__name__)


def extract_docstrings(source: str) -> list[Docstring]:
    """Return one Docstring per documentable declaration, in document order.

    The file-level (package) docstring, when present or required, comes first.

    Raises
    ------
    SyntaxFailure
        When the syntax tree cannot be built.
    """
    tree = parse_source(source)
    docstrings: list[Docstring] = []

    package = locate_package_docstring(tree)
    if package is not None:
        docstrings.append(package)

    for node, declaration in iter_declarations(tree):
        docstrings.append(locate_docstring(node, declaration, tree))

    return docstrings


def read_source(path: Path) -> str:
    """Read a Rust source file as UTF-8.

    Raises
    ------
    IoFailure
        When the file cannot be read or is not valid UTF-8.
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Failed to read file: {exc}"
        raise IoFailure(msg, path) from exc


class RustDocAnalyzer:
    """Combine parsing and checking for whole files."""

    def __init__(self, engine: RuleEngine | None = None) -> None:
        self.engine = engine if engine is not None else DEFAULT_ENGINE

    def analyze_source(self, source: str) -> list[Violation]:
        """Return every violation in *source*, grouped per declaration in document order."""
        violations: list[Violation] = []
        for docstring in extract_docstrings(source):
            violations.extend(self.engine.check(docstring))
        return violations

    def analyze_file(self, path: Path | str) -> list[Violation]:
        """Analyze one file.

        Raises
        ------
        IoFailure
            When the file cannot be read.
        SyntaxFailure
            When the syntax tree cannot be built.
        """
        path = Path(path)
        logger.info("Processing file: %s", path)
        source = read_source(path)
        try:
            return self.analyze_source(source)
        except SyntaxFailure as exc:
            raise SyntaxFailure(str(exc), path) from exc
