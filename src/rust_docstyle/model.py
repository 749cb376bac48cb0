"""Core data model: declaration kinds, docstrings, and violations."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Severity(enum.Enum):
    """Severity level for a violation."""

    ERROR = "error"
    WARNING = "warning"


class DeclarationKind(enum.Enum):
    """Closed set of documentable Rust declaration kinds."""

    FUNCTION = "function"
    METHOD = "method"
    STRUCT = "struct"
    ENUM = "enum"
    TRAIT = "trait"
    IMPL = "impl"
    MODULE = "module"
    PACKAGE = "package"
    CONST = "const"
    STATIC = "static"
    TYPE_ALIAS = "type_alias"
    MACRO = "macro"

    @property
    def label(self) -> str:
        """Human-readable name used in messages."""
        return _KIND_TABLE[self][1]

    @property
    def missing_doc_code(self) -> str:
        """Rule code reported when a public declaration of this kind is undocumented."""
        return _KIND_TABLE[self][0]

    def is_function_like(self) -> bool:
        return self in (DeclarationKind.FUNCTION, DeclarationKind.METHOD)


# kind -> (missing-doc rule code, label)
_KIND_TABLE: dict[DeclarationKind, tuple[str, str]] = {
    DeclarationKind.MODULE: ("D100", "module"),
    DeclarationKind.STRUCT: ("D101", "struct"),
    DeclarationKind.ENUM: ("D101", "enum"),
    DeclarationKind.TRAIT: ("D101", "trait"),
    DeclarationKind.IMPL: ("D101", "impl"),
    DeclarationKind.METHOD: ("D102", "method"),
    DeclarationKind.FUNCTION: ("D103", "function"),
    DeclarationKind.PACKAGE: ("D104", "package"),
    DeclarationKind.TYPE_ALIAS: ("R101", "type alias"),
    DeclarationKind.CONST: ("R102", "const"),
    DeclarationKind.STATIC: ("R102", "static"),
    DeclarationKind.MACRO: ("R103", "macro"),
}


@dataclass(frozen=True)
class Declaration:
    """A documentable declaration found in the syntax tree."""

    kind: DeclarationKind
    is_public: bool
    line: int  # 1-based
    column: int  # 1-based
    name: str | None = None


@dataclass(frozen=True)
class Docstring:
    """Normalized documentation attached to one declaration.

    An empty ``content`` means the declaration is undocumented.  ``line`` and
    ``column`` point at the first doc element, or at the declaration itself
    when no documentation exists.  ``origins`` holds the source position of
    the first character of each content line.
    """

    content: str
    raw_content: str
    line: int
    column: int
    is_multiline: bool
    is_public: bool
    target_kind: DeclarationKind
    name: str | None = None
    origins: tuple[tuple[int, int], ...] = ()

    @property
    def is_missing(self) -> bool:
        return not self.content.strip()

    def position(self, index: int) -> tuple[int, int]:
        """Return the 1-based ``(line, column)`` where content line *index* starts.

        Without recorded origins, lines are assumed to follow ``line`` one per
        row at ``column``.
        """
        if index < len(self.origins):
            return self.origins[index]
        return self.line + index, self.column


@dataclass(frozen=True)
class Violation:
    """A single rule violation."""

    rule: str
    message: str
    line: int
    column: int
    severity: Severity

    def __str__(self) -> str:
        # Filename is prefixed by the caller.
        return (
            f":{self.line}:{self.column} {self.severity.value} [{self.rule}]: {self.message}"
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "rule": self.rule,
            "message": self.message,
            "line": self.line,
            "column": self.column,
            "severity": self.severity.value,
        }
