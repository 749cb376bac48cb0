"""Shared test fixtures for rust-docstyle."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from rust_docstyle.model import DeclarationKind, Docstring

if TYPE_CHECKING:
    from collections.abc import Callable

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture()
def fixtures_dir() -> Path:
    """Directory holding the sample ``.rs`` files."""
    return FIXTURES_DIR


@pytest.fixture()
def make_docstring() -> Callable[..., Docstring]:
    """Build a Docstring directly, bypassing the parser."""

    def _make(
        content: str,
        *,
        kind: DeclarationKind = DeclarationKind.FUNCTION,
        public: bool = True,
        line: int = 1,
        column: int = 1,
    ) -> Docstring:
        return Docstring(
            content=content,
            raw_content=content,
            line=line,
            column=column,
            is_multiline=len(content.splitlines()) > 1,
            is_public=public,
            target_kind=kind,
        )

    return _make
