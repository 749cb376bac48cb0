"""Syntax-tree provider: tree-sitter Rust grammar loading and parsing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tree_sitter import Language, Parser

from rust_docstyle.errors import SyntaxFailure

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode
    from tree_sitter import Tree

logger = logging.getLogger(__name__)

# Cache for the loaded grammar (populated on first use).
_LANG_CACHE: dict[str, Language] = {}


def _load_rust() -> Language:
    import tree_sitter_rust as tsrust

    return Language(tsrust.language())


def load_language() -> Language:
    """Return the tree-sitter Rust language, loading it on first use.

    Raises
    ------
    SyntaxFailure
        When the ``tree_sitter_rust`` grammar is not installed or is
        incompatible with the installed ``tree_sitter`` runtime.
    """
    cached = _LANG_CACHE.get("rust")
    if cached is not None:
        return cached

    try:
        language = _load_rust()
    except (ImportError, ValueError) as exc:
        msg = f"Failed to parse file: cannot load tree-sitter Rust grammar ({exc})"
        raise SyntaxFailure(msg) from exc

    _LANG_CACHE["rust"] = language
    return language


def clear_cache() -> None:
    """Clear the grammar cache (useful for testing)."""
    _LANG_CACHE.clear()


@dataclass(frozen=True)
class SourceTree:
    """A parsed source file together with the bytes it was parsed from."""

    tree: Tree
    source: bytes

    @property
    def root(self) -> TSNode:
        return self.tree.root_node

    def text(self, node: TSNode) -> str:
        """Return the source text spanned by *node*."""
        return self.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def parse_source(source: str) -> SourceTree:
    """Parse Rust *source* text into a :class:`SourceTree`.

    tree-sitter is error tolerant, so trees containing ``ERROR`` nodes are
    still returned; they are logged because documentation attached to the
    broken region may be missed.
    """
    parser = Parser(load_language())
    source_bytes = source.encode("utf-8")
    tree = parser.parse(source_bytes)
    if tree is None:
        msg = "Failed to parse file: tree-sitter error"
        raise SyntaxFailure(msg)

    if tree.root_node.has_error:
        logger.warning("Syntax errors found; documentation near them may be skipped")

    return SourceTree(tree=tree, source=source_bytes)
