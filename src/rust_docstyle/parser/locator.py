"""Doc locator: collect the documentation attached to a declaration.

Outer documentation is found by walking backward over the declaration's
preceding siblings.  Inner documentation (``//!``, ``#![doc]``) is found by
scanning forward from the top of the file, or from the top of an inline
module body.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rust_docstyle.model import DeclarationKind, Docstring
from rust_docstyle.parser.declarations import has_public_declaration
from rust_docstyle.parser.normalizer import (
    comment_lines,
    doc_attribute_lines,
    is_inner_attribute,
    is_inner_block_doc,
    is_inner_line_doc,
    is_outer_block_doc,
    is_outer_line_doc,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tree_sitter import Node as TSNode

    from rust_docstyle.model import Declaration
    from rust_docstyle.parser.language import SourceTree
    from rust_docstyle.parser.normalizer import DocLine

_ATTRIBUTE_TYPES = frozenset({"attribute_item", "outer_attribute_item"})


def _start(node: TSNode) -> tuple[int, int]:
    # tree-sitter points are 0-based.
    return node.start_point.row + 1, node.start_point.column + 1


@dataclass
class _DocRun:
    """Doc elements collected for one declaration, in source order."""

    comments: list[tuple[str, list[DocLine]]] = field(default_factory=list)
    attributes: list[list[DocLine]] = field(default_factory=list)
    first_node: TSNode | None = None

    @property
    def empty(self) -> bool:
        return not self.comments and not self.attributes

    def add_comment(self, text: str, node: TSNode, *, backward: bool) -> None:
        entry = (text.rstrip(), comment_lines(text, *_start(node)))
        if backward:
            self.comments.insert(0, entry)
        else:
            self.comments.append(entry)
        self._track(node)

    def add_attribute(self, lines: list[DocLine], node: TSNode, *, backward: bool) -> None:
        if backward:
            self.attributes.insert(0, lines)
        else:
            self.attributes.append(lines)
        self._track(node)

    def _track(self, node: TSNode) -> None:
        if self.first_node is None or node.start_byte < self.first_node.start_byte:
            self.first_node = node


def _preceding_siblings(node: TSNode) -> list[TSNode]:
    """Return the siblings before *node*, nearest first."""
    siblings: list[TSNode] = []
    current = node.prev_sibling
    while current is not None:
        siblings.append(current)
        current = current.prev_sibling
    return siblings


def _collect_outer(node: TSNode, tree: SourceTree) -> _DocRun:
    run = _DocRun()
    siblings = _preceding_siblings(node)
    index = 0
    while index < len(siblings):
        sibling = siblings[index]
        index += 1
        text = tree.text(sibling)

        if sibling.type == "line_comment":
            if not is_outer_line_doc(text):
                break
            run.add_comment(text, sibling, backward=True)
        elif sibling.type == "block_comment":
            if is_outer_block_doc(text):
                run.add_comment(text, sibling, backward=True)
            # Block comments stand alone; never chain past one.
            break
        elif sibling.type in _ATTRIBUTE_TYPES:
            lines = doc_attribute_lines(text, *_start(sibling))
            if lines is not None:
                run.add_attribute(lines, sibling, backward=True)
            # Other attributes (derive, macro_export, cfg) do not end the run.
        elif not text.strip():
            continue
        else:
            break
    return run


def _collect_inner(children: Iterable[TSNode], tree: SourceTree) -> _DocRun:
    run = _DocRun()
    for child in children:
        text = tree.text(child)
        if child.type == "line_comment":
            if is_inner_line_doc(text):
                run.add_comment(text, child, backward=False)
            # Plain comments above the inner docs are allowed.
        elif child.type == "block_comment":
            if is_inner_block_doc(text):
                run.add_comment(text, child, backward=False)
        elif child.type == "inner_attribute_item" or (
            child.type in _ATTRIBUTE_TYPES and is_inner_attribute(text)
        ):
            lines = doc_attribute_lines(text, *_start(child))
            if lines is not None:
                run.add_attribute(lines, child, backward=False)
        elif not text.strip():
            continue
        else:
            break
    return run


def _to_docstring(
    run: _DocRun,
    *,
    kind: DeclarationKind,
    public: bool,
    fallback_line: int,
    fallback_column: int,
    name: str | None,
) -> Docstring:
    if run.empty or run.first_node is None:
        return Docstring(
            content="",
            raw_content="",
            line=fallback_line,
            column=fallback_column,
            is_multiline=False,
            is_public=public,
            target_kind=kind,
            name=name,
        )

    # Doc attributes take precedence over comments when both are present.
    if run.attributes:
        lines = [doc_line for entry in run.attributes for doc_line in entry]
        content = "\n".join(text for text, _line, _column in lines)
        raw_content = content
    else:
        lines = [doc_line for _raw, entry in run.comments for doc_line in entry]
        content = "\n".join(text for text, _line, _column in lines)
        raw_content = "\n".join(raw for raw, _entry in run.comments)

    line, column = _start(run.first_node)
    return Docstring(
        content=content,
        raw_content=raw_content,
        line=line,
        column=column,
        is_multiline=len(content.splitlines()) > 1,
        is_public=public,
        target_kind=kind,
        name=name,
        origins=tuple((doc_line, doc_column) for _text, doc_line, doc_column in lines),
    )


def locate_docstring(node: TSNode, declaration: Declaration, tree: SourceTree) -> Docstring:
    """Return the :class:`Docstring` for a classified declaration node.

    An inline module without outer docs falls back to the inner docs at the
    top of its body.  An undocumented declaration yields a Docstring with
    empty content positioned at the declaration itself.
    """
    run = _collect_outer(node, tree)
    if run.empty and declaration.kind is DeclarationKind.MODULE:
        body = node.child_by_field_name("body")
        if body is not None:
            run = _collect_inner(body.named_children, tree)

    return _to_docstring(
        run,
        kind=declaration.kind,
        public=declaration.is_public,
        fallback_line=declaration.line,
        fallback_column=declaration.column,
        name=declaration.name,
    )


def locate_package_docstring(tree: SourceTree) -> Docstring | None:
    """Return the inner (``//!``) documentation of the file.

    When the file has no inner documentation, a "missing" Docstring is only
    synthesized if the file declares something public, so small private
    snippets are not flagged.  Returns ``None`` otherwise.
    """
    run = _collect_inner(tree.root.named_children, tree)
    if run.empty and not has_public_declaration(tree):
        return None
    return _to_docstring(
        run,
        kind=DeclarationKind.PACKAGE,
        public=True,
        fallback_line=1,
        fallback_column=1,
        name=None,
    )
