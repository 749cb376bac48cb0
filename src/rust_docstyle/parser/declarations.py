"""Declaration classifier: map tree-sitter nodes to documentable kinds and visibility."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rust_docstyle.model import Declaration, DeclarationKind

if TYPE_CHECKING:
    from collections.abc import Iterator

    from tree_sitter import Node as TSNode

    from rust_docstyle.parser.language import SourceTree

# Node types that map directly to a kind.  Function items and
# ``mod_item`` need context and are handled in ``classify_kind``.
_SIMPLE_KINDS: dict[str, DeclarationKind] = {
    "struct_item": DeclarationKind.STRUCT,
    "enum_item": DeclarationKind.ENUM,
    "trait_item": DeclarationKind.TRAIT,
    "impl_item": DeclarationKind.IMPL,
    "const_item": DeclarationKind.CONST,
    "static_item": DeclarationKind.STATIC,
    "type_item": DeclarationKind.TYPE_ALIAS,
    "macro_definition": DeclarationKind.MACRO,
}

# Containers whose function items are methods.
_METHOD_OWNERS = frozenset({"impl_item", "trait_item"})

# Sibling node types that may sit between a macro and its attributes.
_ATTRIBUTE_RUN_TYPES = frozenset({"attribute_item", "line_comment", "block_comment"})

_PUB_RE = re.compile(r"^pub\b")
_MACRO_EXPORT_RE = re.compile(r"^#\s*\[\s*macro_export\b")


def _method_owner(node: TSNode) -> TSNode | None:
    """Return the impl or trait whose body directly contains *node*."""
    parent = node.parent
    if parent is None or parent.type != "declaration_list":
        return None
    owner = parent.parent
    if owner is None or owner.type not in _METHOD_OWNERS:
        return None
    return owner


def classify_kind(node: TSNode) -> DeclarationKind | None:
    """Return the documentable kind of *node*, or ``None`` if it is not documentable."""
    if node.type == "function_item":
        if _method_owner(node) is not None:
            return DeclarationKind.METHOD
        return DeclarationKind.FUNCTION

    if node.type == "function_signature_item":
        # Required trait methods have no body; signatures in extern blocks are skipped.
        owner = _method_owner(node)
        if owner is not None and owner.type == "trait_item":
            return DeclarationKind.METHOD
        return None

    if node.type == "mod_item":
        # ``mod foo;`` is documented inside foo.rs with inner doc comments.
        if node.child_by_field_name("body") is None:
            return None
        return DeclarationKind.MODULE

    return _SIMPLE_KINDS.get(node.type)


def _visibility_node(node: TSNode) -> TSNode | None:
    field = node.child_by_field_name("visibility")
    if field is not None:
        return field
    for child in node.children:
        if child.type == "visibility_modifier":
            return child
    return None


def _has_macro_export(node: TSNode, tree: SourceTree) -> bool:
    """Check the contiguous attribute/comment run before *node* for ``#[macro_export]``."""
    sibling = node.prev_sibling
    while sibling is not None and sibling.type in _ATTRIBUTE_RUN_TYPES:
        if sibling.type == "attribute_item" and _MACRO_EXPORT_RE.match(tree.text(sibling)):
            return True
        sibling = sibling.prev_sibling
    return False


def is_public(node: TSNode, kind: DeclarationKind, tree: SourceTree) -> bool:
    """Determine whether *node* is part of the public surface.

    Macros have no visibility of their own and are public when exported.
    Impl blocks never carry a visibility marker.  Trait methods share the
    visibility of their trait.
    """
    if kind is DeclarationKind.MACRO:
        return _has_macro_export(node, tree)
    if kind is DeclarationKind.IMPL:
        return False
    if kind is DeclarationKind.METHOD:
        owner = _method_owner(node)
        if owner is not None and owner.type == "trait_item":
            return is_public(owner, DeclarationKind.TRAIT, tree)

    marker = _visibility_node(node)
    if marker is not None:
        return tree.text(marker).startswith("pub")
    return bool(_PUB_RE.match(tree.text(node).lstrip()))


def declaration_name(node: TSNode, tree: SourceTree) -> str | None:
    """Return the declared name, or the implemented type for impl blocks."""
    name_node = node.child_by_field_name("name")
    if name_node is None and node.type == "impl_item":
        name_node = node.child_by_field_name("type")
    if name_node is None:
        return None
    return tree.text(name_node)


def classify(node: TSNode, tree: SourceTree) -> Declaration | None:
    """Build a :class:`Declaration` for *node*, or ``None`` if it is not documentable."""
    kind = classify_kind(node)
    if kind is None:
        return None
    return Declaration(
        kind=kind,
        is_public=is_public(node, kind, tree),
        # tree-sitter uses 0-based rows; we want 1-based lines.
        line=node.start_point.row + 1,
        column=node.start_point.column + 1,
        name=declaration_name(node, tree),
    )


def iter_declarations(tree: SourceTree) -> Iterator[tuple[TSNode, Declaration]]:
    """Yield every documentable declaration in document order.

    The whole tree is walked, so nested modules, impl methods and
    functions declared inside other function bodies are all visited.
    """
    stack: list[TSNode] = [tree.root]
    while stack:
        node = stack.pop()
        declaration = classify(node, tree)
        if declaration is not None:
            yield node, declaration
        stack.extend(reversed(node.named_children))


def has_public_declaration(tree: SourceTree) -> bool:
    return any(decl.is_public for _node, decl in iter_declarations(tree))
