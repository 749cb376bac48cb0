"""Tests for rust_docstyle.parser.declarations: kinds, visibility, positions."""

from __future__ import annotations

from rust_docstyle.model import Declaration, DeclarationKind
from rust_docstyle.parser.declarations import has_public_declaration, iter_declarations
from rust_docstyle.parser.language import clear_cache, load_language, parse_source


def _declarations(source: str) -> list[Declaration]:
    return [decl for _node, decl in iter_declarations(parse_source(source))]


def _by_name(source: str, name: str) -> Declaration:
    return next(decl for decl in _declarations(source) if decl.name == name)


# ---------------------------------------------------------------------------
# Kinds
# ---------------------------------------------------------------------------


class TestClassifyKind:
    def test_top_level_kinds(self) -> None:
        source = (
            "fn f() {}\n"
            "struct S;\n"
            "enum E { A }\n"
            "trait T {}\n"
            "const C: u8 = 1;\n"
            "static G: u8 = 2;\n"
            "type Alias = u8;\n"
            "macro_rules! m { () => {}; }\n"
            "mod inner {}\n"
        )
        kinds = [decl.kind for decl in _declarations(source)]
        assert kinds == [
            DeclarationKind.FUNCTION,
            DeclarationKind.STRUCT,
            DeclarationKind.ENUM,
            DeclarationKind.TRAIT,
            DeclarationKind.CONST,
            DeclarationKind.STATIC,
            DeclarationKind.TYPE_ALIAS,
            DeclarationKind.MACRO,
            DeclarationKind.MODULE,
        ]

    def test_impl_function_is_method(self) -> None:
        source = "struct S;\nimpl S {\n    fn new() -> Self { S }\n}\n"
        assert _by_name(source, "new").kind is DeclarationKind.METHOD
        assert _by_name(source, "S").kind is DeclarationKind.STRUCT

    def test_trait_default_method_is_method(self) -> None:
        source = "trait T {\n    fn run(&self) {}\n}\n"
        assert _by_name(source, "run").kind is DeclarationKind.METHOD

    def test_required_trait_method_is_method(self) -> None:
        source = "trait T {\n    fn run(&self);\n}\n"
        decls = _declarations(source)
        assert [decl.name for decl in decls] == ["T", "run"]
        assert decls[1].kind is DeclarationKind.METHOD
        assert (decls[1].line, decls[1].column) == (2, 5)

    def test_extern_signature_is_not_documentable(self) -> None:
        source = 'extern "C" {\n    fn abs(input: i32) -> i32;\n}\n'
        assert _declarations(source) == []

    def test_nested_function_is_function(self) -> None:
        source = "fn outer() {\n    fn inner() {}\n}\n"
        assert _by_name(source, "inner").kind is DeclarationKind.FUNCTION

    def test_bodyless_module_is_not_documentable(self) -> None:
        assert _declarations("mod helpers;\n") == []

    def test_impl_name_is_implemented_type(self) -> None:
        source = "struct Point;\ntrait Show {}\nimpl Show for Point {}\n"
        impl = next(d for d in _declarations(source) if d.kind is DeclarationKind.IMPL)
        assert impl.name == "Point"

    def test_items_inside_modules_are_visited(self) -> None:
        source = "mod outer {\n    pub struct Inner;\n    pub fn helper() {}\n}\n"
        names = [decl.name for decl in _declarations(source)]
        assert names == ["outer", "Inner", "helper"]


# ---------------------------------------------------------------------------
# Visibility
# ---------------------------------------------------------------------------


class TestVisibility:
    def test_pub_is_public(self) -> None:
        assert _by_name("pub fn f() {}\n", "f").is_public

    def test_restricted_pub_is_public(self) -> None:
        assert _by_name("pub(crate) fn f() {}\n", "f").is_public
        assert _by_name("pub(super) struct S;\n", "S").is_public

    def test_no_modifier_is_private(self) -> None:
        assert not _by_name("fn f() {}\n", "f").is_public
        assert not _by_name("struct S;\n", "S").is_public

    def test_impl_block_is_never_public(self) -> None:
        source = "pub struct S;\nimpl S {\n    pub fn new() -> Self { S }\n}\n"
        impl = next(d for d in _declarations(source) if d.kind is DeclarationKind.IMPL)
        assert not impl.is_public
        assert _by_name(source, "new").is_public

    def test_trait_methods_share_trait_visibility(self) -> None:
        source = (
            "pub trait T {\n"
            "    fn run(&self);\n"
            "    fn stop(&self) {}\n"
            "}\n"
            "trait U {\n"
            "    fn hidden(&self);\n"
            "}\n"
        )
        assert _by_name(source, "run").is_public
        assert _by_name(source, "stop").is_public
        assert not _by_name(source, "hidden").is_public

    def test_exported_macro_is_public(self) -> None:
        source = "#[macro_export]\nmacro_rules! m { () => {}; }\n"
        assert _by_name(source, "m").is_public

    def test_export_found_across_doc_comments(self) -> None:
        source = "#[macro_export]\n/// Say hello.\nmacro_rules! m { () => {}; }\n"
        assert _by_name(source, "m").is_public

    def test_unexported_macro_is_private(self) -> None:
        source = "/// Say hello.\nmacro_rules! m { () => {}; }\n"
        assert not _by_name(source, "m").is_public

    def test_export_does_not_leak_to_next_macro(self) -> None:
        source = (
            "#[macro_export]\n"
            "macro_rules! first { () => {}; }\n"
            "macro_rules! second { () => {}; }\n"
        )
        assert _by_name(source, "first").is_public
        assert not _by_name(source, "second").is_public


# ---------------------------------------------------------------------------
# Positions and traversal
# ---------------------------------------------------------------------------


class TestPositions:
    def test_one_based_line_and_column(self) -> None:
        decl = _by_name("\n\npub fn f() {}\n", "f")
        assert (decl.line, decl.column) == (3, 1)

    def test_indented_method_column(self) -> None:
        source = "struct S;\nimpl S {\n    fn new() -> Self { S }\n}\n"
        decl = _by_name(source, "new")
        assert (decl.line, decl.column) == (3, 5)

    def test_document_order(self) -> None:
        source = (
            "pub fn a() {}\n"
            "pub struct B;\n"
            "impl B {\n"
            "    pub fn c() {}\n"
            "}\n"
            "pub fn d() {}\n"
        )
        lines = [decl.line for decl in _declarations(source)]
        assert lines == sorted(lines)
        assert [decl.name for decl in _declarations(source)] == ["a", "B", "B", "c", "d"]


def test_has_public_declaration() -> None:
    assert has_public_declaration(parse_source("mod m {\n    pub fn f() {}\n}\n"))
    assert not has_public_declaration(parse_source("fn f() {}\nstruct S;\n"))


class TestLanguageCache:
    def test_grammar_loaded_once(self) -> None:
        assert load_language() is load_language()

    def test_clear_cache_reloads(self) -> None:
        first = load_language()
        clear_cache()
        assert load_language() is not first
