"""Parser domain: syntax tree, declaration classifier, doc locator, normalizer."""

from rust_docstyle.parser.declarations import classify, iter_declarations
from rust_docstyle.parser.language import SourceTree, clear_cache, load_language, parse_source
from rust_docstyle.parser.locator import locate_docstring, locate_package_docstring
from rust_docstyle.parser.normalizer import (
    comment_lines,
    doc_attribute_lines,
    doc_attribute_payload,
    normalize_comment,
)

__all__ = [
    "SourceTree",
    "classify",
    "clear_cache",
    "comment_lines",
    "doc_attribute_lines",
    "doc_attribute_payload",
    "iter_declarations",
    "load_language",
    "locate_docstring",
    "locate_package_docstring",
    "normalize_comment",
    "parse_source",
]
