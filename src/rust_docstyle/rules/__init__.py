"""Rules domain: markdown scanner, mood classifier, checks, rule engine."""

from rust_docstyle.rules.engine import DEFAULT_ENGINE, STRICT_ENGINE, Rule, RuleEngine, get_engine
from rust_docstyle.rules.markdown import BracketSpan, iter_bracket_spans, remove_markdown_links

__all__ = [
    "DEFAULT_ENGINE",
    "STRICT_ENGINE",
    "BracketSpan",
    "Rule",
    "RuleEngine",
    "get_engine",
    "iter_bracket_spans",
    "remove_markdown_links",
]
