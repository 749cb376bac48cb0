"""rust-docstyle: PEP 257 inspired documentation linter for Rust sources."""

__version__ = "0.3.0"
