"""File collection: find Rust source files under a directory."""

from __future__ import annotations

import fnmatch
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import pathspec

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

logger = logging.getLogger(__name__)

RUST_SUFFIX = ".rs"

# Ignore files honoured in every directory; each applies to its own subtree.
_IGNORE_FILES = (".gitignore", ".ignore")


@dataclass(frozen=True)
class _IgnoreScope:
    base: Path
    spec: pathspec.PathSpec

    def matches(self, path: Path, *, is_dir: bool) -> bool:
        relative = path.relative_to(self.base).as_posix()
        if is_dir:
            relative += "/"
        return self.spec.match_file(relative)


def _load_ignore_scope(directory: Path) -> _IgnoreScope | None:
    lines: list[str] = []
    for name in _IGNORE_FILES:
        ignore_path = directory / name
        if not ignore_path.is_file():
            continue
        try:
            lines.extend(ignore_path.read_text(encoding="utf-8").splitlines())
        except (OSError, UnicodeDecodeError):
            logger.warning("Cannot read ignore file: %s", ignore_path)
    if not lines:
        return None
    return _IgnoreScope(base=directory, spec=pathspec.GitIgnoreSpec.from_lines(lines))


def _is_rust_file(path: Path) -> bool:
    return path.suffix == RUST_SUFFIX and path.is_file()


def should_skip_target_dir(path: Path) -> bool:
    """Return ``True`` for a Cargo build directory that should not be scanned.

    A directory named ``target`` is skipped when it holds no ``.rs`` files
    directly, or when its parent contains a ``Cargo.lock``.
    """
    if path.name != "target":
        return False
    if (path.parent / "Cargo.lock").exists():
        return True
    try:
        return not any(_is_rust_file(entry) for entry in path.iterdir())
    except OSError:
        return False


def _is_excluded(path: Path, root: Path, patterns: tuple[str, ...]) -> bool:
    if not patterns:
        return False
    relative = path.relative_to(root).as_posix()
    return any(
        fnmatch.fnmatch(relative, pattern) or fnmatch.fnmatch(path.name, pattern)
        for pattern in patterns
    )


def collect_rust_files(directory: Path, *, recursive: bool = False) -> list[Path]:
    """Return the ``.rs`` files directly inside *directory*, sorted.

    With *recursive*, walk the whole tree (see :func:`collect_rust_files_recursive`).
    """
    if recursive:
        return collect_rust_files_recursive(directory)
    return sorted(entry for entry in directory.iterdir() if _is_rust_file(entry))


def collect_rust_files_recursive(
    directory: Path,
    *,
    exclude: Iterable[str] = (),
) -> list[Path]:
    """Walk *directory* and return every ``.rs`` file, sorted.

    Hidden entries, paths matched by ``.gitignore``/``.ignore`` files,
    paths matched by *exclude* globs (relative to *directory*, or by
    name), and Cargo ``target`` directories (see
    :func:`should_skip_target_dir`) are skipped.  Symlinked directories are
    not followed.
    """
    files: list[Path] = []
    patterns = tuple(exclude)

    def _visit(current: Path, scopes: tuple[_IgnoreScope, ...]) -> None:
        scope = _load_ignore_scope(current)
        if scope is not None:
            scopes = (*scopes, scope)

        for entry in sorted(current.iterdir()):
            if entry.name.startswith("."):
                continue
            is_dir = entry.is_dir()
            if any(s.matches(entry, is_dir=is_dir) for s in scopes):
                logger.debug("Ignored by ignore file: %s", entry)
                continue
            if _is_excluded(entry, directory, patterns):
                logger.debug("Excluded by pattern: %s", entry)
                continue
            if is_dir:
                if entry.is_symlink():
                    continue
                if should_skip_target_dir(entry):
                    logger.debug("Skipping build directory: %s", entry)
                    continue
                _visit(entry, scopes)
            elif _is_rust_file(entry):
                files.append(entry)

    _visit(directory, ())
    return sorted(files)
