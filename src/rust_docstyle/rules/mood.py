"""Imperative-mood classification for summary lines.

Verb forms come from the ``pydocstyle`` word lists (a stem -> imperative
forms table plus a blacklist of words that never start an imperative
summary).  Words the lists know nothing about are undecided; for those a
short list of common non-imperative openers is consulted.

The heuristic only looks at the first word.  It misses summaries such as
"Simply returns x." and accepts nouns that happen to be verbs ("Set of
values."); both are accepted limitations.
"""

from __future__ import annotations

import re

from pydocstyle.wordlists import IMPERATIVE_BLACKLIST, IMPERATIVE_VERBS, stem

# Non-imperative openers used when the word lists are undecided.
FALLBACK_NON_IMPERATIVE: frozenset[str] = frozenset(
    {"this", "the", "a", "an", "returns", "gets", "creates", "makes", "builds"}
)

_NON_ALNUM_RE = re.compile(r"[^A-Za-z0-9]")


def _normalize_word(word: str) -> str:
    return _NON_ALNUM_RE.sub("", word).lower()


def is_imperative(word: str) -> bool | None:
    """Classify *word* as imperative (``True``), not imperative (``False``), or undecided."""
    check_word = _normalize_word(word)
    if not check_word:
        return None
    if check_word in IMPERATIVE_BLACKLIST:
        return False
    correct_forms = IMPERATIVE_VERBS.get(stem(check_word))
    if not correct_forms:
        return None
    return check_word in correct_forms


def suggested_form(word: str) -> str | None:
    """Return the imperative form closest to *word*, if the verb is known."""
    check_word = _normalize_word(word)
    correct_forms = IMPERATIVE_VERBS.get(stem(check_word)) if check_word else None
    if not correct_forms:
        return None

    def _common_prefix(form: str) -> int:
        length = 0
        for left, right in zip(check_word, form):
            if left != right:
                break
            length += 1
        return length

    best = max(sorted(correct_forms), key=_common_prefix)
    return best.capitalize()


def is_not_imperative(first_word: str) -> bool:
    """Return ``True`` when *first_word* should be reported as non-imperative."""
    verdict = is_imperative(first_word)
    if verdict is None:
        return _normalize_word(first_word) in FALLBACK_NON_IMPERATIVE
    return not verdict
