"""Terminology cleanup for model-written text.

Rewrites conventional-school nouns to studio vocabulary on whole-word matches,
keeping the plural marker and the leading capital of the original word.
Replacements never contain a disallowed stem, so the rewrite is idempotent.
"""

import re

TERMINOLOGY: tuple[tuple[str, str], ...] = (
    ("student", "learner"),
    ("teacher", "guide"),
    ("classroom", "studio"),
)

_PATTERNS = [
    (re.compile(rf"\b({stem})(s?)\b", re.IGNORECASE), replacement)
    for stem, replacement in TERMINOLOGY
]


def _match_case(source: str, replacement: str) -> str:
    if len(source) > 1 and source.isupper():
        return replacement.upper()
    if source[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def normalize_terminology(text: str) -> str:
    for pattern, replacement in _PATTERNS:
        text = pattern.sub(
            lambda m, r=replacement: _match_case(m.group(1), r) + m.group(2),
            text,
        )
    return text


def find_disallowed_terms(text: str) -> list[str]:
    """Return every disallowed word in text, as written, in order of appearance."""
    found: list[tuple[int, str]] = []
    for pattern, _ in _PATTERNS:
        found.extend((m.start(), m.group(0)) for m in pattern.finditer(text))
    return [word for _, word in sorted(found)]
