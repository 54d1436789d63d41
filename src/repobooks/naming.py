# ABOUTME: Turns folder and repository slugs into human-readable titles.
# ABOUTME: "es6-iteration_protocols" becomes "ES6 Iteration Protocols".

import re

# Words whose capitalization is fixed rather than derived.
TITLE_OVERRIDES: dict[str, str] = {
    "js": "JS",
    "es": "ES",
    "es6": "ES6",
}

_SEPARATOR_RE = re.compile(r"[-_]")


def _normalize(text: str) -> str:
    """Replace slug separators with spaces, lower-case, and strip."""
    return _SEPARATOR_RE.sub(" ", text).lower().strip()


def _titleize_word(word: str) -> str:
    override = TITLE_OVERRIDES.get(word.lower())
    if override is not None:
        return override
    return word[:1].upper() + word[1:].lower()


def titleize(text: str) -> str:
    """Convert a slug into a title, honouring the acronym overrides.

    Args:
        text: Raw folder, file, or repository name.

    Returns:
        Space-joined capitalized words. Empty input yields an empty string.
    """
    return " ".join(_titleize_word(word) for word in _normalize(text).split())
