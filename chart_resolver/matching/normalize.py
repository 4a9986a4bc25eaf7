"""
Text normalization shared by query building and scoring.

Search queries and match scoring must compare text in the same space,
so both go through the functions below.

    normalize("Beyoncé feat. Jay-Z")   -> "beyonce jayz"
    tokenize("The Rhythm of the Night") -> ["rhythm", "of", "night"]
"""

import re
import unicodedata


# Matched case-insensitively against whole whitespace-separated tokens
FILL_WORDS = frozenset({
    "&", "und", "and", "feat", "feat.", "featuring", "the", "der", "die", "das",
})

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")
_WORD_SPLIT_RE = re.compile(r"\W+")


def strip_non_ascii(text: str) -> str:
    """
    Decompose text (NFKD) and drop every non-ASCII code point.

    Diacritics are split from their base letter by the decomposition, so
    "Beyoncé" becomes "Beyonce" rather than "Beyonc".
    """
    decomposed = unicodedata.normalize("NFKD", text)
    return decomposed.encode("ascii", "ignore").decode("ascii")


def _is_fill_word(token: str) -> bool:
    return token.lower() in FILL_WORDS


def normalize(text: str | None) -> str | None:
    """
    Canonicalize text into lowercase ASCII alphanumeric tokens.

    Steps:
        1. NFKD decomposition, non-ASCII code points removed
        2. Lowercase, split on whitespace
        3. Fill words dropped
        4. Non-alphanumeric characters stripped from each token
        5. Empty tokens (and tokens that became fill words) dropped
        6. Tokens joined by single spaces

    Args:
        text: Any text, or None.

    Returns:
        The normalized text, or None if text is None.
    """
    if text is None:
        return None

    tokens = strip_non_ascii(text).lower().split()
    cleaned = []
    for token in tokens:
        if _is_fill_word(token):
            continue
        token = _NON_ALNUM_RE.sub("", token)
        # "the," only becomes a fill word after stripping
        if token and not _is_fill_word(token):
            cleaned.append(token)
    return " ".join(cleaned)


def tokenize(text: str | None) -> list[str]:
    """
    Split text on word boundaries into distinct normalized tokens.

    Order of first appearance is preserved; duplicates are removed.

    Example:
        tokenize("Live and Let Live") -> ["live", "let"]
    """
    if not text:
        return []

    tokens: list[str] = []
    seen: set[str] = set()
    for piece in _WORD_SPLIT_RE.split(text):
        normalized = normalize(piece)
        if not normalized:
            continue
        for token in normalized.split():
            if token not in seen:
                seen.add(token)
                tokens.append(token)
    return tokens


def contains_phrase(haystack: str, phrase: str) -> bool:
    """
    Word-boundary containment check on normalized text.

    Both arguments must already be normalized (single-space separated).
    "live" is contained in "believe live" but not in "believe".
    """
    if not phrase:
        return False
    return f" {phrase} " in f" {haystack} "
