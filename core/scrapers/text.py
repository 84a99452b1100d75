import re
from typing import Optional

_WHITESPACE = re.compile(r"\s+")

# Word characters, whitespace and basic punctuation survive description cleanup
_DESCRIPTION_REJECT = re.compile(r"[^\w\s.,!?\-@#$%&*()]")

MAX_DESCRIPTION_LENGTH = 1000

# Phrases eBay injects into listing titles for screen readers and badges
TITLE_BOILERPLATE = (
    "Opens in a new window or tab",
    "New Listing",
)


def normalize(raw: Optional[str]) -> str:
    """Collapse whitespace runs to a single space and trim the result."""
    if not raw:
        return ""
    return _WHITESPACE.sub(" ", raw).strip()


def normalize_description(raw: Optional[str]) -> str:
    """Normalize description text.

    On top of :func:`normalize`, characters outside the allowed set are
    dropped and the result is capped at ``MAX_DESCRIPTION_LENGTH``.
    """
    text = _DESCRIPTION_REJECT.sub("", normalize(raw))
    return text.strip()[:MAX_DESCRIPTION_LENGTH]


def strip_boilerplate(title: Optional[str]) -> str:
    """Remove known boilerplate phrases from a listing title."""
    text = title or ""
    for phrase in TITLE_BOILERPLATE:
        text = text.replace(phrase, " ")
    return normalize(text)
