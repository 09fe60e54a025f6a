"""Text normalization shared by the scorer and the resolvers."""

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_WORD_BREAK = re.compile(r"[\W_]+")


def strip_diacritics(text: str) -> str:
    """Decompose accented characters and drop combining marks ("é" -> "e")."""
    decomposed = unicodedata.normalize("NFKD", text or "")
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def fold_case(text: str) -> str:
    return strip_diacritics(text).lower()


def collapse(text: str) -> str:
    """Fold and keep ASCII letters and digits only.

    "AI Code King" and "AICodeKing" both collapse to "aicodeking".
    """
    return _NON_ALNUM.sub("", fold_case(text))


def tokenize(text: str) -> list[str]:
    """Fold and split on runs of non-alphanumeric characters."""
    return [token for token in _WORD_BREAK.split(fold_case(text)) if token]
