"""Tests for text normalization."""

from miniflux_catalog.core.text import collapse, fold_case, strip_diacritics, tokenize


def test_strip_diacritics() -> None:
    """Test accented characters lose their marks."""
    assert strip_diacritics("Café") == "Cafe"
    assert strip_diacritics("Příliš žluťoučký kůň") == "Prilis zlutoucky kun"
    assert strip_diacritics("") == ""


def test_fold_case() -> None:
    """Test folding removes diacritics and case."""
    assert fold_case("CAFÉ Crème") == "cafe creme"


def test_collapse_ignores_formatting() -> None:
    """Test spaces, punctuation and symbols are removed."""
    assert collapse("AI Code King") == collapse("AICodeKing") == "aicodeking"
    assert collapse("Café") == collapse("Cafe")
    assert collapse("Hacker-News (Top 10)!") == "hackernewstop10"
    assert collapse("--- !!! ---") == ""


def test_tokenize() -> None:
    """Test splitting on non-alphanumeric runs."""
    assert tokenize("Tech News: Daily") == ["tech", "news", "daily"]
    assert tokenize("  rust_lang / blog  ") == ["rust", "lang", "blog"]
    assert tokenize("...") == []


def test_tokenize_keeps_non_latin_words() -> None:
    """Test letters outside ASCII still form tokens."""
    assert tokenize("Новости науки") == ["новости", "науки"]
