"""Tests for time normalization."""

import pytest

from miniflux_catalog.core.temporal import normalize_time


def test_equivalent_representations() -> None:
    """Test ISO string, unix seconds and unix milliseconds agree."""
    expected = 1704067200
    assert normalize_time("2024-01-01T00:00:00Z") == expected
    assert normalize_time(1704067200) == expected
    assert normalize_time(1704067200000) == expected


def test_digit_strings_behave_like_numbers() -> None:
    """Test digit-only strings are read as unix time."""
    assert normalize_time("1704067200") == 1704067200
    assert normalize_time("1704067200999") == 1704067200


def test_floats_are_floored() -> None:
    """Test fractional seconds are floored."""
    assert normalize_time(1704067200.9) == 1704067200
    assert normalize_time(1704067200999.0) == 1704067200


def test_bare_date_is_utc_midnight() -> None:
    """Test naive dates are read as UTC."""
    assert normalize_time("2024-01-01") == 1704067200


def test_offset_is_respected() -> None:
    """Test explicit offsets shift the result."""
    assert normalize_time("2024-01-01T02:00:00+02:00") == 1704067200


@pytest.mark.parametrize("value", [None, "", "   ", "nonsense", float("nan"), float("inf"), True])
def test_unusable_values_are_omitted(value) -> None:
    """Test empty or unparseable input gives no value instead of an error."""
    assert normalize_time(value) is None
