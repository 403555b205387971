"""Format predicate tests."""

from __future__ import annotations

import pytest

from theme_helper.services.format_validator import is_iso8601_date, is_iso8601_duration, is_url


@pytest.mark.parametrize(
    "value",
    ["https://example.com", "http://example.com/a/b?x=1#frag", "https://e.com/s?q={q}", "mailto:a@b.pl"],
)
def test_is_url_accepts_absolute_urls(value) -> None:
    assert is_url(value) is True


@pytest.mark.parametrize(
    "value",
    ["", "not a url", "/relative/path", "example.com", "http://", 42, None, ["https://e.com"]],
)
def test_is_url_rejects_everything_else(value) -> None:
    assert is_url(value) is False


@pytest.mark.parametrize(
    "value",
    ["2025-01-01", "2025-01-01T10:00", "2025-01-01 10:00:59", "2025-01-01T10:00:00Z", "2025-01-01T10:00:00+01:00"],
)
def test_iso8601_date_accepts_dates_and_datetimes(value) -> None:
    assert is_iso8601_date(value) is True


@pytest.mark.parametrize(
    "value",
    ["", "01-01-2025", "2025-1-1", "2025-01-01T10", "2025-01-01T10:00+0100", "2025-01-01\n", 20250101],
)
def test_iso8601_date_rejects_malformed_values(value) -> None:
    assert is_iso8601_date(value) is False


@pytest.mark.parametrize("value", ["P1D", "PT1H30M", "P1Y2M3DT4H5M6S", "PT45S"])
def test_iso8601_duration_accepts_durations(value) -> None:
    assert is_iso8601_duration(value) is True


@pytest.mark.parametrize("value", ["", "P", "PT", "P1DT", "1H", "PT1.5H", None])
def test_iso8601_duration_requires_a_component(value) -> None:
    assert is_iso8601_duration(value) is False
