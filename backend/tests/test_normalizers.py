"""
Tests for slug derivation and date/time canonicalization.
"""

import pytest

from devevent.core.errors import InvalidDateError, InvalidTimeError, SlugDerivationError, ValidationError
from devevent.validation.normalizers import derive_slug, normalize_date, normalize_time


def test_derive_slug_basic():
    assert derive_slug("Dev Conf 2025!") == "dev-conf-2025"


@pytest.mark.parametrize("title", [
    "  Hello,   World  ",
    "--Python -- Meetup--",
    "Rust & Go: a *love* story",
    "AI/ML\tSummit\n2025",
    "Café Talks",
])
def test_derive_slug_shape(title):
    slug = derive_slug(title)
    assert slug
    assert not slug.startswith("-")
    assert not slug.endswith("-")
    assert "--" not in slug
    assert all(c.isascii() and (c.isalnum() or c == "-") for c in slug)
    assert slug == slug.lower()


def test_derive_slug_collapses_whitespace_and_hyphens():
    assert derive_slug("--Python -- Meetup--") == "python-meetup"
    assert derive_slug("AI/ML\tSummit\n2025") == "aiml-summit-2025"


@pytest.mark.parametrize("title", ["Dev Conf 2025!", "  Hello,   World  ", "already-a-slug"])
def test_derive_slug_is_idempotent(title):
    slug = derive_slug(title)
    assert derive_slug(slug) == slug


@pytest.mark.parametrize("title", ["!!!", "   ", "", "---", "日本語"])
def test_derive_slug_without_alphanumerics_fails(title):
    with pytest.raises(SlugDerivationError):
        derive_slug(title)


def test_slug_error_is_a_validation_error():
    with pytest.raises(ValidationError) as exc_info:
        derive_slug("???")
    assert exc_info.value.violations[0].field == "slug"


@pytest.mark.parametrize("raw,expected", [
    ("9:30 PM", "21:30"),
    ("12:00 AM", "00:00"),
    ("12:15 PM", "12:15"),
    ("1:05am", "01:05"),
    ("11:59 pm", "23:59"),
    ("23:59", "23:59"),
    ("7:05", "07:05"),
    ("00:00", "00:00"),
    ("  18:30  ", "18:30"),
])
def test_normalize_time(raw, expected):
    assert normalize_time(raw) == expected


@pytest.mark.parametrize("raw", [
    "25:00",
    "",
    "   ",
    "12:60",
    "9.30",
    "930",
    "13:00 PM",
    "0:30 AM",
    "9:30 P.M.",
    "9:30  PM",
    "noon",
    "9:30 PMX",
])
def test_normalize_time_rejects(raw):
    with pytest.raises(InvalidTimeError):
        normalize_time(raw)


@pytest.mark.parametrize("raw,expected", [
    ("March 5, 2025", "2025-03-05"),
    ("2025-03-05", "2025-03-05"),
    ("2025-03-05T23:30:00-05:00", "2025-03-05"),
    ("2025-03-05T01:00:00Z", "2025-03-05"),
    ("5 March 2025", "2025-03-05"),
    ("2024-02-29", "2024-02-29"),
])
def test_normalize_date(raw, expected):
    assert normalize_date(raw) == expected


@pytest.mark.parametrize("raw", ["not-a-date", "", "   ", "2025-02-30", "9:30 PM", "Tuesday", "12:00", "March 2025"])
def test_normalize_date_rejects(raw):
    with pytest.raises(InvalidDateError):
        normalize_date(raw)


def test_normalize_date_is_idempotent():
    assert normalize_date(normalize_date("March 5, 2025")) == "2025-03-05"


def test_normalize_date_does_not_depend_on_today():
    # A date named in full never borrows components from the clock
    assert normalize_date("Wednesday, March 5, 2025") == "2025-03-05"
    assert normalize_date("05 Mar 2025 18:00 +0200") == "2025-03-05"
