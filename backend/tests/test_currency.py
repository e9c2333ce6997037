"""Tests for location -> currency resolution and currency formatting."""

import pytest

from giftai.services.locale.currency import (
    CURRENCIES,
    format_currency,
    get_currency_for_location,
    get_location_display_name,
    get_suggested_budgets,
    resolve_locale,
    round_half_up,
)


@pytest.mark.parametrize(
    "location,code,country",
    [
        ("10001", "USD", "United States"),
        ("10001-1234", "USD", "United States"),
        ("SW1A 1AA", "GBP", "United Kingdom"),
        ("sw1a 1aa", "GBP", "United Kingdom"),
        ("  M5V 3A8  ", "CAD", "Canada"),
        ("400001", "INR", "India"),
        ("2000", "AUD", "Australia"),
        ("1012 AB", "EUR", "Netherlands"),
        ("100-0001", "JPY", "Japan"),
        ("01310-100", "BRL", "Brazil"),
    ],
)
def test_postal_codes(location, code, country):
    locale = resolve_locale(location)
    assert locale.currency.code == code
    assert locale.country == country
    assert locale.matched_by == "postal"


@pytest.mark.parametrize(
    "location,code,country",
    [
        ("Germany", "EUR", "Germany"),
        ("Paris, France", "EUR", "France"),
        ("Tokyo, JAPAN", "JPY", "Japan"),
        ("new zealand", "NZD", "New Zealand"),
        ("Seoul, South Korea", "KRW", "South Korea"),
        ("Austin, Texas, USA", "USD", "United States"),
        ("switz", "CHF", "Switzerland"),
    ],
)
def test_country_names(location, code, country):
    locale = resolve_locale(location)
    assert locale.currency.code == code
    assert locale.country == country
    assert locale.matched_by == "country"


def test_country_alias_needs_whole_word():
    # "australia" and "russia" both contain "us"
    assert resolve_locale("Sydney, Australia").currency.code == "AUD"
    moscow = resolve_locale("Moscow, Russia")
    assert moscow.currency.code == "USD"
    assert moscow.country is None


@pytest.mark.parametrize(
    "location,code",
    [("Austin, Texas", "USD"), ("London", "GBP"), ("Toronto", "CAD"), ("Melbourne", "AUD"), ("Mumbai", "INR")],
)
def test_city_keywords(location, code):
    locale = resolve_locale(location)
    assert locale.currency.code == code
    assert locale.matched_by == "city"


@pytest.mark.parametrize("location", ["", "   ", "Atlantis", "xyz"])
def test_unresolvable_locations_default_to_usd(location):
    locale = resolve_locale(location)
    assert locale.currency == CURRENCIES["USD"]
    assert locale.country is None
    assert locale.matched_by == "default"


def test_resolution_ignores_case_and_whitespace():
    assert resolve_locale("  GERMANY ") == resolve_locale("germany")
    assert get_currency_for_location("  m5v3a8 ").code == "CAD"


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.4) == 2


def test_format_currency_without_minor_units():
    assert format_currency(1000, CURRENCIES["JPY"]) == "¥1,000"
    assert format_currency(1500.5, CURRENCIES["KRW"]) == "₩1,501"


def test_format_currency_trims_trailing_zeros():
    usd = CURRENCIES["USD"]
    assert format_currency(50, usd) == "$50"
    assert format_currency(19.5, usd) == "$19.5"
    assert format_currency(1234567.891, usd) == "$1,234,567.891"
    assert format_currency(40, CURRENCIES["GBP"]) == "£40"


def test_suggested_budgets():
    assert get_suggested_budgets("JPY") == [3000, 6000, 12000, 25000, 60000]
    assert get_suggested_budgets("XYZ") == get_suggested_budgets("USD")


def test_suggested_budgets_returns_a_copy():
    budgets = get_suggested_budgets("USD")
    budgets.append(1)
    assert get_suggested_budgets("USD") == [25, 50, 100, 200, 500]


def test_location_display_name():
    assert get_location_display_name("10001") == "10001, United States"
    assert get_location_display_name(" London ") == "London"


@pytest.mark.parametrize("location", ["Chicago, America", "america", "United States of America"])
def test_america_means_united_states(location):
    locale = resolve_locale(location)
    assert locale.country == "United States"
    assert locale.currency.code == "USD"


def test_continent_names_are_not_the_us():
    assert resolve_locale("Lima, Peru, South America").country == "Peru"
    assert resolve_locale("Latin America").country is None
