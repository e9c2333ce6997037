"""
Currency/locale resolution for free-text recipient locations.

A location is either a postal code ("10001", "SW1A 1AA") or free text
("Austin, Texas, USA"). Resolution order:

1. Postal-code patterns, in table order (first match wins).
2. Exact match of the lowercased text against the country alias table.
3. Whole-word alias match inside the text (longest alias first).
4. Major city / state keywords.
5. Fallback: USD with no country.

Both the generation and refinement prompts take their country from here.
"""

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional


@dataclass(frozen=True)
class CurrencyInfo:
    symbol: str
    code: str
    name: str


@dataclass(frozen=True)
class ResolvedLocale:
    country: Optional[str]
    currency: CurrencyInfo
    matched_by: str  # postal | country | city | default


CURRENCIES: dict[str, CurrencyInfo] = {
    c.code: c
    for c in (
        CurrencyInfo("$", "USD", "US Dollar"),
        CurrencyInfo("C$", "CAD", "Canadian Dollar"),
        CurrencyInfo("$", "MXN", "Mexican Peso"),
        CurrencyInfo("£", "GBP", "British Pound"),
        CurrencyInfo("€", "EUR", "Euro"),
        CurrencyInfo("kr", "SEK", "Swedish Krona"),
        CurrencyInfo("kr", "NOK", "Norwegian Krone"),
        CurrencyInfo("kr", "DKK", "Danish Krone"),
        CurrencyInfo("CHF", "CHF", "Swiss Franc"),
        CurrencyInfo("zł", "PLN", "Polish Złoty"),
        CurrencyInfo("A$", "AUD", "Australian Dollar"),
        CurrencyInfo("NZ$", "NZD", "New Zealand Dollar"),
        CurrencyInfo("¥", "JPY", "Japanese Yen"),
        CurrencyInfo("₩", "KRW", "South Korean Won"),
        CurrencyInfo("¥", "CNY", "Chinese Yuan"),
        CurrencyInfo("₹", "INR", "Indian Rupee"),
        CurrencyInfo("S$", "SGD", "Singapore Dollar"),
        CurrencyInfo("HK$", "HKD", "Hong Kong Dollar"),
        CurrencyInfo("฿", "THB", "Thai Baht"),
        CurrencyInfo("RM", "MYR", "Malaysian Ringgit"),
        CurrencyInfo("₱", "PHP", "Philippine Peso"),
        CurrencyInfo("Rp", "IDR", "Indonesian Rupiah"),
        CurrencyInfo("₪", "ILS", "Israeli Shekel"),
        CurrencyInfo("SR", "SAR", "Saudi Riyal"),
        CurrencyInfo("AED", "AED", "UAE Dirham"),
        CurrencyInfo("R", "ZAR", "South African Rand"),
        CurrencyInfo("E£", "EGP", "Egyptian Pound"),
        CurrencyInfo("R$", "BRL", "Brazilian Real"),
        CurrencyInfo("$", "ARS", "Argentine Peso"),
        CurrencyInfo("$", "CLP", "Chilean Peso"),
        CurrencyInfo("$", "COP", "Colombian Peso"),
        CurrencyInfo("S/", "PEN", "Peruvian Sol"),
    )
}

DEFAULT_CURRENCY = CURRENCIES["USD"]

# alias (lowercase) -> (country, currency code)
COUNTRY_ALIASES: dict[str, tuple[str, str]] = {
    # North America
    "united states": ("United States", "USD"),
    "usa": ("United States", "USD"),
    "us": ("United States", "USD"),
    "canada": ("Canada", "CAD"),
    "mexico": ("Mexico", "MXN"),
    # Europe
    "united kingdom": ("United Kingdom", "GBP"),
    "uk": ("United Kingdom", "GBP"),
    "britain": ("United Kingdom", "GBP"),
    "england": ("United Kingdom", "GBP"),
    "scotland": ("United Kingdom", "GBP"),
    "wales": ("United Kingdom", "GBP"),
    "ireland": ("Ireland", "EUR"),
    "germany": ("Germany", "EUR"),
    "deutschland": ("Germany", "EUR"),
    "france": ("France", "EUR"),
    "spain": ("Spain", "EUR"),
    "italy": ("Italy", "EUR"),
    "netherlands": ("Netherlands", "EUR"),
    "belgium": ("Belgium", "EUR"),
    "austria": ("Austria", "EUR"),
    "portugal": ("Portugal", "EUR"),
    "greece": ("Greece", "EUR"),
    "finland": ("Finland", "EUR"),
    "sweden": ("Sweden", "SEK"),
    "norway": ("Norway", "NOK"),
    "denmark": ("Denmark", "DKK"),
    "switzerland": ("Switzerland", "CHF"),
    "poland": ("Poland", "PLN"),
    # Asia Pacific
    "australia": ("Australia", "AUD"),
    "new zealand": ("New Zealand", "NZD"),
    "japan": ("Japan", "JPY"),
    "south korea": ("South Korea", "KRW"),
    "korea": ("South Korea", "KRW"),
    "china": ("China", "CNY"),
    "india": ("India", "INR"),
    "singapore": ("Singapore", "SGD"),
    "hong kong": ("Hong Kong", "HKD"),
    "thailand": ("Thailand", "THB"),
    "malaysia": ("Malaysia", "MYR"),
    "philippines": ("Philippines", "PHP"),
    "indonesia": ("Indonesia", "IDR"),
    # Middle East & Africa
    "israel": ("Israel", "ILS"),
    "saudi arabia": ("Saudi Arabia", "SAR"),
    "uae": ("United Arab Emirates", "AED"),
    "united arab emirates": ("United Arab Emirates", "AED"),
    "south africa": ("South Africa", "ZAR"),
    "egypt": ("Egypt", "EGP"),
    # South America
    "brazil": ("Brazil", "BRL"),
    "argentina": ("Argentina", "ARS"),
    "chile": ("Chile", "CLP"),
    "colombia": ("Colombia", "COP"),
    "peru": ("Peru", "PEN"),
}

# Ordered: overlapping formats (4/5/6 digit codes) resolve to the first entry.
POSTAL_CODE_PATTERNS: list[tuple[str, re.Pattern, str, str]] = [
    ("us_zip", re.compile(r"^\d{5}(-\d{4})?$"), "United States", "USD"),
    ("uk_postcode", re.compile(r"^[A-Z]{1,2}[0-9][A-Z0-9]?\s?[0-9][A-Z]{2}$", re.I), "United Kingdom", "GBP"),
    ("ca_postal", re.compile(r"^[A-Z][0-9][A-Z]\s?[0-9][A-Z][0-9]$", re.I), "Canada", "CAD"),
    ("au_postcode", re.compile(r"^[0-9]{4}$"), "Australia", "AUD"),
    ("de_plz", re.compile(r"^[0-9]{5}$"), "Germany", "EUR"),
    ("fr_postal", re.compile(r"^[0-9]{5}$"), "France", "EUR"),
    ("in_pin", re.compile(r"^[0-9]{6}$"), "India", "INR"),
    ("jp_postal", re.compile(r"^[0-9]{3}-?[0-9]{4}$"), "Japan", "JPY"),
    ("nl_postal", re.compile(r"^[0-9]{4}\s?[A-Z]{2}$", re.I), "Netherlands", "EUR"),
    ("ch_postal", re.compile(r"^[0-9]{4}$"), "Switzerland", "CHF"),
    ("sg_postal", re.compile(r"^[0-9]{6}$"), "Singapore", "SGD"),
    ("nz_postal", re.compile(r"^[0-9]{4}$"), "New Zealand", "NZD"),
    ("kr_postal", re.compile(r"^[0-9]{5}$"), "South Korea", "KRW"),
    ("br_cep", re.compile(r"^[0-9]{5}-?[0-9]{3}$"), "Brazil", "BRL"),
]

CITY_KEYWORDS: list[tuple[tuple[str, ...], str, str]] = [
    (("new york", "california", "texas", "florida"), "United States", "USD"),
    (("london", "manchester", "birmingham", "glasgow"), "United Kingdom", "GBP"),
    (("toronto", "vancouver", "montreal", "ontario"), "Canada", "CAD"),
    (("sydney", "melbourne", "brisbane", "perth"), "Australia", "AUD"),
    (
        ("mumbai", "delhi", "bangalore", "chennai", "maharashtra", "karnataka"),
        "India",
        "INR",
    ),
]

SUGGESTED_BUDGETS: dict[str, list[int]] = {
    "USD": [25, 50, 100, 200, 500],
    "CAD": [25, 50, 100, 200, 500],
    "AUD": [25, 50, 100, 200, 500],
    "NZD": [25, 50, 100, 200, 500],
    "GBP": [20, 40, 80, 150, 400],
    "EUR": [25, 45, 90, 180, 450],
    "JPY": [3000, 6000, 12000, 25000, 60000],
    "KRW": [30000, 60000, 120000, 250000, 600000],
    "INR": [2000, 4000, 8000, 16000, 40000],
    "CNY": [180, 350, 700, 1400, 3500],
    "BRL": [130, 260, 520, 1000, 2600],
    "MXN": [500, 1000, 2000, 4000, 10000],
    "ZAR": [400, 800, 1600, 3200, 8000],
    "CHF": [25, 50, 100, 200, 500],
    "SGD": [35, 70, 140, 280, 700],
}

# Currencies displayed without minor units
_NO_DECIMAL_CODES = frozenset({"JPY", "KRW", "IDR"})

_ALIASES_LONGEST_FIRST = sorted(COUNTRY_ALIASES, key=len, reverse=True)
_MIN_PARTIAL_LEN = 4
# Bare "America" means the US; checked after every country alias. South/Latin/Central America excluded.
_AMERICA_RE = re.compile(r"(?<!south )(?<!latin )(?<!central )\bamerica\b")


def round_half_up(value: float) -> int:
    """Round .5 away from zero, matching how prices are usually quoted."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _match_postal(location: str) -> Optional[tuple[str, str]]:
    for _key, pattern, country, code in POSTAL_CODE_PATTERNS:
        if pattern.match(location):
            return country, code
    return None


def _match_country(normalized: str) -> Optional[tuple[str, str]]:
    if normalized in COUNTRY_ALIASES:
        return COUNTRY_ALIASES[normalized]
    for alias in _ALIASES_LONGEST_FIRST:
        if re.search(rf"\b{re.escape(alias)}\b", normalized):
            return COUNTRY_ALIASES[alias]
    if _AMERICA_RE.search(normalized):
        return COUNTRY_ALIASES["united states"]
    # Partially typed country names ("switz", "new zeal")
    if len(normalized) >= _MIN_PARTIAL_LEN:
        for alias in _ALIASES_LONGEST_FIRST:
            if normalized in alias:
                return COUNTRY_ALIASES[alias]
    return None


def _match_city(normalized: str) -> Optional[tuple[str, str]]:
    for keywords, country, code in CITY_KEYWORDS:
        if any(k in normalized for k in keywords):
            return country, code
    return None


def resolve_locale(location: str) -> ResolvedLocale:
    trimmed = (location or "").strip()
    postal = _match_postal(trimmed)
    if postal:
        return ResolvedLocale(postal[0], CURRENCIES[postal[1]], "postal")

    normalized = trimmed.lower()
    if normalized:
        country = _match_country(normalized)
        if country:
            return ResolvedLocale(country[0], CURRENCIES[country[1]], "country")
        city = _match_city(normalized)
        if city:
            return ResolvedLocale(city[0], CURRENCIES[city[1]], "city")
    return ResolvedLocale(None, DEFAULT_CURRENCY, "default")


def get_currency_for_location(location: str) -> CurrencyInfo:
    return resolve_locale(location).currency


def format_currency(amount: float, currency: CurrencyInfo) -> str:
    if currency.code in _NO_DECIMAL_CODES:
        return f"{currency.symbol}{round_half_up(amount):,}"
    text = f"{amount:,.3f}".rstrip("0").rstrip(".")
    return f"{currency.symbol}{text}"


def get_suggested_budgets(currency_code: str) -> list[int]:
    return list(SUGGESTED_BUDGETS.get(currency_code, SUGGESTED_BUDGETS["USD"]))


def get_location_display_name(location: str) -> str:
    trimmed = (location or "").strip()
    postal = _match_postal(trimmed)
    if postal:
        return f"{trimmed}, {postal[0]}"
    return trimmed
