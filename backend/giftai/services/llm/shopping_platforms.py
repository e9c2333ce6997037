"""
Per-country shopping platforms and their search URL formats.

URL formats use SPECIFIC_SEARCH_TERMS as the slot the model fills in, plus
str.format placeholders: {gender}, {min}, {max}, {min_cents}, {max_cents}.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Platform:
    name: str
    url_format: str
    note: Optional[str] = None


@dataclass(frozen=True)
class ShoppingRegion:
    label: str
    platforms: tuple[Platform, ...]
    header_focus: str = "PROPER PRICE FILTERS"
    footer: Optional[str] = None
    extra_rule: str = ""


US = ShoppingRegion(
    label="US",
    platforms=(
        Platform("Amazon", "https://amazon.com/s?k=SPECIFIC_SEARCH_TERMS+{gender}+adult&rh=p_36%3A{min_cents}-{max_cents}"),
        Platform("Target", "https://target.com/s?searchTerm=SPECIFIC_SEARCH_TERMS+{gender}+adult&facetedValue=price%3A{min}-{max}"),
        Platform("Walmart", "https://walmart.com/search?q=SPECIFIC_SEARCH_TERMS+{gender}+adult&min_price={min}&max_price={max}"),
        Platform("Best Buy", "https://bestbuy.com/site/searchpage.jsp?st=SPECIFIC_SEARCH_TERMS+adult&qp=currentprice_facet%3DPrice~{min}%20to%20{max}"),
    ),
    extra_rule=' NEVER use "kids", "children", "boys", "girls" for recipients over 16.',
)

UK = ShoppingRegion(
    label="UK",
    platforms=(
        Platform("Amazon UK", "https://amazon.co.uk/s?k=SPECIFIC_SEARCH_TERMS+{gender}+adult&rh=p_36%3A{min_cents}-{max_cents}"),
        Platform("John Lewis", "https://johnlewis.com/search?search-term=SPECIFIC_SEARCH_TERMS+{gender}+adult"),
        Platform("Argos", "https://argos.co.uk/search/SPECIFIC_SEARCH_TERMS+{gender}+adult/?clickOrigin=searchbar"),
        Platform("Currys", "https://currys.co.uk/search?q=SPECIFIC_SEARCH_TERMS+{gender}+adult"),
    ),
    extra_rule=' NEVER use "kids", "children", "boys", "girls" for recipients over 16.',
)

CANADA = ShoppingRegion(
    label="Canadian",
    platforms=(
        Platform("Amazon Canada", "https://amazon.ca/s?k=SPECIFIC_SEARCH_TERMS+{gender}+adult&rh=p_36%3A{min_cents}-{max_cents}"),
        Platform("Best Buy Canada", "https://bestbuy.ca/en-ca/search?search=SPECIFIC_SEARCH_TERMS+{gender}+adult"),
        Platform("Canadian Tire", "https://canadiantire.ca/en/search-results.html?q=SPECIFIC_SEARCH_TERMS+{gender}+adult"),
        Platform("The Bay", "https://thebay.com/search?q=SPECIFIC_SEARCH_TERMS+{gender}+adult"),
    ),
)

AUSTRALIA = ShoppingRegion(
    label="Australian",
    platforms=(
        Platform("Amazon Australia", "https://amazon.com.au/s?k=SPECIFIC_SEARCH_TERMS+{gender}+adult&rh=p_36%3A{min_cents}-{max_cents}"),
        Platform("JB Hi-Fi", "https://jbhifi.com.au/search?query=SPECIFIC_SEARCH_TERMS+{gender}+adult"),
        Platform("Harvey Norman", "https://harveynorman.com.au/search?q=SPECIFIC_SEARCH_TERMS+{gender}+adult"),
        Platform("Kmart Australia", "https://kmart.com.au/search/?searchTerm=SPECIFIC_SEARCH_TERMS+{gender}+adult"),
    ),
)

INDIA = ShoppingRegion(
    label="Indian",
    header_focus="WORKING URL FORMATS",
    platforms=(
        Platform("Amazon India", "https://amazon.in/s?k=SPECIFIC_SEARCH_TERMS+{gender}+adult&rh=p_36%3A{min_cents}-{max_cents}"),
        Platform(
            "Flipkart",
            "https://flipkart.com/search?q=SPECIFIC_SEARCH_TERMS+{gender}+adult"
            "&p%5B%5D=facets.price_range.from%3D{min}&p%5B%5D=facets.price_range.to%3D{max}",
        ),
        Platform(
            "Myntra",
            "https://myntra.com/{gender}?q=SPECIFIC_SEARCH_TERMS",
            note="For fashion/lifestyle items. Users need to manually apply price filters on Myntra.",
        ),
        Platform(
            "Nykaa",
            "https://nykaa.com/search/result/?q=SPECIFIC_SEARCH_TERMS+{gender}",
            note="For beauty/wellness items. Users need to manually apply price filters on Nykaa.",
        ),
    ),
    footer=(
        "IMPORTANT: For Myntra and Nykaa, price filtering must be done manually on the site. "
        "Focus on specific product categories that match the budget range and mention this in the price_range field."
    ),
    extra_rule=" Use specific product terms.",
)

GERMANY = ShoppingRegion(
    label="German",
    platforms=(
        Platform("Amazon Germany", "https://amazon.de/s?k=SPECIFIC_SEARCH_TERMS+{gender}+erwachsene&rh=p_36%3A{min_cents}-{max_cents}"),
        Platform("Otto", "https://otto.de/suche/SPECIFIC_SEARCH_TERMS+{gender}+erwachsene/"),
        Platform("MediaMarkt", "https://mediamarkt.de/de/search.html?query=SPECIFIC_SEARCH_TERMS+{gender}"),
        Platform("Zalando", "https://zalando.de/search?q=SPECIFIC_SEARCH_TERMS+{gender}"),
    ),
)

FRANCE = ShoppingRegion(
    label="French",
    platforms=(
        Platform("Amazon France", "https://amazon.fr/s?k=SPECIFIC_SEARCH_TERMS+{gender}+adulte&rh=p_36%3A{min_cents}-{max_cents}"),
        Platform("Fnac", "https://fnac.com/SearchResult/ResultList.aspx?Search=SPECIFIC_SEARCH_TERMS+{gender}+adulte"),
        Platform("Cdiscount", "https://cdiscount.com/search/10/SPECIFIC_SEARCH_TERMS+{gender}+adulte.html"),
        Platform("La Redoute", "https://laredoute.fr/search?keyword=SPECIFIC_SEARCH_TERMS+{gender}+adulte"),
    ),
)

INTERNATIONAL = ShoppingRegion(
    label="international",
    platforms=(
        Platform("Amazon", "https://amazon.com/s?k=SPECIFIC_SEARCH_TERMS+{gender}+adult&rh=p_36%3A{min_cents}-{max_cents}"),
        Platform("eBay", "https://ebay.com/sch/i.html?_nkw=SPECIFIC_SEARCH_TERMS+{gender}+adult&_udlo={min}&_udhi={max}"),
        Platform("Etsy", "https://etsy.com/search?q=SPECIFIC_SEARCH_TERMS+{gender}+adult&min={min}&max={max}"),
    ),
    extra_rule=' NEVER use "kids", "children", "boys", "girls" for recipients over 16.',
)

REGIONS_BY_COUNTRY: dict[str, ShoppingRegion] = {
    "United States": US,
    "United Kingdom": UK,
    "Canada": CANADA,
    "Australia": AUSTRALIA,
    "India": INDIA,
    "Germany": GERMANY,
    "France": FRANCE,
}


def region_for_country(country: Optional[str]) -> ShoppingRegion:
    return REGIONS_BY_COUNTRY.get(country or "", INTERNATIONAL)
