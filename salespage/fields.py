"""Field extractors for sales-page HTML.

Each extractor is a pure function over the raw HTML string. The pages we
see are hand-built landing pages with inconsistent markup, so instead of
building a DOM we scan for a handful of known shapes in a fixed order and
fall back to a default when nothing fits.
"""

from typing import List, Tuple

from salespage.config import (
    BENEFIT_MAX_LENGTH,
    BENEFIT_MIN_LENGTH,
    DEFAULT_BENEFITS,
    DEFAULT_CTA,
    DEFAULT_DESCRIPTION,
    DEFAULT_PRICE,
    DEFAULT_TESTIMONIALS,
    DEFAULT_TITLE,
    DESCRIPTION_MAX_LENGTH,
    MAX_BENEFITS,
    MAX_TESTIMONIALS,
    TESTIMONIAL_MIN_LENGTH,
    TITLE_MAX_LENGTH,
)
from salespage.models import ProductRecord
from salespage.rules import PatternRule, collect_matches, first_match

__all__ = [
    "TITLE_RULES",
    "DESCRIPTION_RULES",
    "PRICE_RULES",
    "BENEFIT_RULES",
    "TESTIMONIAL_RULES",
    "CTA_RULES",
    "extract_title",
    "extract_description",
    "extract_price",
    "extract_benefits",
    "extract_testimonials",
    "extract_cta",
    "extract_fields",
]

# ---------- RULE TABLES (order is precedence) ----------

TITLE_RULES: Tuple[PatternRule, ...] = (
    PatternRule.compile("title_tag", r"<title[^>]*>([^<]+)</title>"),
    PatternRule.compile("h1", r"<h1[^>]*>([^<]+)</h1>"),
    PatternRule.compile("og_title", r'<meta[^>]*property="og:title"[^>]*content="([^"]+)"'),
)

DESCRIPTION_RULES: Tuple[PatternRule, ...] = (
    PatternRule.compile("meta_description", r'<meta[^>]*name="description"[^>]*content="([^"]+)"'),
    PatternRule.compile("og_description", r'<meta[^>]*property="og:description"[^>]*content="([^"]+)"'),
    PatternRule.compile(
        "description_paragraph",
        r'<p[^>]*class="[^"]*description[^"]*"[^>]*>([^<]+)</p>',
    ),
)

# Price rules return the whole token so the currency symbol is kept as found.
PRICE_RULES: Tuple[PatternRule, ...] = (
    PatternRule.compile("brl", r"R\$\s*(?:\d{1,3}(?:\.\d{3})+|\d+)(?:,\d{2})?", group=0),
    PatternRule.compile("dollar", r"\$\s*(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d{2})?", group=0),
    PatternRule.compile("reais_suffix", r"(?:\d{1,3}(?:\.\d{3})+|\d+)(?:,\d{2})?\s*(?:reais|real)\b", group=0),
    PatternRule.compile("por_apenas", r"por\s+apenas\s+R?\$?\s*\d+(?:,\d{2})?", group=0),
)

BENEFIT_RULES: Tuple[PatternRule, ...] = (
    PatternRule.compile("list_item", r"<li[^>]*>([^<]+)</li>"),
    PatternRule.compile("benefit_div", r'<div[^>]*class="[^"]*benefit[^"]*"[^>]*>([^<]+)</div>'),
    PatternRule.compile("check_span", r'<span[^>]*class="[^"]*check[^"]*"[^>]*>[^<]*</span>\s*([^<]+)'),
)

# Structural markup first; the quote-with-attribution heuristic is the last resort.
TESTIMONIAL_RULES: Tuple[PatternRule, ...] = (
    PatternRule.compile("testimonial_div", r'<div[^>]*class="[^"]*testimonial[^"]*"[^>]*>([^<]+)</div>'),
    PatternRule.compile("blockquote", r"<blockquote[^>]*>([^<]+)</blockquote>"),
    PatternRule.compile("attributed_quote", r'"([^"]{50,200})"\s*-\s*([^<\n]+)'),
)

CTA_RULES: Tuple[PatternRule, ...] = (
    PatternRule.compile("button", r"<button[^>]*>([^<]+)</button>"),
    PatternRule.compile("btn_link", r'<a[^>]*class="[^"]*btn[^"]*"[^>]*>([^<]+)</a>'),
    PatternRule.compile("comprar_agora", r"comprar?\s+agora", group=0),
    PatternRule.compile("adquirir_ja", r"adquirir?\s+já", group=0),
)


# ---------- EXTRACTORS ----------


def _clip(value: str, max_length: int) -> str:
    return value[:max_length].strip()


def _is_benefit(candidate: str) -> bool:
    return BENEFIT_MIN_LENGTH < len(candidate) < BENEFIT_MAX_LENGTH


def _is_testimonial(candidate: str) -> bool:
    return len(candidate) > TESTIMONIAL_MIN_LENGTH


def extract_title(html: str) -> str:
    value = first_match(TITLE_RULES, html)
    return _clip(value, TITLE_MAX_LENGTH) if value else DEFAULT_TITLE


def extract_description(html: str) -> str:
    value = first_match(DESCRIPTION_RULES, html)
    return _clip(value, DESCRIPTION_MAX_LENGTH) if value else DEFAULT_DESCRIPTION


def extract_price(html: str) -> str:
    """Return the first price-shaped token, e.g. ``R$ 1.997,00`` or ``97 reais``."""
    return first_match(PRICE_RULES, html) or DEFAULT_PRICE


def extract_benefits(html: str) -> Tuple[str, ...]:
    """Collect up to five benefit lines; the default list replaces an empty result."""
    found: List[str] = collect_matches(BENEFIT_RULES, html, MAX_BENEFITS, _is_benefit)
    return tuple(found) if found else DEFAULT_BENEFITS


def extract_testimonials(html: str) -> Tuple[str, ...]:
    found: List[str] = collect_matches(TESTIMONIAL_RULES, html, MAX_TESTIMONIALS, _is_testimonial)
    return tuple(found) if found else DEFAULT_TESTIMONIALS


def extract_cta(html: str) -> str:
    return first_match(CTA_RULES, html) or DEFAULT_CTA


def extract_fields(html: str, url: str) -> ProductRecord:
    """Run every field extractor over ``html`` and assemble the record."""
    return ProductRecord(
        title=extract_title(html),
        description=extract_description(html),
        price=extract_price(html),
        benefits=extract_benefits(html),
        testimonials=extract_testimonials(html),
        cta=extract_cta(html),
        url=url,
    )
