"""Configuration and constants for the sales-page extractor."""

import os
from typing import Dict, Tuple

__all__ = [
    "HEADERS",
    "REQUEST_TIMEOUT",
    "FETCH_VIA_PROXY",
    "MAX_REDIRECTS",
    "PROXY_URL",
    "TITLE_MAX_LENGTH",
    "DESCRIPTION_MAX_LENGTH",
    "MAX_BENEFITS",
    "MAX_TESTIMONIALS",
    "BENEFIT_MIN_LENGTH",
    "BENEFIT_MAX_LENGTH",
    "TESTIMONIAL_MIN_LENGTH",
    "DEFAULT_TITLE",
    "DEFAULT_DESCRIPTION",
    "DEFAULT_PRICE",
    "DEFAULT_BENEFITS",
    "DEFAULT_TESTIMONIALS",
    "DEFAULT_CTA",
]

# HTTP headers for page fetches (sales pages often block non-browser agents)
HEADERS: Dict[str, str] = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
}

# Single fetch attempt, hard cutoff in seconds
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))

# Redirect hops followed by hand so each target is validated
MAX_REDIRECTS = 5

# Route fetches through the AllOrigins CORS proxy (returns JSON with "contents")
FETCH_VIA_PROXY = os.getenv("FETCH_VIA_PROXY", "False").lower() == "true"
PROXY_URL = "https://api.allorigins.win/get"

# Field bounds
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 300
MAX_BENEFITS = 5
MAX_TESTIMONIALS = 3
BENEFIT_MIN_LENGTH = 10  # exclusive
BENEFIT_MAX_LENGTH = 100  # exclusive
TESTIMONIAL_MIN_LENGTH = 20  # exclusive

# Defaults used when a field can't be extracted (or the page can't be fetched)
DEFAULT_TITLE = "Produto Incrível"
DEFAULT_DESCRIPTION = "Um produto que vai transformar sua vida e seus resultados."
DEFAULT_PRICE = "Consulte o preço na página"
DEFAULT_BENEFITS: Tuple[str, ...] = (
    "Resultados comprovados",
    "Suporte especializado",
    "Garantia de satisfação",
)
DEFAULT_TESTIMONIALS: Tuple[str, ...] = (
    "Produto excelente, recomendo! - Cliente Satisfeito",
)
DEFAULT_CTA = "Compre Agora"
