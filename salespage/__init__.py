"""Heuristic sales-page extractor package."""

__version__ = "6.0.0"

# Re-export main components for convenient imports
from salespage.extractor import PageResponse, extract, extract_page_data, fetch_page
from salespage.fields import extract_fields
from salespage.models import DEFAULTED, EXTRACTED, ExtractionResult, ProductRecord

__all__ = [
    # Version
    "__version__",
    # Models
    "ProductRecord",
    "ExtractionResult",
    "EXTRACTED",
    "DEFAULTED",
    # Core functions
    "PageResponse",
    "extract",
    "extract_page_data",
    "extract_fields",
    "fetch_page",
]
