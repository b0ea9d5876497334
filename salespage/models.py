"""Data models for extracted sales pages."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from salespage.config import (
    DEFAULT_BENEFITS,
    DEFAULT_CTA,
    DEFAULT_DESCRIPTION,
    DEFAULT_PRICE,
    DEFAULT_TESTIMONIALS,
    DEFAULT_TITLE,
)

__all__ = ["ProductRecord", "ExtractionResult", "EXTRACTED", "DEFAULTED"]

EXTRACTED = "extracted"
DEFAULTED = "defaulted"


@dataclass(frozen=True)
class ProductRecord:
    """Fixed-shape description of a single sales page.

    Every field is populated, either from the page or from its default.
    Sequences are tuples so a record can be shared between requests
    without anyone mutating it.
    """

    title: str = DEFAULT_TITLE
    description: str = DEFAULT_DESCRIPTION
    price: str = DEFAULT_PRICE
    benefits: Tuple[str, ...] = DEFAULT_BENEFITS
    testimonials: Tuple[str, ...] = DEFAULT_TESTIMONIALS
    cta: str = DEFAULT_CTA
    url: str = ""

    @classmethod
    def default(cls, url: str) -> "ProductRecord":
        """Record with every field at its default, carrying the source URL."""
        return cls(url=url)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "benefits": list(self.benefits),
            "testimonials": list(self.testimonials),
            "cta": self.cta,
            "url": self.url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductRecord":
        """Rebuild a record from to_dict() output; missing keys fall back to defaults."""
        return cls(
            title=data.get("title") or DEFAULT_TITLE,
            description=data.get("description") or DEFAULT_DESCRIPTION,
            price=data.get("price") or DEFAULT_PRICE,
            benefits=tuple(data.get("benefits") or DEFAULT_BENEFITS),
            testimonials=tuple(data.get("testimonials") or DEFAULT_TESTIMONIALS),
            cta=data.get("cta") or DEFAULT_CTA,
            url=data.get("url", ""),
        )


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of one extraction: the record plus how it was obtained.

    Callers that only need the record read ``.record``; logging and tests
    use ``source`` and ``error`` to see whether the page was degraded.
    """

    record: ProductRecord
    source: str = EXTRACTED
    error: Optional[str] = field(default=None)

    @property
    def degraded(self) -> bool:
        return self.source == DEFAULTED
