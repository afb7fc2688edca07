"""
Extraction data models.

Pure data classes for page data and LLM extraction results.
No business logic - only data structure definitions and their
JSON-ready representations (camelCase keys, as written to disk).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class PriceExtraction:
    """
    Product pricing as reported by the extraction model.

    confidence == 0 with all price fields None means no price was found
    or extraction failed; failures also carry ``error``.
    """
    current_price: Optional[float] = None
    original_price: Optional[float] = None
    currency: Optional[str] = None
    on_sale: bool = False
    confidence: float = 0.0
    error: Optional[str] = None

    @classmethod
    def failed(cls, error: str) -> "PriceExtraction":
        return cls(error=error)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "currentPrice": self.current_price,
            "originalPrice": self.original_price,
            "currency": self.currency,
            "onSale": self.on_sale,
            "confidence": self.confidence,
        }
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class ImageCandidate:
    """Unverified image URL returned by the extraction model."""
    url: Any

    @classmethod
    def from_raw(cls, item: Any) -> "ImageCandidate":
        """Accept a bare URL string or a {"url": ...} object."""
        if isinstance(item, dict):
            return cls(url=item.get("url"))
        return cls(url=item)


@dataclass(frozen=True)
class VerificationOutcome:
    """Result of checking one candidate URL (transient)."""
    is_image: bool
    content_type: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class VerifiedImage:
    """Candidate image URL confirmed to serve an image/* content type."""
    url: str
    content_type: str

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "contentType": self.content_type}


@dataclass(frozen=True)
class ImageExtraction:
    """Verified product images, in the order the model listed them."""
    product_images: List[VerifiedImage] = field(default_factory=list)
    confidence: float = 0.0
    error: Optional[str] = None

    @classmethod
    def failed(cls, error: str) -> "ImageExtraction":
        return cls(error=error)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "productImages": [image.to_dict() for image in self.product_images],
            "confidence": self.confidence,
        }
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass
class PageData:
    """What the browser collected from a rendered page."""
    title: str
    links: List[str] = field(default_factory=list)
    body_html: str = ""


@dataclass
class PageResult:
    """Combined per-page record written to the -data.json file."""
    url: str
    title: str
    price_data: PriceExtraction
    image_data: ImageExtraction
    links: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate required fields after initialization."""
        if not self.url:
            raise ValueError("Page URL is required")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "priceData": self.price_data.to_dict(),
            "imageData": self.image_data.to_dict(),
            "links": list(self.links),
        }
