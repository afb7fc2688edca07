"""
Product Data Extractor

Orchestrates price and image extraction for one page:
- Normalizes and truncates the body HTML
- Runs the schema-constrained extraction call
- Converts the response into result models
- Verifies image candidates before returning them

Failures never propagate past this class; they come back as
results with confidence 0 and an ``error`` message.
"""

import logging
import math
import re
from typing import Any, Optional

from ..common.config_loader import CrawlerSettings
from ..common.text_utils import prepare_llm_input
from ..models import ImageExtraction, PriceExtraction
from .image_verifier import ImageVerifier
from .llm_client import ExtractionServiceError, StructuredExtractionClient
from .result_validator import normalize_confidence, validate_images
from .schemas import (
    IMAGE_INSTRUCTION,
    IMAGE_SCHEMA,
    IMAGE_SUBJECT,
    PRICE_INSTRUCTION,
    PRICE_SCHEMA,
    PRICE_SUBJECT,
)

logger = logging.getLogger(__name__)


# "19.99", "1299"
_PLAIN_PRICE_RE = re.compile(r'\d+(\.\d+)?')
# "19,99" - comma as the only separator, followed by 1-2 decimals
_DECIMAL_COMMA_RE = re.compile(r'\d+,\d{1,2}')
# "1,299" / "1,299.99" - comma thousands separators
_COMMA_GROUPED_RE = re.compile(r'\d{1,3}(,\d{3})+(\.\d+)?')
# "1.299,99" - dot thousands separators with decimal comma
_DOT_GROUPED_RE = re.compile(r'\d{1,3}(\.\d{3})+,\d{1,2}')


def _parse_price_string(text: str) -> Optional[float]:
    """
    Parse a price string, telling thousands separators from decimal commas.

    Ambiguous or unrecognized formats return None rather than a guess.

    Example:
        "1,299" -> 1299.0, "1,299.99" -> 1299.99, "19,99" -> 19.99,
        "1.299,99" -> 1299.99, "1,2345" -> None
    """
    text = text.strip().replace(' ', '')

    if _PLAIN_PRICE_RE.fullmatch(text):
        return float(text)
    if _DECIMAL_COMMA_RE.fullmatch(text):
        return float(text.replace(',', '.'))
    if _COMMA_GROUPED_RE.fullmatch(text):
        return float(text.replace(',', ''))
    if _DOT_GROUPED_RE.fullmatch(text):
        return float(text.replace('.', '').replace(',', '.'))
    return None


def _to_price(value: Any) -> Optional[float]:
    """Coerce a model-reported price to float, or None if it isn't one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        price = float(value)
    elif isinstance(value, str):
        price = _parse_price_string(value)
    else:
        return None

    if price is None or not math.isfinite(price):
        return None
    return price


def _to_currency(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class ProductDataExtractor:
    """
    Extracts pricing and verified product images from page HTML.

    Usage:
        extractor = ProductDataExtractor(client, settings)
        price = extractor.extract_price(html)
        images = extractor.extract_images(html)
    """

    def __init__(
        self,
        client: StructuredExtractionClient,
        settings: CrawlerSettings,
        verifier: Optional[ImageVerifier] = None,
    ):
        """
        Initialize the extractor.

        Args:
            client: Structured extraction client (shared for the process)
            settings: Crawler settings (models, input budget, verification limits)
            verifier: Image verifier (created from settings if omitted)
        """
        self.client = client
        self.settings = settings
        self.verifier = verifier or ImageVerifier(timeout=settings.verify_timeout)

    def _prepare(self, html: str) -> str:
        text = prepare_llm_input(html, self.settings.max_input_chars)
        logger.debug("Body content length: original=%d, cleaned=%d",
                     len(html or ""), len(text))
        return text

    def extract_price(self, html: str) -> PriceExtraction:
        """Extract current/original price, currency and sale flag."""
        text = self._prepare(html)

        try:
            data = self.client.extract(
                PRICE_INSTRUCTION, PRICE_SCHEMA, text,
                model=self.settings.price_model, subject=PRICE_SUBJECT,
            )
        except ExtractionServiceError as e:
            logger.error("Error extracting product price: %s", e)
            return PriceExtraction.failed(str(e))

        logger.info("Price extraction completed")
        return PriceExtraction(
            current_price=_to_price(data.get("currentPrice")),
            original_price=_to_price(data.get("originalPrice")),
            currency=_to_currency(data.get("currency")),
            on_sale=data.get("onSale") is True,
            confidence=normalize_confidence(data.get("confidence")),
        )

    def extract_images(self, html: str) -> ImageExtraction:
        """Extract product image URLs and keep only those that serve images."""
        text = self._prepare(html)

        try:
            data = self.client.extract(
                IMAGE_INSTRUCTION, IMAGE_SCHEMA, text,
                model=self.settings.image_model, subject=IMAGE_SUBJECT,
            )
        except ExtractionServiceError as e:
            logger.error("Error extracting product images: %s", e)
            return ImageExtraction.failed(str(e))

        logger.info("Image extraction completed")
        return validate_images(
            data.get("productImages"),
            data.get("confidence"),
            self.verifier,
            max_workers=self.settings.max_verify_workers,
        )
