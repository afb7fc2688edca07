"""
Extraction Result Validator

Turns the model's untrusted image list into verified images.
All candidates are checked concurrently; the output keeps the
model's order and drops anything that is not confirmed as an image.
"""

from __future__ import annotations

import concurrent.futures
import logging
import math
from numbers import Real
from typing import Any, Optional, Protocol

from ..models import ImageCandidate, ImageExtraction, VerificationOutcome, VerifiedImage

logger = logging.getLogger(__name__)


class Verifier(Protocol):
    def verify(self, url: Any) -> VerificationOutcome: ...


def normalize_confidence(value: Any) -> float:
    """Pass finite numeric confidence through unchanged; anything else becomes 0."""
    if isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value):
        return value
    return 0


def validate_images(
    candidates: Any,
    raw_confidence: Any,
    verifier: Verifier,
    max_workers: Optional[int] = None,
) -> ImageExtraction:
    """
    Verify candidate image URLs and keep the ones that serve images.

    Args:
        candidates: Candidate list from the model (URL strings or {"url": ...})
        raw_confidence: Confidence reported by the model
        verifier: Object with ``verify(url) -> VerificationOutcome``
        max_workers: Optional cap on simultaneous HEAD requests
            (None = every candidate in flight at once)

    Returns:
        ImageExtraction with verified images in candidate order and the
        model's confidence (0 if missing)
    """
    confidence = normalize_confidence(raw_confidence)

    if not isinstance(candidates, (list, tuple)) or not candidates:
        return ImageExtraction(product_images=[], confidence=confidence)

    items = [ImageCandidate.from_raw(item) for item in candidates]
    workers = len(items) if max_workers is None else max(1, min(len(items), max_workers))

    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        # Submit everything before reading any result
        futures = [executor.submit(verifier.verify, item.url) for item in items]

        outcomes: list[VerificationOutcome | None] = []
        for item, future in zip(items, futures):
            try:
                outcomes.append(future.result())
            except Exception as e:
                logger.warning("Verification failed for %r: %s", item.url, e)
                outcomes.append(None)

    verified = []
    for item, outcome in zip(items, outcomes):
        if outcome is not None and outcome.is_image:
            verified.append(VerifiedImage(url=item.url, content_type=outcome.content_type))
        elif outcome is not None:
            logger.debug("Dropped %r: %s", item.url, outcome.error)

    logger.info("Verified %d of %d candidate images", len(verified), len(items))
    return ImageExtraction(product_images=verified, confidence=confidence)
