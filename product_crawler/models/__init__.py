"""
Data models for page crawling and product extraction.

This module contains pure data classes with no business logic.
"""

from .extraction import (
    ImageCandidate,
    ImageExtraction,
    PageData,
    PageResult,
    PriceExtraction,
    VerificationOutcome,
    VerifiedImage,
)

__all__ = [
    'PriceExtraction',
    'ImageCandidate',
    'VerificationOutcome',
    'VerifiedImage',
    'ImageExtraction',
    'PageData',
    'PageResult',
]
