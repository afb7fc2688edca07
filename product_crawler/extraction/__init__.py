"""
LLM-based product data extraction.

Modules:
    llm_client - StructuredExtractionClient (OpenAI JSON mode)
    schemas - Fixed price/image schemas and instructions
    image_verifier - ImageVerifier (HEAD request content-type check)
    result_validator - validate_images (concurrent candidate verification)
    product_extractor - ProductDataExtractor (price and image orchestration)
"""

from .image_verifier import ImageVerifier
from .llm_client import ExtractionServiceError, StructuredExtractionClient
from .product_extractor import ProductDataExtractor
from .result_validator import validate_images

__all__ = [
    'StructuredExtractionClient',
    'ExtractionServiceError',
    'ImageVerifier',
    'validate_images',
    'ProductDataExtractor',
]
