"""
Extraction schemas and instructions.

Fixed JSON schemas and system instructions for the price and image
extraction calls. The schema is embedded in the system message because
JSON mode only guarantees syntactically valid JSON, not a shape.
"""

PRICE_SCHEMA = {
    "type": "object",
    "properties": {
        "currentPrice": {
            "type": ["number", "null"],
            "description": "The current/reduced/sale price without currency symbol (e.g., 19.99)",
        },
        "originalPrice": {
            "type": ["number", "null"],
            "description": (
                "The original/full price without currency symbol (e.g., 29.99), "
                "same as currentPrice if no discount"
            ),
        },
        "currency": {
            "type": ["string", "null"],
            "description": "The currency code (e.g., 'USD', 'EUR', 'GBP')",
        },
        "onSale": {
            "type": "boolean",
            "description": "Whether the product appears to be on sale/discount",
        },
        "confidence": {
            "type": "number",
            "description": "A value between 0 and 1 indicating confidence in the extraction",
        },
    },
    "required": ["currentPrice", "originalPrice", "currency", "onSale", "confidence"],
}

PRICE_INSTRUCTION = (
    "You are a helpful assistant that extracts product pricing information from HTML content.\n"
    "Extract the information according to this JSON schema:\n"
    "{schema}\n\n"
    "If no price is found, return currentPrice and originalPrice as null, currency as null, "
    "onSale as false, and confidence as 0."
)

IMAGE_SCHEMA = {
    "type": "object",
    "properties": {
        "productImages": {
            "type": "array",
            "items": {"type": "string"},
            "description": (
                "Array of URLs for all product images, including the main product "
                "image and additional gallery images"
            ),
        },
        "confidence": {
            "type": "number",
            "description": "A value between 0 and 1 indicating confidence in the extraction",
        },
    },
    "required": ["productImages", "confidence"],
}

IMAGE_INSTRUCTION = (
    "You are a helpful assistant that extracts product image information from HTML content.\n"
    "Extract the information according to this JSON schema:\n"
    "{schema}\n\n"
    "If no images are found, return an empty array for productImages and confidence as 0."
)

PRICE_SUBJECT = "product pricing information"
IMAGE_SUBJECT = "product image information"
