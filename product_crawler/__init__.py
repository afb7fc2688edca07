"""
Product Page Crawler

Modules:
    models      - Data models (PriceExtraction, ImageExtraction, PageResult)
    common      - Shared utilities (settings loader, logging, URL helpers, timing)
    browser     - Headless browser page crawling
    extraction  - LLM price/image extraction and image URL verification
    output      - HTML and JSON result files
"""
