#!/usr/bin/env python3
"""
Product Page Crawl

Crawls a single page in a headless browser, extracts price and image data
with an LLM, and saves the body HTML plus a combined JSON document.

Modes:
    links - crawl and report title/links only
    html  - also save the body HTML
    full  - also extract price and images and save the JSON record (default)

Usage:
    python3 crawl_page.py https://shop.example.com/product/123
    python3 crawl_page.py https://shop.example.com/product/123 --mode html
    python3 crawl_page.py https://shop.example.com/product/123 --output-dir results --verbose
"""

import argparse
import json
import logging
import sys

from dotenv import load_dotenv

from product_crawler.browser import PageCrawler, PageCrawlError
from product_crawler.common import is_valid_url, load_settings, measure_time, setup_logging
from product_crawler.common.config_loader import CrawlerSettings
from product_crawler.extraction import ProductDataExtractor, StructuredExtractionClient
from product_crawler.models import ImageExtraction, PageResult, PriceExtraction
from product_crawler.output import ResultWriter, run_timestamp

logger = logging.getLogger("product_crawler.cli")

DEFAULT_URL = "https://google.com"
MODES = ("links", "html", "full")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Crawl a product page and extract price and image data"
    )
    parser.add_argument(
        "url",
        nargs="?",
        default=DEFAULT_URL,
        help=f"Page URL (default: {DEFAULT_URL})"
    )
    parser.add_argument(
        "--mode",
        choices=MODES,
        default="full",
        help="How much post-processing to run after crawling (default: full)"
    )
    parser.add_argument(
        "--output-dir",
        help="Directory for output files (default: from config, usually output/)"
    )
    parser.add_argument(
        "--config",
        help="Path to crawler YAML config (default: config/crawler.yaml)"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--quiet", "-q", action="store_true", help="Warnings and errors only")
    return parser.parse_args(argv)


def extract_product_data(html: str, settings: CrawlerSettings):
    """Run price and image extraction, degrading to error results without an API key."""
    if not settings.openai_api_key:
        message = "OPENAI_API_KEY is not set"
        logger.error("Skipping extraction: %s", message)
        return PriceExtraction.failed(message), ImageExtraction.failed(message)

    client = StructuredExtractionClient.from_settings(settings)
    extractor = ProductDataExtractor(client, settings)
    try:
        logger.info("Extracting price data...")
        with measure_time("Price extraction"):
            price_data = extractor.extract_price(html)

        logger.info("Extracting image data...")
        with measure_time("Image extraction"):
            image_data = extractor.extract_images(html)
    finally:
        extractor.verifier.close()

    return price_data, image_data


def main(argv=None) -> None:
    load_dotenv()
    args = parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    url = args.url
    if not is_valid_url(url):
        logger.error("Invalid URL: %s", url)
        logger.error("Please provide a valid URL starting with http:// or https://")
        sys.exit(1)

    settings = load_settings(args.config)
    if args.output_dir:
        settings.output_dir = args.output_dir
    logger.info("Running in %s environment", settings.environment)

    logger.info("Starting crawl of %s", url)
    try:
        with measure_time("Crawl"):
            page = PageCrawler(settings).crawl(url)
    except PageCrawlError as e:
        logger.error("Error during crawl: %s", e)
        return

    logger.info("Page title: %s", page.title)
    logger.info("Found %d links on %s", len(page.links), url)

    if args.mode == "links":
        for link in page.links:
            print(link)
        return

    writer = ResultWriter(settings.output_dir)
    timestamp = run_timestamp()

    if args.mode == "full":
        price_data, image_data = extract_product_data(page.body_html, settings)
        print("Extracted price data:")
        print(json.dumps(price_data.to_dict(), indent=2))
        print("Extracted image data:")
        print(json.dumps(image_data.to_dict(), indent=2))

    try:
        html_path = writer.save_html(url, page.body_html, timestamp)
        print(f"Body content saved to {html_path}")

        if args.mode == "full":
            result = PageResult(
                url=url,
                title=page.title,
                price_data=price_data,
                image_data=image_data,
                links=page.links,
            )
            json_path = writer.save_page_data(result, timestamp)
            print(f"Page data saved to {json_path}")
    except OSError as e:
        logger.error("Could not save results: %s", e)


if __name__ == "__main__":
    main()
