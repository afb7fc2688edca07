"""Headless browser page crawling."""

from .page_crawler import PageCrawlError, PageCrawler

__all__ = ['PageCrawler', 'PageCrawlError']
