"""Shared test fixtures."""

from unittest.mock import MagicMock

import pytest

from product_crawler.common.config_loader import CrawlerSettings
from product_crawler.models import VerificationOutcome


@pytest.fixture
def settings():
    """Settings with an API key and no dev-mode delays."""
    return CrawlerSettings(
        openai_api_key="sk-test",
        environment="test",
        network_idle_timeout=1,
        dev_linger_seconds=0,
    )


@pytest.fixture
def product_html():
    """Small product page body with messy whitespace."""
    return """
        <div class="product">
            <h1>Trail Runner 2</h1>
            <span class="price   old">$129.99</span>
            <span class="price new">$99.99</span>
            <img src="https://cdn.shop.example.com/p/trail-runner-2/main.jpg">
        </div>
    """


class FakeVerifier:
    """Verifier that answers from a url -> content type map (None = not found)."""

    def __init__(self, content_types):
        self.content_types = content_types
        self.calls = []

    def verify(self, url):
        self.calls.append(url)
        content_type = self.content_types.get(url)
        if content_type is None:
            return VerificationOutcome(is_image=False, error="HTTP error: 404 Not Found")
        is_image = content_type.startswith("image/")
        return VerificationOutcome(
            is_image=is_image,
            content_type=content_type,
            error=None if is_image else "URL does not point to an image",
        )

    def close(self):
        pass


@pytest.fixture
def fake_verifier_factory():
    return FakeVerifier


def make_head_response(status_code=200, content_type=None, reason="OK"):
    """Build a mock requests.Response for HEAD requests."""
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.headers = {"Content-Type": content_type} if content_type else {}
    return response


@pytest.fixture
def head_response():
    """Factory for mock HEAD responses."""
    return make_head_response
