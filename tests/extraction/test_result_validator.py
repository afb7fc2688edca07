"""Tests for product_crawler/extraction/result_validator.py"""

import threading
import time

import pytest

from product_crawler.extraction.result_validator import normalize_confidence, validate_images
from product_crawler.models import ImageExtraction, VerificationOutcome, VerifiedImage

IMG_A = "https://cdn.shop.example.com/a.png"
IMG_B = "https://cdn.shop.example.com/b.html"
IMG_C = "https://cdn.shop.example.com/c.webp"


class SlowVerifier:
    """Every URL is an image; each check sleeps for a per-URL delay."""

    def __init__(self, delays):
        self.delays = delays
        self.lock = threading.Lock()
        self.in_flight = 0
        self.max_in_flight = 0

    def verify(self, url):
        with self.lock:
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        time.sleep(self.delays.get(url, 0))
        with self.lock:
            self.in_flight -= 1
        return VerificationOutcome(is_image=True, content_type="image/jpeg")


class ExplodingVerifier:
    """Raises for one URL, answers image/png for the rest."""

    def __init__(self, bad_url):
        self.bad_url = bad_url

    def verify(self, url):
        if url == self.bad_url:
            raise RuntimeError("verifier crashed")
        return VerificationOutcome(is_image=True, content_type="image/png")


class TestFiltering:
    def test_keeps_images_drops_others(self, fake_verifier_factory):
        verifier = fake_verifier_factory({IMG_A: "image/png", IMG_B: "text/html"})

        result = validate_images([IMG_A, IMG_B], 0.8, verifier)

        assert result == ImageExtraction(
            product_images=[VerifiedImage(url=IMG_A, content_type="image/png")],
            confidence=0.8,
        )

    def test_preserves_candidate_order(self, fake_verifier_factory):
        verifier = fake_verifier_factory({IMG_A: "image/png", IMG_B: "text/html",
                                          IMG_C: "image/webp"})

        result = validate_images([IMG_C, IMG_B, IMG_A], 0.5, verifier)

        assert [img.url for img in result.product_images] == [IMG_C, IMG_A]

    def test_all_fail_keeps_confidence(self, fake_verifier_factory):
        verifier = fake_verifier_factory({})

        result = validate_images([IMG_A, IMG_B, IMG_C], 0.9, verifier)

        assert result.product_images == []
        assert result.confidence == 0.9

    def test_invalid_entries_are_dropped(self, fake_verifier_factory):
        verifier = fake_verifier_factory({IMG_A: "image/png"})

        result = validate_images([None, 17, IMG_A, "relative/img.png"], 0.7, verifier)

        assert [img.url for img in result.product_images] == [IMG_A]

    def test_accepts_url_objects(self, fake_verifier_factory):
        verifier = fake_verifier_factory({IMG_A: "image/png"})

        result = validate_images([{"url": IMG_A}], 0.6, verifier)

        assert result.product_images == [VerifiedImage(url=IMG_A, content_type="image/png")]

    def test_duplicates_are_verified_independently(self, fake_verifier_factory):
        verifier = fake_verifier_factory({IMG_A: "image/png"})

        result = validate_images([IMG_A, IMG_A], 1, verifier)

        assert len(result.product_images) == 2
        assert verifier.calls == [IMG_A, IMG_A]

    def test_output_never_longer_than_input(self, fake_verifier_factory):
        verifier = fake_verifier_factory({IMG_A: "image/png", IMG_C: "image/webp"})
        candidates = [IMG_A, IMG_B, IMG_C]

        result = validate_images(candidates, 0.4, verifier)

        assert len(result.product_images) <= len(candidates)
        assert all(img.content_type.startswith("image/") for img in result.product_images)


class TestEmptyOrMalformedInput:
    @pytest.mark.parametrize("confidence", [0, 0.3, 1])
    def test_empty_list(self, fake_verifier_factory, confidence):
        verifier = fake_verifier_factory({})

        result = validate_images([], confidence, verifier)

        assert result == ImageExtraction(product_images=[], confidence=confidence)
        assert verifier.calls == []

    @pytest.mark.parametrize("candidates", [None, "https://cdn.example.com/a.png",
                                            {"url": IMG_A}, 42])
    def test_non_list_candidates(self, fake_verifier_factory, candidates):
        verifier = fake_verifier_factory({IMG_A: "image/png"})

        result = validate_images(candidates, 0.5, verifier)

        assert result.product_images == []
        assert result.confidence == 0.5
        assert verifier.calls == []

    def test_missing_confidence_defaults_to_zero(self, fake_verifier_factory):
        result = validate_images([], None, fake_verifier_factory({}))
        assert result.confidence == 0


class TestConcurrency:
    def test_runs_checks_concurrently(self):
        urls = [f"https://cdn.shop.example.com/{i}.jpg" for i in range(8)]
        verifier = SlowVerifier({url: 0.3 for url in urls})

        start = time.perf_counter()
        result = validate_images(urls, 1, verifier)
        elapsed = time.perf_counter() - start

        assert len(result.product_images) == 8
        # Sequential would take 2.4 s
        assert elapsed < 1.2
        assert verifier.max_in_flight > 1

    def test_order_follows_candidates_not_completion(self):
        urls = [IMG_A, IMG_B, IMG_C]
        # First candidate finishes last
        verifier = SlowVerifier({IMG_A: 0.3, IMG_B: 0.1, IMG_C: 0.0})

        result = validate_images(urls, 1, verifier)

        assert [img.url for img in result.product_images] == urls

    def test_no_default_cap_on_large_batches(self):
        urls = [f"https://cdn.shop.example.com/{i}.jpg" for i in range(48)]
        verifier = SlowVerifier({url: 0.4 for url in urls})

        start = time.monotonic()
        result = validate_images(urls, 1, verifier)
        elapsed = time.monotonic() - start

        assert len(result.product_images) == 48
        assert verifier.max_in_flight == 48
        assert elapsed < 0.8

    def test_max_workers_limits_parallelism(self):
        urls = [f"https://cdn.shop.example.com/{i}.jpg" for i in range(6)]
        verifier = SlowVerifier({url: 0.05 for url in urls})

        validate_images(urls, 1, verifier, max_workers=2)

        assert verifier.max_in_flight <= 2

    def test_one_failing_check_does_not_abort_batch(self):
        verifier = ExplodingVerifier(bad_url=IMG_B)

        result = validate_images([IMG_A, IMG_B, IMG_C], 0.8, verifier)

        assert [img.url for img in result.product_images] == [IMG_A, IMG_C]
        assert result.confidence == 0.8


class TestNormalizeConfidence:
    def test_numbers_pass_through(self):
        assert normalize_confidence(0.42) == 0.42
        assert normalize_confidence(1) == 1

    @pytest.mark.parametrize("value", [None, "0.9", True, [0.5], {}])
    def test_non_numbers_become_zero(self, value):
        assert normalize_confidence(value) == 0

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_becomes_zero(self, value):
        assert normalize_confidence(value) == 0

    def test_non_finite_confidence_on_empty_result(self, fake_verifier_factory):
        result = validate_images([], float("nan"), fake_verifier_factory({}))

        assert result == ImageExtraction(product_images=[], confidence=0)
