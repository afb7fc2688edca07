"""
Image URL Verifier

Classifies a candidate URL as an image or not with a single HEAD request
(headers only, no body). Network failures never escape: every call
returns a VerificationOutcome.
"""

import logging
import threading
from typing import List, Optional

import requests

from ..common.url_utils import is_valid_url
from ..models import VerificationOutcome

logger = logging.getLogger(__name__)


class ImageVerifier:
    """
    Checks candidate image URLs via HEAD requests.

    verify() is called from worker threads; unless a session is injected,
    each thread gets its own requests.Session.

    Usage:
        verifier = ImageVerifier(timeout=10)
        outcome = verifier.verify("https://cdn.example.com/p/1.jpg")
        if outcome.is_image:
            ...
    """

    def __init__(self, timeout: float = 10.0, session: Optional[requests.Session] = None):
        """
        Initialize the verifier.

        Args:
            timeout: Per-request timeout in seconds
            session: Session to use for every request, from any thread
                (default: one session per thread)
        """
        self.timeout = timeout
        self.session = session
        self._local = threading.local()
        self._thread_sessions: List[requests.Session] = []
        self._lock = threading.Lock()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        if self.session is not None:
            self.session.close()
        with self._lock:
            for session in self._thread_sessions:
                session.close()
            self._thread_sessions.clear()

    def _get_session(self) -> requests.Session:
        if self.session is not None:
            return self.session

        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
            with self._lock:
                self._thread_sessions.append(session)
        return session

    def verify(self, url) -> VerificationOutcome:
        """
        Verify that a URL serves an image/* content type.

        No retries: one failed request means "not an image".
        """
        if not is_valid_url(url):
            return VerificationOutcome(is_image=False, error="Invalid URL format")

        try:
            response = self._get_session().head(url, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as e:
            logger.debug("HEAD %s failed: %s", url, e)
            return VerificationOutcome(
                is_image=False,
                error=f"Error verifying image URL: {e}",
            )

        if not 200 <= response.status_code < 300:
            return VerificationOutcome(
                is_image=False,
                error=f"HTTP error: {response.status_code} {response.reason or ''}".rstrip(),
            )

        content_type = response.headers.get("Content-Type")
        is_image = bool(content_type) and content_type.startswith("image/")

        return VerificationOutcome(
            is_image=is_image,
            content_type=content_type,
            error=None if is_image else "URL does not point to an image",
        )
