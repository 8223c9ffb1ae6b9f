import logging
from typing import Any, Dict, Optional

import requests

from core.config import get_settings
from core.errors import BookNotFound, ProviderUnavailable

logger = logging.getLogger(__name__)

class BookMetadataClient:
    """Client for the book metadata proxy.

    The proxy answers a POST of ``{"isbn": ...}`` with an envelope
    ``{"errorCode": 0, "data": {...}}``; any other ``errorCode`` is a
    structured failure with an ``errorMsg``.
    """
    SUCCESS_CODE = 0

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        settings = get_settings()
        self.base_url = base_url or settings.book_provider_url
        self.timeout = timeout if timeout is not None else settings.book_provider_timeout

    def fetch_by_isbn(self, isbn: str) -> Dict[str, Any]:
        """
        Fetch the provider's book payload for an ISBN.

        Args:
            isbn: The ISBN to look up

        Returns:
            The provider's book payload

        Raises:
            ProviderUnavailable: On transport errors, timeouts, error statuses
                or a body that is not a well-formed envelope
            BookNotFound: If the provider reports a failure or has no data
        """
        logger.debug(f"Requesting book metadata for {isbn} from {self.base_url}")
        try:
            response = requests.post(
                self.base_url,
                json={'isbn': isbn},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Book metadata request for {isbn} failed: {e}")
            raise ProviderUnavailable(f"Book metadata request for {isbn} failed", cause=e) from e

        if response.status_code == 404:
            raise BookNotFound(f"Book metadata provider has no book for {isbn}")

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            logger.error(f"Book metadata provider returned {response.status_code} for {isbn}")
            raise ProviderUnavailable(
                f"Book metadata provider returned status {response.status_code} for {isbn}", cause=e
            ) from e

        try:
            body = response.json()
        except ValueError as e:
            logger.error(f"Book metadata response for {isbn} is not JSON")
            raise ProviderUnavailable(f"Book metadata response for {isbn} is not JSON", cause=e) from e

        if not isinstance(body, dict) or 'errorCode' not in body:
            raise ProviderUnavailable(f"Malformed book metadata response for {isbn}")

        if body['errorCode'] != self.SUCCESS_CODE:
            message = body.get('errorMsg') or 'unknown error'
            logger.debug(f"Book metadata provider failed for {isbn}: {body['errorCode']} {message}")
            raise BookNotFound(f"Book metadata provider failed for {isbn}: {message}")

        data = body.get('data')
        if not data:
            raise BookNotFound(f"Book metadata provider returned no data for {isbn}")
        if not isinstance(data, dict):
            raise ProviderUnavailable(f"Malformed book data for {isbn}")

        return data
