"""
BGG API Client - Low-level HTTP client for the BoardGameGeek XML API 2.

This handles the raw HTTP communication with BoardGameGeek.
BggListingSource and BggNameResolver use this to implement their ports.
"""

import logging
import time
from typing import Any, Optional

import requests

from ...core.ports.listing_source import ListingNotFoundError, ListingSourceError


class BggApiClient:
    """
    Low-level BoardGameGeek XML API client.

    Handles throttling, the "queued" response and error mapping. Responses are
    returned as XML text; parsing is left to the adapters.
    """

    DEFAULT_API_URL = "https://boardgamegeek.com/xmlapi2"

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        request_delay: float = 0.5,
        timeout: float = 30.0,
        max_retries: int = 5,
        retry_delay: float = 2.0,
        api_token: Optional[str] = None,
    ):
        """
        Initialize the BGG client.

        Args:
            api_url: XML API 2 root (e.g., https://boardgamegeek.com/xmlapi2)
            request_delay: Minimum pause between two requests, in seconds
            timeout: Per-request timeout, in seconds
            max_retries: How often a queued (HTTP 202) request is repeated
            retry_delay: Pause before repeating a queued request, in seconds
            api_token: Optional bearer token for registered applications
        """
        self.api_url = api_url.rstrip("/")
        self.request_delay = request_delay
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.logger = logging.getLogger("BggApiClient")

        self._session = requests.Session()
        self._session.headers.update({"Accept": "application/xml"})
        if api_token:
            self._session.headers["Authorization"] = f"Bearer {api_token}"

        self._last_request: Optional[float] = None

    # -------------------------------------------------------------------------
    # Core Request Methods
    # -------------------------------------------------------------------------

    def get(self, endpoint: str, **params: Any) -> str:
        """
        Make a GET request to the XML API.

        Args:
            endpoint: API endpoint (e.g., 'geeklist/12345')
            **params: Query parameters

        Returns:
            Response body as text

        Raises:
            ListingNotFoundError: If BGG does not know the requested object
            ListingSourceError: On transport or API errors
        """
        url = f"{self.api_url}/{endpoint}"

        for attempt in range(1, self.max_retries + 2):
            self._throttle()
            try:
                response = self._session.get(url, params=params or None, timeout=self.timeout)
            except requests.exceptions.ConnectionError as e:
                raise ListingSourceError(f"Connection failed: {e}", cause=e)
            except requests.exceptions.Timeout as e:
                raise ListingSourceError(f"Request timed out: {e}", cause=e)
            except requests.exceptions.RequestException as e:
                raise ListingSourceError(f"Request failed: {e}", cause=e)

            if response.status_code != 202:
                return self._handle_response(response, endpoint)

            self.logger.info(f"{endpoint} is queued by BGG (attempt {attempt}), retrying")
            if attempt <= self.max_retries:
                time.sleep(self.retry_delay)

        raise ListingSourceError(f"{endpoint} still queued after {self.max_retries} retries")

    # -------------------------------------------------------------------------
    # Response Handling
    # -------------------------------------------------------------------------

    def _throttle(self) -> None:
        if self._last_request is not None and self.request_delay > 0:
            remaining = self.request_delay - (time.monotonic() - self._last_request)
            if remaining > 0:
                time.sleep(remaining)
        self._last_request = time.monotonic()

    def _handle_response(self, response: requests.Response, endpoint: str) -> str:
        """Handle API response and errors."""
        if response.ok:
            return response.text

        status = response.status_code
        error_body = response.text[:500] if response.text else ""

        if status == 404:
            raise ListingNotFoundError(f"Not found: {endpoint}")

        if status in (401, 403):
            raise ListingSourceError(f"Access denied for {endpoint}. Check BGG_API_TOKEN.")

        if status == 429:
            raise ListingSourceError(f"Rate limited on {endpoint}. Increase BGG_REQUEST_DELAY.")

        raise ListingSourceError(f"API error {status}: {error_body}")

    # -------------------------------------------------------------------------
    # Convenience Methods
    # -------------------------------------------------------------------------

    def get_geeklist(self, listing_id: str) -> str:
        """Get a geek list with item comments."""
        return self.get(f"geeklist/{listing_id}", comments=1)

    def get_thing(self, item_id: str) -> str:
        """Get a thing (game) record."""
        return self.get("thing", id=item_id)
