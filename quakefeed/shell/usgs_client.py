"""USGS Feed Client - Imperative Shell.

This module handles HTTP communication with the USGS earthquake summary
feeds and event detail documents. All I/O is contained here; parsing and
windowing logic is in the core module.
"""

import logging
from typing import Any

import requests

from quakefeed.core.config import USGS_FEED_BASE
from quakefeed.core.filters import TimeWindow, feed_url


logger = logging.getLogger(__name__)


# Default timeout for API requests (seconds)
DEFAULT_TIMEOUT = 30


class USGSClient:
    """Client for fetching earthquake feeds from USGS.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        base_url: str = USGS_FEED_BASE,
        timeout: int = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize USGS client.

        Args:
            base_url: Base URL of the summary feeds
            timeout: Request timeout in seconds
            session: Optional requests session (for connection reuse)
        """
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get_json(self, url: str) -> dict[str, Any]:
        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def fetch_feed(self, window: TimeWindow) -> dict[str, Any]:
        """Fetch the summary feed for a time window.

        This method performs HTTP I/O.

        Args:
            window: Feed time window

        Returns:
            Raw GeoJSON FeatureCollection

        Raises:
            requests.RequestException: If the request fails
            ValueError: If the response is not valid JSON
        """
        url = feed_url(window, self.base_url)

        logger.info(
            "Fetching earthquake feed from USGS",
            extra={"url": url, "window": window.feed_name},
        )

        data = self._get_json(url)
        count = len(data.get("features") or [])

        logger.info("Fetched %d features from USGS (%s)", count, window.feed_name)

        return data

    def fetch_event_detail(self, detail_url: str) -> dict[str, Any]:
        """Fetch the detail document for a single event.

        This method performs HTTP I/O.

        Args:
            detail_url: The event's detail URL (Event.detail_url)

        Returns:
            Raw event detail GeoJSON Feature

        Raises:
            ValueError: If detail_url is empty or the response is not JSON
            requests.RequestException: If the request fails
        """
        if not detail_url:
            raise ValueError("Detail URL is required")

        logger.info("Fetching event detail", extra={"url": detail_url})
        return self._get_json(detail_url)
