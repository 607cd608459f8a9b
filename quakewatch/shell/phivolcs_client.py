"""PHIVOLCS Source Client - Imperative Shell.

This module handles HTTP communication with the PHIVOLCS earthquake
information page. All I/O is contained here; parsing is in the core module.
"""

import logging

import requests

from quakewatch.core.config import DEFAULT_USER_AGENT, PHIVOLCS_URL


logger = logging.getLogger(__name__)


# Default timeout for page requests (seconds)
DEFAULT_TIMEOUT = 30


class PhivolcsClient:
    """Client for fetching the PHIVOLCS earthquake information page.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        url: str = PHIVOLCS_URL,
        timeout: int = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        """Initialize PHIVOLCS client.

        Args:
            url: Earthquake information page URL
            timeout: Request timeout in seconds
            user_agent: User-Agent header; the site rejects some default agents
        """
        self.url = url
        self.timeout = timeout
        self.user_agent = user_agent

    def fetch_page(self) -> str:
        """Fetch the raw earthquake information page.

        This method performs HTTP I/O.

        Returns:
            Page body as text

        Raises:
            requests.RequestException: If the request fails, times out,
                or returns a non-2xx status
        """
        logger.info("Fetching earthquake page from %s", self.url)

        response = requests.get(
            self.url,
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout,
        )
        response.raise_for_status()

        logger.info(
            "Fetched %d bytes from PHIVOLCS (status %d)",
            len(response.content),
            response.status_code,
        )

        return response.text
