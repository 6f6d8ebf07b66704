"""
Unsplash photo search connector.

Requires UNSPLASH_ACCESS_KEY in .env file. The base URL defaults to
https://api.unsplash.com and can be overridden via UNSPLASH_API_BASE_URL.
"""

import logging
import os
from typing import Any, Dict, List, Optional

import requests

from .base import BaseConnector

logger = logging.getLogger(__name__)

DEFAULT_UNSPLASH_BASE_URL = "https://api.unsplash.com"


class UnsplashConnector(BaseConnector):
    """Connector for the Unsplash /search/photos endpoint (landscape photos only)."""
    source = "unsplash"

    def __init__(
        self,
        access_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
    ) -> None:
        """
        Args:
            access_key: Unsplash access key (optional, reads from UNSPLASH_ACCESS_KEY env var if not provided)
            base_url: API base URL (optional, reads from UNSPLASH_API_BASE_URL env var)
            timeout: Request timeout in seconds

        Raises:
            RuntimeError: If UNSPLASH_ACCESS_KEY is not set.
        """
        key = access_key or os.getenv("UNSPLASH_ACCESS_KEY")
        if not key:
            raise RuntimeError(
                "UNSPLASH_ACCESS_KEY is not set. Please add it to your .env file at the project root:\n"
                "UNSPLASH_ACCESS_KEY=your_unsplash_access_key_here"
            )

        self.access_key = key
        self.base_url = (base_url or os.getenv("UNSPLASH_API_BASE_URL", DEFAULT_UNSPLASH_BASE_URL)).rstrip("/")
        self.timeout = timeout

    def search(self, query: str, size: int = 5) -> List[Dict[str, Any]]:
        """
        Search Unsplash photos.

        Args:
            query: Search text
            size: per_page sent to the API

        Returns:
            Raw photo dictionaries (urls, alt_description, description, ...)

        Raises:
            RuntimeError: If the request fails or the response is not JSON.
        """
        url = f"{self.base_url}/search/photos"
        try:
            response = requests.get(
                url,
                params={"query": query, "per_page": size, "orientation": "landscape"},
                headers={"Authorization": f"Client-ID {self.access_key}"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise RuntimeError(f"Unsplash API request failed: {e}") from e
        except ValueError as e:
            raise RuntimeError(f"Unsplash API returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise RuntimeError(f"Unsplash API returned unexpected {type(data).__name__} body")

        results = data.get("results") or []
        logger.debug("Unsplash search for %r returned %d photos", query, len(results))
        return results
