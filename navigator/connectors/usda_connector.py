"""
USDA FoodData Central connector.

Searches the FoodData Central database and returns the raw food records,
including their foodNutrients lists (amounts per 100 g).

The connector:
- POSTs {"query": ..., "pageSize": ...} to <base>/foods/search?api_key=<key>
- Returns the "foods" array of the response unchanged
- Raises RuntimeError when no key is configured or the request fails

Requires USDA_API_KEY in .env file. The base URL defaults to
https://api.nal.usda.gov/fdc/v1 and can be overridden via USDA_API_BASE_URL.
"""

import logging
import os
from typing import Any, Dict, List, Optional

import requests

from .base import BaseConnector

logger = logging.getLogger(__name__)

DEFAULT_USDA_BASE_URL = "https://api.nal.usda.gov/fdc/v1"


class UsdaConnector(BaseConnector):
    """Connector for the USDA FoodData Central search API."""
    source = "usda"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
    ) -> None:
        """
        Args:
            api_key: FoodData Central API key (optional, reads from USDA_API_KEY env var if not provided)
            base_url: API base URL (optional, reads from USDA_API_BASE_URL env var)
            timeout: Request timeout in seconds

        Raises:
            RuntimeError: If USDA_API_KEY is not set.
        """
        key = api_key or os.getenv("USDA_API_KEY")
        if not key:
            raise RuntimeError(
                "USDA_API_KEY is not set. Please add it to your .env file at the project root:\n"
                "USDA_API_KEY=your_fdc_api_key_here\n\n"
                "Keys are free at https://fdc.nal.usda.gov/api-key-signup.html"
            )

        self.api_key = key
        self.base_url = (base_url or os.getenv("USDA_API_BASE_URL", DEFAULT_USDA_BASE_URL)).rstrip("/")
        self.timeout = timeout

    def search(self, query: str, size: int = 1) -> List[Dict[str, Any]]:
        """
        Search FoodData Central for foods matching the query.

        Args:
            query: Food name (e.g., "salmon")
            size: pageSize sent to the API

        Returns:
            Raw food dictionaries (description, fdcId, foodNutrients, ...)

        Raises:
            RuntimeError: If the request fails or the response is not JSON.
        """
        url = f"{self.base_url}/foods/search"
        logger.debug("USDA search: query=%r size=%d", query, size)
        try:
            response = requests.post(
                url,
                params={"api_key": self.api_key},
                json={"query": query, "pageSize": size},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise RuntimeError(f"USDA API request failed: {e}") from e
        except ValueError as e:
            raise RuntimeError(f"USDA API returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise RuntimeError(f"USDA API returned unexpected {type(data).__name__} body")

        foods = data.get("foods") or []
        logger.debug("USDA search for %r returned %d foods", query, len(foods))
        return foods

    def search_first(self, query: str) -> Optional[Dict[str, Any]]:
        """Best matching food for the query, or None when nothing matches."""
        foods = self.search(query, size=1)
        return foods[0] if foods else None
