"""
Base connector abstract class for third-party data sources.

All connectors must:
- Set the source attribute (e.g., "usda", "unsplash")
- Provide a search method returning the provider's raw result dictionaries
- Raise RuntimeError when they are not configured or the request fails
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class BaseConnector(ABC):
    """
    Abstract base class for all third-party connectors.

    Attributes:
        source: String identifier for the provider (e.g., "usda", "unsplash")
    """
    source: str

    @abstractmethod
    def search(self, query: str, size: int = 1) -> List[Dict[str, Any]]:
        """
        Search the provider.

        Args:
            query: Free-text search query
            size: Maximum number of results to request

        Returns:
            List of raw result dictionaries as returned by the provider
        """
        pass
