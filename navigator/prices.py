"""
Grocery price search.

Prices come from the food backend's price endpoint when a client is given.
When the backend is unavailable or has nothing for the query, a small table of
sample store prices is used so the price view is never empty.
"""

import logging
from typing import Dict, List, Optional

from navigator.backend_client import BackendError, FoodBackendClient
from navigator.models import PriceResult

logger = logging.getLogger(__name__)

SAMPLE_PRICES: Dict[str, List[PriceResult]] = {
    "tomatoes": [
        PriceResult(store="Farmboy", price=2.99, unit="kg", distance="0.8 km", savings=0.50, logo="🏪"),
        PriceResult(store="FreshCo", price=3.49, unit="kg", distance="1.2 km", logo="🥬"),
        PriceResult(store="Metro", price=3.29, unit="kg", distance="0.5 km", logo="🛒"),
        PriceResult(store="Costco", price=4.99, unit="3 kg bag", distance="2.5 km", savings=1.00, logo="📦"),
    ],
    "olive oil": [
        PriceResult(store="Costco", price=12.99, unit="1L", distance="2.5 mi", savings=4.00, logo="📦"),
        PriceResult(store="Farmboy", price=6.99, unit="500ml", distance="0.8 mi", logo="🏪"),
        PriceResult(store="FreshCo", price=14.99, unit="750ml", distance="1.2 mi", logo="🥬"),
    ],
}

GENERIC_PRICES: List[PriceResult] = [
    PriceResult(store="Local Market", price=3.99, unit="each", distance="0.3 km", logo="🏬"),
    PriceResult(store="Grocery Outlet", price=2.49, unit="each", distance="1.5 km", savings=1.50, logo="💰"),
]


def sort_by_price(results: List[PriceResult]) -> List[PriceResult]:
    """Lowest price first; equal prices keep their order."""
    return sorted(results, key=lambda r: r.price)


def sample_prices(query: str) -> List[PriceResult]:
    """Sample prices for the query (exact, case-insensitive), else the generic list."""
    key = query.strip().lower()
    return list(SAMPLE_PRICES.get(key, GENERIC_PRICES))


def search_prices(query: str, client: Optional[FoodBackendClient] = None) -> List[PriceResult]:
    """
    Find store prices for a grocery item.

    Args:
        query: Item name (e.g., "tomatoes")
        client: Backend client; when omitted only sample prices are used

    Returns:
        PriceResult list sorted by price, lowest first
    """
    results: List[PriceResult] = []

    if client is not None:
        try:
            results = client.search_prices(query)
        except BackendError as e:
            logger.warning("Price search failed on the backend, using sample prices: %s", e)
            results = []

        if not results:
            logger.info("No backend prices for %r, using sample prices", query)

    if not results:
        results = sample_prices(query)

    return sort_by_price(results)
