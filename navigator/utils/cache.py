"""
In-process TTL cache for recipe image lookups.

This module keeps resolved image URLs for a while so repeated renders of the
same recipe do not spend Unsplash requests (the free tier allows 50 per hour).

The cache is process-local and in-memory, with automatic expiration based on TTL.
"""

import logging
import os
import time
from typing import Any, Dict, Hashable, Optional, Tuple

logger = logging.getLogger(__name__)

# Cache storage: Key -> (timestamp, cached_value)
_IMAGE_CACHE: Dict[Hashable, Tuple[float, Any]] = {}

DEFAULT_IMAGE_CACHE_TTL_SECONDS = 24 * 60 * 60


def get_cache_ttl() -> int:
    """
    TTL in seconds from IMAGE_CACHE_TTL_SECONDS (default: 24 hours).

    Invalid values are logged and replaced by the default.
    """
    raw = os.getenv("IMAGE_CACHE_TTL_SECONDS")
    if not raw:
        return DEFAULT_IMAGE_CACHE_TTL_SECONDS
    try:
        return int(raw)
    except ValueError:
        logger.warning(
            "Invalid IMAGE_CACHE_TTL_SECONDS=%r, using %s",
            raw, DEFAULT_IMAGE_CACHE_TTL_SECONDS,
        )
        return DEFAULT_IMAGE_CACHE_TTL_SECONDS


def make_image_cache_key(recipe_name: str) -> Hashable:
    """
    Create the cache key for a recipe image lookup.

    Args:
        recipe_name: Recipe name exactly as passed to the lookup

    Returns:
        String key of the form "recipe_image_<name>"
    """
    return f"recipe_image_{recipe_name}"


def get_cached(key: Hashable) -> Optional[Any]:
    """
    Retrieve a cached value if it exists and hasn't expired.

    Args:
        key: Cache key

    Returns:
        Cached value, or None if not found or expired
    """
    now = time.time()
    entry = _IMAGE_CACHE.get(key)

    if not entry:
        return None

    timestamp, value = entry

    if now - timestamp > get_cache_ttl():
        # Expired - remove from cache
        _IMAGE_CACHE.pop(key, None)
        return None

    return value


def set_cached(key: Hashable, value: Any) -> None:
    """Store a value in the cache with the current timestamp."""
    _IMAGE_CACHE[key] = (time.time(), value)


def clear_cache() -> None:
    """Clear all cached entries (useful for testing)."""
    _IMAGE_CACHE.clear()


def get_cache_size() -> int:
    """Get the current number of cached entries (useful for monitoring)."""
    return len(_IMAGE_CACHE)
