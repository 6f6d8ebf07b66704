"""
Recipe image lookup via Unsplash.

Each recipe name is searched on Unsplash and the photo whose alt text and
description mention the most query words is used. Lookups are cached in the
process-local TTL cache, and every failure degrades to a deterministic
placeholder photo so a recipe always has an image.
"""

import logging
import os
import re
import time
from typing import Any, Dict, List, Optional, Sequence

from navigator.catalog import placeholder_image_url
from navigator.connectors.unsplash_connector import UnsplashConnector
from navigator.utils.cache import get_cached, make_image_cache_key, set_cached

logger = logging.getLogger(__name__)

RESULTS_PER_SEARCH = 5
# Unsplash free tier allows 50 requests per hour
BATCH_DELAY_SECONDS = 0.1

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")


def fallback_image_url(index: int) -> str:
    """Placeholder photo used when no Unsplash image can be found."""
    return placeholder_image_url(index)


def clean_query(query: str) -> str:
    """
    Normalize a recipe name into an Unsplash search query.

    Examples:
        >>> clean_query("  Chicken & Rice! ")
        'chicken  rice'
    """
    return _NON_ALNUM_RE.sub("", query.strip().lower())


def pick_best_image(results: Sequence[Dict[str, Any]], keywords: Sequence[str]) -> Optional[Dict[str, Any]]:
    """
    Pick the photo whose text mentions the most keywords.

    Args:
        results: Unsplash photo dictionaries, in API order
        keywords: Lower-cased query words

    Returns:
        Best photo, or None for an empty result list. Only a strictly higher
        score replaces the current pick, so the first photo wins ties.
    """
    if not results:
        return None

    best = results[0]
    best_score = 0
    for result in results:
        text = f"{result.get('alt_description') or ''} {result.get('description') or ''}".lower()
        score = sum(1 for keyword in keywords if keyword in text)
        if score > best_score:
            best_score = score
            best = result
    return best


def get_recipe_image(
    name: str,
    fallback_index: int = 0,
    connector: Optional[UnsplashConnector] = None,
) -> str:
    """
    Look up a photo URL for a recipe name (uncached).

    Args:
        name: Recipe name
        fallback_index: Position used for the placeholder photo
        connector: Unsplash connector (created from UNSPLASH_ACCESS_KEY if omitted)

    Returns:
        The "small" URL of the best matching photo, or the placeholder URL
        when no key is configured, the request fails or nothing is found
    """
    fallback = fallback_image_url(fallback_index)

    if connector is None:
        if not os.getenv("UNSPLASH_ACCESS_KEY"):
            logger.warning("Unsplash API key not configured. Using fallback image.")
            return fallback
        connector = UnsplashConnector()

    query = clean_query(name)
    keywords = query.split()

    try:
        results = connector.search(query, size=RESULTS_PER_SEARCH)
    except RuntimeError as e:
        logger.warning("Error fetching image from Unsplash for %r, using fallback: %s", name, e)
        return fallback

    best = pick_best_image(results, keywords)
    if best is None:
        logger.debug("No Unsplash photos for %r", name)
        return fallback

    return (best.get("urls") or {}).get("small") or fallback


def get_cached_recipe_image(name: str, fallback_index: int = 0) -> str:
    """Cached variant of get_recipe_image(); results are stored under recipe_image_<name>."""
    key = make_image_cache_key(name)
    cached = get_cached(key)
    if cached:
        return cached

    url = get_recipe_image(name, fallback_index)
    set_cached(key, url)
    return url


def batch_fetch_recipe_images(names: Sequence[str]) -> Dict[str, str]:
    """
    Resolve images for several recipes in order.

    Cached names are answered immediately. Uncached lookups are spaced by
    BATCH_DELAY_SECONDS and use the name's position as fallback index.

    Returns:
        Ordered mapping of recipe name to image URL
    """
    images: Dict[str, str] = {}
    pending: List[int] = []

    for index, name in enumerate(names):
        cached = get_cached(make_image_cache_key(name))
        if cached:
            images[name] = cached
        else:
            # Placeholder keeps the result ordered by input position
            images[name] = ""
            pending.append(index)

    for position, index in enumerate(pending):
        name = names[index]
        images[name] = get_cached_recipe_image(name, index)
        if position < len(pending) - 1:
            time.sleep(BATCH_DELAY_SECONDS)

    logger.info("Resolved %d recipe images (%d looked up)", len(images), len(pending))
    return images
