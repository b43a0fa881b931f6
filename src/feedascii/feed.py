import logging
import os
import random
from collections.abc import Callable
from typing import Any

import httpx

from feedascii.errors import DataError, NetworkError
from feedascii.model import Listing, Post

log = logging.getLogger(__name__)

BASE_URL = os.environ.get("FEEDASCII_BASE_URL", "https://www.reddit.com")
USER_AGENT = "feedascii/0.1 (terminal image viewer)"
FEED_PREFIX = "r"


def make_client(**kwargs) -> httpx.AsyncClient:
    """Async client shared by the feed request and the image download."""
    headers = {"User-Agent": USER_AGENT, **kwargs.pop("headers", {})}
    return httpx.AsyncClient(headers=headers, follow_redirects=True, **kwargs)


async def fetch_posts(
    name: str,
    listing: Listing,
    client: httpx.AsyncClient,
    base_url: str = BASE_URL,
) -> list[dict[str, Any]]:
    """Return the raw post entries (``data.children``) of a feed listing."""
    url = listing.url(name, base_url)
    log.debug("GET %s params=%s", url, listing.params)
    try:
        response = await client.get(url, params=listing.params)
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise NetworkError(f"Couldn't load posts from {name}: {e}") from e

    try:
        payload = response.json()
    except ValueError as e:
        raise DataError(f"Couldn't load posts from {name}: response is not JSON") from e

    children = None
    if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
        children = payload["data"].get("children")
    if not isinstance(children, list) or not children:
        raise DataError(f"Couldn't load posts from {name}")
    log.debug("Listing returned %d posts", len(children))
    return children


def parse_post(child: Any, name: str = "") -> Post:
    """Turn one listing entry into a Post, rejecting entries with nothing to show."""
    data = child.get("data") if isinstance(child, dict) else None
    if not isinstance(data, dict) or not data:
        raise DataError(f"Missing required data from {name}")

    title = data.get("title")
    is_video = bool(data.get("is_video", False))
    post = Post(
        title=title if isinstance(title, str) else "",
        url=data.get("url") or "",
        is_video=is_video,
        thumbnail=data.get("thumbnail") or None,
    )
    if not isinstance(title, str) or not post.image_source:
        raise DataError(f"Missing required data from {name}")
    return post


def select_post(
    children: list[Any],
    name: str = "",
    choose: Callable[[int], int] = random.randrange,
) -> Post:
    """Pick one entry with ``choose(n) -> index in [0, n)`` and parse it."""
    if not children:
        raise DataError(f"Couldn't load posts from {name}")
    index = choose(len(children))
    log.debug("Selected post %d of %d", index, len(children))
    return parse_post(children[index], name)


async def random_post(
    name: str,
    listing: Listing,
    client: httpx.AsyncClient,
    choose: Callable[[int], int] = random.randrange,
    base_url: str = BASE_URL,
) -> Post:
    children = await fetch_posts(name, listing, client, base_url=base_url)
    return select_post(children, name, choose)
