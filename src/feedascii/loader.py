import io
import logging
from pathlib import Path

import httpx
from PIL import Image, UnidentifiedImageError

from feedascii.errors import DecodeError

log = logging.getLogger(__name__)


def _is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


async def _fetch_bytes(source: str, client: httpx.AsyncClient | None) -> bytes:
    if client is None:
        async with httpx.AsyncClient(follow_redirects=True) as own_client:
            return await _fetch_bytes(source, own_client)
    try:
        response = await client.get(source, follow_redirects=True)
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise DecodeError(f"Couldn't load image {source}: {e}") from e
    return response.content


def decode_image(data: bytes, source: str = "<bytes>") -> Image.Image:
    """Decode image bytes into a fully loaded Pillow image."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return img.copy()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise DecodeError(f"Couldn't decode image {source}: {e}") from e


async def load_image(
    source: str | Path | None,
    client: httpx.AsyncClient | None = None,
    allow_local: bool = False,
) -> Image.Image:
    """Fetch and decode an image from a URL, or from a local path when ``allow_local`` is set.

    Any failure to reach, read or decode the source raises DecodeError.
    """
    if not source:
        raise DecodeError("Post has no image to render")
    source = str(source)
    if _is_remote(source):
        log.debug("Fetching image %s", source)
        data = await _fetch_bytes(source, client)
    elif allow_local:
        try:
            data = Path(source).read_bytes()
        except OSError as e:
            raise DecodeError(f"Couldn't read image {source}: {e}") from e
    else:
        raise DecodeError(f"Not a network image: {source}")
    log.debug("Decoding %d bytes from %s", len(data), source)
    return decode_image(data, source)
