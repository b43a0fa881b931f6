import io

import httpx
import pytest
from PIL import Image

BASE_URL = "https://feed.test"


def png_bytes(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def listing_payload(*posts: dict) -> dict:
    return {"kind": "Listing", "data": {"children": [{"kind": "t3", "data": post} for post in posts]}}


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)


@pytest.fixture
def white_png():
    return png_bytes(Image.new("RGB", (8, 8), (255, 255, 255)))
