import asyncio

import httpx
import pytest
from PIL import Image

from feedascii.errors import DecodeError
from feedascii.loader import decode_image, load_image
from tests.conftest import mock_client, png_bytes


def test_decode_image_returns_loaded_image(white_png):
    img = decode_image(white_png)
    assert img.size == (8, 8)
    assert img.convert("RGB").getpixel((0, 0)) == (255, 255, 255)


def test_decode_image_rejects_garbage():
    with pytest.raises(DecodeError, match="Couldn't decode"):
        decode_image(b"not an image at all")


def test_load_image_from_url(white_png):
    def handler(request):
        assert request.url == "https://i.test/cat.png"
        return httpx.Response(200, content=white_png)

    async def run():
        async with mock_client(handler) as client:
            return await load_image("https://i.test/cat.png", client)

    assert asyncio.run(run()).size == (8, 8)


def test_load_image_follows_redirects(white_png):
    def handler(request):
        if request.url.path == "/old.png":
            return httpx.Response(302, headers={"Location": "https://i.test/new.png"})
        return httpx.Response(200, content=white_png)

    async def run():
        async with mock_client(handler) as client:
            return await load_image("https://i.test/old.png", client)

    assert asyncio.run(run()).size == (8, 8)


def test_load_image_http_error_is_decode_error():
    async def run():
        async with mock_client(lambda request: httpx.Response(404)) as client:
            await load_image("https://i.test/missing.png", client)

    with pytest.raises(DecodeError, match="Couldn't load image"):
        asyncio.run(run())


def test_load_image_unreachable_is_decode_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async def run():
        async with mock_client(handler) as client:
            await load_image("https://i.test/cat.png", client)

    with pytest.raises(DecodeError):
        asyncio.run(run())


def test_load_image_bad_payload_is_decode_error():
    async def run():
        async with mock_client(lambda request: httpx.Response(200, content=b"<html>")) as client:
            await load_image("https://i.test/cat.png", client)

    with pytest.raises(DecodeError, match="Couldn't decode"):
        asyncio.run(run())


def test_load_image_from_local_path(tmp_path):
    path = tmp_path / "dot.png"
    path.write_bytes(png_bytes(Image.new("RGB", (3, 5), (1, 2, 3))))
    assert asyncio.run(load_image(path, allow_local=True)).size == (3, 5)


def test_load_image_missing_file(tmp_path):
    with pytest.raises(DecodeError, match="Couldn't read image"):
        asyncio.run(load_image(tmp_path / "nope.png", allow_local=True))


@pytest.mark.parametrize("source", [None, ""])
def test_load_image_without_source(source):
    with pytest.raises(DecodeError):
        asyncio.run(load_image(source))


def test_load_image_invalid_url_is_decode_error():
    async def run():
        async with mock_client(lambda request: httpx.Response(200)) as client:
            await load_image("https://i.test/a\x01.png", client)

    with pytest.raises(DecodeError, match="Couldn't load image"):
        asyncio.run(run())


@pytest.mark.parametrize("source", ["self", "default", "nsfw"])
def test_placeholder_thumbnails_are_not_read_from_disk(source):
    with pytest.raises(DecodeError, match="Not a network image"):
        asyncio.run(load_image(source))


def test_local_path_needs_allow_local(tmp_path):
    path = tmp_path / "private.png"
    path.write_bytes(png_bytes(Image.new("RGB", (2, 2))))
    with pytest.raises(DecodeError, match="Not a network image"):
        asyncio.run(load_image(path))
