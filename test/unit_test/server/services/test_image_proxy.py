import httpx
import pytest

from gunpla_sekai.core.errors import BadRequestError
from gunpla_sekai.server.services.image_proxy import UpstreamError, fetch_image, proxy_headers

pytestmark = pytest.mark.asyncio


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestFetchImage:
    async def test_returns_body_with_cors_headers(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert str(request.url) == "https://mock.img/kits/hguc-191.png"
            return httpx.Response(200, content=b"\x89PNG", headers={"content-type": "image/png"})

        async with mock_client(handler) as client:
            content, headers = await fetch_image("https://mock.img/kits/hguc-191.png", client=client)

        assert content == b"\x89PNG"
        assert headers == {
            "content-type": "image/png",
            "access-control-allow-origin": "*",
            "cache-control": "private, max-age=60",
        }

    async def test_defaults_content_type(self):
        async with mock_client(lambda request: httpx.Response(200, content=b"...")) as client:
            _, headers = await fetch_image("http://mock.img/box.jpg", client=client)
        assert headers["content-type"] == "image/jpeg"

    async def test_upstream_error(self):
        async with mock_client(lambda request: httpx.Response(404)) as client:
            with pytest.raises(UpstreamError) as exc_info:
                await fetch_image("https://mock.img/missing.jpg", client=client)
        assert exc_info.value.status_code == 502
        assert exc_info.value.detail == "bad upstream"

    @pytest.mark.parametrize("url", [None, ""])
    async def test_url_required(self, url):
        with pytest.raises(BadRequestError) as exc_info:
            await fetch_image(url)
        assert exc_info.value.detail == "url required"

    async def test_rejects_other_schemes(self):
        with pytest.raises(BadRequestError):
            await fetch_image("ftp://mock.img/box.jpg")


async def test_proxy_headers_keep_content_type():
    assert proxy_headers("image/webp")["content-type"] == "image/webp"
