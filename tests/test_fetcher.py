"""
Tests for the remote CSV fetcher, using httpx's mock transport.
"""
import httpx
import pytest

from directory_app.utils.fetcher import fetch_csv


def _transport(routes):
    def handler(request: httpx.Request) -> httpx.Response:
        return routes(request)
    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_fetch_returns_body_text():
    transport = _transport(lambda request: httpx.Response(200, text="FLOOR,NAME\n1,Bob\n"))
    text = await fetch_csv("https://sheets.test/pub.csv", transport=transport)
    assert text == "FLOOR,NAME\n1,Bob\n"


@pytest.mark.asyncio
async def test_fetch_follows_redirects():
    def routes(request):
        if request.url.path == "/pub":
            return httpx.Response(307, headers={"Location": "https://content.test/data.csv"})
        return httpx.Response(200, text="A,B\n1,2\n")

    text = await fetch_csv("https://sheets.test/pub", transport=_transport(routes))
    assert text == "A,B\n1,2\n"


@pytest.mark.asyncio
async def test_fetch_raises_on_error_status():
    transport = _transport(lambda request: httpx.Response(404, text="not found"))
    with pytest.raises(httpx.HTTPStatusError):
        await fetch_csv("https://sheets.test/missing.csv", transport=transport)
