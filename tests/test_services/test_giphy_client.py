import httpx
import pytest

from conftest import giphy_transport, trending_item
from gif_pipeline.core.exceptions import DownloadError, MalformedResponseError, TrendingApiError
from gif_pipeline.integrations.giphy_client import GiphyClient


def make_client(transport, limit=25):
    return GiphyClient(
        api_key="secret",
        base_url="https://api.giphy.test/",
        limit=limit,
        timeout=5.0,
        transport=transport,
    )


async def test_trending_request_parameters():
    requests = []
    payload = {"data": [trending_item("https://media.giphy.test/a.gif")]}
    client = make_client(giphy_transport(payload, requests=requests), limit=10)

    result = await client.get_trending()

    assert result == payload
    request = requests[0]
    assert request.method == "GET"
    assert request.url.host == "api.giphy.test"
    assert request.url.path == "/v1/gifs/trending"
    assert dict(request.url.params) == {"api_key": "secret", "limit": "10", "rating": "g"}


async def test_trending_error_status_raises():
    client = make_client(giphy_transport({"message": "Unauthorized"}, trending_status=401))

    with pytest.raises(TrendingApiError) as exc_info:
        await client.get_trending()

    assert exc_info.value.status_code == 401


async def test_trending_transport_failure_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(httpx.MockTransport(handler))

    with pytest.raises(TrendingApiError):
        await client.get_trending()


async def test_trending_non_json_body_raises():
    client = make_client(httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html>")))

    with pytest.raises(MalformedResponseError):
        await client.get_trending()


async def test_download_returns_bytes(gif_bytes):
    client = make_client(giphy_transport({"data": []}, gif_bytes=gif_bytes))

    async with client.session() as giphy:
        content = await giphy.download("https://media.giphy.test/a.gif")

    assert content == gif_bytes


async def test_download_failure_raises():
    url = "https://media.giphy.test/gone.gif"
    client = make_client(giphy_transport({"data": []}, failing_urls={url}))

    with pytest.raises(DownloadError) as exc_info:
        await client.download(url)

    assert exc_info.value.url == url


async def test_session_does_not_bind_original_client():
    client = make_client(giphy_transport({"data": []}))

    async with client.session() as giphy:
        assert giphy is not client
        assert client._http is None


async def test_transport_failure_does_not_expose_url():
    def handler(request):
        raise httpx.ConnectError(f"cannot reach {request.url}", request=request)

    client = make_client(httpx.MockTransport(handler))

    with pytest.raises(TrendingApiError) as exc_info:
        await client.get_trending()

    assert "secret" not in exc_info.value.message
    assert exc_info.value.__suppress_context__
