import io

import httpx
import pytest
from PIL import Image

from gif_pipeline.integrations.giphy_client import GiphyClient
from gif_pipeline.services.storage.local_service import LocalService
from gif_pipeline.services.storage.storage_service import StorageService

TEST_BUCKET = "test-bucket"


def make_gif(width=200, height=100, frames=1):
    """Encode a small solid-color GIF."""
    images = [
        Image.new("RGB", (width, height), color=(40 * i % 256, 120, 200))
        for i in range(frames)
    ]
    buffer = io.BytesIO()
    images[0].save(buffer, format="GIF", save_all=frames > 1, append_images=images[1:])
    return buffer.getvalue()


def trending_item(url, item_type="gif"):
    return {
        "type": item_type,
        "id": url.rsplit("/", 1)[-1],
        "images": {"original": {"url": url, "width": "200", "height": "100"}},
    }


def giphy_transport(payload, gif_bytes=None, failing_urls=(), trending_status=200, requests=None):
    """
    Fake Giphy: serves ``payload`` on the trending endpoint and ``gif_bytes``
    for every other URL, answering 404 for ``failing_urls``.
    """
    gif_bytes = gif_bytes if gif_bytes is not None else make_gif()

    def handler(request):
        if requests is not None:
            requests.append(request)
        if request.url.path == "/v1/gifs/trending":
            return httpx.Response(trending_status, json=payload)
        if str(request.url) in failing_urls:
            return httpx.Response(404)
        return httpx.Response(200, content=gif_bytes)

    return httpx.MockTransport(handler)


@pytest.fixture
def gif_bytes():
    return make_gif()


@pytest.fixture
def local_backend(tmp_path):
    """Local filesystem bucket rooted in a temporary directory."""
    return LocalService(TEST_BUCKET, base_dir=str(tmp_path))


@pytest.fixture
def storage_service(local_backend):
    return StorageService(backend=local_backend)


@pytest.fixture
def make_giphy_client():
    def _make(payload, **kwargs):
        transport = giphy_transport(payload, **kwargs)
        return GiphyClient(
            api_key="test-key",
            base_url="https://api.giphy.test",
            limit=25,
            timeout=5.0,
            transport=transport,
        )

    return _make
