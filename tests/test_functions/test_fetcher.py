import json
import logging

import pytest

from conftest import trending_item
from gif_pipeline.core.exceptions import MalformedResponseError
from gif_pipeline.functions.fetcher import Fetcher, extract_gif_urls
from gif_pipeline.services.keys import original_object_key


def test_extract_keeps_only_gifs_in_order():
    payload = {
        "data": [
            trending_item("A"),
            trending_item("B", item_type="sticker"),
            trending_item("C"),
        ]
    }

    assert extract_gif_urls(payload) == ["A", "C"]


def test_extract_skips_gifs_without_original_url():
    payload = {"data": [{"type": "gif", "images": {}}, trending_item("C")]}

    assert extract_gif_urls(payload) == ["C"]


def test_extract_ignores_items_with_non_string_type():
    payload = {"data": [{"type": 7}, trending_item("A")]}

    assert extract_gif_urls(payload) == ["A"]


def test_extract_requires_data():
    with pytest.raises(MalformedResponseError):
        extract_gif_urls({"pagination": {}})


async def test_fetch_stores_every_gif(make_giphy_client, storage_service, gif_bytes):
    urls = ["https://media.giphy.test/1/giphy.gif", "https://media.giphy.test/2/giphy.gif"]
    payload = {"data": [trending_item(url) for url in urls]}
    fetcher = Fetcher(make_giphy_client(payload, gif_bytes=gif_bytes), storage_service)

    response = await fetcher.run({"source": "scheduler"})

    assert response.status_code == 200
    body = json.loads(response.body)
    assert body["message"] == "Gifs Saved"
    assert [result["key"] for result in body["input"]] == [original_object_key(url) for url in urls]
    for url in urls:
        assert await storage_service.get_object(original_object_key(url)) == gif_bytes


async def test_failed_download_leaves_false_in_its_slot(make_giphy_client, storage_service):
    urls = [f"https://media.giphy.test/{i}/giphy.gif" for i in range(4)]
    payload = {"data": [trending_item(url) for url in urls]}
    fetcher = Fetcher(make_giphy_client(payload, failing_urls={urls[2]}), storage_service, max_concurrency=2)

    response = await fetcher.run()

    body = response.payload()
    assert response.status_code == 200
    assert len(body["input"]) == 4
    assert body["input"][2] is False
    assert all(isinstance(result, dict) for i, result in enumerate(body["input"]) if i != 2)
    assert len(await storage_service.list_objects("original/")) == 3


async def test_failed_write_leaves_false_in_its_slot(make_giphy_client, storage_service, monkeypatch):
    urls = ["https://media.giphy.test/ok.gif", "https://media.giphy.test/bad.gif"]
    payload = {"data": [trending_item(url) for url in urls]}
    put_object = storage_service.put_object

    async def flaky_put(key, body, content_type=None):
        if key == original_object_key(urls[1]):
            raise RuntimeError("bucket unavailable")
        return await put_object(key, body, content_type)

    monkeypatch.setattr(storage_service, "put_object", flaky_put)
    fetcher = Fetcher(make_giphy_client(payload), storage_service)

    body = (await fetcher.run()).payload()

    assert body["input"][0]["key"] == original_object_key(urls[0])
    assert body["input"][1] is False


async def test_missing_data_returns_500(make_giphy_client, storage_service):
    fetcher = Fetcher(make_giphy_client({"meta": {"status": 200}}), storage_service)

    response = await fetcher.run()

    assert response.status_code == 500
    body = response.payload()
    assert body["message"] == "Failed to get from Giphy"
    assert body["error"]["code"] == "malformed_response"


async def test_upstream_error_returns_500(make_giphy_client, storage_service):
    fetcher = Fetcher(make_giphy_client({"message": "boom"}, trending_status=503), storage_service)

    response = await fetcher.run()

    assert response.status_code == 500
    assert response.payload()["error"]["code"] == "upstream_unavailable"


async def test_no_gifs_returns_empty_result(make_giphy_client, storage_service):
    payload = {"data": [trending_item("https://media.giphy.test/s.gif", item_type="sticker")]}
    fetcher = Fetcher(make_giphy_client(payload), storage_service)

    response = await fetcher.run()

    assert response.status_code == 200
    assert response.payload()["input"] == []


async def test_api_key_stays_out_of_errors_and_logs(make_giphy_client, storage_service, caplog):
    caplog.set_level(logging.DEBUG)
    fetcher = Fetcher(make_giphy_client({"message": "Unauthorized"}, trending_status=401), storage_service)

    response = await fetcher.run()

    assert response.status_code == 500
    assert response.payload()["error"]["message"] == "Trending API error: 401 Unauthorized"
    assert "test-key" not in response.body
    assert "test-key" not in caplog.text
