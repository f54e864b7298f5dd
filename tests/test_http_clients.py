"""Tests for HTTP-based adapters."""

import asyncio
import json

import httpx
import pytest

from flickr_unfurl.adapters.flickr_client import HttpxFlickrClient
from flickr_unfurl.adapters.slack_client import HttpxSlackClient
from flickr_unfurl.errors import FlickrApiError, SlackApiError


def test_flickr_client_calls_rest_methods() -> None:
    seen: list[dict[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(dict(request.url.params))
        return httpx.Response(200, json={"stat": "ok", "photo": {"id": "1"}})

    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport)
    client = HttpxFlickrClient(
        api_key="key",
        base_url="https://api.test/services/rest",
        http_client=async_client,
    )

    info = asyncio.run(client.get_info("1"))
    asyncio.run(client.get_sizes("1"))
    asyncio.run(client.get_all_contexts("1"))

    assert info["photo"] == {"id": "1"}
    assert [params["method"] for params in seen] == [
        "flickr.photos.getInfo",
        "flickr.photos.getSizes",
        "flickr.photos.getAllContexts",
    ]
    assert seen[0]["api_key"] == "key"
    assert seen[0]["photo_id"] == "1"
    assert seen[0]["format"] == "json"
    assert seen[0]["nojsoncallback"] == "1"


def test_flickr_client_raises_on_failed_stat() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, json={"stat": "fail", "code": 1, "message": "Photo not found"}
        )

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = HttpxFlickrClient(
        api_key="key", base_url="https://api.test", http_client=async_client
    )

    with pytest.raises(FlickrApiError, match="Photo not found"):
        asyncio.run(client.get_info("1"))


def test_flickr_client_raises_on_http_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = HttpxFlickrClient(
        api_key="key", base_url="https://api.test", http_client=async_client
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.get_sizes("1"))


def test_slack_client_posts_unfurls() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"ok": True})

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = HttpxSlackClient(
        token="xoxb-test", base_url="https://slack.test/api", http_client=async_client
    )

    asyncio.run(
        client.unfurl(
            channel="C123",
            ts="1.0",
            unfurls={"https://flickr.com/photos/o/1/": {"title": "Sunset"}},
        )
    )

    request = captured[0]
    assert request.url.path == "/api/chat.unfurl"
    assert request.headers["Authorization"] == "Bearer xoxb-test"
    assert json.loads(request.content.decode()) == {
        "channel": "C123",
        "ts": "1.0",
        "unfurls": {"https://flickr.com/photos/o/1/": {"title": "Sunset"}},
    }


def test_slack_client_raises_when_not_ok() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"ok": False, "error": "cannot_unfurl_url"})

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = HttpxSlackClient(
        token="xoxb-test", base_url="https://slack.test/api", http_client=async_client
    )

    with pytest.raises(SlackApiError, match="cannot_unfurl_url"):
        asyncio.run(client.unfurl(channel="C1", ts="1.0", unfurls={}))
