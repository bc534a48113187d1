# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Tests for the downstream call helper."""

import json
import logging

import httpx
import pytest

from service_tree import Dispatcher, Request, Response, http_get
from service_tree.client import make_request


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_json_body_is_parsed():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"items": [1, 2]}, headers={"X-Upstream": "1"})

    async with _client(handler) as client:
        response = await make_request(
            "GET",
            "https://upstream.test/items",
            headers={"Authorization": "Bearer t"},
            client=client,
        )
    assert response == Response(status_code=200, headers={}, body={"items": [1, 2]})
    assert seen == {"method": "GET", "url": "https://upstream.test/items", "auth": "Bearer t"}


@pytest.mark.asyncio
async def test_post_data_is_sent():
    received = []

    def handler(request: httpx.Request) -> httpx.Response:
        received.append(json.loads(request.content))
        return httpx.Response(201, json={"ok": True})

    async with _client(handler) as client:
        response = await make_request(
            "POST", "https://upstream.test/items", content='{"name": "x"}', client=client
        )
    assert received == [{"name": "x"}]
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_empty_body_is_none():
    async with _client(lambda request: httpx.Response(204)) as client:
        response = await make_request("DELETE", "https://upstream.test/items/1", client=client)
    assert (response.status_code, response.body) == (204, None)


@pytest.mark.asyncio
async def test_error_status_is_returned():
    async with _client(lambda request: httpx.Response(404, json={"error": "missing"})) as client:
        response = await make_request("GET", "https://upstream.test/nope", client=client)
    assert (response.status_code, response.body) == (404, {"error": "missing"})


@pytest.mark.asyncio
async def test_transport_error_propagates():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(httpx.ConnectError):
            await make_request("GET", "https://upstream.test/items", client=client)


@pytest.mark.asyncio
async def test_invalid_json_raises():
    async with _client(lambda request: httpx.Response(200, text="<html>")) as client:
        with pytest.raises(json.JSONDecodeError):
            await make_request("GET", "https://upstream.test/page", client=client)


@pytest.mark.asyncio
async def test_transport_error_inside_handler_is_500():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(refuse) as client:

        async def proxy(request, auth):
            upstream = await make_request("GET", "https://upstream.test/items", client=client)
            return Response(body=upstream.body)

        async def anonymous():
            return None

        response = await Dispatcher(http_get(proxy)).respond(anonymous, Request(method="GET"))
    assert response.status_code == 500
    assert response.body["message"] == "connection refused"


@pytest.mark.asyncio
async def test_upstream_status_error_keeps_code():
    async with _client(lambda request: httpx.Response(429, json={"retry": 1})) as client:

        async def proxy(request, auth):
            upstream = await client.get("https://upstream.test/items")
            upstream.raise_for_status()
            return Response(body=upstream.json())

        async def anonymous():
            return None

        response = await Dispatcher(http_get(proxy)).respond(anonymous, Request(method="GET"))
    assert response.status_code == 429
    assert response.body["body"] == {"retry": 1}


class _Unavailable(httpx.AsyncByteStream):
    async def __aiter__(self):
        yield b'{"error": "maintenance"}'


@pytest.mark.asyncio
async def test_streamed_status_error_keeps_code():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, stream=_Unavailable())

    async with _client(handler) as client:

        async def proxy(request, auth):
            async with client.stream("GET", "https://upstream.test/feed") as upstream:
                upstream.raise_for_status()
            return Response(body="unreachable")

        async def anonymous():
            return None

        delivered = []
        dispatcher = Dispatcher(http_get(proxy))
        await dispatcher.handle(
            anonymous, Request(method="GET"), lambda *args: delivered.append(args)
        )
    assert len(delivered) == 1
    status, headers, body = delivered[0]
    assert status == 503
    assert body["body"] is None
    assert headers["Access-Control-Allow-Origin"] == "*"


class _BrokenStatus(Exception):
    @property
    def status_code(self):
        raise RuntimeError("status lookup failed")


@pytest.mark.asyncio
async def test_failing_normalization_still_answers_500(caplog):
    async def handler(request, auth):
        raise _BrokenStatus("gateway confused")

    async def anonymous():
        return None

    delivered = []
    dispatcher = Dispatcher(http_get(handler))
    with caplog.at_level(logging.ERROR, logger="service_tree"):
        await dispatcher.handle(
            anonymous, Request(method="GET"), lambda *args: delivered.append(args)
        )
    assert [(status, body["message"]) for status, _, body in delivered] == [
        (500, "gateway confused")
    ]
    assert "Failed to normalize _BrokenStatus" in caplog.text
