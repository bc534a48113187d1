# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Downstream call helper.

``make_request`` lets a handler call another service and get back a
``Response`` shaped like the ones handlers return. The whole body is read as
UTF-8 text and parsed as JSON when non-empty.

Transport failures (``httpx.TransportError``) propagate to the caller; error
statuses are returned, not raised.

Example::

    async def proxy(request, auth):
        upstream = await make_request("GET", "https://api.example.com/items")
        return Response(body=upstream.body)
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping

import httpx

from service_tree.core.models import Response

__all__ = ["make_request"]

logger = logging.getLogger("service_tree.client")


async def make_request(
    method: str,
    url: str,
    *,
    headers: Mapping[str, str] | None = None,
    content: str | bytes | None = None,
    client: httpx.AsyncClient | None = None,
    timeout: float = 10.0,
) -> Response:
    """Issue an HTTP request and return its parsed outcome.

    Args:
        method: HTTP verb.
        url: Target URL.
        headers: Request headers.
        content: Request body, sent as-is when truthy.
        client: Client to use. A temporary client is created (and closed)
            when omitted.
        timeout: Timeout in seconds for the temporary client.

    Returns:
        ``Response(status_code, {}, body)`` where ``body`` is the decoded JSON
        document, or None for an empty body. ``status_code`` falls back to 500
        when the transport reports none.

    Raises:
        httpx.TransportError: On connection or protocol failures.
        json.JSONDecodeError: If a non-empty body is not valid JSON.
    """
    if client is None:
        async with httpx.AsyncClient(timeout=timeout) as temporary:
            return await make_request(
                method, url, headers=headers, content=content, client=temporary
            )

    response = await client.request(method, url, headers=headers, content=content or None)
    text = response.content.decode("utf-8")
    logger.debug("%s %s -> %s (%d bytes)", method, url, response.status_code, len(text))
    return Response(
        status_code=response.status_code or 500,
        headers={},
        body=json.loads(text) if text else None,
    )
