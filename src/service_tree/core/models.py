# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Request and response models exchanged with the dispatch pipeline.

``Request`` is what the transport hands to the dispatcher; ``Response`` is what
a handler produces. Both are frozen pydantic models: a request is never
modified once received and a response is built fresh for every request.

Constants
---------
- ``HTTP_VERBS``: verbs a service node may expose handlers for.
- ``READ_VERBS``: verbs whose request data comes from the query string.
- ``CORS_HEADERS``: header set applied to every response.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["CORS_HEADERS", "HTTP_VERBS", "READ_VERBS", "Request", "Response", "base_headers"]

HTTP_VERBS: frozenset[str] = frozenset({"GET", "POST", "PUT", "DELETE", "OPTIONS"})

READ_VERBS: frozenset[str] = frozenset({"GET", "DELETE"})

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Authorization, Content-Type, Auth-Provider",
    "Access-Control-Allow-Methods": "OPTIONS, GET, POST, PUT",
    "Content-Type": "application/json",
}


def base_headers() -> dict[str, Any]:
    """Return a fresh copy of the fixed response headers."""
    return dict(CORS_HEADERS)


class Request(BaseModel):
    """Incoming request as received from the transport.

    Attributes:
        method: HTTP verb (e.g. "GET").
        path: Slash-delimited path, possibly followed by a ``?query`` suffix.
        headers: Header name to value (string or list of strings). Case
            handling is the transport's responsibility.
        query: Pre-parsed query mapping, if the transport provides one.
        body: Raw body text, if any.
    """

    model_config = ConfigDict(frozen=True)

    method: str
    path: str = ""
    headers: dict[str, str | list[str] | None] = Field(default_factory=dict)
    query: dict[str, Any] | None = None
    body: str | None = None


class Response(BaseModel):
    """Response produced by a request handler."""

    model_config = ConfigDict(frozen=True)

    status_code: int = 200
    headers: dict[str, Any] = Field(default_factory=dict)
    body: Any = None
