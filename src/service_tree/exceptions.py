# Copyright 2025 Softwell S.r.l. - All Rights Reserved
# SPDX-License-Identifier: Apache-2.0
"""Exceptions for Service Tree.

This module defines the error shape understood natively by the dispatch
pipeline, plus the adapter used to bring errors raised by other libraries
into that shape.
"""

from __future__ import annotations

from typing import Any

import httpx

__all__ = [
    "HttpError",
    "NotFound",
    "from_upstream",
]


class HttpError(Exception):
    """Error carrying an HTTP status code.

    Attributes:
        status_code: HTTP status code delivered to the client.
        message: Human-readable message (may be None).
        body: Optional structured payload included in the error response.
    """

    def __init__(self, status_code: int, message: str | None = None, body: Any = None) -> None:
        self.status_code = status_code
        self.message = message
        self.body = body
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.status_code}, {self.message!r})"


class NotFound(HttpError):
    """Raised when a path segment or handler does not exist (404)."""

    def __init__(self, message: str | None = None, body: Any = None) -> None:
        super().__init__(404, message, body)


def from_upstream(error: BaseException) -> HttpError | None:
    """Adapt an error raised outside the package into an ``HttpError``.

    Recognizes ``httpx.HTTPStatusError`` and any exception exposing an integer
    ``status_code`` (or ``statusCode``) attribute. Status code, message and an
    optional ``body`` attribute are preserved.

    Returns:
        The adapted HttpError, or None when the error carries no status code.
    """
    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        return HttpError(response.status_code, str(error) or None, _response_body(response))

    for attr in ("status_code", "statusCode"):
        code = getattr(error, attr, None)
        if isinstance(code, int) and not isinstance(code, bool) and code:
            message = getattr(error, "message", None) or str(error) or None
            return HttpError(code, message, getattr(error, "body", None))
    return None


def _response_body(response: httpx.Response) -> Any:
    """Decoded body of an upstream response; None for an unread stream."""
    try:
        content = response.content
    except httpx.ResponseNotRead:
        return None
    if not content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
