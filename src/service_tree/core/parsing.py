# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Path and query parsing.

The parser performs no normalization at all: no percent-decoding, no
trailing-slash collapsing, no handling of repeated keys. ``"/a/"`` yields the
segments ``["a", ""]`` and the empty last segment takes part in resolution.

Example::

    >>> parse_path("/foo/bar?x=1")
    ParsedPath(path='/foo/bar', query={'x': '1'})
    >>> read_parts("/foo/bar")
    ['foo', 'bar']
"""

from __future__ import annotations

import json
from typing import Any, NamedTuple

from .models import READ_VERBS, Request

__all__ = ["ParsedPath", "get_request_data", "parse_path", "read_parts", "read_values"]


class ParsedPath(NamedTuple):
    path: str
    query: dict[str, str | None] | None


def read_values(raw: str) -> dict[str, str | None]:
    """Parse ``a=1&b=2`` into ``{"a": "1", "b": "2"}``.

    Values are kept raw. A pair without ``=`` maps to None; for a pair with
    several ``=`` only the text up to the second one is kept.
    """
    if not raw:
        return {}
    values: dict[str, str | None] = {}
    for pair in raw.split("&"):
        keys = pair.split("=")
        values[keys[0]] = keys[1] if len(keys) > 1 else None
    return values


def parse_path(raw: str) -> ParsedPath:
    """Split ``raw`` on the first ``?`` into path and parsed query.

    The query is None when no ``?`` is present.
    """
    path, sep, query = raw.partition("?")
    if not sep:
        return ParsedPath(raw, None)
    return ParsedPath(path, read_values(query))


def read_parts(path: str | None) -> list[str]:
    """Drop the leading separator and split the rest on ``/``."""
    if not path:
        return []
    return path[1:].split("/")


def get_request_data(request: Request) -> Any:
    """Return the data carried by ``request``.

    GET and DELETE read the parsed query. Every other verb reads the JSON
    body; an empty or missing body yields None.

    Raises:
        json.JSONDecodeError: If the body is not valid JSON.
    """
    if request.method in READ_VERBS:
        return request.query
    if not request.body:
        return None
    return json.loads(request.body)
