"""Convenience constructors for service nodes.

All builders return the same ``ServiceNode`` shape; they only differ in
which verb handlers they pre-populate.

- ``json_node(value, children)``: GET returns ``value``.
- ``http_node(methods, children)``: explicit methods and children.
- ``directory(children)``: GET returns ``"directory"``.
- ``http_get`` / ``http_post`` / ``http_put``: leaf with a single handler.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .models import Request, Response
from .service_node import AuthAccessor, RequestHandler, ServiceNode

__all__ = ["directory", "http_get", "http_node", "http_post", "http_put", "json_node"]


def _constant(value: Any) -> RequestHandler[Any]:
    async def handler(request: Request, auth: AuthAccessor[Any]) -> Response:
        return Response(status_code=200, headers={}, body=value)

    return handler


def http_node(
    methods: Mapping[str, RequestHandler[Any]],
    children: Mapping[str, ServiceNode[Any]] | None = None,
) -> ServiceNode[Any]:
    return ServiceNode(methods=methods, children=children if children is not None else {})


def json_node(
    value: Any, children: Mapping[str, ServiceNode[Any]] | None = None
) -> ServiceNode[Any]:
    """Node whose GET handler always returns ``value``."""
    return http_node({"GET": _constant(value)}, children)


def directory(children: Mapping[str, ServiceNode[Any]]) -> ServiceNode[Any]:
    """Branch node listing children; its GET handler returns ``"directory"``."""
    return http_node({"GET": _constant("directory")}, children)


def http_get(handler: RequestHandler[Any]) -> ServiceNode[Any]:
    return http_node({"GET": handler})


def http_post(handler: RequestHandler[Any]) -> ServiceNode[Any]:
    return http_node({"POST": handler})


def http_put(handler: RequestHandler[Any]) -> ServiceNode[Any]:
    return http_node({"PUT": handler})
