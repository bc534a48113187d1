"""Service Tree - tree-shaped request router and dispatch pipeline.

Public API surface for assembling a static tree of service nodes and
dispatching HTTP-style requests against it without a web framework.

Public exports:
    - ``ServiceNode``: Verb handlers plus named children
    - ``Dispatcher``: Request pipeline bound to a tree root
    - ``handle_request``: ``(auth, request, callback)`` entry point factory
    - ``authenticate``: Wrap ``handler(user, request)`` into a request handler
    - ``Request`` / ``Response``: Models exchanged with handlers
    - ``HttpError`` / ``NotFound``: Error shape understood by the pipeline

Plugin registration happens lazily via ``import_module`` to avoid cycles.
Built-in plugins (logging) are auto-registered on first import.

Example::

    from service_tree import Response, directory, handle_request, http_get

    async def health(request, auth):
        return Response(body={"status": "ok"})

    handle = handle_request(directory({"health": http_get(health)}))
    await handle(auth, request, callback)
"""

from importlib import import_module

__version__ = "0.3.0"

from .core import (
    CORS_HEADERS,
    HTTP_VERBS,
    Dispatcher,
    Request,
    Response,
    ServiceNode,
    authenticate,
    directory,
    get_error,
    get_request_data,
    handle_request,
    http_get,
    http_node,
    http_post,
    http_put,
    json_node,
    parse_path,
    read_parts,
    read_values,
    resolve,
)
from .exceptions import HttpError, NotFound

# Import plugins to trigger auto-registration (lazy to avoid cycles)
for _plugin in ("logging",):
    import_module(f"{__name__}.plugins.{_plugin}")
del _plugin

__all__ = [
    "CORS_HEADERS",
    "HTTP_VERBS",
    "Dispatcher",
    "HttpError",
    "NotFound",
    "Request",
    "Response",
    "ServiceNode",
    "authenticate",
    "directory",
    "get_error",
    "get_request_data",
    "handle_request",
    "http_get",
    "http_node",
    "http_post",
    "http_put",
    "json_node",
    "parse_path",
    "read_parts",
    "read_values",
    "resolve",
]
