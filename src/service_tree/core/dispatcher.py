# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Dispatcher - request pipeline over a service tree.

``Dispatcher`` binds a root ``ServiceNode`` and turns each incoming request
into exactly one call of a response callback::

    parse -> resolve -> method lookup -> invoke -> respond or error

Entry point
-----------
``handle(auth, request, callback)`` is the entry point attached to a server
or function-as-a-service runtime. It returns nothing: results flow through
``callback(status_code, headers, body)``, which is invoked exactly once for
every request, whether the handler succeeds, the path or verb is missing, or
an error is raised at any stage. ``handle_request(root)`` returns the bound
``handle`` of a fresh dispatcher.

Outcomes:

- handler found: ``callback(200, base headers | response headers, body)``;
  the handler's own status code is ignored.
- no handler, verb ``OPTIONS``: ``callback(200, base headers, {})``.
- no handler, other verb: ``callback(404, base headers, {})``.
- any exception: normalized by ``get_error`` and delivered as
  ``callback(error.status_code, base headers, {request, message, body})``.

Plugins
-------
Plugin classes register globally with ``Dispatcher.register_plugin`` and are
attached per dispatcher with ``plug(name, **options)``. For every dispatched
request the attached plugins wrap the selected handler in reverse order, so
the last one attached runs closest to the handler. A plugin whose
``config.enabled`` is False is skipped.

Example::

    from service_tree import Dispatcher, directory, http_get

    root = directory({"health": http_get(health)})
    dispatcher = Dispatcher(root).plug("logging")
    await dispatcher.handle(auth, request, callback)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from genro_toolbox import dictExtract

from service_tree.exceptions import HttpError
from service_tree.plugins._base_plugin import BasePlugin, HandlerEntry

from .models import Request, Response, base_headers
from .normalizer import error_body, get_error
from .parsing import parse_path, read_parts
from .resolver import resolve
from .service_node import AuthAccessor, ServiceNode

__all__ = ["Dispatcher", "ResponseCallback", "handle_request"]

U = TypeVar("U")

ResponseCallback = Callable[[int, dict[str, Any], Any], None]

_PLUGIN_REGISTRY: dict[str, type[BasePlugin]] = {}


class Dispatcher(Generic[U]):
    """Request pipeline bound to a service tree root.

    Args:
        root: Root node of the service tree.
        logger: Logger used by the pipeline and its plugins
            (default: the ``service_tree`` logger).
    """

    __slots__ = ("root", "logger", "_plugins")

    def __init__(self, root: ServiceNode[U], *, logger: logging.Logger | None = None) -> None:
        if not isinstance(root, ServiceNode):
            raise TypeError(f"Dispatcher root must be a ServiceNode, got {type(root).__name__}")
        self.root = root
        self.logger = logger or logging.getLogger("service_tree")
        self._plugins: dict[str, BasePlugin] = {}

    # ------------------------------------------------------------------
    # Plugins
    # ------------------------------------------------------------------
    @classmethod
    def register_plugin(cls, plugin_class: type[BasePlugin]) -> None:
        """Register a plugin class under its ``plugin_code``.

        Raises:
            TypeError: If plugin_class is not a BasePlugin subclass.
            ValueError: If plugin_code is missing or taken by another class.
        """
        if not isinstance(plugin_class, type) or not issubclass(plugin_class, BasePlugin):
            raise TypeError("plugin_class must be a BasePlugin subclass")
        code = plugin_class.plugin_code
        if not code:
            raise ValueError(f"Plugin {plugin_class.__name__} is missing plugin_code")
        existing = _PLUGIN_REGISTRY.get(code)
        if existing is not None and existing is not plugin_class:
            raise ValueError(f"Plugin '{code}' already registered")
        _PLUGIN_REGISTRY[code] = plugin_class

    @classmethod
    def available_plugins(cls) -> list[str]:
        return sorted(_PLUGIN_REGISTRY)

    def plug(self, plugin: str, **options: Any) -> Dispatcher[U]:
        """Attach a registered plugin by name and return self.

        Raises:
            ValueError: If plugin is not registered or already attached.
            pydantic.ValidationError: If ``options`` do not fit the plugin.
        """
        plugin_class = _PLUGIN_REGISTRY.get(plugin)
        if plugin_class is None:
            available = ", ".join(self.available_plugins()) or "none"
            raise ValueError(f"Unknown plugin '{plugin}'. Available plugins: {available}")
        if plugin in self._plugins:
            raise ValueError(f"Plugin '{plugin}' is already attached to this dispatcher")
        self._plugins[plugin] = plugin_class(self, **options)
        return self

    def configure(self, **options: Any) -> Dispatcher[U]:
        """Route ``<plugin_code>_<key>`` options to the attached plugins.

        Example::

            dispatcher.configure(logging_level="DEBUG", logging_enabled=False)

        Raises:
            ValueError: If an option does not belong to an attached plugin.
        """
        remaining = set(options)
        for code, plugin in self._plugins.items():
            prefix = f"{code}_"
            plugin_options = dictExtract(options, prefix, slice_prefix=True, pop=False)
            if plugin_options:
                plugin.configure(**plugin_options)
                remaining -= {prefix + key for key in plugin_options}
        if remaining:
            raise ValueError(f"Unknown configuration options: {', '.join(sorted(remaining))}")
        return self

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        plugin = self._plugins.get(name)
        if plugin is None:
            raise AttributeError(f"No plugin named '{name}' attached to dispatcher")
        return plugin

    def _wrap_handler(self, entry: HandlerEntry, call_next: Callable) -> Callable:
        wrapped = call_next
        for plugin in reversed(self._plugins.values()):
            if plugin.config.enabled:
                wrapped = plugin.wrap_handler(self, entry, wrapped)
        return wrapped

    # ------------------------------------------------------------------
    # Request pipeline
    # ------------------------------------------------------------------
    def _locate(self, request: Request) -> tuple[list[str], ServiceNode[U], Request]:
        """Parse the request path and resolve it against the root.

        Returns the segments, the resolved node and the request handed to the
        handler. When the transport left the query suffix on the path, the
        handler receives a copy with ``query`` filled in.
        """
        path, query = parse_path(request.path)
        segments = read_parts(path)
        node = resolve(self.root, segments)
        if query is not None and request.query is None:
            request = request.model_copy(update={"path": path, "query": query})
        return segments, node, request

    async def handle(
        self, auth: AuthAccessor[U], request: Request, callback: ResponseCallback
    ) -> None:
        """Dispatch ``request`` and deliver the outcome to ``callback`` once."""
        try:
            segments, node, scoped = self._locate(request)
        except Exception as error:
            self._return_error(request, error, callback)
            return

        handler = node.handler(request.method)
        if handler is None:
            status = 200 if request.method == "OPTIONS" else 404
            callback(status, base_headers(), {})
            return

        entry = HandlerEntry(verb=request.method, segments=tuple(segments))
        try:
            response = await self._wrap_handler(entry, handler)(scoped, auth)
            if not isinstance(response, Response):
                raise TypeError(
                    f"Handler for '{entry.name}' returned {type(response).__name__}, "
                    "expected Response"
                )
        except Exception as error:
            self._return_error(request, error, callback)
            return
        self._return_response(response, callback)

    async def respond(self, auth: AuthAccessor[U], request: Request) -> Response:
        """Dispatch ``request`` and return the delivered outcome as a Response."""
        delivered: list[Response] = []

        def collect(status_code: int, headers: dict[str, Any], body: Any) -> None:
            delivered.append(Response(status_code=status_code, headers=headers, body=body))

        await self.handle(auth, request, collect)
        return delivered[0]

    def _return_response(self, response: Response, callback: ResponseCallback) -> None:
        callback(200, {**base_headers(), **response.headers}, response.body)

    def _return_error(
        self, request: Request, error: BaseException, callback: ResponseCallback
    ) -> None:
        try:
            http_error = get_error(error, self.logger)
        except Exception:
            self.logger.exception("Failed to normalize %s", type(error).__name__)
            http_error = HttpError(500, str(error) or None)
        callback(http_error.status_code, base_headers(), error_body(request, http_error))


def handle_request(
    root: ServiceNode[U], *, logger: logging.Logger | None = None
) -> Callable[..., Any]:
    """Return the ``(auth, request, callback)`` entry point for ``root``."""
    return Dispatcher(root, logger=logger).handle
