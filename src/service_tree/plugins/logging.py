"""Access logging for dispatched requests.

One line per handled request, once the handler has finished::

    GET /users/list -> 200 (1.52 ms)
    POST /users -> 409 (0.87 ms) HttpError

The status is the one the client receives: 200 on success, the error's own
status code when the handler raised one, 500 otherwise. Requests that never
reach a handler (unknown path, missing verb, OPTIONS preflight) are not
logged here.

Options:
    - ``enabled``: turn logging off without detaching the plugin
    - ``level``: level used for regular lines (default ``INFO``)
    - ``slow_ms``: requests slower than this are logged at WARNING

Example::

    dispatcher = Dispatcher(root).plug("logging", slow_ms=250)
"""

from __future__ import annotations

import logging
import time
from typing import Literal

from service_tree.core.dispatcher import Dispatcher
from service_tree.exceptions import HttpError, from_upstream
from service_tree.plugins._base_plugin import BasePlugin, HandlerEntry, PluginConfig


def _status_of(error: Exception) -> int:
    if isinstance(error, HttpError):
        return error.status_code
    adapted = from_upstream(error)
    return adapted.status_code if adapted is not None else 500


class LoggingPlugin(BasePlugin):
    plugin_code = "logging"

    class Config(PluginConfig):
        level: Literal["DEBUG", "INFO", "WARNING"] = "INFO"
        slow_ms: float | None = None

    def __init__(self, dispatcher, *, logger: logging.Logger | None = None, **options):
        self.logger = logger or dispatcher.logger
        super().__init__(dispatcher, **options)

    def _log(self, entry: HandlerEntry, status: int, elapsed: float, suffix: str = "") -> None:
        level = logging.getLevelName(self.config.level)
        if self.config.slow_ms is not None and elapsed > self.config.slow_ms:
            level = logging.WARNING
        self.logger.log(level, "%s -> %d (%.2f ms)%s", entry.name, status, elapsed, suffix)

    def wrap_handler(self, dispatcher, entry, call_next):
        async def logged(request, auth):
            started = time.perf_counter()
            try:
                response = await call_next(request, auth)
            except Exception as error:
                elapsed = (time.perf_counter() - started) * 1000
                self._log(entry, _status_of(error), elapsed, f" {type(error).__name__}")
                raise
            self._log(entry, 200, (time.perf_counter() - started) * 1000)
            return response

        return logged


Dispatcher.register_plugin(LoggingPlugin)
