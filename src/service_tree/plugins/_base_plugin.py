"""Plugin contract for the Service Tree dispatcher.

A plugin wraps the handler selected for a request. The dispatcher builds the
chain once per request, last attached plugin closest to the handler.

``HandlerEntry``
    What the dispatcher knows about the selected handler: the request verb
    and the segments that resolved to the node.

``BasePlugin``
    Subclasses set ``plugin_code`` and may declare a ``Config`` pydantic model
    listing their options. ``configure(**options)`` validates the options
    against that model and merges them into ``self.config``.

Example::

    class TimingHeader(BasePlugin):
        plugin_code = "timing"

        class Config(PluginConfig):
            header: str = "X-Elapsed"

        def wrap_handler(self, dispatcher, entry, call_next):
            async def timed(request, auth):
                response = await call_next(request, auth)
                headers = {**response.headers, self.config.header: "..."}
                return response.model_copy(update={"headers": headers})
            return timed
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict

__all__ = ["BasePlugin", "HandlerEntry", "PluginConfig"]


@dataclass(frozen=True)
class HandlerEntry:
    verb: str
    segments: tuple[str, ...]

    @property
    def path(self) -> str:
        return "/" + "/".join(self.segments)

    @property
    def name(self) -> str:
        return f"{self.verb} {self.path}"


class PluginConfig(BaseModel):
    """Options shared by every plugin."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    enabled: bool = True


class BasePlugin:
    plugin_code: str = ""
    Config: type[PluginConfig] = PluginConfig

    def __init__(self, dispatcher: Any, **options: Any) -> None:
        self._dispatcher = dispatcher
        self.config = self.Config()
        self.configure(**options)

    @property
    def name(self) -> str:
        return self.plugin_code

    def configure(self, **options: Any) -> None:
        """Validate ``options`` and merge them into the current config.

        Raises:
            pydantic.ValidationError: On unknown options or wrong types.
        """
        if options:
            self.config = self.Config.model_validate({**self.config.model_dump(), **options})

    def wrap_handler(self, dispatcher: Any, entry: HandlerEntry, call_next: Callable) -> Callable:
        """Return an async ``(request, auth) -> Response`` around ``call_next``."""
        return call_next
