# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Error normalizer.

Every failure reaching the dispatcher boundary is turned into an
``HttpError`` here, then rendered by ``error_body``.

Resolution order:

1. ``HttpError`` instances pass through unchanged.
2. Errors recognized by ``service_tree.exceptions.from_upstream`` keep their
   status code, message and body.
3. Anything else is logged and becomes a 500.
"""

from __future__ import annotations

import logging
from typing import Any

from service_tree.exceptions import HttpError, from_upstream

from .models import Request

__all__ = ["error_body", "get_error"]

_logger = logging.getLogger("service_tree")


def get_error(error: BaseException, logger: logging.Logger | None = None) -> HttpError:
    """Convert ``error`` into an ``HttpError``.

    Unknown errors are logged on ``logger`` (default: the ``service_tree``
    logger) with their traceback.
    """
    if isinstance(error, HttpError):
        return error
    adapted = from_upstream(error)
    if adapted is not None:
        return adapted
    (logger or _logger).error(
        "Caught an unknown error: %s (%s)",
        error,
        type(error).__name__,
        exc_info=(type(error), error, error.__traceback__),
    )
    return HttpError(500, str(error) or None)


def error_body(request: Request, error: HttpError) -> dict[str, Any]:
    """Build the body delivered with an error response."""
    return {
        "request": request,
        "message": error.message,
        "body": error.body,
    }
