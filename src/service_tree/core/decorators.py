"""Handler helpers.

``authenticate(handler)``
    Turns a plain ``handler(user, request)`` function into a
    ``RequestHandler``. The returned handler awaits the authentication
    accessor first, so ``handler`` never runs for an unauthenticated request,
    then wraps the handler's result into a 200 ``Response``.

    ``handler`` may be a plain function or a coroutine function. Errors raised
    by the accessor or by ``handler`` are not caught here: they reach the
    dispatcher and are normalized there.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from .models import Request, Response
from .service_node import AuthAccessor, RequestHandler

__all__ = ["authenticate"]

U = TypeVar("U")


def authenticate(handler: Callable[[U, Request], Any | Awaitable[Any]]) -> RequestHandler[U]:
    """Wrap ``handler`` so it receives the authenticated user.

    Example::

        @authenticate
        async def profile(user, request):
            return {"name": user.name}

        root = http_get(profile)
    """

    @wraps(handler)
    async def authenticated(request: Request, auth: AuthAccessor[U]) -> Response:
        user = await auth()
        result = handler(user, request)
        if inspect.isawaitable(result):
            result = await result
        return Response(status_code=200, headers={}, body=result)

    return authenticated
