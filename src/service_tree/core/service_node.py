# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""ServiceNode - one point of the routing tree.

A node holds verb handlers and named children. The tree is assembled once at
process start and shared read-only by every in-flight request: both mappings
are exposed through ``MappingProxyType`` so no request can change them.

Every node and handler of a tree is parametrized over the same user type
``U``, the value produced by the authentication accessor.

Example::

    async def list_users(request, auth):
        return Response(body=["alice", "bob"])

    root = ServiceNode(children={"users": ServiceNode({"GET": list_users})})
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Generic, TypeVar

from .models import HTTP_VERBS, Request, Response

__all__ = ["AuthAccessor", "RequestHandler", "ServiceNode"]

U = TypeVar("U")

AuthAccessor = Callable[[], Awaitable[U]]
RequestHandler = Callable[[Request, AuthAccessor[U]], Awaitable[Response]]


@dataclass(frozen=True, eq=False)
class ServiceNode(Generic[U]):
    """Verb handlers plus named children.

    Attributes:
        methods: Verb name to request handler. Keys must be in ``HTTP_VERBS``.
        children: Path segment to child node. Segment names are matched with
            case-sensitive string equality. ``None`` marks a malformed node
            that cannot be descended into.

    Nodes compare and hash by identity.

    Raises:
        ValueError: If a method key is not a recognized HTTP verb.
        TypeError: If a child is not a ServiceNode.
    """

    methods: Mapping[str, RequestHandler[U]] = field(default_factory=dict)
    children: Mapping[str, ServiceNode[U]] | None = field(default_factory=dict)

    def __post_init__(self) -> None:
        unknown = sorted(set(self.methods) - HTTP_VERBS)
        if unknown:
            raise ValueError(f"Unsupported HTTP verbs: {', '.join(unknown)}")
        object.__setattr__(self, "methods", MappingProxyType(dict(self.methods)))
        if self.children is None:
            return
        for name, child in self.children.items():
            if not isinstance(child, ServiceNode):
                raise TypeError(
                    f"Child {name!r} must be a ServiceNode, got {type(child).__name__}"
                )
        object.__setattr__(self, "children", MappingProxyType(dict(self.children)))

    def handler(self, verb: str) -> RequestHandler[U] | None:
        """Return the handler registered for ``verb``, or None."""
        return self.methods.get(verb)

    def __repr__(self) -> str:
        verbs = ",".join(sorted(self.methods))
        names = "-" if self.children is None else ",".join(self.children)
        return f"ServiceNode(methods=[{verbs}], children=[{names}])"
