# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Tree resolver.

``resolve(node, segments)`` descends from ``node`` consuming one segment per
step. There is no best-match fallback and no backtracking: either every
segment names a child at its level, or resolution fails with ``NotFound``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from service_tree.exceptions import NotFound

from .service_node import ServiceNode

__all__ = ["resolve"]

U = TypeVar("U")


def _child(node: ServiceNode[U], segment: str) -> ServiceNode[U]:
    if node.children is None:
        raise NotFound("Illegal node parent. Missing children.")
    child = node.children.get(segment)
    if child is None:
        choices = list(node.children)
        raise NotFound(
            f"Resource not found: {segment}. Did you mean {', '.join(choices)}?",
            {"segment": segment, "choices": choices},
        )
    return child


def resolve(node: ServiceNode[U], segments: Sequence[str]) -> ServiceNode[U]:
    """Return the node reached by following ``segments`` from ``node``.

    Args:
        node: Root of the (sub)tree.
        segments: Path segments, e.g. ``["users", "list"]``. An empty
            sequence returns ``node`` itself.

    Raises:
        NotFound: If a node on the way has no children mapping, or a segment
            is not one of its children. The message lists the valid names.
    """
    for segment in segments:
        node = _child(node, segment)
    return node
