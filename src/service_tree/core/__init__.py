"""Core runtime aggregator for Service Tree.

Exposes the runtime building blocks from a single module: data model,
parser, resolver, normalizer, dispatcher and node builders.

Importing this module performs only imports; it does not register plugins
or build any tree.
"""

from .builders import directory, http_get, http_node, http_post, http_put, json_node
from .decorators import authenticate
from .dispatcher import Dispatcher, handle_request
from .models import CORS_HEADERS, HTTP_VERBS, Request, Response
from .normalizer import get_error
from .parsing import get_request_data, parse_path, read_parts, read_values
from .resolver import resolve
from .service_node import ServiceNode

__all__ = [
    "CORS_HEADERS",
    "HTTP_VERBS",
    "Dispatcher",
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
