"""Plugin package for Service Tree.

This package contains built-in plugins for the Dispatcher.

Note: Do not import concrete plugins here to keep imports side-effect free.
Concrete plugin modules (logging) self-register when imported via the main
service_tree package.
"""

__all__: list[str] = []
