"""Route construction under a namespace prefix."""

from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

from route_dispatch.patterns import WILDCARD
from route_dispatch.routing import Route


class RouteFactory:
    """Build routes, prefixing their path with the current namespace.

    The namespace is a raw string prefix: appending concatenates without
    any slash normalization. A route without a path built under a namespace
    gets the pattern ``namespace + "*"``, matching the namespace itself and
    anything after it.

    """

    def __init__(self, namespace: Optional[str] = None) -> None:
        """Initialize factory."""
        self.namespace = namespace

    def get_namespace(self) -> Optional[str]:
        return self.namespace

    def set_namespace(self, namespace: Optional[str]) -> "RouteFactory":
        self.namespace = namespace
        return self

    def append_namespace(self, namespace: str) -> "RouteFactory":
        self.namespace = (self.namespace or "") + namespace
        return self

    @contextmanager
    def scope(self, namespace: str) -> Iterator["RouteFactory"]:
        """Append `namespace` for the duration of the block."""
        previous = self.namespace
        self.append_namespace(namespace)
        try:
            yield self
        finally:
            self.namespace = previous

    def _preprocess_path(self, path: Optional[str]) -> Optional[str]:
        if not self.namespace:
            return path
        if path is None or path == WILDCARD:
            return self.namespace + WILDCARD
        return self.namespace + path

    def build(
        self,
        handler: Callable,
        path: Optional[str] = None,
        method: Any = None,
        count_match: bool = True,
        name: Optional[str] = None,
    ) -> Route:
        """Build a route with the namespace applied to `path`."""
        return Route(handler, self._preprocess_path(path), method, count_match, name)
