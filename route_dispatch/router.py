"""Route registration and dispatch entry point."""

import logging
import os
import sys
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Mapping, MutableMapping, Optional

from route_dispatch.factory import RouteFactory
from route_dispatch.registry import RouteRegistry
from route_dispatch.routing import Route
from route_dispatch.types import DispatchOutcome

DEBUG_ENV = "ROUTE_DISPATCH_DEBUG"


def _env_debug() -> bool:
    return os.environ.get(DEBUG_ENV, "").lower() in ["1", "true", "yes", "on"]


class Router:
    """Router."""

    FORMAT_STRING = "[%(name)s] - [%(levelname)s] - %(message)s"

    def __init__(
        self,
        name: str = "route_dispatch",
        namespace: Optional[str] = None,
        configure_logs: bool = True,
        debug: Optional[bool] = None,
    ) -> None:
        """Initialize Router object."""
        self.name: str = name
        self.debug: bool = _env_debug() if debug is None else debug
        self.log = logging.getLogger(self.name)
        self.factory = RouteFactory(namespace)
        self.registry = RouteRegistry(self.log)
        if configure_logs:
            self._configure_logging()

    @property
    def routes(self) -> List[Route]:
        return self.registry.routes

    def _configure_logging(self) -> None:
        if self._already_configured(self.log):
            return

        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(self.FORMAT_STRING)
        handler.setFormatter(formatter)
        self.log.propagate = False
        if self.debug:
            level = logging.DEBUG
        else:
            level = logging.ERROR
        self.log.setLevel(level)
        self.log.addHandler(handler)

    def _already_configured(self, log) -> bool:
        if not log.handlers:
            return False

        for handler in log.handlers:
            if isinstance(handler, logging.StreamHandler):
                if handler.stream == sys.stdout:
                    return True

        return False

    @contextmanager
    def namespace(self, prefix: str) -> Iterator["Router"]:
        """Register the routes of the block under `prefix`."""
        with self.factory.scope(prefix):
            yield self

    def respond(
        self,
        handler: Callable,
        path: Optional[str] = None,
        method: Any = None,
        count_match: bool = True,
        name: Optional[str] = None,
    ) -> Route:
        """Build and register a route."""
        route = self.factory.build(handler, path, method, count_match, name)
        return self.registry.add(route)

    def route(
        self, path: Optional[str] = None, methods: Any = None, **kwargs
    ) -> Callable:
        """Register route."""
        count_match = kwargs.pop("count_match", True)
        name = kwargs.pop("name", None)
        if kwargs:
            raise TypeError(
                f"TypeError: route() got unexpected keyword "
                f"arguments: {', '.join(list(kwargs))}"
            )

        def _register_view(handler):
            self.respond(handler, path, methods, count_match, name)
            return handler

        return _register_view

    def get(self, path: Optional[str] = None, **kwargs) -> Callable:
        """Register GET route."""
        kwargs["methods"] = "GET"
        return self.route(path, **kwargs)

    def post(self, path: Optional[str] = None, **kwargs) -> Callable:
        """Register POST route."""
        kwargs["methods"] = "POST"
        return self.route(path, **kwargs)

    def put(self, path: Optional[str] = None, **kwargs) -> Callable:
        """Register PUT route."""
        kwargs["methods"] = "PUT"
        return self.route(path, **kwargs)

    def patch(self, path: Optional[str] = None, **kwargs) -> Callable:
        """Register PATCH route."""
        kwargs["methods"] = "PATCH"
        return self.route(path, **kwargs)

    def delete(self, path: Optional[str] = None, **kwargs) -> Callable:
        """Register DELETE route."""
        kwargs["methods"] = "DELETE"
        return self.route(path, **kwargs)

    def options(self, path: Optional[str] = None, **kwargs) -> Callable:
        """Register OPTIONS route."""
        kwargs["methods"] = "OPTIONS"
        return self.route(path, **kwargs)

    def head(self, path: Optional[str] = None, **kwargs) -> Callable:
        """Register HEAD route."""
        kwargs["methods"] = "HEAD"
        return self.route(path, **kwargs)

    def find_by_name(self, name: str) -> Optional[Route]:
        return self.registry.find_by_name(name)

    def path_for(self, name: str, params: Optional[Mapping[str, Any]] = None) -> str:
        return self.registry.path_for(name, params)

    def dispatch(
        self,
        method: str,
        path: str,
        params: Optional[MutableMapping[str, Any]] = None,
    ) -> DispatchOutcome:
        """Dispatch a request to the matching routes."""
        outcome = self.registry.dispatch(method, path, params)
        if not outcome.matched:
            self.log.info(f"No route matched: {method.upper()} - {path}")
        return outcome

    def __call__(self, method: str, path: str) -> DispatchOutcome:
        return self.dispatch(method, path)
