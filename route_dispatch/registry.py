"""Ordered route registry and request dispatch."""

import logging
from typing import Any, Dict, Iterator, List, Mapping, MutableMapping, Optional, Set

from route_dispatch.collection import ParamCollection
from route_dispatch.errors import RouteNotFoundError
from route_dispatch.routing import Route
from route_dispatch.types import Control, DispatchOutcome, Request


class RouteRegistry:
    """Routes in registration order.

    Registration order is evaluation order. Routes are expected to be
    registered before dispatching starts: the route list is only read
    during `dispatch`, so concurrent dispatches are safe as long as each
    one uses its own parameter sink.

    """

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        """Initialize registry."""
        self.routes: List[Route] = []
        self.names: Dict[str, Route] = {}
        self.log = log or logging.getLogger(__name__)

    def __len__(self) -> int:
        return len(self.routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self.routes)

    def add(self, route: Route) -> Route:
        """Append a route, later routes with the same name win lookups."""
        if not isinstance(route, Route):
            raise TypeError(f"Expected a Route. Got a {type(route).__name__}")

        self.routes.append(route)
        if route.name is not None:
            self.names[route.name] = route
        self.log.debug(f"Registered {route!r}")
        return route

    def find_by_name(self, name: str) -> Optional[Route]:
        return self.names.get(name)

    def path_for(self, name: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Build the path of the route registered as `name`."""
        route = self.find_by_name(name)
        if route is None:
            raise RouteNotFoundError(f"No route with the name '{name}'")
        return route.matcher.path_for(params)

    def dispatch(
        self,
        method: str,
        path: str,
        params: Optional[MutableMapping[str, Any]] = None,
    ) -> DispatchOutcome:
        """Run every route matching the request, in registration order.

        Captured path parameters are merged into `params` (a new
        ParamCollection by default) before each handler runs. A handler
        returning `Control.STOP` ends the dispatch. Handler exceptions
        propagate to the caller.

        """
        method = method.upper()
        request = Request(
            method, path, params if params is not None else ParamCollection()
        )
        outcome = DispatchOutcome()
        allowed: Set[str] = set()

        for route in self.routes:
            captured = route.match(path)
            if captured is None:
                continue

            allowed.update(route.methods)
            if not route.accepts(method):
                self.log.debug(f"{route!r} skipped: method {method} not allowed")
                continue

            request.params.update(captured)
            if route.count_match:
                outcome.matched_count += 1

            request.route = route
            outcome.executed.append(route)
            control = route(request)
            if control is Control.STOP:
                self.log.debug(f"Dispatch stopped by {route!r}")
                outcome.stopped = True
                break

        outcome.allowed_methods = sorted(allowed)
        self.log.debug(
            f"{method} {path}: {outcome.matched_count} matched, "
            f"{len(outcome.executed)} executed"
        )
        return outcome
