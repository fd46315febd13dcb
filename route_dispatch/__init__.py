"""route-dispatch: ordered HTTP path routing."""

from route_dispatch.collection import ParamCollection
from route_dispatch.errors import (
    InvalidHandlerError,
    InvalidMethodError,
    PatternError,
    RouteNotFoundError,
    RoutingError,
)
from route_dispatch.factory import RouteFactory
from route_dispatch.registry import RouteRegistry
from route_dispatch.router import Router
from route_dispatch.routing import Matcher, Route, compile_pattern
from route_dispatch.types import Control, DispatchOutcome, Request

__version__ = "1.0.0"

__all__ = [
    "Control",
    "DispatchOutcome",
    "InvalidHandlerError",
    "InvalidMethodError",
    "Matcher",
    "ParamCollection",
    "PatternError",
    "Request",
    "Route",
    "RouteFactory",
    "RouteNotFoundError",
    "RouteRegistry",
    "Router",
    "RoutingError",
    "compile_pattern",
]
