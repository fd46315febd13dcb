"""Registration-time errors."""


class RoutingError(Exception):
    """Base class for route registration errors."""


class PatternError(RoutingError, ValueError):
    """Malformed path pattern."""

    def __init__(self, message: str, pattern: str) -> None:
        """Initialize error with the offending pattern."""
        super().__init__(f"{message} in pattern '{pattern}'")
        self.pattern = pattern


class InvalidHandlerError(RoutingError, TypeError):
    """Handler is not callable."""


class InvalidMethodError(RoutingError, TypeError):
    """Method filter is neither a string nor a collection of strings."""


class RouteNotFoundError(RoutingError, LookupError):
    """No route registered under the requested name."""
