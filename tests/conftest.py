from unittest.mock import Mock

import pytest

from route_dispatch import Router
from route_dispatch.registry import RouteRegistry


@pytest.fixture
def funct():
    """Mock function for testing purposes."""
    return Mock(__name__="Mock", return_value=None)


@pytest.fixture
def registry():
    return RouteRegistry()


@pytest.fixture
def router():
    """Router without log handlers."""
    return Router(name="test", configure_logs=False)
