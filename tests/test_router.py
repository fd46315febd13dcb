"""Test route-dispatch router."""

import logging
import sys
from unittest.mock import Mock

import pytest

from route_dispatch import Control, Router
from route_dispatch.errors import InvalidHandlerError, PatternError
from route_dispatch.router import DEBUG_ENV


@pytest.fixture
def clean_logger():
    """Remove handlers added to the 'test-logs' logger."""
    yield "test-logs"
    log = logging.getLogger("test-logs")
    for h in list(log.handlers):
        log.removeHandler(h)


def test_Router_init(clean_logger, monkeypatch):
    """Should work as expected."""
    monkeypatch.delenv(DEBUG_ENV, raising=False)
    app = Router(name=clean_logger)
    assert app.name == clean_logger
    assert len(app.routes) == 0
    assert not app.debug
    assert app.log.getEffectiveLevel() == logging.ERROR
    assert not app.log.propagate
    assert len(app.log.handlers) == 1


def test_Router_debug_logging(clean_logger):
    """Debug router logs at DEBUG level."""
    app = Router(name=clean_logger, debug=True)
    assert app.log.getEffectiveLevel() == logging.DEBUG


def test_Router_debug_from_env(clean_logger, monkeypatch):
    """Debug falls back to the environment."""
    monkeypatch.setenv(DEBUG_ENV, "true")
    assert Router(name=clean_logger, configure_logs=False).debug
    monkeypatch.setenv(DEBUG_ENV, "0")
    assert not Router(name=clean_logger, configure_logs=False).debug
    assert Router(name=clean_logger, configure_logs=False, debug=True).debug


def test_logging_configured_once(clean_logger):
    """A second router with the same name does not add another handler."""
    Router(name=clean_logger)
    Router(name=clean_logger)
    handlers = logging.getLogger(clean_logger).handlers
    assert len(handlers) == 1
    assert handlers[0].stream == sys.stdout


def test_already_configured_no_handlers(router):
    """Logger without handlers is not configured."""
    empty_logger = logging.getLogger("empty_test")
    empty_logger.handlers = []
    assert not router._already_configured(empty_logger)


def test_already_configured_other_stream(router):
    """Only a stdout handler counts."""
    logger = logging.getLogger("stderr_test")
    handler = logging.StreamHandler(sys.stderr)
    logger.addHandler(handler)
    try:
        assert not router._already_configured(logger)
    finally:
        logger.removeHandler(handler)


def test_route_decorators(router):
    """Decorators register routes and return the handler."""

    @router.get("/users/[i:id]", name="user")
    def user(request):
        return Control.STOP

    @router.post("/users")
    def create(request):
        pass

    assert user.__name__ == "user"
    assert [r.method for r in router.routes] == ["GET", "POST"]
    assert router.find_by_name("user").handler is user

    outcome = router("get", "/users/12")
    assert outcome.executed == [router.routes[0]]
    assert outcome.stopped


@pytest.mark.parametrize(
    "verb", ["get", "post", "put", "patch", "delete", "options", "head"]
)
def test_route_verbs(router, funct, verb):
    """Each verb helper sets its method."""
    getattr(router, verb)("/x")(funct)
    assert router.routes[0].method == verb.upper()
    assert router.dispatch(verb, "/x").matched_count == 1


def test_route_methods_list(router, funct):
    """route() accepts a method list."""
    router.route("/x", methods=["get", "post"], count_match=False)(funct)
    route = router.routes[0]
    assert route.method == frozenset(["GET", "POST"])
    assert not route.count_match


def test_route_unexpected_kwargs(router):
    """Unknown options are rejected."""
    with pytest.raises(TypeError):
        router.route("/x", cors=True)


def test_respond_invalid_handler(router):
    """Registration errors leave the router unchanged."""
    with pytest.raises(InvalidHandlerError):
        router.respond(None, "/x")
    with pytest.raises(PatternError):
        router.respond(Mock(), "/users/[i:id")
    assert len(router.routes) == 0


def test_namespace_block(router, funct):
    """Routes registered in a namespace block get the prefix."""
    with router.namespace("/api"):
        router.get("/users")(funct)
        with router.namespace("/admin"):
            router.respond(funct, "/stats")
        router.respond(funct, count_match=False)
    router.get("/health")(funct)

    assert [r.path for r in router.routes] == [
        "/api/users",
        "/api/admin/stats",
        "/api*",
        "/health",
    ]
    outcome = router.dispatch("GET", "/api/users")
    assert outcome.matched_count == 1
    assert [r.path for r in outcome.executed] == ["/api/users", "/api*"]


def test_router_namespace_argument(funct):
    """Router-wide namespace."""
    app = Router(name="ns", namespace="/v1", configure_logs=False)
    app.get("/ping")(funct)
    assert app.routes[0].path == "/v1/ping"


def test_middleware_chain(router):
    """Probe routes run before the endpoint without counting as a match."""
    calls = []

    @router.route(count_match=False)
    def before(request):
        calls.append("before")

    @router.get("/items/[i:id]")
    def item(request):
        calls.append(f"item {request.params['id']}")

    @router.route(count_match=False)
    def after(request):
        calls.append("after")
        return Control.STOP

    @router.route()
    def never(request):
        calls.append("never")

    outcome = router.dispatch("GET", "/items/3")
    assert calls == ["before", "item 3", "after"]
    assert outcome.matched_count == 1
    assert outcome.stopped


def test_not_found_is_logged(router, caplog):
    """A dispatch without match is logged, not raised."""
    router.log.setLevel(logging.INFO)
    with caplog.at_level(logging.INFO, logger="test"):
        outcome = router.dispatch("get", "/nothing")
    assert not outcome.matched
    assert "No route matched: GET - /nothing" in caplog.text


def test_path_for(router, funct):
    """Reverse routing through the router."""
    with router.namespace("/api"):
        router.get("/posts/[:slug]", name="post")(funct)
    assert router.path_for("post", {"slug": "hello"}) == "/api/posts/hello"
