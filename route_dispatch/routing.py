"""Path pattern compilation and route definition."""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import (
    Any,
    Callable,
    Dict,
    FrozenSet,
    Iterable,
    List,
    Mapping,
    Optional,
    Set,
    Tuple,
    Union,
)

from route_dispatch.errors import InvalidHandlerError, InvalidMethodError, PatternError
from route_dispatch.patterns import (
    WILDCARD,
    match_types,
    name_pattern,
    token_expr,
    token_pattern,
    wildcard_types,
)

MethodFilter = Union[None, str, FrozenSet[str]]


@dataclass(frozen=True)
class Literal:
    """Literal text, matched verbatim."""

    text: str


@dataclass(frozen=True)
class Placeholder:
    """Named capture with a type tag."""

    name: str
    type: str = ""
    optional: bool = False
    pre: str = ""

    @property
    def wildcard(self) -> bool:
        return self.type in wildcard_types


Segment = Union[Literal, Placeholder]


def _check_literal(text: str, pattern: str) -> None:
    if "[" in text:
        raise PatternError("Unterminated placeholder token", pattern)
    if "]" in text:
        raise PatternError("Unbalanced ']'", pattern)


def _placeholder(token: re.Match, pattern: str) -> Placeholder:
    body = token_pattern.match(token["body"]).groupdict()
    arg_type = body["type"] or ""
    name = body["name"]
    if not name:
        raise PatternError(f"Empty placeholder name in '{token.group()}'", pattern)
    if arg_type not in match_types:
        raise PatternError(
            f"'{arg_type}' is not a supported placeholder type", pattern
        )
    if not name_pattern.match(name):
        raise PatternError(f"'{name}' is not a valid placeholder name", pattern)

    return Placeholder(
        name=name,
        type=arg_type,
        optional=bool(token["optional"]),
        pre=token["pre"],
    )


def _parse(pattern: str) -> Tuple[Segment, ...]:
    segments: List[Segment] = []
    names: Set[str] = set()
    position = 0

    def _append(segment: Segment) -> None:
        last = segments[-1] if segments else None
        if isinstance(last, Placeholder) and last.wildcard:
            raise PatternError("Wildcard must be the final token", pattern)
        if isinstance(segment, Placeholder):
            if segment.name in names:
                raise PatternError(
                    f"Duplicate placeholder name '{segment.name}'", pattern
                )
            names.add(segment.name)
        segments.append(segment)

    for token in token_expr.finditer(pattern):
        literal = pattern[position : token.start()]
        _check_literal(literal, pattern)
        if literal:
            _append(Literal(literal))
        _append(_placeholder(token, pattern))
        position = token.end()

    tail = pattern[position:]
    _check_literal(tail, pattern)

    # Trailing bare "*" captures the rest of the path.
    wildcard = tail.endswith(WILDCARD)
    if wildcard:
        tail = tail[: -len(WILDCARD)]
    if tail:
        _append(Literal(tail))
    if wildcard:
        _append(Placeholder(name=WILDCARD, type=WILDCARD))

    return tuple(segments)


def _segment_to_regex(segment: Segment, group: str) -> str:
    if isinstance(segment, Literal):
        return re.escape(segment.text)

    expr = f"(?P<{group}>{match_types[segment.type]})"
    pre = re.escape(segment.pre)
    if not segment.optional:
        return pre + expr
    if pre:
        # separator and value are optional together, trailing separator allowed
        return f"(?:{pre}(?:{expr})?)?"
    return f"(?:{expr})?"


@dataclass(frozen=True)
class Matcher:
    """Compiled path pattern."""

    pattern: Optional[str]
    segments: Tuple[Segment, ...] = ()
    regex: Optional[re.Pattern] = None

    @property
    def catch_all(self) -> bool:
        return self.regex is None

    @property
    def placeholders(self) -> Tuple[Placeholder, ...]:
        return tuple(s for s in self.segments if isinstance(s, Placeholder))

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self.placeholders)

    def match(self, path: str) -> Optional[Dict[str, str]]:
        """Match the full path, return captured parameters or None."""
        if self.regex is None:
            return {}

        found = self.regex.fullmatch(path)
        if not found:
            return None

        return {
            name: found[f"p{index}"]
            for index, name in enumerate(self.names)
            if found[f"p{index}"] is not None
        }

    def path_for(self, params: Optional[Mapping[str, Any]] = None) -> str:
        """Build a concrete path by filling placeholders with values."""
        if self.catch_all:
            return "/"

        params = params or {}
        parts = []
        for segment in self.segments:
            if isinstance(segment, Literal):
                parts.append(segment.text)
                continue

            value = params.get(segment.name)
            if value is None:
                if segment.optional:
                    continue
                if not segment.wildcard:
                    raise ValueError(
                        f"Missing value for path parameter '{segment.name}' "
                        f"in '{self.pattern}'"
                    )
                value = ""
            parts.append(f"{segment.pre}{value}")

        return "".join(parts)


@lru_cache(maxsize=None)
def compile_pattern(pattern: Optional[str]) -> Matcher:
    """Compile a path pattern into a reusable matcher."""
    if pattern is None or pattern == WILDCARD:
        return Matcher(pattern)

    segments = _parse(pattern)
    placeholders = 0
    parts = []
    for segment in segments:
        parts.append(_segment_to_regex(segment, f"p{placeholders}"))
        if isinstance(segment, Placeholder):
            placeholders += 1

    return Matcher(pattern, segments, re.compile("".join(parts)))


def normalize_methods(method: Any) -> MethodFilter:
    """Uppercase a method filter: None, a single token or a set of tokens."""
    if method is None:
        return None
    if isinstance(method, str):
        return method.strip().upper() or None
    if isinstance(method, (bytes, Mapping)) or not isinstance(method, Iterable):
        raise InvalidMethodError(
            "Expected a string or a collection of strings. "
            f"Got a {type(method).__name__}"
        )

    methods = list(method)
    for value in methods:
        if not isinstance(value, str):
            raise InvalidMethodError(
                f"Expected method names as strings. Got a {type(value).__name__}"
            )

    return frozenset(value.strip().upper() for value in methods) or None


class Route:
    """Binding of a method filter and a path pattern to a handler."""

    def __init__(
        self,
        handler: Callable,
        path: Optional[str] = None,
        method: Any = None,
        count_match: bool = True,
        name: Optional[str] = None,
    ) -> None:
        """Initialize route object."""
        if not callable(handler):
            raise InvalidHandlerError(
                f"Expected a callable. Got an un-callable {type(handler).__name__}"
            )
        if path is not None and not isinstance(path, str):
            raise TypeError(f"Expected a string path. Got a {type(path).__name__}")

        self.handler = handler
        self.path = path
        self.method = normalize_methods(method)
        self.count_match = bool(count_match)
        self.name = name
        self.matcher = compile_pattern(path)

    def __eq__(self, other) -> bool:
        """Check for equality."""
        if not isinstance(other, Route):
            return NotImplemented
        return self.__dict__ == other.__dict__

    def __repr__(self) -> str:
        methods = ",".join(sorted(self.methods)) or "*"
        return f"<Route {methods} {self.path if self.path is not None else '*'}>"

    def __call__(self, *args, **kwargs) -> Any:
        """Invoke the handler."""
        return self.handler(*args, **kwargs)

    @property
    def methods(self) -> FrozenSet[str]:
        """Method filter as a set, empty meaning any method."""
        if self.method is None:
            return frozenset()
        if isinstance(self.method, str):
            return frozenset([self.method])
        return self.method

    def accepts(self, method: str) -> bool:
        """Return True when the method filter allows `method`."""
        if self.method is None:
            return True
        method = method.upper()
        if isinstance(self.method, str):
            return method == self.method
        return method in self.method

    def match(self, path: str) -> Optional[Dict[str, str]]:
        """Match `path` against the route pattern."""
        return self.matcher.match(path)
