from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, List, MutableMapping, Optional

from route_dispatch.collection import ParamCollection

if TYPE_CHECKING:
    from route_dispatch.routing import Route


class Control(Enum):
    """Handler return value deciding whether dispatch goes on."""

    CONTINUE = "continue"
    STOP = "stop"


@dataclass
class Request:
    method: str
    path: str
    params: MutableMapping[str, Any] = field(default_factory=ParamCollection)
    route: Optional["Route"] = None


@dataclass
class DispatchOutcome:
    matched_count: int = 0
    executed: List["Route"] = field(default_factory=list)
    stopped: bool = False
    allowed_methods: List[str] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return self.matched_count > 0

    @property
    def method_not_allowed(self) -> bool:
        """No counted match, but the path matched under other methods."""
        return not self.matched and bool(self.allowed_methods)
