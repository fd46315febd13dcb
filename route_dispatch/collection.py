"""String-keyed parameter collection."""

from collections.abc import MutableMapping
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence


class ParamCollection(MutableMapping):
    """Mutable mapping of parameter names to values.

    Used as the parameter sink of a dispatch: every matching route merges
    its captured path parameters in, later values overwriting earlier ones.
    Masks passed to `keys` and `all` are sequences of names.

    """

    def __init__(self, attributes: Optional[Mapping[str, Any]] = None) -> None:
        """Initialize collection."""
        self._attributes: Dict[str, Any] = dict(attributes or {})

    def __getitem__(self, key: str) -> Any:
        return self._attributes[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._attributes[key] = value

    def __delitem__(self, key: str) -> None:
        del self._attributes[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._attributes!r})"

    def keys(  # type: ignore[override]
        self, mask: Optional[Sequence[str]] = None, fill_with_nulls: bool = True
    ) -> List[str]:
        """Return the keys, optionally restricted to `mask`.

        With a mask and `fill_with_nulls`, names from the mask missing in
        the collection are still listed.

        """
        if mask is None:
            return list(self._attributes)
        if fill_with_nulls:
            return list(mask)
        return [key for key in mask if key in self._attributes]

    def all(
        self, mask: Optional[Sequence[str]] = None, fill_with_nulls: bool = True
    ) -> Dict[str, Any]:
        """Return a copy of the attributes, optionally restricted to `mask`."""
        if mask is None:
            return dict(self._attributes)
        if fill_with_nulls:
            return {key: self._attributes.get(key) for key in mask}
        return {key: self._attributes[key] for key in mask if key in self._attributes}

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for `key`, `default` when missing or None."""
        value = self._attributes.get(key)
        return default if value is None else value

    def set(self, key: str, value: Any) -> "ParamCollection":
        self._attributes[key] = value
        return self

    def replace(
        self, attributes: Optional[Mapping[str, Any]] = None
    ) -> "ParamCollection":
        """Replace every attribute."""
        self._attributes = dict(attributes or {})
        return self

    def merge(
        self, attributes: Optional[Mapping[str, Any]] = None
    ) -> "ParamCollection":
        """Merge attributes in, overwriting existing keys."""
        if attributes:
            self._attributes.update(attributes)
        return self

    def exists(self, key: str) -> bool:
        return key in self._attributes

    def remove(self, key: str) -> None:
        self._attributes.pop(key, None)

    def clear(self) -> "ParamCollection":  # type: ignore[override]
        return self.replace()

    def is_empty(self) -> bool:
        return not self._attributes

    def clone_empty(self) -> "ParamCollection":
        """Return an empty collection of the same type."""
        return type(self)()
