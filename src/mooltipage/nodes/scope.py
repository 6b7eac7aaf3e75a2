"""Variable scopes attached to DOM nodes.

Every node owns a ``ScopeData`` holding only the keys bound on that node,
plus a reference to the parent node's scope. Reads walk the chain upward
until a key is found; writes always land locally. Attaching a node chains
its scope beneath the new parent's scope, and detaching severs the chain,
so a detached subtree sees no inherited bindings.

Embedded code does not see ``ScopeData`` directly. It receives a
``ScopeView`` (``$`` in template text) which exposes bindings as plain
attributes, with no methods that could shadow a variable name.

Example:
    >>> parent = ScopeData({"title": "Home"})
    >>> child = ScopeData(parent=parent)
    >>> child["title"]
    'Home'
    >>> child["title"] = "Local"
    >>> parent["title"]
    'Home'

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any


class ScopeData(MutableMapping[str, Any]):
    """Chained key/value bag with prototype-style lookup.

    Attributes:
        parent: Scope consulted when a key is not bound locally, or None.
    """

    __slots__ = ("_data", "parent")

    def __init__(self, data: Mapping[str, Any] | None = None, parent: ScopeData | None = None):
        self._data: dict[str, Any] = dict(data) if data else {}
        self.parent = parent

    def __getitem__(self, key: str) -> Any:
        scope: ScopeData | None = self
        while scope is not None:
            if key in scope._data:
                return scope._data[key]
            scope = scope.parent
        raise KeyError(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __contains__(self, key: object) -> bool:
        scope: ScopeData | None = self
        while scope is not None:
            if key in scope._data:
                return True
            scope = scope.parent
        return False

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_dict())

    def __len__(self) -> int:
        return len(self.to_dict())

    def __repr__(self) -> str:
        return f"ScopeData({self._data!r}, parent={'set' if self.parent is not None else None})"

    def has_own(self, key: str) -> bool:
        """True if ``key`` is bound on this scope itself, ignoring ancestors."""
        return key in self._data

    def local_keys(self) -> list[str]:
        return list(self._data)

    def to_dict(self) -> dict[str, Any]:
        """Flatten the chain into a dict; the nearest binding wins."""
        chain: list[ScopeData] = []
        scope: ScopeData | None = self
        while scope is not None:
            chain.append(scope)
            scope = scope.parent
        merged: dict[str, Any] = {}
        for scope in reversed(chain):
            merged.update(scope._data)
        return merged

    def copy_local(self) -> ScopeData:
        """Copy of the local bindings only, detached from any parent."""
        return ScopeData(self._data)


class ScopeView:
    """Attribute-style access to a ScopeData, as seen by embedded code.

    Unresolved names read as None rather than raising, matching how
    templates test optional variables (``$.title or "Untitled"``).

    Example:
        >>> view = ScopeView(ScopeData({"name": "World"}))
        >>> view.name
        'World'
        >>> view.missing is None
        True
    """

    __slots__ = ("_scope",)

    def __init__(self, scope: ScopeData):
        object.__setattr__(self, "_scope", scope)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        return self._scope.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        self._scope[name] = value

    def __delattr__(self, name: str) -> None:
        del self._scope[name]

    def __getitem__(self, key: str) -> Any:
        return self._scope[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._scope[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._scope

    def __iter__(self) -> Iterator[str]:
        return iter(self._scope)

    def __repr__(self) -> str:
        return f"ScopeView({self._scope.to_dict()!r})"
