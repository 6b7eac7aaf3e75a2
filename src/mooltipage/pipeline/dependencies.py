"""Page <-> resource dependency bookkeeping.

The tracker only records edges; deciding what to rebuild when a resource
changes is left to the caller.

Example:
    >>> tracker = DependencyTracker()
    >>> tracker.record_dependency("index.html", "header.html")
    >>> tracker.get_dependents_for_resource("header.html")
    {'index.html'}
"""

from __future__ import annotations


class DependencyTracker:
    __slots__ = ("_page_dependencies", "_resource_dependents")

    def __init__(self) -> None:
        self._page_dependencies: dict[str, set[str]] = {}
        self._resource_dependents: dict[str, set[str]] = {}

    def record_dependency(self, page_res_path: str, res_path: str) -> None:
        self._page_dependencies.setdefault(page_res_path, set()).add(res_path)
        self._resource_dependents.setdefault(res_path, set()).add(page_res_path)

    def get_dependencies_for_page(self, page_res_path: str) -> set[str]:
        """Resources read while compiling the page (empty if never tracked)."""
        return set(self._page_dependencies.get(page_res_path, ()))

    def get_dependents_for_resource(self, res_path: str) -> set[str]:
        """Pages that read the resource (empty if never tracked)."""
        return set(self._resource_dependents.get(res_path, ()))

    def has_tracked_page(self, page_res_path: str) -> bool:
        return page_res_path in self._page_dependencies

    def has_tracked_resource(self, res_path: str) -> bool:
        return res_path in self._resource_dependents

    def clear(self) -> None:
        self._page_dependencies.clear()
        self._resource_dependents.clear()
