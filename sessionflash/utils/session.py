"""Dotted-path access to the Starlette session dict."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any

_MISSING = object()


class SessionStore:
    """
    Read and write nested session values with paths like ``Flash.flash``.

    Wraps ``request.session`` (or any mutable mapping). Nested changes are
    written back as a new top-level value: the session only notices top-level
    assignments and pops, so in-place edits would never reach the cookie.
    """

    def __init__(self, data: MutableMapping[str, Any]) -> None:
        self.data = data

    @staticmethod
    def _split(path: str) -> list[str]:
        return [part for part in path.split(".") if part]

    def _lookup(self, path: str) -> Any:
        node: Any = self.data
        for depth, part in enumerate(self._split(path)):
            # the root is the session object itself, whatever mapping type it is
            if depth and not isinstance(node, Mapping):
                return _MISSING
            if part not in node:
                return _MISSING
            node = node[part]
        return node

    def check(self, path: str) -> bool:
        """Return True if a non-None value exists at ``path``."""
        value = self._lookup(path)
        return value is not _MISSING and value is not None

    def read(self, path: str) -> Any:
        """Return the value at ``path`` or None."""
        value = self._lookup(path)
        return None if value is _MISSING else value

    def write(self, path: str, value: Any) -> None:
        """Store ``value`` at ``path``, creating intermediate dicts."""
        parts = self._split(path)
        if not parts:
            raise ValueError("Session path must not be empty")
        if len(parts) == 1:
            self.data[parts[0]] = value
            return
        # Rebuild the top-level branch so the session sees a top-level assignment
        branch = self._copy_branch(parts[0])
        node = branch
        for part in parts[1:-1]:
            child = node.get(part)
            child = dict(child) if isinstance(child, Mapping) else {}
            node[part] = child
            node = child
        node[parts[-1]] = value
        self.data[parts[0]] = branch

    def delete(self, path: str) -> None:
        """Remove the value at ``path``; missing paths are ignored."""
        parts = self._split(path)
        if not parts:
            return
        if len(parts) == 1:
            self.data.pop(parts[0], None)
            return
        if self._lookup(path) is _MISSING:
            return
        branch = self._copy_branch(parts[0])
        node = branch
        for part in parts[1:-1]:
            child = dict(node[part])
            node[part] = child
            node = child
        node.pop(parts[-1], None)
        self.data[parts[0]] = branch

    def _copy_branch(self, name: str) -> dict[str, Any]:
        current = self.data.get(name)
        return dict(current) if isinstance(current, Mapping) else {}
