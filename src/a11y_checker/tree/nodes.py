"""LiveElement and SnapshotElement: lxml backed DocumentNode adapters.

Both adapters wrap an ``lxml.html`` element and satisfy the ``DocumentNode``
Protocol structurally.  Wrappers are cheap and created on demand, so two
wrappers around the same lxml element compare (and hash) equal.

Class manipulation is written so that ``add_class`` followed by
``remove_class`` leaves the ``class`` attribute byte-identical to what it was
before, including its absence.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Any

from lxml import html

from a11y_checker.errors import SnapshotMutationError

__all__ = ["LiveElement", "SnapshotElement"]

# Splits a class attribute into alternating token / whitespace runs, keeping
# the whitespace so untouched spacing survives a rewrite.
_CLASS_SPLIT = re.compile(r"(\s+)")

# Any element carrying the attribute with the given value, self included.
_QUERY = "descendant-or-self::*[@*[local-name() = $attr] = $value]"


class _ElementAdapter:
    """Shared read API over a wrapped lxml element."""

    __slots__ = ("_el",)

    def __init__(self, element: html.HtmlElement) -> None:
        self._el = element

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _ElementAdapter):
            return NotImplemented
        return self._el is other._el

    def __hash__(self) -> int:
        return id(self._el)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(<{self.tag}>)"

    @property
    def element(self) -> html.HtmlElement:
        """The wrapped lxml element."""
        return self._el

    @property
    def tag(self) -> str:
        return str(self._el.tag)

    def _wrap(self, element: Any) -> Any:
        return type(self)(element)

    def get_attribute(self, name: str) -> str | None:
        return self._el.get(name)

    def has_attribute(self, name: str) -> bool:
        return name in self._el.attrib

    def has_class(self, name: str) -> bool:
        return name in (self._el.get("class") or "").split()

    def children(self) -> list[Any]:
        return [self._wrap(child) for child in self._el if isinstance(child.tag, str)]

    def iter_elements(self) -> Iterator[Any]:
        """Yield self and every descendant element in pre-order, depth-first.

        Comments and processing instructions are skipped.
        """
        for element in self._el.iter():
            if isinstance(element.tag, str):
                yield self._wrap(element)

    def query(self, attribute: str, value: str) -> Any:
        """Return the first element (document order) whose ``attribute`` equals ``value``."""
        matches = self._el.xpath(_QUERY, attr=attribute, value=value)
        return self._wrap(matches[0]) if matches else None


class LiveElement(_ElementAdapter):
    """Mutable adapter over an element of the live editable tree."""

    __slots__ = ()

    def set_attribute(self, name: str, value: str) -> None:
        self._el.set(name, str(value))

    def remove_attribute(self, name: str) -> None:
        self._el.attrib.pop(name, None)

    def add_class(self, name: str) -> None:
        if self.has_class(name):
            return
        current = self._el.get("class")
        self._el.set("class", f"{current} {name}" if current else name)

    def remove_class(self, name: str) -> None:
        current = self._el.get("class")
        if current is None or not self.has_class(name):
            return

        parts = _CLASS_SPLIT.split(current)
        # Tokens sit at even indexes, separators at odd ones.  Drop each
        # matching token with the separator before it (after it when first).
        idx = 0
        while idx < len(parts):
            if idx % 2 == 0 and parts[idx] == name:
                if idx > 0:
                    del parts[idx - 1 : idx + 1]
                    idx -= 1
                else:
                    del parts[idx : idx + 2]
                continue
            idx += 1

        remaining = "".join(parts)
        if remaining.strip():
            self._el.set("class", remaining)
        else:
            del self._el.attrib["class"]


class SnapshotElement(_ElementAdapter):
    """Read-only adapter over an element of a detached snapshot."""

    __slots__ = ()

    def _read_only(self, *_args: object) -> None:
        msg = f"{self!r} belongs to a detached snapshot and cannot be modified"
        raise SnapshotMutationError(msg)

    set_attribute = _read_only
    remove_attribute = _read_only
    add_class = _read_only
    remove_class = _read_only
