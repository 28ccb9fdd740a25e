"""Structural interfaces for the host document API and other collaborators.

The checker core never touches a concrete DOM library directly.  It talks to
a host through these Protocols, so any object with conformant methods plugs
in without inheriting from anything.  ``a11y_checker.tree`` ships the lxml
backed adapters used by default.

Example::

    from a11y_checker.protocols import DocumentNode
    from a11y_checker.tree import HtmlDocument

    doc = HtmlDocument.from_html("<p>Hello</p>")
    assert isinstance(doc.editable(), DocumentNode)  # True: structural conformance
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from a11y_checker.issues import Issue
    from a11y_checker.quickfix.repository import QuickFixRegistry

__all__ = ["DocumentNode", "Editor", "IssueViewer", "OutputRule", "ResourceLoader"]

# A rule run by the host serializer on every element it emits.
OutputRule = Callable[["DocumentNode"], None]


@runtime_checkable
class DocumentNode(Protocol):
    """Capability interface of one element in a live tree or a snapshot.

    Mutators may raise on read-only (snapshot) implementations.
    """

    def get_attribute(self, name: str) -> str | None: ...

    def has_attribute(self, name: str) -> bool: ...

    def set_attribute(self, name: str, value: str) -> None: ...

    def remove_attribute(self, name: str) -> None: ...

    def has_class(self, name: str) -> bool: ...

    def add_class(self, name: str) -> None: ...

    def remove_class(self, name: str) -> None: ...

    def children(self) -> list[DocumentNode]: ...

    def iter_elements(self) -> Iterator[DocumentNode]: ...

    def query(self, attribute: str, value: str) -> DocumentNode | None: ...


@runtime_checkable
class Editor(Protocol):
    """The host editor owning the editable surface and its output pipeline."""

    supports_fake_objects: bool

    def editable(self) -> DocumentNode | None: ...

    def add_output_filter(self, rule: OutputRule) -> None: ...


@runtime_checkable
class IssueViewer(Protocol):
    """Anything able to bring an issue to the user's attention."""

    def show_issue(self, issue: Issue) -> None: ...


@runtime_checkable
class ResourceLoader(Protocol):
    """Black-box primitive loading the resource behind a fix type name.

    Completion is reported by calling ``registry.register(name, value)``; the
    loader may also fail silently or never complete.
    """

    def load(self, name: str, locator: str, registry: QuickFixRegistry) -> Any: ...
