"""HtmlDocument: an lxml backed editor holding the live editable tree.

HtmlDocument plays the host role the checker core expects (the ``Editor``
Protocol): it owns the editable root, hands out detached snapshots, and runs
registered output rules whenever it serializes data for the outside world.

The editable root is a ``<body>`` element wrapping the parsed fragment, so
the root itself takes part in tagging (it receives Identifier 1) while never
appearing in serialized output.

Composite nodes follow the fakeobjects convention: a placeholder ``<img>``
carries the real markup URI-encoded in ``data-cke-realelement`` and flags
itself with ``data-cke-real-node-type``.  ``get_data()`` swaps placeholders
back for their real elements before output rules run.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from lxml import html

from a11y_checker.codec import decode_uri_component, encode_uri_component
from a11y_checker.config import CheckerConfig
from a11y_checker.tree.nodes import LiveElement, SnapshotElement

if TYPE_CHECKING:
    from a11y_checker.protocols import OutputRule

__all__ = ["HtmlDocument"]

_ROOT_TAG = "body"


class HtmlDocument:
    """Live, mutable HTML document satisfying the ``Editor`` Protocol.

    Args:
        root: The editable root element (normally a ``<body>``).
        supports_fake_objects: Whether composite placeholder nodes are in use.
            When False, taggers skip payload handling and ``get_data()``
            leaves placeholders untouched.
        config: Source of the composite-node attribute names.  Defaults to
            ``CheckerConfig()``.

    Example::

        doc = HtmlDocument.from_html("<p>Hi <img src='a.png'></p>")
        doc.editable()          # LiveElement(<body>)
        doc.get_data()          # '<p>Hi <img src="a.png"></p>'
    """

    def __init__(
        self,
        root: html.HtmlElement,
        supports_fake_objects: bool = True,
        config: CheckerConfig | None = None,
    ) -> None:
        self._root = root
        self._attached = True
        self._rules: list[OutputRule] = []
        self._config = config if config is not None else CheckerConfig()
        self.supports_fake_objects = supports_fake_objects

    @classmethod
    def from_html(
        cls,
        markup: str,
        supports_fake_objects: bool = True,
        config: CheckerConfig | None = None,
    ) -> HtmlDocument:
        """Parse an HTML fragment into a new document."""
        root = html.fragment_fromstring(markup, create_parent=_ROOT_TAG)
        return cls(root, supports_fake_objects=supports_fake_objects, config=config)

    # ------------------------------------------------------------------
    # Editor Protocol surface
    # ------------------------------------------------------------------

    def editable(self) -> LiveElement | None:
        """The live editable root, or None once the document is detached."""
        return LiveElement(self._root) if self._attached else None

    def add_output_filter(self, rule: OutputRule) -> None:
        """Register a rule run on every element emitted by ``get_data()``."""
        self._rules.append(rule)

    # ------------------------------------------------------------------
    # Host helpers
    # ------------------------------------------------------------------

    def detach(self) -> None:
        """Make the editable surface unavailable, as when an editor is torn down."""
        self._attached = False

    def snapshot(self) -> SnapshotElement:
        """Return a read-only deep copy of the current editable tree."""
        return SnapshotElement(copy.deepcopy(self._root))

    def insert_fake_object(
        self, real_markup: str, parent: LiveElement | None = None
    ) -> LiveElement:
        """Append a composite placeholder standing in for ``real_markup``.

        Args:
            real_markup: Markup of the real element, e.g. ``<iframe ...></iframe>``.
            parent: Where to append the placeholder.  Defaults to the root.

        Returns:
            The new placeholder node.
        """
        real = html.fragment_fromstring(real_markup)
        placeholder = html.Element("img")
        placeholder.set("class", f"cke_{real.tag}")
        placeholder.set(self._config.real_element_attribute, encode_uri_component(real_markup))
        placeholder.set(self._config.real_node_type_attribute, "1")
        placeholder.set("data-cke-real-element-type", str(real.tag))
        target = parent.element if parent is not None else self._root
        target.append(placeholder)
        return LiveElement(placeholder)

    def to_html(self) -> str:
        """Serialize the editable content exactly as it is, without output rules."""
        return self._inner_html(copy.deepcopy(self._root))

    def get_data(self) -> str:
        """Serialize the editable content for external consumption.

        Works on a copy: composite placeholders are restored to their real
        elements (when supported), then every output rule runs on every
        element in document order.
        """
        root = copy.deepcopy(self._root)
        if self.supports_fake_objects:
            self._restore_fake_objects(root)
        for element in root.iter():
            if element is root or not isinstance(element.tag, str):
                continue
            node = LiveElement(element)
            for rule in self._rules:
                rule(node)
        return self._inner_html(root)

    def _restore_fake_objects(self, root: html.HtmlElement) -> None:
        attribute = self._config.real_element_attribute
        for placeholder in list(root.iter()):
            if placeholder is root or not isinstance(placeholder.tag, str):
                continue
            payload = placeholder.get(attribute)
            if payload is None:
                continue
            real = html.fragment_fromstring(decode_uri_component(payload))
            real.tail = placeholder.tail
            placeholder.getparent().replace(placeholder, real)

    @staticmethod
    def _inner_html(root: html.HtmlElement) -> str:
        root.attrib.clear()
        markup = html.tostring(root, encoding="unicode")
        # Attributes were cleared, so the wrapper is exactly "<body>...</body>".
        return markup[len(f"<{_ROOT_TAG}>") : -len(f"</{_ROOT_TAG}>")]
