"""IdentityTagger: stamps and strips checker markup on the live editable tree.

The tagger owns everything the checker writes into the editable:

- the Identifier attribute (``data-quail-id``), a 1-based pre-order index
  assigned to every element, the editable root included;
- the same Identifier embedded in composite (fake) node payloads, so the
  real element survives serialization still carrying it;
- the error and focus marker classes.

``apply_markup()`` runs before a snapshot is handed to the analysis engine;
``resolve_editor_elements()`` maps the resulting issues back onto live nodes;
``remove_markup()`` undoes every visible change.  An output rule registered
at construction keeps the Identifier out of serialized data unless
``disable_filter_strip`` is set.

Tagging is synchronous and not reentrant.  Do not mutate the tree from other
code while a pass is running.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Iterable

from a11y_checker.codec import FakeObjectCodec
from a11y_checker.config import CheckerConfig
from a11y_checker.errors import MissingEditableError, UnresolvedIssueWarning
from a11y_checker.issues import Issue, IssueList
from a11y_checker.protocols import DocumentNode, Editor, IssueViewer
from a11y_checker.resolver import IssueResolver

__all__ = ["IdentityTagger"]

logger = logging.getLogger(__name__)


class IdentityTagger:
    """Applies, removes and resolves Identifier markup on an editor's editable.

    Args:
        editor: Host editor.  Its editable must already be available.
        config: Attribute and class names.  Defaults to ``CheckerConfig()``.
        issues: Issue list consulted by ``handle_click``.  Defaults to an
            empty ``IssueList``.
        viewer: Optional viewer notified when a click focuses an issue.

    Raises:
        MissingEditableError: If ``editor.editable()`` returns None.

    Example::

        doc = HtmlDocument.from_html("<p><img src='a.png'></p>")
        tagger = IdentityTagger(doc)
        tagger.apply_markup()          # body=1, p=2, img=3
        snapshot = doc.snapshot()
        issues = IssueList([Issue(original_element=snapshot.children()[0])])
        tagger.resolve_editor_elements(issues)
        tagger.mark_issues(issues)
        tagger.remove_markup()
    """

    def __init__(
        self,
        editor: Editor,
        config: CheckerConfig | None = None,
        issues: IssueList | None = None,
        viewer: IssueViewer | None = None,
    ) -> None:
        if editor.editable() is None:
            msg = "Editable not available; create the tagger once the editing surface is ready"
            raise MissingEditableError(msg)

        self.editor = editor
        self.config = config if config is not None else CheckerConfig()
        self.issues = issues if issues is not None else IssueList()
        self.viewer = viewer
        self.disable_filter_strip = self.config.disable_filter_strip
        self._codec = FakeObjectCodec()
        self._resolver = IssueResolver(self.config)

        editor.add_output_filter(self.strip_identifier)

    def editable(self) -> DocumentNode:
        """The editor's editable root.

        Raises:
            MissingEditableError: If the editable went away after construction.
        """
        editable = self.editor.editable()
        if editable is None:
            raise MissingEditableError("Editable not available")
        return editable

    def is_fake_element(self, node: DocumentNode) -> bool:
        return node.get_attribute(self.config.real_node_type_attribute) is not None

    # ------------------------------------------------------------------
    # Markup
    # ------------------------------------------------------------------

    def apply_markup(self) -> int:
        """Stamp sequential Identifiers, starting at 1, in pre-order.

        Returns:
            The number of elements tagged.
        """
        attribute = self.config.id_attribute_full
        with_fakes = self.editor.supports_fake_objects
        last_id = 0

        for last_id, node in enumerate(self.editable().iter_elements(), start=1):
            node.set_attribute(attribute, str(last_id))
            if with_fakes and self.is_fake_element(node):
                self._update_payload(node, last_id)

        logger.debug("Tagged %d elements", last_id)
        return last_id

    def remove_markup(self) -> None:
        """Remove Identifiers and marker classes added by this tagger."""
        attribute = self.config.id_attribute_full
        with_fakes = self.editor.supports_fake_objects

        for node in self.editable().iter_elements():
            node.remove_attribute(attribute)

            if with_fakes and self.is_fake_element(node):
                self._update_payload(node, None)

            if node.has_class(self.config.error_class):
                node.remove_class(self.config.error_class)
                node.remove_class(self.config.focused_class)

    def _update_payload(self, node: DocumentNode, identifier: int | None) -> None:
        payload_attr = self.config.real_element_attribute
        payload = node.get_attribute(payload_attr)
        if payload is None:
            return
        attribute = self.config.id_attribute_full
        if identifier is None:
            payload = self._codec.remove_identifier(payload, attribute)
        else:
            payload = self._codec.encode_identifier(payload, attribute, identifier)
        node.set_attribute(payload_attr, payload)

    def strip_identifier(self, node: DocumentNode) -> None:
        """Output rule: drop the Identifier from a serialized element."""
        if not self.disable_filter_strip:
            node.remove_attribute(self.config.id_attribute_full)

    # ------------------------------------------------------------------
    # Issues
    # ------------------------------------------------------------------

    def mark_issues(self, issues: Iterable[Issue]) -> None:
        """Add the error class to every issue's live element.

        Raises:
            ValueError: If an issue was never resolved.  Call
                ``resolve_editor_elements`` first.
        """
        for issue in issues:
            if issue.element is None:
                msg = f"Issue {issue.test_name!r} has no live element; resolve issues before marking them"
                raise ValueError(msg)
            issue.element.add_class(self.config.error_class)

    def resolve_editor_elements(self, issues: Iterable[Issue]) -> int:
        """Fill in ``element`` for each issue from its snapshot Identifier.

        Returns:
            The number of issues that found no live element.
        """
        return self._resolver.resolve(issues, self.editable())

    def handle_click(self, target: DocumentNode) -> Issue | None:
        """Focus the issue behind a clicked element.

        Elements without the error class are ignored.  A marked element with
        no issue pointing at it triggers ``UnresolvedIssueWarning``.

        Returns:
            The focused issue, or None.
        """
        if not target.has_class(self.config.error_class):
            return None

        issue = self.issues.get_issue_by_element(target)
        if issue is None:
            logger.warning("Unidentified issue for element %r", target)
            warnings.warn(
                f"no issue found for marked element {target!r}",
                UnresolvedIssueWarning,
                stacklevel=2,
            )
            return None

        self.issues.move_to(self.issues.index_of(issue))
        if self.viewer is not None:
            self.viewer.show_issue(issue)
        return issue
