"""IssueResolver: maps snapshot issues back onto live tree nodes.

Every issue's ``original_element`` lives in a detached snapshot and carries
the Identifier stamped before the snapshot was taken.  Resolution looks that
Identifier up in the live tree and stores the match on ``issue.element``.

A naive implementation runs one attribute-selector query per issue
(O(issues x nodes)).  ``resolve()`` instead indexes the live tree once per
batch, keeping the first node in document order for each Identifier, which
is exactly what a single-match selector lookup would return.

Misses are normal (the live tree may have changed since tagging) and resolve
to None; they never raise.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from a11y_checker.config import CheckerConfig
from a11y_checker.issues import Issue
from a11y_checker.protocols import DocumentNode

__all__ = ["IssueResolver"]

logger = logging.getLogger(__name__)


class IssueResolver:
    """Resolves ``Issue.element`` from ``Issue.original_element`` by Identifier.

    Args:
        config: Source of the Identifier attribute name.  Defaults to
            ``CheckerConfig()``.
    """

    def __init__(self, config: CheckerConfig | None = None) -> None:
        self._config = config if config is not None else CheckerConfig()

    def identifier_of(self, node: DocumentNode) -> str | None:
        """Identifier carried by ``node``, or None when it was never tagged."""
        return node.get_attribute(self._config.id_attribute_full)

    def index(self, editable: DocumentNode) -> dict[str, DocumentNode]:
        """Map every Identifier in the live tree to its first carrier."""
        attribute = self._config.id_attribute_full
        index: dict[str, DocumentNode] = {}
        for node in editable.iter_elements():
            identifier = node.get_attribute(attribute)
            if identifier is not None:
                index.setdefault(identifier, node)
        return index

    def lookup(self, editable: DocumentNode, identifier: str) -> DocumentNode | None:
        """Single attribute-selector lookup of ``identifier`` in the live tree."""
        return editable.query(self._config.id_attribute_full, identifier)

    def resolve(self, issues: Iterable[Issue], editable: DocumentNode) -> int:
        """Assign the live match (or None) to ``element`` for every issue.

        Args:
            issues: Issues whose ``original_element`` belongs to a snapshot.
            editable: Root of the live tree.

        Returns:
            The number of issues left unresolved.
        """
        index = self.index(editable)
        misses = 0
        for issue in issues:
            identifier = self.identifier_of(issue.original_element)
            issue.element = index.get(identifier) if identifier is not None else None
            if issue.element is None:
                misses += 1
                logger.debug(
                    "No live element for issue %r (identifier %s)",
                    issue.test_name,
                    identifier,
                )
        return misses
