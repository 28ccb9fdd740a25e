"""Tree subpackage: lxml backed host document adapters.

Re-exports the public API for the tree module:
- LiveElement: mutable DocumentNode over a live editable element
- SnapshotElement: read-only DocumentNode over a detached snapshot element
- HtmlDocument: Editor implementation owning the editable tree and its output rules
"""

from a11y_checker.tree.document import HtmlDocument
from a11y_checker.tree.nodes import LiveElement, SnapshotElement

__all__ = ["HtmlDocument", "LiveElement", "SnapshotElement"]
