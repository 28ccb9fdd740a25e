"""Exception and warning types raised by the checker core."""

from __future__ import annotations

__all__ = [
    "A11yCheckerError",
    "MissingEditableError",
    "PayloadFormatError",
    "SnapshotMutationError",
    "UnresolvedIssueWarning",
]


class A11yCheckerError(Exception):
    """Base class for every error raised by a11y_checker."""


class MissingEditableError(A11yCheckerError):
    """The editor has no editable surface when the tagger is constructed."""


class PayloadFormatError(A11yCheckerError, ValueError):
    """A composite node payload does not decode to an HTML open tag."""


class SnapshotMutationError(A11yCheckerError, TypeError):
    """A mutator was called on a node of a detached snapshot."""


class UnresolvedIssueWarning(UserWarning):
    """A marked element was clicked but no issue in the list points at it."""
