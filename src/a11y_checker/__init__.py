"""a11y checker core - issue overlay and quick-fix loading for live documents."""

from __future__ import annotations

from a11y_checker.codec import FakeObjectCodec
from a11y_checker.config import CheckerConfig
from a11y_checker.decorator import IdentityTagger
from a11y_checker.errors import (
    A11yCheckerError,
    MissingEditableError,
    PayloadFormatError,
    SnapshotMutationError,
    UnresolvedIssueWarning,
)
from a11y_checker.issues import Issue, IssueList, Testability
from a11y_checker.quickfix import ModuleLoader, QuickFixRegistry
from a11y_checker.resolver import IssueResolver
from a11y_checker.tree import HtmlDocument, LiveElement, SnapshotElement

__version__: str = "0.1.0"
__all__: list[str] = [
    "A11yCheckerError",
    "CheckerConfig",
    "FakeObjectCodec",
    "HtmlDocument",
    "IdentityTagger",
    "Issue",
    "IssueList",
    "IssueResolver",
    "LiveElement",
    "MissingEditableError",
    "ModuleLoader",
    "PayloadFormatError",
    "QuickFixRegistry",
    "SnapshotElement",
    "SnapshotMutationError",
    "Testability",
    "UnresolvedIssueWarning",
]
