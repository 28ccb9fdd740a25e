"""Issue and IssueList: the analysis results overlaid onto the live tree.

An ``Issue`` is created by an external analysis step against a detached
snapshot.  ``original_element`` points into that snapshot and carries the
Identifier stamped before the snapshot was taken; ``element`` starts unset
and is filled in by ``IssueResolver``.  Resolution is a one-shot affair: if
the live tree changes afterwards, resolve again.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from a11y_checker.protocols import DocumentNode

__all__ = ["Issue", "IssueList", "Testability"]


class Testability(StrEnum):
    """How confident the analysis engine is that an issue is real.

    - NOTICE  -> "notice"  : testability score 0
    - WARNING -> "warning" : testability score 0.5
    - ERROR   -> "error"   : testability score 1
    """

    NOTICE = "notice"
    WARNING = "warning"
    ERROR = "error"

    @classmethod
    def from_score(cls, score: float) -> Testability:
        """Map an engine testability score onto the nearest level at or below it."""
        if score >= 1.0:
            return cls.ERROR
        if score >= 0.5:
            return cls.WARNING
        return cls.NOTICE


@dataclass(slots=True, eq=False)
class Issue:
    """A single accessibility issue.

    Attributes:
        original_element: Node in the detached snapshot the issue was found on.
        element: Matching node in the live tree; None until resolved, and
            None after resolution when no live match exists.
        test_name: Identifier of the failing check (also the fix type key).
        testability: Confidence level of the check.
        details: Free-form data attached by the analysis engine.
    """

    original_element: DocumentNode
    element: DocumentNode | None = None
    test_name: str = ""
    testability: Testability = Testability.ERROR
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def is_resolved(self) -> bool:
        return self.element is not None


class IssueList:
    """Ordered issue sequence with a focus cursor.

    Append-only until ``replace()`` swaps in a fresh analysis result.  The
    cursor (``current_index``) is -1 while nothing is focused.
    """

    def __init__(self, issues: Iterable[Issue] = ()) -> None:
        self._issues: list[Issue] = list(issues)
        self._current = -1

    def __len__(self) -> int:
        return len(self._issues)

    def __iter__(self) -> Iterator[Issue]:
        return iter(self._issues)

    def __getitem__(self, index: int) -> Issue:
        return self._issues[index]

    def add(self, issue: Issue) -> None:
        self._issues.append(issue)

    def replace(self, issues: Iterable[Issue]) -> None:
        """Drop every issue and the cursor, then take ``issues``."""
        self._issues = list(issues)
        self._current = -1

    def count(self) -> int:
        return len(self._issues)

    def get_item(self, index: int) -> Issue:
        return self._issues[index]

    def index_of(self, issue: Issue | None) -> int:
        """Position of ``issue`` (by identity), or -1 when absent."""
        for idx, candidate in enumerate(self._issues):
            if candidate is issue:
                return idx
        return -1

    def get_issue_by_element(self, element: DocumentNode) -> Issue | None:
        """First issue whose resolved live element is ``element``."""
        for issue in self._issues:
            if issue.element is not None and issue.element == element:
                return issue
        return None

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    @property
    def current_index(self) -> int:
        return self._current

    def get_focused(self) -> Issue | None:
        return self._issues[self._current] if self._current >= 0 else None

    def move_to(self, index: int) -> bool:
        """Focus the issue at ``index``; return False (cursor untouched) if out of range."""
        if not 0 <= index < len(self._issues):
            return False
        self._current = index
        return True

    def next(self) -> Issue | None:
        """Focus and return the following issue, wrapping to the first."""
        if not self._issues:
            return None
        self._current = (self._current + 1) % len(self._issues)
        return self._issues[self._current]

    def prev(self) -> Issue | None:
        """Focus and return the preceding issue, wrapping to the last."""
        if not self._issues:
            return None
        start = self._current if self._current >= 0 else 0
        self._current = (start - 1) % len(self._issues)
        return self._issues[self._current]
