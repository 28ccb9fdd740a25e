"""Tests for IssueResolver.

Verifies:
- Issues resolve to the live node carrying the same Identifier
- Misses (stale identifiers, untagged originals) resolve to None without raising
- Duplicate Identifiers resolve to the first node in document order,
  the same node a single selector lookup returns
- Re-resolution picks up live tree changes
"""

from __future__ import annotations

import logging

import pytest

from a11y_checker.config import CheckerConfig
from a11y_checker.decorator import IdentityTagger
from a11y_checker.issues import Issue
from a11y_checker.resolver import IssueResolver
from a11y_checker.tree.document import HtmlDocument

ID = "data-quail-id"


@pytest.fixture
def resolver() -> IssueResolver:
    return IssueResolver()


def _tagged(markup: str) -> HtmlDocument:
    doc = HtmlDocument.from_html(markup)
    IdentityTagger(doc).apply_markup()
    return doc


class TestResolve:
    def test_every_issue_resolved(self, resolver: IssueResolver, doc: HtmlDocument) -> None:
        IdentityTagger(doc).apply_markup()
        snapshot = doc.snapshot()
        issues = [Issue(original_element=n) for n in snapshot.iter_elements()]
        editable = doc.editable()
        assert editable is not None

        assert resolver.resolve(issues, editable) == 0

        for issue in issues:
            assert issue.element is not None
            assert issue.element.get_attribute(ID) == issue.original_element.get_attribute(ID)
            assert issue.element.tag == issue.original_element.tag  # type: ignore[attr-defined]

    def test_stale_identifier_resolves_to_none(self, resolver: IssueResolver) -> None:
        doc = _tagged("<p>a</p><p>b</p>")
        snapshot = doc.snapshot()
        issue = Issue(original_element=snapshot.children()[1])
        editable = doc.editable()
        assert editable is not None
        # Live tree changes after the snapshot: the node loses its tag.
        editable.children()[1].remove_attribute(ID)

        assert resolver.resolve([issue], editable) == 1
        assert issue.element is None
        assert not issue.is_resolved

    def test_untagged_original_resolves_to_none(self, resolver: IssueResolver) -> None:
        doc = _tagged("<p>a</p>")
        untagged = HtmlDocument.from_html("<p>a</p>").snapshot()
        issue = Issue(original_element=untagged)
        editable = doc.editable()
        assert editable is not None

        assert resolver.resolve([issue], editable) == 1
        assert issue.element is None

    def test_previous_resolution_overwritten(self, resolver: IssueResolver) -> None:
        doc = _tagged("<p>a</p>")
        editable = doc.editable()
        assert editable is not None
        issue = Issue(original_element=doc.snapshot(), element=editable.children()[0])
        editable.remove_attribute(ID)

        resolver.resolve([issue], editable)

        assert issue.element is None

    def test_duplicate_identifier_matches_selector_lookup(self, resolver: IssueResolver) -> None:
        doc = HtmlDocument.from_html('<p data-quail-id="5">a</p><div><i data-quail-id="5">b</i></div>')
        snapshot = doc.snapshot()
        issue = Issue(original_element=snapshot.children()[0])
        editable = doc.editable()
        assert editable is not None

        resolver.resolve([issue], editable)

        assert issue.element == resolver.lookup(editable, "5")
        assert issue.element is not None and issue.element.tag == "p"  # type: ignore[attr-defined]

    def test_miss_logged_at_debug(
        self, resolver: IssueResolver, caplog: pytest.LogCaptureFixture
    ) -> None:
        doc = _tagged("<p>a</p>")
        editable = doc.editable()
        assert editable is not None
        issue = Issue(original_element=HtmlDocument.from_html("<p>a</p>").snapshot(), test_name="x")

        with caplog.at_level(logging.DEBUG, logger="a11y_checker.resolver"):
            resolver.resolve([issue], editable)

        assert "No live element" in caplog.text


class TestIndex:
    def test_index_covers_tagged_nodes(self, resolver: IssueResolver) -> None:
        doc = _tagged("<p>a</p><p>b</p>")
        editable = doc.editable()
        assert editable is not None
        assert sorted(resolver.index(editable), key=int) == ["1", "2", "3"]

    def test_custom_attribute(self) -> None:
        cfg = CheckerConfig(id_attribute="a11y")
        doc = HtmlDocument.from_html("<p>a</p>")
        IdentityTagger(doc, config=cfg).apply_markup()
        editable = doc.editable()
        assert editable is not None
        assert IssueResolver(cfg).lookup(editable, "2") == editable.children()[0]
