"""Integration tests for the a11y-checker-core pytest plugin.

These tests verify that the assert_markup_clean fixture is auto-discovered
via the pytest11 entry point and behaves correctly.

NOTE: These tests require a11y-checker-core to be installed (even in editable mode
via ``pip install -e .``). The pytest11 entry point is only registered at
install time -- running from a raw source checkout without installing will not
discover the fixture.
"""

from __future__ import annotations

from typing import Any

import pytest

from a11y_checker import CheckerConfig, HtmlDocument, IdentityTagger, Issue, IssueList


def test_fixture_passes_clean_document(assert_markup_clean: Any) -> None:
    """A document that was tagged, marked and cleaned has no markup left."""
    doc = HtmlDocument.from_html("<p>a</p><ul><li>b</li></ul>")
    doc.insert_fake_object('<iframe src="v.html"></iframe>')
    tagger = IdentityTagger(doc)
    tagger.apply_markup()
    issues = IssueList(Issue(original_element=n) for n in doc.snapshot().iter_elements())
    tagger.resolve_editor_elements(issues)
    tagger.mark_issues(issues)

    tagger.remove_markup()

    assert_markup_clean(doc)


def test_fixture_reports_leftovers(assert_markup_clean: Any) -> None:
    """Tagged documents fail with every leftover listed."""
    doc = HtmlDocument.from_html("<p>a</p>")
    doc.insert_fake_object('<iframe src="v.html"></iframe>')
    IdentityTagger(doc).apply_markup()

    with pytest.raises(AssertionError) as exc_info:
        assert_markup_clean(doc)

    message = str(exc_info.value)
    assert "<p> data-quail-id" in message
    assert "<img> payload data-quail-id" in message


def test_fixture_reports_marker_classes(assert_markup_clean: Any) -> None:
    doc = HtmlDocument.from_html('<p class="cke_a11y_focused">a</p>')
    with pytest.raises(AssertionError, match="class cke_a11y_focused"):
        assert_markup_clean(doc)


def test_fixture_custom_config(assert_markup_clean: Any) -> None:
    """Custom names are looked up instead of the defaults."""
    cfg = CheckerConfig(id_attribute="a11y")
    doc = HtmlDocument.from_html('<p data-quail-id="3">a</p>')
    assert_markup_clean(doc, config=cfg)
    IdentityTagger(doc, config=cfg).apply_markup()
    with pytest.raises(AssertionError, match="data-a11y"):
        assert_markup_clean(doc, config=cfg)


def test_fixture_rejects_detached_document(assert_markup_clean: Any) -> None:
    doc = HtmlDocument.from_html("<p>a</p>")
    doc.detach()
    with pytest.raises(AssertionError, match="editable"):
        assert_markup_clean(doc)
