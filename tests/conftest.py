"""Shared fixtures: small documents and a tagger bound to them."""

from __future__ import annotations

import pytest

from a11y_checker.decorator import IdentityTagger
from a11y_checker.tree.document import HtmlDocument


@pytest.fixture
def doc() -> HtmlDocument:
    """body(1) > [div(2) > [p(3), ul(4) > [li(5), li(6)]], span(7)]"""
    return HtmlDocument.from_html(
        '<div><p class="intro">Text</p><ul><li>one</li><li>two</li></ul></div><span>x</span>'
    )


@pytest.fixture
def nested_doc() -> HtmlDocument:
    """body(1) > [div(2) > [p(3) > b(4), ul(5) > [li(6), li(7)]], span(8)]"""
    return HtmlDocument.from_html(
        '<div id="main"><p class="intro">Hello <b>world</b></p>'
        "<ul><li>one</li><li>two</li></ul></div><span>tail</span>"
    )


@pytest.fixture
def tagger(doc: HtmlDocument) -> IdentityTagger:
    return IdentityTagger(doc)
