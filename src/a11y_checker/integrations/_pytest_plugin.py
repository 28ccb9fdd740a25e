"""pytest plugin for a11y-checker-core.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from a11y_checker.codec import FakeObjectCodec
from a11y_checker.config import CheckerConfig
from a11y_checker.tree.document import HtmlDocument

_codec = FakeObjectCodec()


def check_markup_clean(document: HtmlDocument, config: CheckerConfig | None = None) -> None:
    """Assert that ``document`` carries no checker markup.

    Args:
        document: The document to inspect.
        config:   Names to look for.  Defaults to ``CheckerConfig()``.

    Raises:
        AssertionError: Listing every leftover Identifier attribute, marker
            class, or payload-embedded Identifier.
    """
    cfg = config if config is not None else CheckerConfig()
    editable = document.editable()
    if editable is None:
        raise AssertionError("document has no editable surface")

    leftovers: list[str] = []
    for node in editable.iter_elements():
        if node.has_attribute(cfg.id_attribute_full):
            leftovers.append(f"<{node.tag}> {cfg.id_attribute_full}")
        for class_name in (cfg.error_class, cfg.focused_class):
            if node.has_class(class_name):
                leftovers.append(f"<{node.tag}> class {class_name}")
        payload = node.get_attribute(cfg.real_element_attribute)
        if payload is not None and _codec.read_identifier(payload, cfg.id_attribute_full):
            leftovers.append(f"<{node.tag}> payload {cfg.id_attribute_full}")

    if leftovers:
        raise AssertionError(
            "checker markup left in document:\n  " + "\n  ".join(leftovers)
        )


@pytest.fixture(scope="session")
def assert_markup_clean() -> Any:
    """Fixture that returns a callable asserting a document carries no checker markup.

    The fixture is session-scoped because the returned callable is stateless.

    Usage in tests::

        def test_cleanup(assert_markup_clean):
            tagger.apply_markup()
            tagger.remove_markup()
            assert_markup_clean(doc)

    Returns:
        ``check_markup_clean``: ``_assert(document, config=None) -> None``.
    """
    return check_markup_clean
