"""Integrations subpackage for a11y-checker-core.

Contains integration adapters for external frameworks:
- pytest plugin (auto-discovered via pytest11 entry point), providing the
  ``assert_markup_clean`` fixture

The plugin module is loaded by pytest itself; nothing is imported here so
that importing the package never pulls in pytest.
"""

from __future__ import annotations

__all__: list[str] = []
