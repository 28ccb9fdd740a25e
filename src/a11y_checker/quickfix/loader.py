"""ModuleLoader: default ResourceLoader executing fix modules from disk.

A fix module is a plain Python file named after its fix type (see
``CheckerConfig.resource_template``) that defines an attribute with that same
name::

    # quickfixes/ImgHasAlt.py
    class ImgHasAlt:
        ...

Loading is fire-and-forget: success ends in ``registry.register(name, ...)``,
failure is logged and leaves the name pending.
"""

from __future__ import annotations

import importlib.util
import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from a11y_checker.quickfix.repository import QuickFixRegistry

__all__ = ["ModuleLoader"]

logger = logging.getLogger(__name__)


class ModuleLoader:
    """Loads fix modules relative to ``base_path``.

    Args:
        base_path: Directory the resource locator is resolved against.
            Defaults to the current working directory at load time.
    """

    def __init__(self, base_path: str | Path | None = None) -> None:
        self.base_path = Path(base_path) if base_path is not None else None

    def load(self, name: str, locator: str, registry: QuickFixRegistry) -> None:
        base = self.base_path if self.base_path is not None else Path.cwd()
        path = base / locator
        spec = importlib.util.spec_from_file_location(f"a11y_checker_quickfix_{name}", path)
        if spec is None or spec.loader is None:
            logger.error("Cannot load quick fix %r: %s is not a Python module", name, path)
            return

        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception:
            logger.exception("Failed to load quick fix %r from %s", name, path)
            return

        fix_type = getattr(module, name, None)
        if fix_type is None:
            logger.error("Quick fix module %s does not define %r", path, name)
            return
        registry.register(name, fix_type)
