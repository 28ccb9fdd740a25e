"""Quick fix subpackage: lazy, deduplicated loading of fix types.

Re-exports:
- QuickFixRegistry: name-keyed load dedup cache with FIFO callback fan-out
- ModuleLoader: default ResourceLoader executing fix modules from disk
"""

from a11y_checker.quickfix.loader import ModuleLoader
from a11y_checker.quickfix.repository import QuickFixRegistry

__all__ = ["ModuleLoader", "QuickFixRegistry"]
