"""QuickFixRegistry: lazily loads fix types by name, one load per name.

Fix types are pluggable behaviors keyed by name (usually the failing check's
name).  Consumers ask for one with ``get(name, callback)``:

- a loaded type is handed to the callback immediately;
- otherwise the callback is queued, and only the *first* queued request for
  a name fires the cancelable ``requested`` event and triggers the load.

The load itself is a black box (a ``ResourceLoader``).  It reports back by
calling ``register(name, type)``, which stores the type for good and drains
the queue in FIFO order.  Per name the state only ever moves forward::

    unrequested -> requested -> loaded

Canceling ``requested`` leaves callbacks queued; the registry then fires
``suppressed`` so the stall is observable, and ``retry(name)`` can request
the load again later.  In-flight loads are tracked in a ``TTLCache`` so a
load older than ``CheckerConfig.load_timeout`` becomes retryable too.
``get`` itself never re-requests, so without explicit retries each name is
loaded at most once.

Single-threaded by design: no locking.  Guard both maps with one lock if the
registry is ever shared between threads.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from cachetools import TTLCache

from a11y_checker.config import CheckerConfig
from a11y_checker.events import EventEmitter
from a11y_checker.protocols import ResourceLoader
from a11y_checker.quickfix.loader import ModuleLoader

__all__ = ["QuickFixRegistry"]

logger = logging.getLogger(__name__)

FixCallback = Callable[[Any], Any]


class QuickFixRegistry(EventEmitter):
    """Name-keyed load deduplication cache with FIFO callback fan-out.

    Each instance owns its own state; there is no shared or global registry.

    Args:
        loader: Load primitive invoked by ``request_quick_fix``.  Defaults to
            a ``ModuleLoader`` rooted at the current working directory.
        config: Supplies ``resource_template`` and ``load_timeout``.
            Defaults to ``CheckerConfig()``.
        timer: Clock used for in-flight expiry.  Defaults to ``time.monotonic``.

    Events:
        requested:  ``{"name"}``; cancelable, fired before a load starts.
        suppressed: ``{"name"}``; fired when ``requested`` was canceled.
        registered: ``{"name", "type"}``; fired when a type is stored.

    Example::

        registry = QuickFixRegistry(loader=my_loader)
        registry.get("ImgHasAlt", lambda fix_type: fix_type().apply(issue))
        # ... later, the loader calls back:
        registry.register("ImgHasAlt", ImgHasAlt)
    """

    def __init__(
        self,
        loader: ResourceLoader | None = None,
        config: CheckerConfig | None = None,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__()
        self._config = config if config is not None else CheckerConfig()
        self._loader: Any = loader if loader is not None else ModuleLoader()
        self._loaded: dict[str, Any] = {}
        self._waiting: dict[str, list[FixCallback]] = {}
        ttl = self._config.load_timeout if self._config.load_timeout is not None else math.inf
        # Unbounded: evicting a live marker would allow a duplicate load.
        self._in_flight: TTLCache[str, bool] = TTLCache(
            maxsize=math.inf, ttl=ttl, timer=timer
        )

    # ------------------------------------------------------------------
    # State views
    # ------------------------------------------------------------------

    @property
    def loaded_types(self) -> Mapping[str, Any]:
        """Read-only view of every registered fix type."""
        return MappingProxyType(self._loaded)

    @property
    def waiting_callbacks(self) -> dict[str, tuple[FixCallback, ...]]:
        """Snapshot of the queued callbacks per pending name."""
        return {name: tuple(queue) for name, queue in self._waiting.items()}

    def is_loaded(self, name: str) -> bool:
        return name in self._loaded

    def is_pending(self, name: str) -> bool:
        return name in self._waiting

    def is_in_flight(self, name: str) -> bool:
        """True while a load for ``name`` was triggered and has neither finished nor expired."""
        return name in self._in_flight

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get(self, name: str, callback: FixCallback) -> None:
        """Hand the fix type called ``name`` to ``callback``, loading it if needed.

        Never blocks: the callback runs inline when the type is already
        loaded, otherwise it is queued until ``register(name, ...)``.
        """
        if name in self._loaded:
            callback(self._loaded[name])
            return

        queue = self._waiting.get(name)
        if queue is not None:
            # A request for this name is already pending; ride along.
            queue.append(callback)
            return

        self._waiting[name] = [callback]
        self._request(name)

    def request_quick_fix(self, name: str) -> None:
        """Start the external load for ``name``.  Fire-and-forget."""
        locator = self._config.resource_template.format(name=name)
        logger.debug("Requesting quick fix %r from %s", name, locator)
        self._loader.load(name, locator, self)

    def register(self, name: str, fix_type: Any) -> None:
        """Store ``fix_type`` under ``name`` and flush its queued callbacks.

        Callbacks run in the order they were queued, before ``registered``
        fires.  A raising callback or listener is logged and never stops the
        others.  Registering a name nobody asked for simply pre-seeds it.
        Registering the same name twice is a caller error and is not detected.
        """
        self._loaded[name] = fix_type
        self._in_flight.pop(name, None)

        for callback in self._waiting.pop(name, []):
            try:
                callback(fix_type)
            except Exception:
                logger.exception("Quick fix callback %r failed for %r", callback, name)

        try:
            self.fire("registered", {"name": name, "type": fix_type})
        except Exception:
            logger.exception("Listener for 'registered' failed for %r", name)

    def retry(self, name: str) -> bool:
        """Request ``name`` again if it is pending with no live in-flight load.

        Covers loads whose ``requested`` event was canceled and loads older
        than ``load_timeout``.

        Returns:
            True if a new load was triggered.
        """
        if name not in self._waiting or name in self._in_flight:
            return False
        logger.debug("Retrying quick fix %r", name)
        return self._request(name)

    def _request(self, name: str) -> bool:
        if not self.fire("requested", {"name": name}):
            logger.warning(
                "Loading quick fix %r was suppressed; %d callback(s) stay queued",
                name,
                len(self._waiting.get(name, ())),
            )
            self.fire("suppressed", {"name": name})
            return False

        # Mark before loading: a synchronous loader registers immediately.
        self._in_flight[name] = True
        self.request_quick_fix(name)
        return True
