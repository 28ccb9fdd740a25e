"""EventEmitter: ordered listeners with cancelable notifications.

Listeners are called in registration order with ``(event, data)``.  A
listener returning ``False`` (exactly False, not merely falsy) cancels the
notification: remaining listeners are skipped and ``fire()`` returns False.
Any other return value lets the notification proceed.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

__all__ = ["EventEmitter", "Listener"]

Listener = Callable[[str, dict[str, Any]], Any]


class EventEmitter:
    """Minimal synchronous observer registry, intended as a mixin."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def on(self, event: str, listener: Listener) -> Callable[[], None]:
        """Subscribe ``listener`` to ``event``.

        Returns:
            A callable that unsubscribes the listener again.
        """
        self._listeners.setdefault(event, []).append(listener)

        def remove() -> None:
            listeners = self._listeners.get(event, [])
            if listener in listeners:
                listeners.remove(listener)

        return remove

    def fire(self, event: str, data: dict[str, Any]) -> bool:
        """Notify listeners of ``event``; return False if one of them canceled it."""
        # Copy so listeners may unsubscribe while being notified.
        for listener in list(self._listeners.get(event, ())):
            if listener(event, data) is False:
                return False
        return True
