"""Event bus for activation listeners."""

import logging
from collections.abc import Callable

from .schemas import ActivationEvent

logger = logging.getLogger(__name__)

ActivationListener = Callable[[ActivationEvent], None]


class ActivationEventBus:
    """Publishes activation events to listeners.

    Listeners are called synchronously in subscription order. They observe
    the result only; an error in one listener is logged and does not reach
    the others or the caller.
    """

    def __init__(self, listeners: list[ActivationListener] | None = None) -> None:
        self._listeners: list[ActivationListener] = list(listeners or [])

    def subscribe(self, listener: ActivationListener) -> None:
        """Subscribe a listener to all activation events."""
        self._listeners.append(listener)

    def publish(self, event: ActivationEvent) -> None:
        """Publish an event to every listener.

        Args:
            event: ActivationEvent to publish
        """
        for listener in self._listeners:
            try:
                listener(event)
            except Exception:
                name = getattr(listener, "__name__", type(listener).__name__)
                logger.exception(f"Error in activation listener {name}")

    def __len__(self) -> int:
        return len(self._listeners)
