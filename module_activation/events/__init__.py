"""Activation lifecycle events."""

from module_activation.events.bus import ActivationEventBus
from module_activation.events.bus import ActivationListener
from module_activation.events.schemas import ActivationEvent
from module_activation.events.schemas import ActivationImportEvent

__all__ = [
    "ActivationEventBus",
    "ActivationListener",
    "ActivationEvent",
    "ActivationImportEvent",
]
