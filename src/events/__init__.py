"""
Component events
Outbound event model and dispatch capability
"""

from .bridge import (
    EVENT_KEYS,
    EventDispatcher,
    EventSubscription,
    QueuedEventBridge,
    ServerEvent,
)

__all__ = [
    "EVENT_KEYS",
    "EventDispatcher",
    "EventSubscription",
    "QueuedEventBridge",
    "ServerEvent",
]
