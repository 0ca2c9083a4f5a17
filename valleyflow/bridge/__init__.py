"""Backend notification bridge and dispatch loop."""

from .dispatcher import Dispatcher
from .event_bridge import EventBridge
from .publisher import BackendPublisher

__all__ = ["Dispatcher", "EventBridge", "BackendPublisher"]
