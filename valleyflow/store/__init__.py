"""Application state store."""

from .app_store import AppStore, MAX_RECORDING_TIME
from .subscription import Subscription

__all__ = ["AppStore", "MAX_RECORDING_TIME", "Subscription"]
