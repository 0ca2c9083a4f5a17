"""Durable state storage."""

from .state_storage import StateStorage, SETTINGS_SLOT, HISTORY_SLOT, HISTORY_LIMIT

__all__ = ["StateStorage", "SETTINGS_SLOT", "HISTORY_SLOT", "HISTORY_LIMIT"]
