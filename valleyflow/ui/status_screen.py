"""Terminal status screen: a read-only view of the store."""

import logging
from typing import Optional

from rich.console import Console
from rich.table import Table

from ..models.events import NavigationTarget
from ..models.session import AppState
from ..store.app_store import AppStore
from ..store.subscription import Subscription
from .formatting import translate, format_recording_time, history_preview, format_timestamp

logger = logging.getLogger(__name__)


def status_line(state: AppState) -> str:
    """One-line summary of the live session, in the user's language."""
    language = state.settings.language
    if state.error:
        return f"❌ {translate('error', language)}: {state.error}"
    if state.is_recording:
        return f"🔴 {translate('recording', language)}... {format_recording_time(state.recording_time)}"
    if state.is_processing:
        return f"⚙️  {translate('processing', language)}..."
    return f"🎙️  {translate('ready', language)}"


class StatusScreen:
    """Prints a status line whenever the visible state changes.

    Stands in for the desktop presentation layer: it only reads the store
    and is fed navigation requests by the event bridge.
    """

    def __init__(self, store: AppStore, console: Optional[Console] = None):
        self.store = store
        self.console = console or Console()
        self._last_line: Optional[str] = None
        self._history_count = len(store.history)
        self._subscription: Optional[Subscription] = None

    def attach(self) -> Subscription:
        self._subscription = self.store.subscribe(self.render)
        self.render(self.store.snapshot())
        return self._subscription

    def render(self, state: AppState) -> None:
        line = status_line(state)
        if line != self._last_line:
            self._last_line = line
            self.console.print(line, style="bold red" if state.is_recording else None)

        if len(state.history) > self._history_count and state.history:
            newest = state.history[0]
            self.console.print(f"📝 {history_preview(newest.text)}", style="green")
        self._history_count = len(state.history)

    def show_history(self) -> None:
        state = self.store.snapshot()
        language = state.settings.language
        if not state.history:
            self.console.print(translate("history_empty", language), style="yellow")
            return

        table = Table(title=translate("history", language))
        table.add_column("#", justify="right")
        table.add_column("When")
        table.add_column("Text")
        for index, item in enumerate(state.history, 1):
            table.add_row(str(index), format_timestamp(item.timestamp, language), history_preview(item.text))
        self.console.print(table)

    def show_settings(self) -> None:
        settings = self.store.settings
        table = Table(title=translate("settings", settings.language))
        table.add_column("Field")
        table.add_column("Value")
        table.add_row("language", settings.language)
        table.add_row("microphone", settings.microphone)
        table.add_row("apiKey", "set" if settings.api_key else "not set")
        table.add_row("hotkey", settings.hotkey)
        self.console.print(table)

    def navigate(self, target: NavigationTarget) -> None:
        if target is NavigationTarget.HISTORY:
            self.show_history()
        elif target is NavigationTarget.SETTINGS:
            self.show_settings()

