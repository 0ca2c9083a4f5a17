"""First-run setup flow."""

import logging
from enum import Enum
from typing import Optional

from ..store.app_store import AppStore
from .backend_commands import BackendCommands

logger = logging.getLogger(__name__)


class WizardStep(Enum):
    LANGUAGE = "language"
    API = "api"
    MICROPHONE = "microphone"
    DONE = "done"


class MicTestStatus(Enum):
    IDLE = "idle"
    TESTING = "testing"
    SUCCESS = "success"
    ERROR = "error"


def needs_wizard(store: AppStore) -> bool:
    """True until the user has finished the first-run setup."""
    return not store.settings.has_completed_wizard


class WelcomeWizard:
    """Walks through language, API key and microphone setup.

    Each step writes its choice to the store immediately; the wizard only
    tracks which step is current.
    """

    def __init__(self, store: AppStore, commands: Optional[BackendCommands] = None):
        self.store = store
        self.commands = commands or BackendCommands()
        self.step = WizardStep.LANGUAGE
        self.mic_test_status = MicTestStatus.IDLE

    def _require_step(self, step: WizardStep, action: str) -> bool:
        if self.step is not step:
            logger.warning(f"Ignoring wizard action '{action}' at step '{self.step.value}'")
            return False
        return True

    @property
    def display_language(self) -> str:
        # The language screen is always shown in English
        if self.step is WizardStep.LANGUAGE:
            return "en"
        return self.store.settings.language or "en"

    def select_language(self, language: str) -> None:
        if not self._require_step(WizardStep.LANGUAGE, "select_language"):
            return
        self.store.update_settings(language=language)
        self.step = WizardStep.API

    def save_api_key(self, api_key: str) -> None:
        if not self._require_step(WizardStep.API, "save_api_key"):
            return
        self.store.update_settings(api_key=api_key)
        self.step = WizardStep.MICROPHONE

    def skip_api_key(self) -> None:
        if not self._require_step(WizardStep.API, "skip_api_key"):
            return
        self.step = WizardStep.MICROPHONE

    def test_microphone(self) -> MicTestStatus:
        if not self._require_step(WizardStep.MICROPHONE, "test_microphone"):
            return self.mic_test_status
        self.mic_test_status = MicTestStatus.TESTING
        try:
            result = self.commands.test_microphone(self.store.settings.microphone)
            self.mic_test_status = MicTestStatus.SUCCESS if result.success else MicTestStatus.ERROR
        except Exception as e:
            logger.error(f"Microphone test failed: {e}")
            self.mic_test_status = MicTestStatus.ERROR
        return self.mic_test_status

    def complete(self) -> None:
        if not self._require_step(WizardStep.MICROPHONE, "complete"):
            return
        self.store.update_settings(has_completed_wizard=True)
        self.step = WizardStep.DONE
        logger.info("First-run setup completed")
