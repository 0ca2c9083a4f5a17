"""Services layer for ValleyFlow application logic."""

from .recording_timer import RecordingTimer
from .backend_commands import BackendCommands, AudioDevice, MicrophoneTestResult
from .wizard import WelcomeWizard, WizardStep, MicTestStatus, needs_wizard
from .simulated_backend import SimulatedBackend

__all__ = [
    "RecordingTimer",
    "BackendCommands",
    "AudioDevice",
    "MicrophoneTestResult",
    "WelcomeWizard",
    "WizardStep",
    "MicTestStatus",
    "needs_wizard",
    "SimulatedBackend",
]
