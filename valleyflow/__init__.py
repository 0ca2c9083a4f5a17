"""ValleyFlow: state store and backend event bridge for a voice dictation desktop app."""

__version__ = "1.0.0"
