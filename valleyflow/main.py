"""Main application entry point for ValleyFlow."""

import sys
import argparse
import logging
import threading
from pathlib import Path
from typing import Optional

from valleyflow import __version__
from valleyflow.bridge import Dispatcher, EventBridge, BackendPublisher
from valleyflow.services import RecordingTimer, SimulatedBackend, needs_wizard
from valleyflow.storage import StateStorage
from valleyflow.store import AppStore
from valleyflow.ui import StatusScreen, copy_to_clipboard

from .config import ValleyFlowConfig

logger = logging.getLogger(__name__)


class App:
    """Wires storage, store, dispatcher, event bridge, timer and status screen."""

    def __init__(self, config_path: Optional[str] = None, log_level: Optional[str] = None):
        self.config = ValleyFlowConfig(config_path)
        level = log_level or self.config.get('logging.level', 'INFO')
        setup_logging(self.config, level)

        self.storage: Optional[StateStorage] = None
        self.store: Optional[AppStore] = None
        self.dispatcher: Optional[Dispatcher] = None
        self.bridge: Optional[EventBridge] = None
        self.timer: Optional[RecordingTimer] = None
        self.screen: Optional[StatusScreen] = None
        self.backend: Optional[SimulatedBackend] = None
        self._handles = []

    def init(self) -> None:
        logger.info("Initializing components...")
        self.storage = StateStorage(self.config.get_data_directory())
        self.store = AppStore(self.storage)
        self.dispatcher = Dispatcher("state")

        self.screen = StatusScreen(self.store)
        self.bridge = EventBridge(
            self.store,
            dispatcher=self.dispatcher,
            topic_prefix=self.config.get('bridge.topic_prefix', 'backend'),
            reset_on_error=self.config.get('bridge.reset_on_error', False),
            on_navigate=self.screen.navigate,
        )
        self.timer = RecordingTimer(
            self.store,
            dispatcher=self.dispatcher,
            interval=self.config.get('recording.tick_interval_seconds', 1.0),
        )

        if needs_wizard(self.store):
            logger.info("First-run setup has not been completed")

    def mount(self) -> None:
        """Attach all listeners; ``unmount`` releases them."""
        self._handles = [
            self.bridge.subscribe(),
            self.timer.attach(),
            self.screen.attach(),
        ]

    def unmount(self) -> None:
        for handle in reversed(self._handles):
            handle.release()
        self._handles = []

    def start_simulation(self) -> None:
        publisher = BackendPublisher(self.config.get('bridge.topic_prefix', 'backend'))
        self.backend = SimulatedBackend(
            publisher,
            text=self.config.get('simulation.text', 'Hello from the simulated backend'),
            recording_seconds=self.config.get('simulation.recording_seconds', 3.0),
            processing_seconds=self.config.get('simulation.processing_seconds', 1.0),
        )
        self.backend.start()

    def run(self, duration: Optional[float], simulate: bool = False) -> None:
        """Run the dispatcher loop on this thread until duration elapses or Ctrl+C."""
        self.mount()
        if simulate:
            self.start_simulation()
        stopper = None
        try:
            if duration:
                stopper = threading.Timer(duration, self.dispatcher.stop)
                stopper.daemon = True
                stopper.start()
            self.dispatcher.run()
        finally:
            if stopper is not None:
                stopper.cancel()
            self.cleanup()

    def cleanup(self) -> None:
        if self.backend is not None:
            self.backend.stop()
        self.unmount()
        if self.dispatcher is not None:
            self.dispatcher.stop()
        logger.info("ValleyFlow shut down")


def setup_logging(config, level: str = "INFO") -> None:
    """Set up logging configuration from YAML config."""
    log_file_path = config.get('logging.file_path', 'data/logs/valleyflow.log')
    console_output = config.get('logging.console_output', True)

    log_dir = Path(log_file_path).parent
    log_dir.mkdir(parents=True, exist_ok=True)

    handlers = []

    # File handler - always write to file
    file_handler = logging.FileHandler(log_file_path, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
    )
    file_handler.setFormatter(file_formatter)
    handlers.append(file_handler)

    # Console handler - only if enabled in config
    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)  # Only show warnings and above on console
        console_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        console_handler.setFormatter(console_formatter)
        handlers.append(console_handler)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in handlers:
        root_logger.addHandler(handler)

    logger = logging.getLogger(__name__)
    logger.info("=" * 50)
    logger.info("ValleyFlow starting up")
    logger.info(f"Log file: {log_file_path}")
    logger.info(f"Log level set to: {level}")
    logger.info("=" * 50)


def main() -> None:
    """Main entry point for ValleyFlow."""
    parser = argparse.ArgumentParser(
        description="ValleyFlow - voice dictation front-end",
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration YAML file (default: looks for valleyflow.yaml)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: from config, else INFO)"
    )

    parser.add_argument(
        "--simulate",
        action="store_true",
        help="Publish one simulated dictation cycle instead of waiting for the native backend"
    )

    parser.add_argument(
        "--duration",
        type=float,
        help="Stop after this many seconds (default: run until Ctrl+C)"
    )

    parser.add_argument(
        "--show-history",
        action="store_true",
        help="Print the stored transcription history and exit"
    )

    parser.add_argument(
        "--copy-last",
        action="store_true",
        help="Copy the newest transcription to the clipboard and exit"
    )

    parser.add_argument(
        "--clear-history",
        action="store_true",
        help="Delete all stored transcriptions and exit"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"ValleyFlow v{__version__}"
    )

    args = parser.parse_args()

    try:
        app = App(args.config, args.log_level)
        app.init()

        if args.show_history:
            app.screen.show_history()
            return
        if args.copy_last:
            if not app.store.history:
                print("No transcriptions yet")
                return
            if not copy_to_clipboard(app.store.history[0].text):
                sys.exit(1)
            print("Copied!")
            return
        if args.clear_history:
            app.store.clear_history()
            print("History cleared")
            return

        app.run(args.duration, simulate=args.simulate)
    except KeyboardInterrupt:
        print("\n👋 Goodbye!")
    except Exception as e:
        print(f"❌ Error: {e}")
        logging.error(f"Application error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
