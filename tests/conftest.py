"""Pytest configuration and fixtures for ValleyFlow tests."""

import itertools
import logging
import tempfile

import pytest
from pubsub import pub

from valleyflow.bridge import Dispatcher, BackendPublisher
from valleyflow.storage import StateStorage
from valleyflow.store import AppStore


# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@pytest.fixture(autouse=True)
def clean_pubsub():
    """Drop every pub/sub listener after each test."""
    yield
    pub.unsubAll()


@pytest.fixture
def temp_data_dir():
    """Create temporary directory for test data."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def storage(temp_data_dir):
    return StateStorage(temp_data_dir)


@pytest.fixture
def fake_clock():
    """Millisecond clock that advances by one second per call."""
    counter = itertools.count(start=1_700_000_000_000, step=1000)
    return lambda: next(counter)


@pytest.fixture
def sequential_ids():
    counter = itertools.count(1)
    return lambda: f"item-{next(counter)}"


@pytest.fixture
def store(storage, fake_clock, sequential_ids):
    """Store backed by a temporary data directory with deterministic ids and times."""
    return AppStore(storage, clock=fake_clock, id_factory=sequential_ids)


@pytest.fixture
def memory_store(fake_clock, sequential_ids):
    """Store without durable storage."""
    return AppStore(None, clock=fake_clock, id_factory=sequential_ids)


@pytest.fixture
def dispatcher():
    d = Dispatcher("test")
    yield d
    d.stop()


@pytest.fixture
def publisher():
    return BackendPublisher("backend")


@pytest.fixture
def state_recorder():
    """Collects every state a store listener receives."""
    class Recorder:
        def __init__(self):
            self.states = []

        def __call__(self, state):
            self.states.append(state)

    return Recorder()
