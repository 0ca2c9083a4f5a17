"""Single consumer loop that applies store mutations in delivery order."""

import queue
import logging
import threading
from typing import Any, Callable, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)


class DispatchTask(NamedTuple):
    """A queued call to run on the dispatcher thread."""
    func: Callable[..., Any]
    args: Tuple[Any, ...]


class Dispatcher:
    """FIFO queue of mutations consumed by exactly one thread.

    Producers (pub/sub listeners, timer threads) call ``post`` from any
    thread. The consumer is either a worker started with ``start()``, a
    caller blocking in ``run()``, or a caller pumping ``run_pending()``.
    """

    def __init__(self, name: str = "dispatcher"):
        self.name = name
        self.task_queue: "queue.Queue[Optional[DispatchTask]]" = queue.Queue()
        self.worker_thread: Optional[threading.Thread] = None
        self.shutdown_event = threading.Event()
        self.consumer_active = threading.Event()
        self.processed_count = 0

    @property
    def is_closed(self) -> bool:
        return self.shutdown_event.is_set()

    def post(self, func: Callable[..., Any], *args: Any) -> bool:
        """Queue a call. Returns False if the dispatcher has been stopped."""
        if self.shutdown_event.is_set():
            logger.debug(f"{self.name}: dropping {getattr(func, '__name__', func)} posted after stop")
            return False
        self.task_queue.put(DispatchTask(func, args))
        return True

    def _execute(self, task: DispatchTask) -> None:
        try:
            task.func(*task.args)
        except Exception as e:
            logger.error(f"{self.name}: unhandled exception in {getattr(task.func, '__name__', task.func)}: {e}",
                         exc_info=True)
        finally:
            self.processed_count += 1

    def run_pending(self) -> int:
        """Run every queued call on the current thread without blocking.

        Returns:
            Number of calls executed
        """
        executed = 0
        while True:
            try:
                task = self.task_queue.get_nowait()
            except queue.Empty:
                return executed
            try:
                if task is not None:
                    self._execute(task)
                    executed += 1
            finally:
                self.task_queue.task_done()

    def run(self) -> None:
        """Block and run queued calls until ``stop()`` is called.

        Returns at once if the dispatcher was already stopped and drained.
        """
        thread_name = threading.current_thread().name
        if self.shutdown_event.is_set() and self.task_queue.empty():
            logger.debug(f"{self.name}: already stopped, consumer loop not started")
            self.consumer_active.clear()
            return
        logger.debug(f"{self.name}: consumer loop starting on {thread_name}")
        self.consumer_active.set()
        try:
            while True:
                task = self.task_queue.get()
                try:
                    if task is None:
                        logger.debug(f"{self.name}: received sentinel, exiting")
                        break
                    self._execute(task)
                finally:
                    self.task_queue.task_done()
        finally:
            self.consumer_active.clear()
        logger.debug(f"{self.name}: consumer loop on {thread_name} exited")

    def start(self) -> None:
        """Run the consumer loop on a daemon worker thread."""
        if self.worker_thread is not None and self.worker_thread.is_alive():
            return
        # A stop() right after start() must leave draining to the worker
        self.consumer_active.set()
        self.worker_thread = threading.Thread(target=self.run, name=f"{self.name}_worker", daemon=True)
        self.worker_thread.start()
        logger.info(f"{self.name}: worker thread started")

    def wait_idle(self) -> None:
        """Block until every queued call has been executed by the consumer."""
        self.task_queue.join()

    def stop(self, timeout: float = 5.0) -> bool:
        """Stop accepting calls, let the queue drain and end the consumer loop.

        A running consumer (worker thread or a caller blocked in ``run()``)
        drains the queue up to the sentinel. When no consumer loop is running,
        the pending calls are run here on the calling thread.

        Args:
            timeout: Maximum time to wait for the worker thread

        Returns:
            True if shutdown completed within the timeout
        """
        if self.shutdown_event.is_set():
            return True
        logger.info(f"{self.name}: shutting down ({self.task_queue.qsize()} calls pending)")
        self.shutdown_event.set()
        self.task_queue.put(None)

        if not self.consumer_active.is_set():
            drained = self.run_pending()
            if drained:
                logger.debug(f"{self.name}: drained {drained} calls without a consumer loop")

        if self.worker_thread is not None and self.worker_thread is not threading.current_thread():
            self.worker_thread.join(timeout=timeout)
            if self.worker_thread.is_alive():
                logger.warning(f"{self.name}: worker did not exit within {timeout}s")
                return False
        logger.info(f"{self.name}: shutdown complete, {self.processed_count} calls processed")
        return True
