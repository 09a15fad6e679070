"""
=============================================================================
PER-CONNECTION WORKERS
=============================================================================

Every accepted connection gets its own daemon thread. The accept loop
fires it and moves on; it never waits for a worker.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   accept loop ──spawn──► Worker-1  (conn a1b2c3d4)                  │
    │        │      ──spawn──► Worker-2  (conn 9f8e7d6c)                  │
    │        │      ──spawn──► Worker-3  (conn 0a1b2c3d)                  │
    │        ▼                     │                                       │
    │   WorkerRegistry ◄── add / discard (under one small lock)           │
    │        │                                                             │
    │        └── drain(timeout): join what is still running               │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

There is no pool and no cap: a burst of connections is a burst of threads.
There is no cancellation either. drain() only waits, up to a deadline;
a worker stuck on a silent client is still running when it returns, and
being a daemon it dies with the process.

The registry lock guards the set of thread handles and nothing else. It
is never held while a request is being handled.

=============================================================================
"""

import itertools
import logging
import threading
import time
from typing import Any, Callable, Optional, Set


logger = logging.getLogger(__name__)


class Worker(threading.Thread):
    """
    Daemon thread running one task, then removing itself from its registry.
    """

    def __init__(self, registry: "WorkerRegistry", worker_id: int, func: Callable[..., Any], *args: Any):
        super().__init__(name=f"Worker-{worker_id}", daemon=True)
        self.registry = registry
        self.worker_id = worker_id
        self.func = func
        self.args = args

    def run(self):
        start_time = time.time()
        try:
            self.func(*self.args)
            logger.debug(f"Worker {self.worker_id} finished in {time.time() - start_time:.3f}s")
        except Exception as e:
            # Last line of defence: the connection handler already answers 500.
            logger.exception(f"Worker {self.worker_id} failed: {e}")
        finally:
            self.registry.discard(self)


class WorkerRegistry:
    """
    Tracks live worker threads so shutdown can wait for them.

        registry = WorkerRegistry()
        registry.spawn(handle_connection, conn)
        ...
        registry.drain(timeout=5.0)
    """

    def __init__(self):
        self._workers: Set[Worker] = set()
        self._lock = threading.Lock()
        self._ids = itertools.count(1)

    def spawn(self, func: Callable[..., Any], *args: Any) -> Worker:
        """
        Start func(*args) on a new daemon thread and record it.

        Raises:
            RuntimeError: the thread could not be started. Nothing is
                recorded in that case.
        """
        worker = Worker(self, next(self._ids), func, *args)
        # Recorded before start() so a fast worker's discard() can't run first.
        with self._lock:
            self._workers.add(worker)
        try:
            worker.start()
        except RuntimeError:
            self.discard(worker)
            raise
        return worker

    def discard(self, worker: Worker) -> None:
        with self._lock:
            self._workers.discard(worker)

    @property
    def active_count(self) -> int:
        with self._lock:
            return len(self._workers)

    def drain(self, timeout: Optional[float] = None) -> int:
        """
        Wait for running workers, at most timeout seconds in total.

        Returns how many were still running when the deadline passed.
        """
        deadline = None if timeout is None else time.monotonic() + timeout

        with self._lock:
            pending = list(self._workers)

        if pending:
            logger.info(f"Waiting for {len(pending)} in-flight connection(s)")

        for worker in pending:
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            worker.join(remaining)

        still_running = self.active_count
        if still_running:
            logger.warning(f"{still_running} connection(s) still open after drain")
        return still_running
