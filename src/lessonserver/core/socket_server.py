"""
=============================================================================
TCP CONNECTION ACCEPTOR
=============================================================================

Owns the listening socket and the thread that accepts on it.

=============================================================================
SOCKET LIFECYCLE
=============================================================================

    1. socket()    TCP, SO_REUSEADDR so restarts don't hit TIME_WAIT
    2. bind()      (host, port); port 0 picks a free port
    3. listen()    backlog = connections queued before accept()
    4. accept()    on a dedicated thread, polling with a short timeout
    5. close()     exactly once, from stop()

                    ┌───────────────────────┐
                    │   Listening Socket    │ ◄── owned by SocketServer
                    └───────────┬───────────┘
                                │ accept()
        ┌───────────────────────┼───────────────────────┐
        ▼                       ▼                       ▼
    Connection              Connection              Connection
    (Worker-1)              (Worker-2)              (Worker-3)

=============================================================================
START / STOP CONTRACT
=============================================================================

start(handler)
    - returns once the socket is listening and the accept thread runs
    - a second call while running does nothing
    - bind/listen failure: socket closed, OSError re-raised, nothing left
      running

stop()
    - safe from any thread, and from a signal handler on the main thread
    - wakes accept(), joins the accept thread, closes the socket once
    - does NOT wait for workers already handling connections; see
      WorkerRegistry.drain() for that

=============================================================================
"""

import logging
import socket
import threading
from typing import Callable, Optional, Tuple

from ..config import ServerConfig
from .connection import Connection
from .workers import WorkerRegistry


logger = logging.getLogger(__name__)


class SocketServer:
    """
    Accepts TCP connections and hands each one to a worker thread.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      SocketServer Internals                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    start(handler)                                                    │
    │        ├──► _create_socket()   socket + SO_REUSEADDR + poll timeout │
    │        ├──► bind() / listen()                                        │
    │        └──► Thread(_accept_loop)                                     │
    │                 │                                                    │
    │                 └──► while running:                                  │
    │                         accept()                                     │
    │                         Connection(...)                              │
    │                         workers.spawn(handler, conn)                 │
    │                                                                      │
    │    stop()                                                            │
    │        ├──► _running = False                                         │
    │        ├──► shutdown(SHUT_RDWR)   wake accept()                      │
    │        ├──► join accept thread                                       │
    │        └──► close()                                                  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

    Usage:
        def handle_connection(conn: Connection):
            ...

        server = SocketServer(config)
        server.start(handle_connection)   # returns immediately
        ...
        server.stop()
    """

    def __init__(self, config: ServerConfig, workers: Optional[WorkerRegistry] = None):
        self.config = config
        self.workers = workers if workers is not None else WorkerRegistry()

        self._socket: Optional[socket.socket] = None
        self._accept_thread: Optional[threading.Thread] = None
        self._running = False
        self._stopping = False

        # Reentrant: a signal handler may call stop() on the main thread
        # while that thread is already inside start() or stop().
        self._lifecycle_lock = threading.RLock()
        self._shutdown_event = threading.Event()

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def address(self) -> Tuple[str, int]:
        """The bound (host, port); the real port when 0 was configured."""
        sock = self._socket
        if sock is not None:
            try:
                return sock.getsockname()[:2]
            except OSError:
                pass
        return (self.config.host, self.config.port)

    def _create_socket(self) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)

        # Allow rebinding while old connections sit in TIME_WAIT.
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        # accept() wakes up at this interval to look at the running flag.
        sock.settimeout(self.config.accept_poll_interval)
        return sock

    def start(self, connection_handler: Callable[[Connection], None]) -> None:
        """
        Bind, listen and start the accept thread.

        Raises:
            OSError: the address could not be bound or listened on.
        """
        with self._lifecycle_lock:
            if self._running:
                logger.warning("start() called while already running; ignoring")
                return

            sock = self._create_socket()
            try:
                sock.bind((self.config.host, self.config.port))
                sock.listen(self.config.backlog)
            except OSError as e:
                logger.error(f"Failed to bind to {self.config.host}:{self.config.port}: {e}")
                sock.close()
                raise

            self._socket = sock
            self._stopping = False
            self._running = True
            self._shutdown_event.clear()

            self._accept_thread = threading.Thread(
                target=self._accept_loop,
                args=(sock, connection_handler),
                name="Acceptor",
                daemon=True,
            )
            self._accept_thread.start()

            host, port = self.address
            logger.info(f"Server listening on {host}:{port}")

    def _accept_loop(self, sock: socket.socket, connection_handler: Callable[[Connection], None]) -> None:
        """
        Accept until stop() clears the running flag.

        A failed accept() is logged and the loop carries on. A short wait
        keeps a persistent failure (e.g. out of descriptors) from spinning.
        """
        while self._running:
            try:
                client_socket, client_address = sock.accept()
            except socket.timeout:
                continue
            except OSError as e:
                if not self._running:
                    break
                logger.error(f"Accept error: {e}")
                self._shutdown_event.wait(self.config.accept_poll_interval)
                continue

            logger.debug(f"Accepted connection from {client_address[0]}:{client_address[1]}")

            conn = Connection(
                socket=client_socket,
                address=client_address,
                buffer_size=self.config.buffer_size,
            )
            try:
                self.workers.spawn(connection_handler, conn)
            except RuntimeError as e:
                logger.error(f"Could not start worker for {conn.client_ip}:{conn.client_port}: {e}")
                conn.close()

        logger.debug("Accept loop exited")

    def stop(self) -> None:
        """
        Stop accepting and release the listening socket.

        Idempotent. Returns once the accept thread has exited; in-flight
        workers keep running.
        """
        with self._lifecycle_lock:
            if self._stopping or self._socket is None:
                return
            self._stopping = True

            logger.info("Shutting down socket server...")
            self._running = False
            self._shutdown_event.set()

            sock = self._socket
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass  # not connected; the poll timeout still wakes accept()

            thread = self._accept_thread
            if thread is not None and thread is not threading.current_thread():
                thread.join()
            self._accept_thread = None

            try:
                sock.close()
            except OSError:
                pass
            self._socket = None

            logger.info("Socket server stopped")

    def wait_for_shutdown(self, timeout: Optional[float] = None) -> bool:
        """
        Block until stop() has been called.

        Returns:
            True if shutdown was signalled, False on timeout.
        """
        return self._shutdown_event.wait(timeout)
