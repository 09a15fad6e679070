"""
=============================================================================
CLIENT CONNECTION
=============================================================================

One accepted socket, one request, one response, then close.

=============================================================================
CONNECTION LIFECYCLE
=============================================================================

    NEW ──► READING ──► PROCESSING ──► WRITING ──► CLOSING ──► CLOSED
              │                                       ▲
              └──────────── empty read / error ───────┘

There is no keep-alive: every response carries "Connection: close" and
the socket is closed right after it is written.

=============================================================================
READING
=============================================================================

A request is whatever a single recv(buffer_size) returns. There is no
loop to collect a body by Content-Length, so a request larger than the
buffer, or one that arrives in several TCP segments, is truncated.

The socket is blocking with no timeout. A client that connects and
never sends keeps its worker thread parked in recv() for as long as it
stays connected.

=============================================================================
"""

import logging
import socket
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    NEW = "new"
    READING = "reading"
    PROCESSING = "processing"
    WRITING = "writing"
    CLOSING = "closing"
    CLOSED = "closed"


@dataclass
class Connection:
    """
    Wraps an accepted client socket.

        with Connection(sock, addr, buffer_size=4096) as conn:
            data = conn.read_request()
            conn.send_response(payload)
        # closed here

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short random identifier for log lines.
        state: Current lifecycle state.
        created_at: Timestamp when the connection was accepted.
    """

    socket: socket.socket
    address: Tuple[str, int]

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)

    buffer_size: int = 4096

    def __post_init__(self):
        # Accepted sockets can inherit the listener's poll timeout.
        self.socket.setblocking(True)

    @property
    def client_ip(self) -> str:
        return self.address[0]

    @property
    def client_port(self) -> int:
        return self.address[1]

    @property
    def age(self) -> float:
        return time.time() - self.created_at

    # =========================================================================
    # READING
    # =========================================================================

    def read_request(self) -> bytes:
        """
        Read the request with one recv().

        Returns b"" when the peer closed or reset the connection before
        sending anything.
        """
        self.state = ConnectionState.READING
        try:
            data = self.socket.recv(self.buffer_size)
        except (ConnectionResetError, BrokenPipeError):
            logger.debug(f"[{self.id}] Peer reset before sending")
            return b""

        self.state = ConnectionState.PROCESSING
        return data

    # =========================================================================
    # WRITING
    # =========================================================================

    def send_response(self, data: bytes) -> bool:
        """
        Send the whole response with sendall().

        Returns False if the client went away mid-write.
        """
        self.state = ConnectionState.WRITING
        try:
            self.socket.sendall(data)
            return True
        except (ConnectionResetError, BrokenPipeError, OSError) as e:
            logger.warning(f"[{self.id}] Send failed: {e}")
            return False

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self):
        """
        Close the connection gracefully.

        1. shutdown(SHUT_WR) sends FIN so the client sees end-of-response
        2. drain whatever the client still had in flight, briefly
        3. close() releases the descriptor
        """
        if self.state == ConnectionState.CLOSED:
            return

        self.state = ConnectionState.CLOSING

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # peer already gone

        try:
            self.socket.settimeout(0.5)
            while self.socket.recv(1024):
                pass
        except OSError:
            pass  # includes socket.timeout

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.age:.3f}s")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
