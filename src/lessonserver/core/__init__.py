"""
=============================================================================
CORE NETWORKING
=============================================================================

    SocketServer     listening socket + accept thread
    Connection       one accepted socket: one recv, one sendall, close
    WorkerRegistry   one daemon thread per connection, drainable

=============================================================================
CONCURRENCY MODEL
=============================================================================

Thread-per-connection. The accept thread never waits on a worker, and
workers share nothing mutable: the route table and the content catalog
are built before start() and only read afterwards.

Known exposure: no request timeout and no cap on threads. A slow or
silent client holds one thread until it disconnects.

=============================================================================
"""

from .socket_server import SocketServer
from .connection import Connection, ConnectionState
from .workers import WorkerRegistry, Worker

__all__ = [
    "SocketServer",
    "Connection",
    "ConnectionState",
    "WorkerRegistry",
    "Worker",
]
