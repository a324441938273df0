"""
Byte channel capability surface and a socket adapter.

A :class:`~.TelnetSession` never opens a connection itself; it is given any
object satisfying :class:`ByteChannel`.  :class:`SocketChannel` adapts an
already-connected :class:`socket.socket`.
"""

from __future__ import annotations

# std imports
import socket
import select
import logging
from typing import Optional, Protocol

__all__ = ("ByteChannel", "SocketChannel")


class ByteChannel(Protocol):
    """Duplex, pollable byte stream consumed by the telnet core."""

    def can_read(self) -> bool:
        """Whether the channel may still be read from."""

    def can_write(self) -> bool:
        """Whether the channel may still be written to."""

    def data_available(self, timeout: float = 0.0) -> bool:
        """Whether a byte can be read, waiting up to ``timeout`` seconds."""

    def read_byte(self) -> int:
        """Return next byte value, or -1 when no data or end of stream."""

    def write(self, data: bytes) -> None:
        """Write ``data``, raising :exc:`OSError` on transport failure."""

    def flush(self) -> None:
        """Flush any buffered output."""


class SocketChannel:
    """
    :class:`ByteChannel` over a connected stream socket.

    Received bytes are buffered in chunks of ``recv_size`` and served one
    at a time by :meth:`read_byte`.  After end of stream or a receive error
    the channel no longer reports itself readable.

    :param socket.socket sock: connected stream socket, owned by this channel
        once given; :meth:`close` closes it.
    :param int recv_size: maximum bytes received per system call.
    :param logging.Logger log: target logger, if None is given, one is
        created using the namespace ``'minitelnet.channel'``.
    """

    def __init__(self, sock: socket.socket, recv_size: int = 4096,
                 log: Optional[logging.Logger] = None):
        self._sock = sock
        self._recv_size = recv_size
        self._rawq = b""
        self._irawq = 0
        self._eof = False
        self._closed = False
        self.log = log or logging.getLogger(__name__)

    def __repr__(self):
        state = "closed" if self._closed else ("eof" if self._eof else "open")
        return "<SocketChannel fd={0} {1} buffered={2}>".format(
            self.fileno(), state, len(self._rawq) - self._irawq)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def fileno(self) -> int:
        return -1 if self._closed else self._sock.fileno()

    def can_read(self) -> bool:
        return not (self._closed or self._eof)

    def can_write(self) -> bool:
        return not self._closed

    def data_available(self, timeout: float = 0.0) -> bool:
        if self._irawq < len(self._rawq):
            return True
        if not self.can_read():
            return False
        try:
            readable, _, _ = select.select([self._sock], [], [], timeout)
        except (OSError, ValueError) as err:
            self.log.debug("select failed: {0}".format(err))
            return False
        return bool(readable)

    def read_byte(self) -> int:
        if self._irawq >= len(self._rawq):
            if not self._fill_rawq():
                return -1
        byte = self._rawq[self._irawq]
        self._irawq += 1
        return byte

    def write(self, data: bytes) -> None:
        if self._closed:
            raise OSError("write on closed channel")
        self._sock.sendall(data)

    def flush(self) -> None:
        # sendall() leaves nothing buffered in user space.
        pass

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._rawq, self._irawq = b"", 0
        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            # peer may have already closed
            pass
        self._sock.close()

    def _fill_rawq(self) -> bool:
        """Receive next chunk into the raw queue; False on end of stream."""
        if not self.can_read():
            return False
        try:
            buf = self._sock.recv(self._recv_size)
        except socket.timeout:
            # no data within the socket's own timeout, not end of stream
            return False
        except OSError as err:
            self.log.debug("recv failed: {0}".format(err))
            buf = b""
        if not buf:
            self.log.debug("end of stream")
            self._eof = True
            return False
        self._rawq, self._irawq = buf, 0
        return True
