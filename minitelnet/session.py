r"""
Line-oriented Telnet session over a :class:`~.ByteChannel`.

Example usage::

    import socket
    from minitelnet import SessionConfig, SocketChannel, TelnetSession

    sock = socket.create_connection(('localhost', 6023))
    with TelnetSession(SocketChannel(sock), SessionConfig()) as session:
        print(session.read_nonempty(readline=True))
        session.write_line('look')
        print(session.read_nonempty())

Reads and writes never raise for transport or protocol anomalies: writes
report failure as ``False``, reads return what was received, possibly ``''``.
"""

from __future__ import annotations

# std imports
import re
import time
import logging
from typing import Optional

# local
from .config import SessionConfig
from .events import NullSink, SendStarted, ReadCompleted
from .telopt import IAC
from .interpreter import TelnetInterpreter

__all__ = ("TelnetSession", "last_line", "EOL_MARKER")

#: Payload of the :class:`~.SendStarted` event fired by ``write_eol``.
EOL_MARKER = "<EOL>"

#: Characters separating fragments of a prompt or line in read text.
_LINE_BOUNDARY = re.compile("[\r\n\x00>]+")


def last_line(text):
    r"""
    Return the last non-empty fragment of ``text``, or ``''``.

    Fragments are separated by CR, LF, NUL and ``'>'``::

        >>> last_line('foo>bar\r\n')
        'bar'
    """
    fragments = [frag for frag in _LINE_BOUNDARY.split(text) if frag]
    return fragments[-1] if fragments else ""


class TelnetSession:
    """
    Blocking telnet endpoint answering negotiation inline with reads.

    :param channel: :class:`~.ByteChannel` supplied by the caller, or None;
        a session without a channel reads ``''`` and fails every write.
    :param SessionConfig config: end-of-line, encoding and timing.
    :param sink: :class:`~.EventSink` receiving :class:`~.SendStarted` and
        :class:`~.ReadCompleted` events, :class:`~.NullSink` when None.
    :param logging.Logger log: target logger, if None is given, one is
        created using the namespace ``'minitelnet.session'``.
    """

    def __init__(self, channel, config: Optional[SessionConfig] = None,
                 sink=None, log: Optional[logging.Logger] = None):
        self.channel = channel
        self.config = config or SessionConfig()
        self.sink = sink or NullSink()
        self.log = log or logging.getLogger(__name__)
        self._interpreter = TelnetInterpreter(channel, self.config, log=self.log)

    def __repr__(self):
        return "<TelnetSession eol:{0} encoding:{1} channel:{2!r}>".format(
            self.config.eol.name, self.config.encoding, self.channel)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self) -> None:
        """Close the channel, when it supports closing."""
        close = getattr(self.channel, "close", None)
        if close is not None:
            close()

    # Write API

    def write_raw(self, data: bytes) -> bool:
        """
        Write ``data`` and flush, without any transformation.

        :returns: Whether the channel was writable and accepted the data.
        :raises TypeError: When ``data`` is not bytes.
        """
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError("data expected bytes, got {0}".format(type(data)))
        if self.channel is None or not self.channel.can_write():
            self.log.debug("write {0!r}: channel not writable".format(bytes(data)))
            return False
        try:
            self.channel.write(bytes(data))
            self.channel.flush()
        except (OSError, ValueError) as err:
            self.log.debug("write {0!r} failed: {1}".format(bytes(data), err))
            return False
        return True

    def write_text(self, text: str) -> bool:
        """Encode ``text``, escape any IAC byte as ``IAC IAC``, and write it."""
        try:
            buf = text.encode(self.config.encoding)
        except UnicodeEncodeError as err:
            self.log.debug("write {0!r}: {1}".format(text, err))
            return False
        return self.write_raw(buf.replace(IAC, IAC + IAC))

    def write_eol(self) -> bool:
        """Write the configured end-of-line terminator."""
        self.sink.send_started(SendStarted(EOL_MARKER))
        return self.write_raw(self.config.eol.value)

    def write_by_char(self, text: str) -> bool:
        """
        Write ``text`` one character at a time, pausing ``write_delay``.

        Some servers drop or misread input arriving faster than typed.

        :returns: False as soon as any character fails to write.
        """
        self.sink.send_started(SendStarted(text))
        for ucs in text:
            if not self.write_text(ucs):
                return False
            time.sleep(self.config.write_delay)
        return True

    def write_line(self, text: str) -> bool:
        """Write ``text`` paced by character, followed by end-of-line."""
        return self.write_by_char(text) and self.write_eol()

    # Read API

    def read(self, readline: bool = False) -> str:
        """
        Read all text arriving until the channel falls quiet.

        Negotiation commands received are answered and removed.  There is
        no timeout: a peer sending without pause keeps this method reading.

        :param bool readline: return only the last non-empty fragment of
            the text read, see :func:`last_line`.
        :returns: Text read, ``''`` when the channel is None or unreadable.
        """
        if not self._readable():
            return ""
        text = self._interpreter.drain().decode(self.config.encoding, "replace")
        if readline:
            text = last_line(text)
        self.sink.read_completed(ReadCompleted(text))
        return text

    def read_nonempty(self, readline: bool = False) -> str:
        """
        Call :meth:`read` until it returns text or ``nonempty_timeout`` ends.

        Between attempts, waits on the channel for data until the deadline
        rather than polling.  A readable channel is always read at least
        once, even when ``nonempty_timeout`` is zero.

        :returns: Text read, ``''`` when none arrived in time.
        """
        deadline = time.monotonic() + self.config.nonempty_timeout
        text = ""
        while self._readable():
            text = self.read(readline)
            remaining = deadline - time.monotonic()
            if text or remaining <= 0:
                break
            if not self.channel.data_available(timeout=remaining):
                break
        self.sink.read_completed(ReadCompleted(text))
        return text

    def _readable(self):
        return self.channel is not None and self.channel.can_read()
