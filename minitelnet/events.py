"""
Send and read notifications.

A :class:`~.TelnetSession` reports each outbound write as a
:class:`SendStarted` event and each completed read as a
:class:`ReadCompleted` event to the sink given at construction.  Sinks are
advisory only, no protocol behavior depends on them.
"""

from __future__ import annotations

# std imports
import queue
import logging
from typing import Callable, Optional, Protocol
from dataclasses import dataclass

# local
from .accessories import printable

__all__ = (
    "SendStarted",
    "ReadCompleted",
    "EventSink",
    "NullSink",
    "LoggingSink",
    "QueueSink",
    "CallbackSink",
)


@dataclass(frozen=True)
class SendStarted:
    """Fired before a physical write is attempted; it may not succeed."""

    payload: str


@dataclass(frozen=True)
class ReadCompleted:
    """Fired after a read yields its result, which may be empty."""

    payload: str


class EventSink(Protocol):
    def send_started(self, event: SendStarted) -> None:
        ...

    def read_completed(self, event: ReadCompleted) -> None:
        ...


class NullSink:
    """Sink discarding all events."""

    def send_started(self, event: SendStarted) -> None:
        pass

    def read_completed(self, event: ReadCompleted) -> None:
        pass


class LoggingSink:
    r"""
    Sink writing each event as one debug log record.

    Terminal sequences are removed from the payload and remaining control
    characters are shown in caret notation, so that a payload such as
    ``'\x1b[1mok\x1b[m\r\n'`` is logged as ``recv: ok^M^J``.

    :param logging.Logger log: target logger, if None is given, one is
        created using the namespace ``'minitelnet.events'``.
    """

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logging.getLogger(__name__)

    def send_started(self, event: SendStarted) -> None:
        self.log.debug("send: %s", printable(event.payload))

    def read_completed(self, event: ReadCompleted) -> None:
        self.log.debug("recv: %s", printable(event.payload))


class QueueSink:
    """
    Sink placing each event on a :class:`queue.Queue` drained by the caller.

    When ``maxsize`` is reached, the oldest event is discarded.
    """

    def __init__(self, maxsize: int = 0):
        self.queue: "queue.Queue[SendStarted | ReadCompleted]" = queue.Queue(maxsize)

    def _put(self, event):
        while True:
            try:
                self.queue.put_nowait(event)
                return
            except queue.Full:
                try:
                    self.queue.get_nowait()
                except queue.Empty:
                    pass

    def send_started(self, event: SendStarted) -> None:
        self._put(event)

    def read_completed(self, event: ReadCompleted) -> None:
        self._put(event)

    def events(self) -> list:
        """Return and remove all pending events, oldest first."""
        pending = []
        while True:
            try:
                pending.append(self.queue.get_nowait())
            except queue.Empty:
                return pending


class CallbackSink:
    """Sink forwarding event payloads to plain callables."""

    def __init__(self, on_send: Optional[Callable[[str], None]] = None,
                 on_read: Optional[Callable[[str], None]] = None):
        self.on_send = on_send
        self.on_read = on_read

    def send_started(self, event: SendStarted) -> None:
        if self.on_send is not None:
            self.on_send(event.payload)

    def read_completed(self, event: ReadCompleted) -> None:
        if self.on_read is not None:
            self.on_read(event.payload)
