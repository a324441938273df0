"""Module provides :class:`TelnetInterpreter`, the IAC command interpreter."""

from __future__ import annotations

# std imports
import logging
from typing import Optional

# local
from .config import SessionConfig
from .telopt import (DO, SB, SE, IAC, SGA, WILL, WONT, DONT, NEGOTIATION_VERBS,
                     name_command, name_option)

__all__ = ("TelnetInterpreter", "negotiation_reply")


def negotiation_reply(verb, opt):
    """
    Return the 3-byte reply to negotiation command ``IAC verb opt``.

    Suppress Go-Ahead is the only option agreed to: ``DO SGA`` is answered
    by ``WILL SGA``, any other verb by ``DO SGA``.  Every other option is
    refused, ``DO`` by ``WONT``, and any other verb by ``DONT``.

    :param bytes verb: one of DO, DONT, WILL, WONT.
    :param bytes opt: single option byte.
    :rtype: bytes
    """
    if opt == SGA:
        reply = WILL if verb == DO else DO
    else:
        reply = WONT if verb == DO else DONT
    return IAC + reply + opt


class TelnetInterpreter:
    """
    Telnet Is-A-Command (IAC) interpreter over a :class:`~.ByteChannel`.

    :meth:`drain` consumes every byte the channel makes available, answering
    negotiation sequences on the same channel as they are read, and collects
    all in-band bytes into a caller-owned buffer.  No parse state is kept
    between calls; a sequence whose next byte does not arrive within
    ``poll_interval`` is abandoned.

    :param channel: readable and writable :class:`~.ByteChannel`.
    :param SessionConfig config: source of ``poll_interval``.
    :param logging.Logger log: target logger, if None is given, one is
        created using the namespace ``'minitelnet.interpreter'``.
    """

    def __init__(self, channel, config: Optional[SessionConfig] = None,
                 log: Optional[logging.Logger] = None):
        self.channel = channel
        self.config = config or SessionConfig()
        self.log = log or logging.getLogger(__name__)

    def drain(self, buf: Optional[bytearray] = None) -> bytearray:
        """
        Read until no data arrives within ``poll_interval``.

        A producer that never pauses keeps this method running; callers
        bound elapsed time at a higher level.

        :param bytearray buf: buffer receiving in-band bytes, a new one is
            created when None.
        :returns: ``buf``.
        """
        if buf is None:
            buf = bytearray()
        while True:
            while self.channel.data_available():
                self.feed(buf)
            if not self.channel.data_available(timeout=self.config.poll_interval):
                return buf

    def feed(self, buf: bytearray) -> None:
        """Consume one byte, or one complete IAC sequence, into ``buf``."""
        byte = self.channel.read_byte()
        if byte < 0:
            return
        if bytes([byte]) != IAC:
            buf.append(byte)
            return

        verb = self._next_byte()
        if verb is None:
            self.log.debug("recv IAC, stream ended before command byte")
        elif verb == IAC:
            # escaped literal 255
            buf.append(ord(IAC))
        elif verb in NEGOTIATION_VERBS:
            opt = self._next_byte()
            if opt is None:
                self.log.debug("recv IAC {}, stream ended before option byte"
                               .format(name_command(verb)))
                return
            self.log.debug("recv IAC {} {}".format(
                name_command(verb), name_option(opt)))
            self._reply(negotiation_reply(verb, opt))
        elif verb == SB:
            self._skip_subnegotiation()
        else:
            self.log.debug("recv IAC {} (ignored)".format(name_command(verb)))

    def _skip_subnegotiation(self):
        """Discard bytes following IAC SB through IAC SE."""
        count = 0
        while True:
            byte = self._next_byte()
            if byte != IAC:
                if byte is None:
                    break
                count += 1
                continue
            cmd = self._next_byte()
            if cmd is None:
                break
            if cmd == SE:
                self.log.debug("recv IAC SB ({} bytes) IAC SE (ignored)"
                               .format(count))
                return
            if cmd != IAC:
                # IAC IAC is an escaped byte within the buffer, anything
                # else ends it
                self.log.error("sub-negotiation buffer interrupted by IAC {}"
                               .format(name_command(cmd)))
                return
            count += 1
        self.log.debug("recv IAC SB, stream ended after {} bytes".format(count))

    def _next_byte(self):
        """Return next byte, or None if none arrives within poll_interval."""
        if not (self.channel.data_available() or
                self.channel.data_available(timeout=self.config.poll_interval)):
            return None
        byte = self.channel.read_byte()
        return None if byte < 0 else bytes([byte])

    def _reply(self, cmd):
        self.log.debug("send IAC {} {}".format(
            name_command(cmd[1:2]), name_option(cmd[2:3])))
        try:
            self.channel.write(cmd)
            self.channel.flush()
        except (OSError, ValueError) as err:
            self.log.debug("send IAC {} failed: {}".format(
                name_command(cmd[1:2]), err))
