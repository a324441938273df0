"""Session configuration: end-of-line mode, encoding and pacing durations."""

from __future__ import annotations

# std imports
import enum
import codecs
import dataclasses

# local
from . import telopt

__all__ = ("EndOfLine", "SessionConfig")


class EndOfLine(enum.Enum):
    """Terminator appended after an outbound line."""

    CRLF = telopt.CR + telopt.LF
    CRNUL = telopt.CR + telopt.theNULL
    LF = telopt.LF

    @classmethod
    def from_name(cls, name: str) -> "EndOfLine":
        """
        Return member for case-insensitive ``name``, such as ``'crlf'``.

        :raises ValueError: When ``name`` is not a member name.
        """
        try:
            return cls[name.upper()]
        except KeyError as exc:
            raise ValueError(
                "end-of-line must be one of {0}, got {1!r}".format(
                    ", ".join(m.name.lower() for m in cls), name
                )
            ) from exc


@dataclasses.dataclass(frozen=True)
class SessionConfig:
    """
    Immutable configuration of a :class:`~.TelnetSession`.

    :param eol: Terminator written by :meth:`~.TelnetSession.write_eol`.
    :param encoding: Single-byte encoding of outbound and inbound text.
    :param write_delay: Seconds to pause after each character written by
        :meth:`~.TelnetSession.write_by_char`.
    :param poll_interval: Seconds to wait for more data once the channel is
        drained, before a read is considered complete.
    :param nonempty_timeout: Maximum seconds
        :meth:`~.TelnetSession.read_nonempty` waits for non-empty input.
    """

    eol: EndOfLine = EndOfLine.CRLF
    encoding: str = "latin-1"
    write_delay: float = 0.010
    poll_interval: float = 0.100
    nonempty_timeout: float = 0.100

    def __post_init__(self):
        if not isinstance(self.eol, EndOfLine):
            raise TypeError("eol expected EndOfLine, got {0}".format(type(self.eol)))
        for name in ("write_delay", "poll_interval", "nonempty_timeout"):
            if getattr(self, name) < 0:
                raise ValueError(
                    "{0} must not be negative, got {1!r}".format(name, getattr(self, name))
                )
        try:
            codecs.lookup(self.encoding)
        except LookupError as exc:
            raise ValueError("unknown encoding: {0!r}".format(self.encoding)) from exc

    def replace(self, **changes) -> "SessionConfig":
        """Return copy of this configuration with given fields replaced."""
        return dataclasses.replace(self, **changes)
