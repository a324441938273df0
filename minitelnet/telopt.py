"""Telnet command and option byte values, :rfc:`854` and :rfc:`858`."""

__all__ = (
    "BINARY",
    "CR",
    "DO",
    "DONT",
    "ECHO",
    "GA",
    "IAC",
    "LF",
    "NAWS",
    "NOP",
    "SB",
    "SE",
    "SGA",
    "TTYPE",
    "WILL",
    "WONT",
    "theNULL",
    "name_command",
    "name_commands",
    "name_option",
    "NEGOTIATION_VERBS",
)

IAC = b"\xff"
DONT = b"\xfe"
DO = b"\xfd"
WONT = b"\xfc"
WILL = b"\xfb"
SB = b"\xfa"
GA = b"\xf9"
NOP = b"\xf1"
SE = b"\xf0"

BINARY = b"\x00"
ECHO = b"\x01"
SGA = b"\x03"
TTYPE = b"\x18"
NAWS = b"\x1f"

CR = b"\r"
LF = b"\n"
theNULL = b"\x00"

#: Verbs that are followed by a single option byte.
NEGOTIATION_VERBS = (DO, DONT, WILL, WONT)

#: Option byte values mapped to their names, for logging.
_DEBUG_OPTS = {BINARY: "BINARY", ECHO: "ECHO", SGA: "SGA", TTYPE: "TTYPE", NAWS: "NAWS"}

#: Command byte values mapped to their names, for logging.
_DEBUG_CMDS = {
    IAC: "IAC",
    DONT: "DONT",
    DO: "DO",
    WONT: "WONT",
    WILL: "WILL",
    SB: "SB",
    GA: "GA",
    NOP: "NOP",
    SE: "SE",
}


def name_command(byte):
    """Return string description for (maybe) telnet command byte."""
    return _DEBUG_CMDS.get(byte, _DEBUG_OPTS.get(byte, repr(byte)))


def name_option(byte):
    """Return string description for telnet option byte."""
    return _DEBUG_OPTS.get(byte, repr(byte))


def name_commands(cmds, sep=" "):
    """Return string description for array of (maybe) telnet command bytes."""
    return sep.join([name_command(bytes([byte])) for byte in cmds])
