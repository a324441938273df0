# std imports
import logging

# 3rd party
import pytest

# local
from minitelnet.config import SessionConfig
from minitelnet.telopt import (DO, GA, SB, SE, IAC, NOP, SGA, DONT, ECHO, NAWS,
                               WILL, WONT, TTYPE)
from minitelnet.interpreter import TelnetInterpreter, negotiation_reply
from minitelnet.tests.accessories import FakeChannel, BrokenChannel

OTHER = bytes([99])


def drain(*given):
    channel = FakeChannel(*given)
    buf = TelnetInterpreter(channel, SessionConfig(poll_interval=0.5)).drain()
    return bytes(buf), channel


def test_plain_bytes_pass_through():
    """Input without IAC is collected unchanged, nothing is written."""
    given = bytes(range(255))
    buf, channel = drain(given)
    assert buf == given
    assert channel.output == b''


@pytest.mark.parametrize("verb,opt,expected", [
    (DO, SGA, IAC + WILL + SGA),
    (DONT, SGA, IAC + DO + SGA),
    (WILL, SGA, IAC + DO + SGA),
    (WONT, SGA, IAC + DO + SGA),
    (DO, OTHER, IAC + WONT + OTHER),
    (DONT, OTHER, IAC + DONT + OTHER),
    (WILL, OTHER, IAC + DONT + OTHER),
    (WONT, ECHO, IAC + DONT + ECHO),
])
def test_negotiation_reply(verb, opt, expected):
    """Only Suppress Go-Ahead is agreed to."""
    assert negotiation_reply(verb, opt) == expected
    buf, channel = drain(b'a' + IAC + verb + opt + b'b')
    assert buf == b'ab'
    assert channel.output == expected
    assert channel.flushed == 1


def test_several_negotiations_answered_in_order():
    given = IAC + DO + SGA + b'login: ' + IAC + WILL + ECHO + IAC + DO + OTHER
    buf, channel = drain(given)
    assert buf == b'login: '
    assert channel.written == [IAC + WILL + SGA, IAC + DONT + ECHO,
                               IAC + WONT + OTHER]


def test_escaped_iac_is_literal_255():
    """IAC IAC yields a single byte of value 255."""
    buf, channel = drain(b'x' + IAC + IAC + b'y')
    assert buf == b'x\xffy'
    assert channel.output == b''


@pytest.mark.parametrize("given", [
    b'abc' + IAC,
    b'abc' + IAC + DO,
    b'abc' + IAC + WONT,
])
def test_truncated_sequence_abandoned(given):
    """Stream ending inside an IAC sequence sends no reply, does not raise."""
    buf, channel = drain(given)
    assert buf == b'abc'
    assert channel.written == []


def test_sequence_completed_by_next_burst():
    """An option byte arriving within poll_interval completes the command."""
    buf, channel = drain(b'abc' + IAC + DO, SGA + b'def')
    assert buf == b'abcdef'
    assert channel.written == [IAC + WILL + SGA]


def test_truncated_sequence_not_resumed():
    """Without a wait for more data, later bytes begin a fresh parse."""
    channel = FakeChannel(b'abc' + IAC + DO, SGA + b'def')
    interpreter = TelnetInterpreter(channel, SessionConfig(poll_interval=0))
    assert interpreter.drain() == b'abc'
    assert channel.written == []
    channel.data_available(timeout=1)
    assert interpreter.drain() == SGA + b'def'
    assert channel.written == []


@pytest.mark.parametrize("given,expected", [
    (b'a' + IAC + SB + TTYPE + b'\x01' + IAC + SE + b'b', b'ab'),
    (b'a' + IAC + SB + NAWS + b'\x00\x50' + IAC + IAC + b'\x00\x18'
     + IAC + SE + b'b', b'ab'),
    (b'a' + IAC + SB + TTYPE + b'\x00xterm', b'a'),
])
def test_subnegotiation_dropped(given, expected):
    """Bytes of IAC SB ... IAC SE never reach the text."""
    buf, channel = drain(given)
    assert buf == expected
    assert channel.written == []


def test_subnegotiation_interrupted(caplog):
    given = b'a' + IAC + SB + TTYPE + b'\x01' + IAC + DO + b'b'
    with caplog.at_level(logging.ERROR, logger='minitelnet.interpreter'):
        buf, channel = drain(given)
    assert buf == b'ab'
    assert 'interrupted by IAC DO' in caplog.text


@pytest.mark.parametrize("cmd", [NOP, GA])
def test_other_commands_dropped(cmd):
    buf, channel = drain(b'go' + IAC + cmd + b'on')
    assert buf == b'goon'
    assert channel.written == []


def test_drain_waits_poll_interval_for_more_data():
    """A burst arriving within poll_interval is read by the same drain."""
    buf, channel = drain(b'first ', IAC + DO + SGA + b'second')
    assert buf == b'first second'
    assert channel.output == IAC + WILL + SGA
    # one wait released the second burst, one more found nothing
    assert channel.waits == [0.5, 0.5]


def test_drain_quiet_channel():
    buf, channel = drain()
    assert buf == b''
    assert channel.waits == [0.5]


def test_drain_extends_given_buffer():
    channel = FakeChannel(b'more')
    buf = bytearray(b'some')
    result = TelnetInterpreter(channel, SessionConfig(poll_interval=0)).drain(buf)
    assert result is buf
    assert buf == b'somemore'


def test_reply_failure_does_not_stop_drain(caplog):
    channel = BrokenChannel(b'a' + IAC + DO + SGA + b'b')
    interpreter = TelnetInterpreter(channel, SessionConfig(poll_interval=0))
    with caplog.at_level(logging.DEBUG, logger='minitelnet.interpreter'):
        buf = interpreter.drain()
    assert buf == b'ab'
    assert 'send IAC WILL failed' in caplog.text


def test_negotiation_logged(caplog):
    channel = FakeChannel(IAC + WILL + ECHO)
    interpreter = TelnetInterpreter(channel, SessionConfig(poll_interval=0))
    with caplog.at_level(logging.DEBUG, logger='minitelnet.interpreter'):
        interpreter.drain()
    assert 'recv IAC WILL ECHO' in caplog.text
    assert 'send IAC DONT ECHO' in caplog.text
