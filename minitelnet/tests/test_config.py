# 3rd party
import pytest

# local
from minitelnet.config import EndOfLine, SessionConfig


def test_defaults():
    config = SessionConfig()
    assert config.eol is EndOfLine.CRLF
    assert config.encoding == 'latin-1'
    assert config.write_delay == 0.010
    assert config.poll_interval == 0.100
    assert config.nonempty_timeout == 0.100


def test_eol_values():
    assert EndOfLine.CRLF.value == b'\r\n'
    assert EndOfLine.CRNUL.value == b'\r\x00'
    assert EndOfLine.LF.value == b'\n'


@pytest.mark.parametrize("name,expected", [
    ('crlf', EndOfLine.CRLF),
    ('CRNUL', EndOfLine.CRNUL),
    ('Lf', EndOfLine.LF),
])
def test_eol_from_name(name, expected):
    assert EndOfLine.from_name(name) is expected


def test_eol_from_bad_name():
    with pytest.raises(ValueError, match="crlf, crnul, lf"):
        EndOfLine.from_name('cr')


def test_immutable_and_replace():
    config = SessionConfig()
    with pytest.raises(AttributeError):
        config.write_delay = 1.0
    changed = config.replace(eol=EndOfLine.LF, write_delay=0)
    assert changed.eol is EndOfLine.LF
    assert changed.write_delay == 0
    assert config.eol is EndOfLine.CRLF


@pytest.mark.parametrize("field", ['write_delay', 'poll_interval', 'nonempty_timeout'])
def test_negative_duration(field):
    with pytest.raises(ValueError, match=field):
        SessionConfig(**{field: -0.1})


def test_bad_encoding():
    with pytest.raises(ValueError, match='unknown encoding'):
        SessionConfig(encoding='no-such-codec')


def test_bad_eol_type():
    with pytest.raises(TypeError):
        SessionConfig(eol='crlf')
