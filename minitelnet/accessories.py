"""Accessory functions."""
# std imports
import logging
import importlib.metadata

# 3rd party
from wcwidth import strip_sequences

__all__ = ('name_unicode', 'printable', 'make_logger', 'repr_mapping',
           'get_version')

_DEFAULT_LOGFMT = ' '.join(('%(asctime)s',
                            '%(levelname)s',
                            '%(name)s:%(lineno)d',
                            '%(message)s'))


def get_version():
    """Return installed distribution version of minitelnet."""
    return importlib.metadata.version("minitelnet")


def name_unicode(ucs):
    r"""
    Return 7-bit ascii printable of a single character.

    Control characters are shown in caret notation, characters above
    ascii as hexadecimal escapes.

    Example::

        >>> name_unicode('\r'), name_unicode('\x7f'), name_unicode('\xff')
        ('^M', '^?', '\\xff')
    """
    bits = ord(ucs)
    if 32 <= bits <= 126:
        return ucs
    if bits == 127:
        return "^?"
    if bits < 32:
        return "^" + chr(bits + 64)
    return r'\x{:02x}'.format(bits)


def printable(text):
    r"""
    Return ``text`` without terminal sequences, as 7-bit ascii printable.

    Example::

        >>> printable('\x1b[1mok\x1b[m\r\n')
        'ok^M^J'
    """
    return ''.join(name_unicode(ucs) for ucs in strip_sequences(text))


def make_logger(name, loglevel='info', logfile=None, logfmt=_DEFAULT_LOGFMT):
    """
    Configure the root logger and return logger ``name``.

    :param str loglevel: level name, such as ``'debug'`` or ``'warn'``.
    :param str logfile: path of file receiving log records, stderr when
        unset.
    :param str logfmt: :mod:`logging` format string.
    :raises ValueError: When ``loglevel`` is not a level name.
    """
    lvl = getattr(logging, loglevel.upper(), None)
    if not isinstance(lvl, int):
        raise ValueError('unknown log level: {0!r}'.format(loglevel))
    logging.getLogger().setLevel(lvl)

    _cfg = {'format': logfmt}
    if logfile:
        _cfg['filename'] = logfile
    logging.basicConfig(**_cfg)
    return logging.getLogger(name)


def repr_mapping(mapping):
    """Return printable string, 'key=value [key=value ...]' for mapping."""
    return ' '.join('='.join(map(str, kv)) for kv in mapping.items())
