#!/usr/bin/env python3
"""Telnet client for scripted line exchange, with ``open_session`` helper."""

# std imports
import sys
import socket
import logging
import argparse

# local
from . import accessories
from .config import EndOfLine, SessionConfig
from .events import LoggingSink
from .channel import SocketChannel
from .session import TelnetSession

__all__ = ('open_session', 'main')


def open_session(host, port=23, config=None, sink=None, timeout=10.0, log=None):
    """
    Connect to ``host`` and return a :class:`~.TelnetSession`.

    :param str host: Remote server hostname or IP address.
    :param int port: Remote server port.
    :param SessionConfig config: session configuration, defaults when None.
    :param sink: :class:`~.EventSink` for send and read events.
    :param float timeout: seconds allowed to establish the connection.
    :param logging.Logger log: target logger of session and channel.
    :raises OSError: When the connection cannot be established.
    """
    sock = socket.create_connection((host, port), timeout=timeout)
    # reads are paced by select() in SocketChannel, not socket timeouts
    sock.settimeout(None)
    return TelnetSession(SocketChannel(sock, log=log), config=config,
                         sink=sink, log=log)


def run_client(kwargs):
    """Exchange lines given by ``kwargs``, return process exit status."""
    log = accessories.make_logger(
        name=__name__,
        loglevel=kwargs.pop('loglevel'),
        logfile=kwargs.pop('logfile'),
        logfmt=kwargs.pop('logfmt'),
    )
    log.debug('Client configuration: {key_values}'.format(
        key_values=accessories.repr_mapping(kwargs)))

    readline = kwargs.pop('readline')
    with open_session(kwargs['host'], kwargs['port'], config=kwargs['config'],
                      sink=LoggingSink(), timeout=kwargs['connect_timeout']) as session:
        print(session.read_nonempty(readline))
        for line in kwargs['send']:
            if not session.write_line(line):
                log.error('write failed: {0!r}'.format(line))
                return 1
            print(session.read_nonempty(readline))
    return 0


def _get_argument_parser():
    defaults = SessionConfig()
    parser = argparse.ArgumentParser(
        description="Telnet line exchange client",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("host", action="store", help="hostname")
    parser.add_argument("port", nargs="?", default=23, type=int, help="port number")
    parser.add_argument("--send", action="append", default=[], metavar="LINE",
                        help="line to send, may be repeated")
    parser.add_argument("--readline", action="store_true",
                        help="print only the last line of each reply")
    parser.add_argument("--eol", default="crlf",
                        choices=[m.name.lower() for m in EndOfLine],
                        help="end-of-line sent after each line")
    parser.add_argument("--encoding", default=defaults.encoding, help="encoding name")
    parser.add_argument("--write-delay", default=defaults.write_delay, type=float,
                        help="seconds between characters sent")
    parser.add_argument("--poll-interval", default=defaults.poll_interval, type=float,
                        help="seconds of silence ending a read")
    parser.add_argument("--nonempty-timeout", default=defaults.nonempty_timeout,
                        type=float, help="seconds to wait for a reply")
    parser.add_argument("--connect-timeout", default=10.0, type=float,
                        help="seconds to wait for connection")
    parser.add_argument("--loglevel", default="warn", help="log level")
    parser.add_argument(
        "--logfmt", default=accessories._DEFAULT_LOGFMT, help="log format"
    )
    parser.add_argument("--logfile", help="filepath")
    return parser


def _transform_args(args):
    return {
        'host': args.host,
        'port': args.port,
        'send': args.send,
        'readline': args.readline,
        'loglevel': args.loglevel,
        'logfile': args.logfile,
        'logfmt': args.logfmt,
        'connect_timeout': args.connect_timeout,
        'config': SessionConfig(
            eol=EndOfLine.from_name(args.eol),
            encoding=args.encoding,
            write_delay=args.write_delay,
            poll_interval=args.poll_interval,
            nonempty_timeout=args.nonempty_timeout,
        ),
    }


def main(argv=None):
    """Command-line 'minitelnet-client' entry point, via setuptools."""
    parser = _get_argument_parser()
    args = parser.parse_args(argv)
    try:
        kwargs = _transform_args(args)
    except ValueError as err:
        parser.error(str(err))
    try:
        return run_client(kwargs)
    except OSError as err:
        logging.getLogger(__name__).error('{0}:{1}: {2}'.format(
            args.host, args.port, err))
        return 1


if __name__ == '__main__':
    sys.exit(main())
