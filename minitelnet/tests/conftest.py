"""Pytest configuration and fixtures."""

# std imports
import socket

# 3rd party
import pytest


@pytest.fixture
def socketpair():
    """Yield a connected pair of stream sockets, closed on teardown."""
    local, remote = socket.socketpair()
    yield local, remote
    for sock in (local, remote):
        sock.close()
