import contextlib
import socket

import pytest

from prerender.core.errors import NoAvailablePortError
from prerender.server.ports import find_available_port, is_port_free


def _free_port() -> int:
    with contextlib.closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind(("", 0))
        return s.getsockname()[1]


@contextlib.contextmanager
def occupy(port: int):
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        s.bind(("", port))
        s.listen(1)
        yield s
    finally:
        s.close()


def test_returns_start_port_when_free():
    port = _free_port()
    assert find_available_port(port, attempts=1) == port


def test_skips_busy_port():
    port = _free_port()
    with occupy(port):
        assert not is_port_free(port)
        found = find_available_port(port, attempts=10)
    assert port < found < port + 10


def test_exhausted_window_raises():
    port = _free_port()
    with occupy(port):
        with pytest.raises(NoAvailablePortError) as exc:
            find_available_port(port, attempts=1)
    assert exc.value.start_port == port
    assert "No available port" in str(exc.value)


def test_probe_releases_port():
    port = find_available_port(_free_port(), attempts=5)
    # The probe socket is closed, so binding again must work.
    with occupy(port):
        pass


@contextlib.contextmanager
def occupy_ipv6_loopback(port: int):
    if not socket.has_ipv6:
        pytest.skip("IPv6 not supported")
    s = socket.socket(socket.AF_INET6, socket.SOCK_STREAM)
    try:
        s.setsockopt(socket.IPPROTO_IPV6, socket.IPV6_V6ONLY, 1)
        try:
            s.bind(("::1", port))
        except OSError as e:
            pytest.skip(f"cannot bind ::1: {e}")
        s.listen(1)
        yield s
    finally:
        s.close()


def test_ipv6_localhost_listener_counts_as_busy():
    # Node dev servers often bind only ::1 for "localhost".
    port = _free_port()
    with occupy_ipv6_loopback(port):
        assert not is_port_free(port)
        found = find_available_port(port, attempts=10)
    assert found != port
    assert port < found < port + 10


def test_ipv4_loopback_listener_counts_as_busy():
    port = _free_port()
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        s.bind(("127.0.0.1", port))
        s.listen(1)
        assert not is_port_free(port)
    finally:
        s.close()
