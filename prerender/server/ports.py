"""Local TCP port probing."""
from __future__ import annotations

import contextlib
import errno
import os
import socket

from prerender.core.errors import NoAvailablePortError

DEFAULT_START_PORT = 5050
DEFAULT_ATTEMPTS = 100

# Errors meaning "someone else has this port"; anything else on the IPv6 side
# means the family is unusable here (no IPv6 stack, address not configured).
_BUSY_ERRNOS = (errno.EADDRINUSE, errno.EACCES)


def _in_use(family: int, host: str, port: int) -> bool:
    try:
        sock = socket.socket(family, socket.SOCK_STREAM)
    except OSError:
        return False
    with contextlib.closing(sock) as s:
        if os.name == "posix":
            # TIME_WAIT leftovers should not count as busy; live listeners still do.
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        if family == socket.AF_INET6:
            # Probe the IPv6 side alone; IPv4 is checked separately.
            s.setsockopt(socket.IPPROTO_IPV6, socket.IPV6_V6ONLY, 1)
        try:
            s.bind((host, port))
            s.listen(1)
        except OSError as exc:
            if family == socket.AF_INET6:
                return exc.errno in _BUSY_ERRNOS
            return True
    return False


def is_port_free(port: int, host: str = "") -> bool:
    """Try to bind listening sockets on ``port``; release them immediately.

    With the default ``host`` the wildcard and loopback addresses of IPv4 and
    IPv6 are probed, so a server holding only ``::1`` (as Node does
    for ``localhost``) still counts as busy.
    """
    if ":" in host:
        return not _in_use(socket.AF_INET6, host, port)
    if host:
        return not _in_use(socket.AF_INET, host, port)
    # Wildcard and loopback per family: on BSD-style stacks a wildcard bind can
    # succeed next to a loopback-only listener.
    probes = [(socket.AF_INET, ""), (socket.AF_INET, "127.0.0.1")]
    if socket.has_ipv6:
        probes += [(socket.AF_INET6, "::"), (socket.AF_INET6, "::1")]
    return not any(_in_use(family, addr, port) for family, addr in probes)


def find_available_port(
    start_port: int = DEFAULT_START_PORT,
    attempts: int = DEFAULT_ATTEMPTS,
    host: str = "",
) -> int:
    """Return the first free port in ``[start_port, start_port + attempts)``."""
    for port in range(start_port, start_port + attempts):
        if is_port_free(port, host):
            return port
    raise NoAvailablePortError(start_port, attempts)


__all__ = ["find_available_port", "is_port_free", "DEFAULT_START_PORT", "DEFAULT_ATTEMPTS"]
