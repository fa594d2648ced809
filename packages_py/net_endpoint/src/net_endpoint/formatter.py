"""
Canonical text for socket addresses, for logs and diagnostics.

    AF_INET   -> 1.2.3.4:80
    AF_INET6  -> [::1]:8080
    AF_UNIX   -> /run/app.sock
    other     -> <addr family N>
"""
import os
import socket
from typing import Optional

from .codec import inet_ntop, inet_pton
from .types import AddressCandidate, AddressContractError, ResolvedEndpoint, SocketAddress


def _fallback(family: int) -> str:
    return f"<addr family {int(family)}>"


def _require_ip_tuple(family_name: str, sockaddr: SocketAddress) -> None:
    if not isinstance(sockaddr, tuple) or len(sockaddr) < 2:
        raise AddressContractError(
            f"{family_name} address must be a (host, port, ...) tuple, got {sockaddr!r}"
        )


def _canonical_host(family: int, host: str) -> Optional[str]:
    """Normalize an address literal, keeping an IPv6 %zone suffix"""
    if not isinstance(host, str):
        return None
    address, percent, zone = host.partition("%")
    raw = inet_pton(family, address)
    if raw is None:
        return None
    text = inet_ntop(family, raw)
    if text is None:
        return None
    return text + percent + zone


def format_address(family: int, sockaddr: SocketAddress) -> str:
    """
    Render a socket address as canonical text.

    Never fails for addresses the socket module can produce: an address that
    cannot be converted, or an unknown family, renders as "<addr family N>".

    Args:
        family: Address family (socket.AF_INET, socket.AF_INET6, ...)
        sockaddr: The address as the socket module represents it

    Returns:
        A new string

    Raises:
        AddressContractError: an IP family with something other than a
            (host, port, ...) tuple
    """
    if family == socket.AF_INET:
        _require_ip_tuple("AF_INET", sockaddr)
        host = _canonical_host(family, sockaddr[0])
        if host is not None:
            return f"{host}:{int(sockaddr[1])}"

    elif family == socket.AF_INET6:
        _require_ip_tuple("AF_INET6", sockaddr)
        host = _canonical_host(family, sockaddr[0])
        if host is not None:
            return f"[{host}]:{int(sockaddr[1])}"

    elif hasattr(socket, "AF_UNIX") and family == socket.AF_UNIX:
        path = os.fsdecode(sockaddr) if isinstance(sockaddr, bytes) else str(sockaddr)
        # Linux abstract namespace: leading NUL, shown as @name
        if path.startswith("\0"):
            return "@" + path[1:]
        return path

    return _fallback(family)


def format_candidate(candidate: AddressCandidate) -> str:
    """Render one resolution candidate"""
    return format_address(candidate.family, candidate.sockaddr)


def format_endpoint(endpoint: ResolvedEndpoint) -> list[str]:
    """Render every candidate of an endpoint, in order"""
    return [format_candidate(candidate) for candidate in endpoint]


def format_socket_name(sock: socket.socket) -> str:
    """Render the local address of a socket"""
    return format_address(sock.family, sock.getsockname())


def format_peer_name(sock: socket.socket) -> str:
    """Render the remote address of a socket; the fallback text if unconnected"""
    try:
        peer = sock.getpeername()
    except OSError:
        return _fallback(sock.family)
    return format_address(sock.family, peer)
