"""
Numeric address conversion (packed bytes <-> text).

Uses socket.inet_ntop/inet_pton when the platform provides them and falls
back to ipaddress/getaddrinfo otherwise. Nothing here queries DNS.
"""
import ipaddress
import logging
import socket
from typing import Optional

logger = logging.getLogger(__name__)

_PACKED_LENGTHS = {
    socket.AF_INET: 4,
    socket.AF_INET6: 16,
}


def format_numeric_address(family: int, raw: bytes) -> Optional[str]:
    """
    Render packed IPv4/IPv6 bytes as text without a native inet_ntop.

    Args:
        family: socket.AF_INET or socket.AF_INET6
        raw: Packed, network-order address

    Returns:
        The canonical text form, or None for an unsupported family or a
        buffer of the wrong length.
    """
    expected = _PACKED_LENGTHS.get(family)
    if expected is None or len(raw) != expected:
        return None

    if family == socket.AF_INET:
        return str(ipaddress.IPv4Address(bytes(raw)))
    return str(ipaddress.IPv6Address(bytes(raw)))


def parse_numeric_address(family: int, text: str) -> Optional[bytes]:
    """
    Pack a literal address without a native inet_pton.

    The literal goes through getaddrinfo restricted to `family` with
    AI_NUMERICHOST. When several candidates come back, the first one wins.

    Args:
        family: socket.AF_INET or socket.AF_INET6
        text: Literal address

    Returns:
        The packed address, or None if the platform cannot parse the literal.
    """
    if family not in _PACKED_LENGTHS:
        return None

    try:
        infos = socket.getaddrinfo(text, None, family, 0, 0, socket.AI_NUMERICHOST)
    except (socket.gaierror, UnicodeError) as e:
        logger.debug(f"couldn't resolve host {text}: {e}")
        return None

    for info_family, _, _, _, sockaddr in infos:
        if info_family != family:
            continue
        host = sockaddr[0].split("%", 1)[0]
        return ipaddress.ip_address(host).packed

    logger.debug(f"couldn't resolve host {text}: no {family!r} candidates")
    return None


def inet_ntop(family: int, raw: bytes) -> Optional[str]:
    """Packed address to text; None when the conversion fails"""
    if hasattr(socket, "inet_ntop"):
        try:
            return socket.inet_ntop(family, raw)
        except (OSError, ValueError):
            return None
    return format_numeric_address(family, raw)


def inet_pton(family: int, text: str) -> Optional[bytes]:
    """Text address to packed bytes; None when the conversion fails"""
    if hasattr(socket, "inet_pton"):
        try:
            return socket.inet_pton(family, text)
        except (OSError, ValueError):
            return None
    return parse_numeric_address(family, text)
