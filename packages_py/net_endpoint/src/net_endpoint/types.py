"""
Type definitions for net_endpoint
"""
import socket
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional, Union

from .codec import inet_pton


# A socket address as the socket module represents it:
# (host, port) for AF_INET, (host, port[, flowinfo[, scope_id]]) for AF_INET6,
# a path for AF_UNIX.
SocketAddress = Union[tuple, str, bytes]


class ResolveErrorKind(str, Enum):
    """Why an endpoint resolution failed"""
    MALFORMED_INPUT = "malformed-input"
    SYSTEM_ERROR = "system-error"
    RESOLVER_ERROR = "resolver-error"
    EMPTY_RESULT = "empty-result"


class NetEndpointError(Exception):
    """Base class for net_endpoint errors."""
    pass


class EndpointSpecError(NetEndpointError, ValueError):
    """Raised when a HOST[:PORT] specification cannot be split."""
    pass


class ResolverContextError(NetEndpointError, RuntimeError):
    """Raised on resolver context lifecycle misuse or construction failure."""
    pass


class AddressContractError(NetEndpointError, AssertionError):
    """Raised when a caller hands the formatter an address of the wrong shape."""
    pass


class EndpointResolutionError(NetEndpointError):
    """Raised by EndpointResolution.raise_for_error()"""

    def __init__(
        self,
        message: str,
        kind: ResolveErrorKind,
        spec: str,
        os_errno: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.spec = spec
        self.os_errno = os_errno


@dataclass(frozen=True)
class ParsedEndpointSpec:
    """A HOST[:PORT] specification split into its parts"""

    host: str
    """Host text, brackets removed. Empty means 'any' (passive) or loopback."""

    port: str
    """Port text, as given or taken from the default port"""

    bracketed: bool = False
    """Whether the host was written in [brackets]"""


@dataclass(frozen=True)
class ResolutionPolicy:
    """Flags controlling how a specification is resolved"""

    numeric_only: bool = False
    """The host is a literal address; never query DNS"""

    passive: bool = False
    """The endpoint is for binding/listening rather than connecting"""


@dataclass(frozen=True)
class ResolverHints:
    """Hints handed to getaddrinfo"""

    family: int = socket.AF_UNSPEC
    type: int = socket.SOCK_STREAM
    proto: int = 0
    flags: int = 0


@dataclass(frozen=True)
class AddressCandidate:
    """One socket address produced by resolution"""

    family: int
    type: int
    proto: int
    canonname: str
    sockaddr: SocketAddress

    @classmethod
    def from_addrinfo(cls, entry: tuple) -> "AddressCandidate":
        """Build a candidate from one getaddrinfo() 5-tuple"""
        family, socktype, proto, canonname, sockaddr = entry
        return cls(
            family=int(family),
            type=int(socktype),
            proto=proto,
            canonname=canonname,
            sockaddr=sockaddr,
        )

    @property
    def host(self) -> Optional[str]:
        if isinstance(self.sockaddr, tuple):
            return self.sockaddr[0]
        return None

    @property
    def port(self) -> Optional[int]:
        if isinstance(self.sockaddr, tuple) and len(self.sockaddr) >= 2:
            return self.sockaddr[1]
        return None

    @property
    def address_bytes(self) -> Optional[bytes]:
        """The packed, network-order address, or None for non-IP families"""
        if self.family not in (socket.AF_INET, socket.AF_INET6) or self.host is None:
            return None
        return inet_pton(self.family, self.host.split("%", 1)[0])


@dataclass
class ResolvedEndpoint:
    """
    Ordered socket address candidates for one specification.

    The caller owns the endpoint and releases it when done, either with
    release() or by using it as a context manager.

    Example:
        with resolve_endpoint_sync("127.0.0.1:8080", numeric_only=True) as endpoint:
            sock.connect(endpoint[0].sockaddr)
    """

    spec: str
    """The specification this endpoint was resolved from"""

    candidates: list[AddressCandidate] = field(default_factory=list)
    """Candidates in the order the resolver produced them"""

    released: bool = False
    """Whether release() has dropped the candidates"""

    def __iter__(self) -> Iterator[AddressCandidate]:
        return iter(self.candidates)

    def __len__(self) -> int:
        return len(self.candidates)

    def __getitem__(self, index: int) -> AddressCandidate:
        return self.candidates[index]

    def __enter__(self) -> "ResolvedEndpoint":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.release()

    def first(self) -> Optional[AddressCandidate]:
        """The preferred candidate, or None when released/empty"""
        return self.candidates[0] if self.candidates else None

    def release(self) -> None:
        """Drop all candidates"""
        self.candidates.clear()
        self.released = True


@dataclass
class EndpointResolution:
    """Outcome of resolving one specification"""

    spec: str
    """The specification as given by the caller"""

    endpoint: Optional[ResolvedEndpoint] = None
    """The resolved endpoint, None on failure"""

    error_kind: Optional[ResolveErrorKind] = None
    """Failure category, None on success"""

    error_message: Optional[str] = None
    """Human-readable failure description"""

    os_errno: Optional[int] = None
    """Operating system errno for SYSTEM_ERROR failures"""

    @property
    def success(self) -> bool:
        return self.endpoint is not None

    def __bool__(self) -> bool:
        return self.success

    def raise_for_error(self) -> ResolvedEndpoint:
        """Return the endpoint, or raise EndpointResolutionError on failure"""
        if self.endpoint is None:
            raise EndpointResolutionError(
                self.error_message or f"error resolving {self.spec}",
                kind=self.error_kind or ResolveErrorKind.EMPTY_RESULT,
                spec=self.spec,
                os_errno=self.os_errno,
            )
        return self.endpoint
