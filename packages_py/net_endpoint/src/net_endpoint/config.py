"""
Configuration utilities for net_endpoint
"""
import ipaddress
import socket
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .types import (
    EndpointSpecError,
    ParsedEndpointSpec,
    ResolutionPolicy,
    ResolverHints,
)


class ResolverConfig(BaseSettings):
    """Resolver settings, overridable through NET_ENDPOINT_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="NET_ENDPOINT_")

    address_config: bool = True
    """Only return address families configured on the host (AI_ADDRCONFIG). Default: True"""

    max_workers: Optional[int] = None
    """Size of a dedicated resolution thread pool. Default: None (loop default executor)"""

    thread_name_prefix: str = "net-endpoint-resolver"
    """Thread name prefix for the dedicated resolution pool"""

    @field_validator("max_workers")
    @classmethod
    def _check_max_workers(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            raise ValueError("max_workers must be at least 1")
        return value


# Default configuration
DEFAULT_RESOLVER_CONFIG = ResolverConfig()


def load_resolver_config(**overrides) -> ResolverConfig:
    """Read configuration from the environment, explicit overrides taking precedence"""
    return ResolverConfig(**overrides)


def build_hints(
    policy: ResolutionPolicy,
    config: Optional[ResolverConfig] = None,
) -> ResolverHints:
    """
    Build getaddrinfo hints for a resolution policy.

    Stream sockets of any family, numeric services only. Passive adds
    AI_PASSIVE (wildcard bind addresses), numeric_only adds AI_NUMERICHOST
    (literal hosts, no DNS query).
    """
    config = config or load_resolver_config()

    flags = socket.AI_NUMERICSERV
    if config.address_config:
        flags |= socket.AI_ADDRCONFIG
    if policy.passive:
        flags |= socket.AI_PASSIVE
    if policy.numeric_only:
        flags |= socket.AI_NUMERICHOST

    return ResolverHints(
        family=socket.AF_UNSPEC,
        type=socket.SOCK_STREAM,
        proto=0,
        flags=flags,
    )


def _check_port(spec: str, port: str) -> str:
    # getaddrinfo reads an empty service as port 0
    if not port:
        raise EndpointSpecError(f"error in address {spec}: port required")
    if not (port.isascii() and port.isdigit()):
        raise EndpointSpecError(f"error in address {spec}: port must be numeric")
    return port


def split_endpoint_spec(
    spec: str,
    default_port: Optional[str] = None,
) -> ParsedEndpointSpec:
    """
    Split a HOST[:PORT] specification into host and port.

    Accepted forms:
        host:port, host, [v6]:port, [v6], and a bare IPv6 literal (no port)

    An unbracketed spec with several colons is only accepted when the whole
    spec is an IPv6 literal; IPv6 with a port needs brackets.

    Args:
        spec: The specification text
        default_port: Port used when the spec carries none

    Returns:
        ParsedEndpointSpec

    Raises:
        EndpointSpecError: malformed spec, or no port and no default
    """
    if spec.startswith("["):
        close_index = spec.find("]")
        if close_index < 0:
            raise EndpointSpecError(f"error in address {spec}: missing ']'")
        host = spec[1:close_index]
        rest = spec[close_index + 1:]
        if rest.startswith(":"):
            port = _check_port(spec, rest[1:])
            return ParsedEndpointSpec(host=host, port=port, bracketed=True)
        if rest:
            raise EndpointSpecError(
                f"error in address {spec}: unexpected text after ']'"
            )
        if default_port is None:
            raise EndpointSpecError(f"error in address {spec}: port required")
        return ParsedEndpointSpec(host=host, port=default_port, bracketed=True)

    colons = spec.count(":")
    if colons == 1:
        host, port = spec.split(":", 1)
        return ParsedEndpointSpec(host=host, port=_check_port(spec, port))

    if colons > 1:
        try:
            ipaddress.IPv6Address(spec.split("%", 1)[0])
        except ValueError:
            raise EndpointSpecError(
                f"error in address {spec}: IPv6 addresses with a port must use [brackets]"
            ) from None

    if default_port is None:
        raise EndpointSpecError(f"error in address {spec}: port required")
    return ParsedEndpointSpec(host=spec, port=default_port)
