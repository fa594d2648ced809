"""
Endpoint address utilities: HOST[:PORT] parsing and resolution, canonical
address formatting, and the resolver context bound to the event loop.
"""
from .types import (
    SocketAddress,
    ResolveErrorKind,
    NetEndpointError,
    EndpointSpecError,
    ResolverContextError,
    AddressContractError,
    EndpointResolutionError,
    ParsedEndpointSpec,
    ResolutionPolicy,
    ResolverHints,
    AddressCandidate,
    ResolvedEndpoint,
    EndpointResolution,
)
from .config import (
    ResolverConfig,
    DEFAULT_RESOLVER_CONFIG,
    load_resolver_config,
    build_hints,
    split_endpoint_spec,
)
from .codec import (
    format_numeric_address,
    parse_numeric_address,
    inet_ntop,
    inet_pton,
)
from .context import (
    ResolverContext,
    get_resolver_context,
    init_resolver_context,
    close_resolver_context,
)
from .resolver import (
    resolve_endpoint,
    resolve_endpoint_detailed,
    resolve_endpoint_sync,
    resolve_endpoint_detailed_sync,
)
from .formatter import (
    format_address,
    format_candidate,
    format_endpoint,
    format_socket_name,
    format_peer_name,
)


__all__ = [
    # Types
    "SocketAddress",
    "ResolveErrorKind",
    "NetEndpointError",
    "EndpointSpecError",
    "ResolverContextError",
    "AddressContractError",
    "EndpointResolutionError",
    "ParsedEndpointSpec",
    "ResolutionPolicy",
    "ResolverHints",
    "AddressCandidate",
    "ResolvedEndpoint",
    "EndpointResolution",
    # Config
    "ResolverConfig",
    "DEFAULT_RESOLVER_CONFIG",
    "load_resolver_config",
    "build_hints",
    "split_endpoint_spec",
    # Codec
    "format_numeric_address",
    "parse_numeric_address",
    "inet_ntop",
    "inet_pton",
    # Context
    "ResolverContext",
    "get_resolver_context",
    "init_resolver_context",
    "close_resolver_context",
    # Resolver
    "resolve_endpoint",
    "resolve_endpoint_detailed",
    "resolve_endpoint_sync",
    "resolve_endpoint_detailed_sync",
    # Formatter
    "format_address",
    "format_candidate",
    "format_endpoint",
    "format_socket_name",
    "format_peer_name",
]


__version__ = "1.0.0"
