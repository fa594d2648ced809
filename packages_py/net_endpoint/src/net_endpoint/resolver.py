"""
Endpoint resolution: HOST[:PORT] text to socket address candidates
"""
import logging
import os
import socket
from typing import Optional

from .config import ResolverConfig, build_hints, load_resolver_config, split_endpoint_spec
from .context import ResolverContext, get_resolver_context
from .types import (
    AddressCandidate,
    EndpointResolution,
    EndpointSpecError,
    ParsedEndpointSpec,
    ResolutionPolicy,
    ResolvedEndpoint,
    ResolveErrorKind,
    ResolverContextError,
    ResolverHints,
)

logger = logging.getLogger(__name__)


def _malformed(spec: str, message: str) -> EndpointResolution:
    logger.debug(message)
    return EndpointResolution(
        spec=spec,
        error_kind=ResolveErrorKind.MALFORMED_INPUT,
        error_message=message,
    )


def _prepare(
    spec: str,
    policy: ResolutionPolicy,
    default_port: Optional[str],
    config: ResolverConfig,
) -> tuple[Optional[ParsedEndpointSpec], Optional[ResolverHints], Optional[EndpointResolution]]:
    """Split the spec and build hints; on malformed input return the failed resolution"""
    try:
        parsed = split_endpoint_spec(spec, default_port)
    except EndpointSpecError as e:
        return None, None, _malformed(spec, str(e))
    return parsed, build_hints(policy, config), None


def _lookup_host(parsed: ParsedEndpointSpec) -> Optional[str]:
    # getaddrinfo wants None, not "", for the wildcard/loopback address
    return parsed.host or None


def _failed(spec: str, error: OSError) -> EndpointResolution:
    """Log and classify a resolver exception"""
    if isinstance(error, socket.gaierror):
        message = f"error resolving {spec}: {error.strerror or error}"
        logger.warning(message)
        return EndpointResolution(
            spec=spec,
            error_kind=ResolveErrorKind.RESOLVER_ERROR,
            error_message=message,
        )

    os_errno = error.errno
    reason = os.strerror(os_errno) if os_errno else str(error)
    message = f"error resolving {spec}: system error [{reason}]"
    logger.warning(message)
    return EndpointResolution(
        spec=spec,
        error_kind=ResolveErrorKind.SYSTEM_ERROR,
        error_message=message,
        os_errno=os_errno,
    )


def _finish(spec: str, infos: list[tuple]) -> EndpointResolution:
    """Wrap getaddrinfo output, treating an empty list as a failure"""
    if not infos:
        message = f"address resolution failed for {spec}"
        logger.warning(message)
        return EndpointResolution(
            spec=spec,
            error_kind=ResolveErrorKind.EMPTY_RESULT,
            error_message=message,
        )

    endpoint = ResolvedEndpoint(
        spec=spec,
        candidates=[AddressCandidate.from_addrinfo(info) for info in infos],
    )
    return EndpointResolution(spec=spec, endpoint=endpoint)


async def resolve_endpoint_detailed(
    spec: str,
    *,
    numeric_only: bool = False,
    passive: bool = False,
    default_port: Optional[str] = None,
    context: Optional[ResolverContext] = None,
) -> EndpointResolution:
    """
    Resolve a HOST[:PORT] specification to socket address candidates.

    Args:
        spec: The specification, e.g. "example.com:443" or "[::1]:8080"
        numeric_only: The host is a literal address; never query DNS
        passive: Resolve for binding/listening (empty host -> wildcard)
        default_port: Port used when the spec carries none
        context: Resolver context (default: the process-wide context)

    Returns:
        EndpointResolution carrying the endpoint or the failure kind

    Raises:
        ResolverContextError: a DNS lookup is needed and no usable context exists
    """
    policy = ResolutionPolicy(numeric_only=numeric_only, passive=passive)
    if context is None:
        context = get_resolver_context()
    config = context.config if context is not None else load_resolver_config()

    parsed, hints, failure = _prepare(spec, policy, default_port, config)
    if failure is not None:
        return failure

    try:
        if numeric_only:
            # Literal addresses never touch the network
            infos = socket.getaddrinfo(
                _lookup_host(parsed),
                parsed.port,
                hints.family,
                hints.type,
                hints.proto,
                hints.flags,
            )
        else:
            if context is None:
                raise ResolverContextError(
                    f"cannot resolve {spec}: resolver context is not initialized"
                )
            infos = await context.getaddrinfo(_lookup_host(parsed), parsed.port, hints)
    except UnicodeError as e:
        return _malformed(spec, f"error in address {spec}: {e}")
    except OSError as e:
        return _failed(spec, e)

    return _finish(spec, infos)


async def resolve_endpoint(
    spec: str,
    *,
    numeric_only: bool = False,
    passive: bool = False,
    default_port: Optional[str] = None,
    context: Optional[ResolverContext] = None,
) -> Optional[ResolvedEndpoint]:
    """
    Resolve a HOST[:PORT] specification.

    Same arguments as resolve_endpoint_detailed().

    Returns:
        The resolved endpoint, or None on failure (the reason is logged)
    """
    resolution = await resolve_endpoint_detailed(
        spec,
        numeric_only=numeric_only,
        passive=passive,
        default_port=default_port,
        context=context,
    )
    return resolution.endpoint


def resolve_endpoint_detailed_sync(
    spec: str,
    *,
    numeric_only: bool = False,
    passive: bool = False,
    default_port: Optional[str] = None,
    config: Optional[ResolverConfig] = None,
) -> EndpointResolution:
    """
    Blocking variant of resolve_endpoint_detailed().

    Calls the platform resolver directly; meant for start-up code that runs
    before an event loop exists.
    """
    policy = ResolutionPolicy(numeric_only=numeric_only, passive=passive)
    parsed, hints, failure = _prepare(
        spec, policy, default_port, config or load_resolver_config()
    )
    if failure is not None:
        return failure

    try:
        infos = socket.getaddrinfo(
            _lookup_host(parsed),
            parsed.port,
            hints.family,
            hints.type,
            hints.proto,
            hints.flags,
        )
    except UnicodeError as e:
        return _malformed(spec, f"error in address {spec}: {e}")
    except OSError as e:
        return _failed(spec, e)

    return _finish(spec, infos)


def resolve_endpoint_sync(
    spec: str,
    *,
    numeric_only: bool = False,
    passive: bool = False,
    default_port: Optional[str] = None,
    config: Optional[ResolverConfig] = None,
) -> Optional[ResolvedEndpoint]:
    """Blocking variant of resolve_endpoint()"""
    return resolve_endpoint_detailed_sync(
        spec,
        numeric_only=numeric_only,
        passive=passive,
        default_port=default_port,
        config=config,
    ).endpoint
