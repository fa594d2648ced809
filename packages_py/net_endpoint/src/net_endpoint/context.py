"""
Resolver context: the name-resolution engine bound to an event loop.

A process creates one context at startup with init_resolver_context() and
either passes it explicitly to the resolve functions or lets them read it
back through get_resolver_context().
"""
import asyncio
import functools
import logging
import socket
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Union

from .config import ResolverConfig, load_resolver_config
from .types import ResolverContextError, ResolverHints

logger = logging.getLogger(__name__)


class ResolverContext:
    """
    Runs the platform resolver (getaddrinfo) on an event loop's executor.

    Name server configuration is the system's (resolv.conf, hosts file).

    Example:
        context = ResolverContext(asyncio.get_running_loop())
        infos = await context.getaddrinfo("example.com", "443", hints)
        context.close()
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        config: Optional[ResolverConfig] = None,
    ) -> None:
        if loop.is_closed():
            raise ResolverContextError("cannot bind a resolver context to a closed event loop")

        self._loop = loop
        self._config = config or load_resolver_config()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._closed = False

        if self._config.max_workers is not None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._config.max_workers,
                thread_name_prefix=self._config.thread_name_prefix,
            )

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    @property
    def config(self) -> ResolverConfig:
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    async def getaddrinfo(
        self,
        host: Optional[str],
        port: Union[str, int, None],
        hints: ResolverHints,
    ) -> list[tuple]:
        """
        Resolve host and port with the given hints.

        Raises:
            socket.gaierror: the resolver reported an error
            OSError: the system call itself failed
            ResolverContextError: the context is closed
        """
        if self._closed:
            raise ResolverContextError("resolver context is closed")

        return await self._loop.run_in_executor(
            self._executor,
            functools.partial(
                socket.getaddrinfo,
                host,
                port,
                hints.family,
                hints.type,
                hints.proto,
                hints.flags,
            ),
        )

    def close(self) -> None:
        """Release the dedicated executor, if any"""
        if self._closed:
            return
        self._closed = True
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None


_the_context: Optional[ResolverContext] = None


def get_resolver_context() -> Optional[ResolverContext]:
    """
    Get the process-wide resolver context.

    Returns:
        The context stored by init_resolver_context(), or None
    """
    return _the_context


def init_resolver_context(
    loop: Optional[asyncio.AbstractEventLoop] = None,
    config: Optional[ResolverConfig] = None,
) -> ResolverContext:
    """
    Create the process-wide resolver context.

    Args:
        loop: Event loop to bind to (default: the running loop)
        config: Resolver configuration (default: read from the environment)

    Returns:
        The new context

    Raises:
        ResolverContextError: already initialized, or construction failed
    """
    global _the_context

    if _the_context is not None:
        raise ResolverContextError("resolver context is already initialized")

    try:
        if loop is None:
            loop = asyncio.get_running_loop()
        context = ResolverContext(loop, config)
    except RuntimeError as e:
        logger.error(f"failed to initialize resolver context: {e}")
        raise ResolverContextError(f"failed to initialize resolver context: {e}") from e

    _the_context = context
    logger.info(
        f"resolver context initialized (max_workers={context.config.max_workers})"
    )
    return context


def close_resolver_context() -> None:
    """Close and forget the process-wide resolver context"""
    global _the_context

    context, _the_context = _the_context, None
    if context is not None:
        context.close()
        logger.info("resolver context closed")
