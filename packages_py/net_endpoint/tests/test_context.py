"""
Tests for the resolver context

Coverage includes:
- get_resolver_context() before and after initialization
- init_resolver_context() double initialization and failures
- close_resolver_context() teardown
- ResolverContext.getaddrinfo() on default and dedicated executors
"""

import asyncio
import socket
import threading
from unittest.mock import patch

import pytest

from net_endpoint import (
    ResolverConfig,
    ResolverContext,
    ResolverContextError,
    ResolverHints,
    close_resolver_context,
    get_resolver_context,
    init_resolver_context,
)

MOCK_RESULT = [(socket.AF_INET, socket.SOCK_STREAM, 6, "", ("10.0.0.1", 80))]


class TestResolverContextHolder:
    """Tests for the process-wide holder"""

    def test_get_before_init_returns_none(self):
        """Should return None rather than failing before initialization"""
        assert get_resolver_context() is None

    @pytest.mark.asyncio
    async def test_init_binds_running_loop(self):
        """Should bind to the running loop by default"""
        context = init_resolver_context()

        assert get_resolver_context() is context
        assert context.loop is asyncio.get_running_loop()

    @pytest.mark.asyncio
    async def test_init_twice_raises(self):
        """Should refuse a second initialization"""
        first = init_resolver_context()

        with pytest.raises(ResolverContextError):
            init_resolver_context()

        assert get_resolver_context() is first

    def test_init_without_loop_raises(self):
        """Should fail when there is no running loop and none is given"""
        with pytest.raises(ResolverContextError):
            init_resolver_context()

        assert get_resolver_context() is None

    def test_init_with_closed_loop_raises(self):
        """Should fail to bind to a closed loop"""
        loop = asyncio.new_event_loop()
        loop.close()

        with pytest.raises(ResolverContextError):
            init_resolver_context(loop)

        assert get_resolver_context() is None

    def test_init_with_explicit_loop(self):
        """Should accept an explicit loop outside of a coroutine"""
        loop = asyncio.new_event_loop()
        try:
            context = init_resolver_context(loop, ResolverConfig(max_workers=1))
            assert context.loop is loop
            assert context.config.max_workers == 1
        finally:
            close_resolver_context()
            loop.close()

    @pytest.mark.asyncio
    async def test_close_clears_holder(self):
        """Should close the context and allow re-initialization"""
        context = init_resolver_context()
        close_resolver_context()

        assert context.closed is True
        assert get_resolver_context() is None

        again = init_resolver_context()
        assert again is not context

    def test_close_without_context(self):
        """Should be a no-op when nothing was initialized"""
        close_resolver_context()
        assert get_resolver_context() is None


class TestResolverContextLookup:
    """Tests for ResolverContext.getaddrinfo"""

    @pytest.mark.asyncio
    async def test_passes_hints(self):
        """Should hand host, port and every hint to getaddrinfo"""
        context = ResolverContext(asyncio.get_running_loop())
        hints = ResolverHints(
            family=socket.AF_INET,
            type=socket.SOCK_STREAM,
            proto=0,
            flags=socket.AI_NUMERICSERV,
        )

        with patch("socket.getaddrinfo", return_value=MOCK_RESULT) as mock:
            result = await context.getaddrinfo("api.internal", "80", hints)

        assert result == MOCK_RESULT
        mock.assert_called_once_with(
            "api.internal", "80", socket.AF_INET, socket.SOCK_STREAM, 0, socket.AI_NUMERICSERV
        )
        context.close()

    @pytest.mark.asyncio
    async def test_dedicated_executor(self):
        """Should run lookups on the dedicated pool when max_workers is set"""
        config = ResolverConfig(max_workers=2, thread_name_prefix="test-resolver")
        context = ResolverContext(asyncio.get_running_loop(), config)
        thread_names = []

        def fake_getaddrinfo(*args):
            thread_names.append(threading.current_thread().name)
            return MOCK_RESULT

        with patch("socket.getaddrinfo", side_effect=fake_getaddrinfo):
            await context.getaddrinfo("api.internal", "80", ResolverHints())

        assert thread_names[0].startswith("test-resolver")
        context.close()

    @pytest.mark.asyncio
    async def test_propagates_gaierror(self):
        """Should let resolver errors through for the caller to classify"""
        context = ResolverContext(asyncio.get_running_loop())
        error = socket.gaierror(socket.EAI_NONAME, "Name or service not known")

        with patch("socket.getaddrinfo", side_effect=error):
            with pytest.raises(socket.gaierror):
                await context.getaddrinfo("nonexistent.invalid", "80", ResolverHints())

        context.close()

    @pytest.mark.asyncio
    async def test_closed_context_raises(self):
        """Should refuse lookups once closed"""
        context = ResolverContext(asyncio.get_running_loop())
        context.close()
        context.close()

        with pytest.raises(ResolverContextError):
            await context.getaddrinfo("api.internal", "80", ResolverHints())
