"""Pytest configuration and fixtures for net_endpoint tests."""
from typing import Generator

import pytest

from net_endpoint import ResolverConfig, close_resolver_context


@pytest.fixture(autouse=True)
def reset_resolver_context() -> Generator[None, None, None]:
    """Make sure no test leaks a process-wide resolver context."""
    close_resolver_context()
    yield
    close_resolver_context()


@pytest.fixture
def local_config() -> ResolverConfig:
    """Config usable on hosts whose only interface is loopback."""
    return ResolverConfig(address_config=False)
