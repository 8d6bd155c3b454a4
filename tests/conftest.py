"""Shared pytest fixtures for fieldwire tests."""

import pytest

from fieldwire.container import Container
from fieldwire.lock_mode import LockMode
from fieldwire.providers import Lifecycle


@pytest.fixture()
def container() -> Container:
    """Default container: transient classes, no locking."""
    return Container()


@pytest.fixture()
def container_singleton() -> Container:
    """Container with singleton as the default lifecycle."""
    return Container(Lifecycle.SINGLETON)


@pytest.fixture()
def container_threaded() -> Container:
    """Container guarded by a re-entrant thread lock."""
    return Container(lock_mode=LockMode.THREAD)
