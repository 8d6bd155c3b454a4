from __future__ import annotations

from collections.abc import Iterator

import pytest

from fieldwire._internal.container import Container
from fieldwire._internal.container_context import container_context


@pytest.fixture()
def fieldwire_container() -> Container:
    """Create a fresh container for one test.

    The fixture is function-scoped, so registrations and singletons never leak
    between tests unless users override the fixture scope explicitly.

    Returns:
        A new ``Container`` instance.

    """
    return Container()


@pytest.fixture()
def fieldwire_context(fieldwire_container: Container) -> Iterator[Container]:
    """Bind ``fieldwire_container`` to the global ``container_context`` for one test.

    The previously bound container is restored afterwards, so code under test
    that uses ``container_context`` sees an isolated container.

    Yields:
        The container bound for the duration of the test.

    """
    previous = container_context.get_current()
    container_context.set_current(fieldwire_container)
    try:
        yield fieldwire_container
    finally:
        container_context.set_current(previous)
