from __future__ import annotations

from fieldwire import Container, container_context, inject, injectable


@injectable
class _Greeter:
    name = inject("name")

    def greet(self) -> str:
        return f"hello {self.name}"


def test_fieldwire_container_fixture_is_fresh(fieldwire_container: Container) -> None:
    assert isinstance(fieldwire_container, Container)
    assert fieldwire_container.has("name") is False


def test_fieldwire_context_binds_the_global_context(fieldwire_context: Container) -> None:
    assert container_context.get_current() is fieldwire_context

    container_context.add_value("name", "world")

    assert fieldwire_context.resolve(_Greeter).greet() == "hello world"


def test_fieldwire_context_does_not_leak_registrations(fieldwire_context: Container) -> None:
    assert container_context.has("name") is False
    assert fieldwire_context.has("name") is False
