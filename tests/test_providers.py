from __future__ import annotations

from typing import Any

import pytest

from fieldwire import (
    ABSENT,
    ClassProvider,
    Container,
    FactoryProvider,
    FieldWireDependencyNotRegisteredError,
    FieldWireInvalidProviderError,
    FieldWireInvalidRegistrationError,
    FieldWireRedirectCycleError,
    Token,
    TokenProvider,
    ValueProvider,
    inject,
    injectable,
    is_lazy_proxy,
    lazy,
    singleton,
    unwrap_lazy_proxy,
)


class Foo:
    pass


@pytest.mark.parametrize(
    "value",
    [
        pytest.param("1", id="string"),
        pytest.param(0, id="zero"),
        pytest.param(None, id="none"),
        pytest.param(False, id="false"),
        pytest.param({}, id="dict"),
        pytest.param([], id="list"),
        pytest.param(Foo, id="class"),
        pytest.param(Token("value"), id="token"),
    ],
)
def test_value_provider_returns_the_same_object(container: Container, value: Any) -> None:
    container.register("value", ValueProvider(value))

    assert container.resolve("value") is value
    assert container.resolve("value") is value


def test_value_provider_without_value_is_rejected(container: Container) -> None:
    with pytest.raises(FieldWireInvalidProviderError):
        container.register("value", ValueProvider())

    with pytest.raises(FieldWireInvalidProviderError):
        container.register("value", ValueProvider(ABSENT))

    assert container.has("value") is False


def test_value_provider_holding_a_class_does_not_instantiate_it(container: Container) -> None:
    container.add_value("cls", Foo)

    assert container.resolve("cls") is Foo


def test_factory_provider_is_called_on_every_resolve(container: Container) -> None:
    calls: list[int] = []

    def factory(_: Container) -> int:
        calls.append(1)
        return len(calls)

    container.register("counter", FactoryProvider(factory))

    assert container.resolve("counter") == 1
    assert container.resolve("counter") == 2
    assert container.resolve("counter") == 3


def test_factory_provider_receives_the_container(container: Container) -> None:
    container.register("container", FactoryProvider(lambda c: c))

    assert container.resolve("container") is container


def test_factory_provider_can_resolve_other_tokens(container: Container) -> None:
    container.add_value("a", 1)
    container.add_factory("b", lambda c: c.resolve("a") + 1)

    assert container.resolve("b") == 2


def test_factory_provider_result_is_not_cached_within_one_resolve(
    container: Container,
) -> None:
    container.add_factory("object", lambda _: object())

    @injectable
    class Foo2:
        first = inject("object")
        second = inject("object")

    instance = container.resolve(Foo2)

    assert instance.first is not instance.second


def test_class_provider_builds_the_class(container: Container) -> None:
    container.register("foo", ClassProvider(Foo))

    assert isinstance(container.resolve("foo"), Foo)
    assert container.resolve("foo") is not container.resolve("foo")


def test_bare_class_is_shorthand_for_class_provider(container: Container) -> None:
    container.register("foo", Foo)

    assert isinstance(container.resolve("foo"), Foo)


def test_class_provider_keeps_the_class_lifecycle(container: Container) -> None:
    @singleton
    class Shared:
        pass

    container.register("a", Shared)
    container.add_concrete("b", Shared)

    assert container.resolve("a") is container.resolve("b")
    assert container.resolve("a") is container.resolve(Shared)


def test_class_provider_accepts_forward_references(container: Container) -> None:
    container.add_concrete("later", lazy(lambda: Later))

    proxy = container.resolve("later")

    assert is_lazy_proxy(proxy)
    assert isinstance(unwrap_lazy_proxy(proxy), Later)


class Later:
    pass


def test_token_provider_redirects(container: Container) -> None:
    container.register("a", ValueProvider(1))
    container.register("b", TokenProvider("a"))

    assert container.resolve("b") == 1


def test_token_provider_chain_reaches_a_class(container: Container) -> None:
    target = Token("target")
    container.register(target, Foo)
    container.add_alias("middle", target)
    container.add_alias("entry", "middle")

    assert isinstance(container.resolve("entry"), Foo)


def test_token_provider_target_may_be_registered_later(container: Container) -> None:
    container.add_alias("b", "a")

    with pytest.raises(FieldWireDependencyNotRegisteredError) as exc_info:
        container.resolve("b")

    assert exc_info.value.token == "a"

    container.add_value("a", 1)

    assert container.resolve("b") == 1


def test_registering_again_replaces_the_provider(container: Container) -> None:
    container.add_value("value", 1)
    container.add_value("value", 2)

    assert container.resolve("value") == 2


def test_redirect_cycle_is_rejected_and_registry_unchanged(container: Container) -> None:
    a = "a"
    b = Token("b")
    c = Token("c")

    container.register(a, TokenProvider(b))
    container.register(b, TokenProvider(c))

    with pytest.raises(FieldWireRedirectCycleError) as exc_info:
        container.register(c, TokenProvider(a))

    assert exc_info.value.chain == ("Token(c)", "String(a)", "Token(b)", "Token(c)")
    assert str(exc_info.value) == (
        "Token registration cycle detected! Token(c) -> String(a) -> Token(b) -> Token(c)"
    )
    assert container.has(c) is False


def test_redirect_cycle_keeps_previous_binding(container: Container) -> None:
    container.add_value("a", 1)
    container.add_alias("b", "a")

    with pytest.raises(FieldWireRedirectCycleError):
        container.add_alias("a", "b")

    assert container.resolve("b") == 1


def test_self_redirect_is_rejected(container: Container) -> None:
    with pytest.raises(FieldWireRedirectCycleError) as exc_info:
        container.register("a", TokenProvider("a"))

    assert exc_info.value.chain == ("String(a)", "String(a)")


def test_redirect_to_class_payload_is_not_a_cycle(container: Container) -> None:
    container.register("a", Foo)
    container.add_alias("b", "a")
    container.add_alias("c", "b")

    assert isinstance(container.resolve("c"), Foo)


@pytest.mark.parametrize(
    "provider",
    [
        pytest.param(FactoryProvider("factory"), id="non-callable-factory"),
        pytest.param(ClassProvider(42), id="non-class-payload"),
        pytest.param(ClassProvider(Foo()), id="instance-payload"),
        pytest.param(TokenProvider(42), id="non-token-redirect"),
        pytest.param(TokenProvider(Foo), id="class-redirect"),
        pytest.param(object(), id="plain-object"),
        pytest.param({"value": 1}, id="dict"),
        pytest.param(None, id="none"),
    ],
)
def test_malformed_providers_are_rejected(container: Container, provider: Any) -> None:
    with pytest.raises(FieldWireInvalidProviderError):
        container.register("token", provider)

    assert container.has("token") is False


@pytest.mark.parametrize(
    "key",
    [
        pytest.param(Foo, id="class"),
        pytest.param(1, id="int"),
        pytest.param(None, id="none"),
        pytest.param(lazy(lambda: Foo), id="lazy"),
    ],
)
def test_only_tokens_can_be_registered(container: Container, key: Any) -> None:
    with pytest.raises(FieldWireInvalidRegistrationError):
        container.register(key, ValueProvider(1))


def test_add_helpers_build_the_matching_provider(container: Container) -> None:
    container.add_value("value", 1)
    container.add_factory("factory", lambda c: c.resolve("value") * 10)
    container.add_concrete("concrete", Foo)
    container.add_alias("alias", "factory")

    assert container.resolve("value") == 1
    assert container.resolve("factory") == 10
    assert isinstance(container.resolve("concrete"), Foo)
    assert container.resolve("alias") == 10
