from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol

import pytest

from fieldwire._internal.type_checks import abstract_reason, is_runtime_class
from fieldwire.deferred import lazy
from fieldwire.identifiers import Token


class _Service:
    pass


class _Shape(ABC):
    @abstractmethod
    def area(self) -> float: ...


class _Square(_Shape):
    def area(self) -> float:
        return 1.0


class _Sized(Protocol):
    def size(self) -> int: ...


class _SizedImpl(_Sized):
    def size(self) -> int:
        return 1


@pytest.mark.parametrize(
    "candidate",
    [
        pytest.param(_Service, id="class"),
        pytest.param(int, id="builtin"),
        pytest.param(Token, id="generic-class"),
    ],
)
def test_is_runtime_class_accepts_classes(candidate: Any) -> None:
    assert is_runtime_class(candidate) is True


@pytest.mark.parametrize(
    "candidate",
    [
        pytest.param(list[int], id="generic-alias"),
        pytest.param(Token[int], id="parametrized-user-generic"),
        pytest.param(_Service(), id="instance"),
        pytest.param(lazy(lambda: _Service), id="lazy"),
        pytest.param("_Service", id="string"),
    ],
)
def test_is_runtime_class_rejects_other_values(candidate: Any) -> None:
    assert is_runtime_class(candidate) is False


def test_abstract_reason_lists_abstract_methods() -> None:
    assert abstract_reason(_Shape) == "it has abstract methods: area"


def test_abstract_reason_flags_protocols() -> None:
    assert abstract_reason(_Sized) == "it is a protocol"


@pytest.mark.parametrize(
    "cls",
    [
        pytest.param(_Service, id="plain"),
        pytest.param(_Square, id="abstract-implemented"),
        pytest.param(_SizedImpl, id="protocol-implemented"),
    ],
)
def test_abstract_reason_is_none_for_concrete_classes(cls: type[Any]) -> None:
    assert abstract_reason(cls) is None
