from __future__ import annotations

import logging
import math
import operator
from collections.abc import Callable, Generator
from typing import Any, Generic, TypeVar

from fieldwire._internal.type_checks import is_runtime_class
from fieldwire.exceptions import FieldWireInvalidForwardRefError

T = TypeVar("T")

logger = logging.getLogger(__name__)

_UNRESOLVED: Any = object()


class Lazy(Generic[T]):
    """Forward reference to a class that may not exist yet at declaration time.

    Build instances with :func:`lazy`. A ``Lazy`` is a valid identifier: it can
    be passed to ``inject`` or ``Container.resolve`` in place of the class it
    refers to. Resolving it returns a :class:`LazyProxy` right away; the real
    instance is resolved on first use of the proxy.
    """

    __slots__ = ("forward_ref",)

    def __init__(self, forward_ref: Callable[[], type[T]]) -> None:
        self.forward_ref = forward_ref

    @property
    def name(self) -> str:
        return getattr(self.forward_ref, "__qualname__", repr(self.forward_ref))

    def target(self) -> type[T]:
        """Call the forward reference and return the class it points to.

        Raises:
            FieldWireInvalidForwardRefError: If the callable does not return a class.

        """
        target = self.forward_ref()
        if not is_runtime_class(target):
            msg = (
                f"Forward reference '{self.name}' must return a class, "
                f"got {target!r} instead."
            )
            raise FieldWireInvalidForwardRefError(msg)
        return target

    def create_proxy(self, resolve: Callable[[type[T]], T]) -> T:
        """Return a proxy that resolves the referenced class with ``resolve`` on first use."""
        return LazyProxy(self, resolve)  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"Lazy({self.name})"


def lazy(forward_ref: Callable[[], type[T]]) -> Lazy[T]:
    """Declare a dependency on a class through a zero-argument callable.

    Use it to break cycles between classes that depend on each other, or to
    refer to a class defined later in the module.

    Args:
        forward_ref: Callable returning the class, usually a lambda.

    Returns:
        A ``Lazy`` identifier.

    Raises:
        FieldWireInvalidForwardRefError: If ``forward_ref`` is not callable.

    Examples:
        .. code-block:: python

            @injectable
            class Parent:
                child = inject(lazy(lambda: Child))

    """
    if not callable(forward_ref):
        msg = "lazy() needs a callable that returns the class."
        raise FieldWireInvalidForwardRefError(msg)
    return Lazy(forward_ref)


def _unary(operation: Callable[[Any], Any]) -> Callable[[LazyProxy], Any]:
    def forward(self: LazyProxy) -> Any:
        return operation(_target(self))

    return forward


def _binary(operation: Callable[[Any, Any], Any]) -> Callable[[LazyProxy, Any], Any]:
    def forward(self: LazyProxy, other: Any) -> Any:
        return operation(_target(self), other)

    return forward


def _reflected(operation: Callable[[Any, Any], Any]) -> Callable[[LazyProxy, Any], Any]:
    def forward(self: LazyProxy, other: Any) -> Any:
        return operation(other, _target(self))

    return forward


class LazyProxy:
    """Stand-in for an instance whose resolution is deferred until first use.

    Every operation performed on the handle first resolves the target through
    a brand-new top-level resolution, memoizes it and then forwards the
    operation: attribute and item access, calls, iteration, rich comparisons,
    arithmetic (plain, reflected and in-place), numeric conversions, hashing,
    string formatting, sync and async context management, awaiting, async
    iteration and ``isinstance`` checks through ``__class__``. Resolution errors
    surface on that first operation.

    In-place operators return the target's result, so ``handle += x`` rebinds
    the name to the real object.
    """

    __slots__ = ("_fieldwire_instance", "_fieldwire_lazy", "_fieldwire_resolve")

    def __init__(self, lazy: Lazy[Any], resolve: Callable[[type[Any]], Any]) -> None:
        object.__setattr__(self, "_fieldwire_lazy", lazy)
        object.__setattr__(self, "_fieldwire_resolve", resolve)
        object.__setattr__(self, "_fieldwire_instance", _UNRESOLVED)

    @property  # type: ignore[misc]
    def __class__(self) -> type[Any]:  # noqa: D105
        return type(_target(self))

    # region Attributes
    def __getattr__(self, name: str) -> Any:
        return getattr(_target(self), name)

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(_target(self), name, value)

    def __delattr__(self, name: str) -> None:
        delattr(_target(self), name)

    def __dir__(self) -> list[str]:
        return dir(_target(self))

    # endregion Attributes

    # region Calls, conversion and hashing
    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return _target(self)(*args, **kwargs)

    def __round__(self, ndigits: int | None = None) -> Any:
        return round(_target(self), ndigits)

    __repr__ = _unary(repr)
    __str__ = _unary(str)
    __bytes__ = _unary(bytes)
    __format__ = _binary(format)
    __hash__ = _unary(hash)
    __bool__ = _unary(bool)
    __int__ = _unary(int)
    __float__ = _unary(float)
    __complex__ = _unary(complex)
    __index__ = _unary(operator.index)
    __trunc__ = _unary(math.trunc)
    __floor__ = _unary(math.floor)
    __ceil__ = _unary(math.ceil)
    # endregion Calls, conversion and hashing

    # region Comparison
    __eq__ = _binary(operator.eq)
    __ne__ = _binary(operator.ne)
    __lt__ = _binary(operator.lt)
    __le__ = _binary(operator.le)
    __gt__ = _binary(operator.gt)
    __ge__ = _binary(operator.ge)
    # endregion Comparison

    # region Arithmetic
    __neg__ = _unary(operator.neg)
    __pos__ = _unary(operator.pos)
    __abs__ = _unary(abs)
    __invert__ = _unary(operator.invert)

    __add__ = _binary(operator.add)
    __sub__ = _binary(operator.sub)
    __mul__ = _binary(operator.mul)
    __matmul__ = _binary(operator.matmul)
    __truediv__ = _binary(operator.truediv)
    __floordiv__ = _binary(operator.floordiv)
    __mod__ = _binary(operator.mod)
    __divmod__ = _binary(divmod)
    __lshift__ = _binary(operator.lshift)
    __rshift__ = _binary(operator.rshift)
    __and__ = _binary(operator.and_)
    __or__ = _binary(operator.or_)
    __xor__ = _binary(operator.xor)

    __radd__ = _reflected(operator.add)
    __rsub__ = _reflected(operator.sub)
    __rmul__ = _reflected(operator.mul)
    __rmatmul__ = _reflected(operator.matmul)
    __rtruediv__ = _reflected(operator.truediv)
    __rfloordiv__ = _reflected(operator.floordiv)
    __rmod__ = _reflected(operator.mod)
    __rdivmod__ = _reflected(divmod)
    __rpow__ = _reflected(pow)
    __rlshift__ = _reflected(operator.lshift)
    __rrshift__ = _reflected(operator.rshift)
    __rand__ = _reflected(operator.and_)
    __ror__ = _reflected(operator.or_)
    __rxor__ = _reflected(operator.xor)

    __iadd__ = _binary(operator.iadd)
    __isub__ = _binary(operator.isub)
    __imul__ = _binary(operator.imul)
    __imatmul__ = _binary(operator.imatmul)
    __itruediv__ = _binary(operator.itruediv)
    __ifloordiv__ = _binary(operator.ifloordiv)
    __imod__ = _binary(operator.imod)
    __ipow__ = _binary(operator.ipow)
    __ilshift__ = _binary(operator.ilshift)
    __irshift__ = _binary(operator.irshift)
    __iand__ = _binary(operator.iand)
    __ior__ = _binary(operator.ior)
    __ixor__ = _binary(operator.ixor)

    def __pow__(self, other: Any, modulo: Any = None) -> Any:
        if modulo is None:
            return pow(_target(self), other)
        return pow(_target(self), other, modulo)

    # endregion Arithmetic

    # region Containers and iteration
    __len__ = _unary(len)
    __iter__ = _unary(iter)
    __next__ = _unary(next)
    __reversed__ = _unary(reversed)
    __getitem__ = _binary(operator.getitem)
    __delitem__ = _binary(operator.delitem)

    def __contains__(self, item: object) -> bool:
        return item in _target(self)

    def __setitem__(self, key: Any, value: Any) -> None:
        _target(self)[key] = value

    # endregion Containers and iteration

    # region Context managers and async protocols
    def __enter__(self) -> Any:
        return _target(self).__enter__()

    def __exit__(self, *exc_info: Any) -> Any:
        return _target(self).__exit__(*exc_info)

    def __aenter__(self) -> Any:
        return _target(self).__aenter__()

    def __aexit__(self, *exc_info: Any) -> Any:
        return _target(self).__aexit__(*exc_info)

    def __await__(self) -> Generator[Any, None, Any]:
        return _target(self).__await__()  # type: ignore[no-any-return]

    def __aiter__(self) -> Any:
        return _target(self).__aiter__()

    def __anext__(self) -> Any:
        return _target(self).__anext__()

    # endregion Context managers and async protocols


def _target(proxy: LazyProxy) -> Any:
    instance = object.__getattribute__(proxy, "_fieldwire_instance")
    if instance is _UNRESOLVED:
        lazy_ref: Lazy[Any] = object.__getattribute__(proxy, "_fieldwire_lazy")
        resolve = object.__getattribute__(proxy, "_fieldwire_resolve")
        logger.debug("Resolving deferred reference %s on first use", lazy_ref.name)
        instance = resolve(lazy_ref.target())
        object.__setattr__(proxy, "_fieldwire_instance", instance)
    return instance


def is_lazy_proxy(value: object) -> bool:
    """Return whether value is an unwrapped deferred handle.

    ``isinstance`` cannot answer this because proxies report the class of their
    target.
    """
    return type(value) is LazyProxy


def unwrap_lazy_proxy(value: T) -> T:
    """Return the real instance behind a deferred handle, resolving it if needed.

    Values that are not proxies are returned unchanged.
    """
    if type(value) is LazyProxy:
        return _target(value)  # type: ignore[no-any-return]
    return value


__all__ = ["Lazy", "LazyProxy", "is_lazy_proxy", "lazy", "unwrap_lazy_proxy"]
