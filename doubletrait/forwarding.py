"""Implement a class for every implementor of its double by forwarding."""

from __future__ import annotations

import abc
import inspect
from typing import Any, Callable

from .dummy import associated_types

_Lookup = Callable[[tuple], "tuple[Callable[..., Any], tuple]"]


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _forwarder(lookup: _Lookup, is_async: bool) -> Callable[..., Any]:
    if is_async:

        async def forward(*args: Any, **kwargs: Any) -> Any:
            target, rest = lookup(args)
            return await target(*rest, **kwargs)

    else:

        def forward(*args: Any, **kwargs: Any) -> Any:
            target, rest = lookup(args)
            return target(*rest, **kwargs)

    return forward


def _dress(forward: Callable[..., Any], name: str, func: Callable[..., Any]) -> Callable[..., Any]:
    forward.__name__ = name
    forward.__qualname__ = getattr(func, "__qualname__", name)
    forward.__module__ = func.__module__
    forward.__doc__ = func.__doc__
    forward.__annotations__ = dict(getattr(func, "__annotations__", None) or {})
    # Lets signature introspection report the original parameters.
    forward.__wrapped__ = func  # type: ignore[attr-defined]
    return forward


class _ForwardedType:
    """An associated type looked up on whichever class implements the double."""

    def __init__(self, double_cls: type, name: str) -> None:
        self.double_cls = double_cls
        self.name = name

    def resolve(self, implementor: Any) -> Any:
        """The type that ``implementor`` binds under this name."""
        owner = (
            implementor
            if isinstance(implementor, type) and issubclass(implementor, self.double_cls)
            else self.double_cls
        )
        try:
            return getattr(owner, self.name)
        except AttributeError:
            raise AttributeError(
                f"{owner.__name__} binds no type {self.name} of {self.double_cls.__name__}"
            ) from None

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        return self.resolve(type(instance) if instance is not None else owner)

    def __repr__(self) -> str:
        return f"<forwarded type {self.double_cls.__name__}.{self.name}>"


def forward_method(double_cls: type, name: str, func: Any) -> Any:
    """A member that calls ``name`` as the implementor of ``double_cls`` defines it.

    Plain methods dispatch on their receiver, which must implement
    ``double_cls``. Class methods dispatch on the class they are called on
    when it implements ``double_cls`` and on ``double_cls`` otherwise. Static
    methods call ``double_cls`` directly. Coroutine functions are awaited.
    """
    if isinstance(func, staticmethod):
        inner = func.__func__

        def lookup(args: tuple) -> tuple[Callable[..., Any], tuple]:
            return getattr(double_cls, name), args

        forward = _forwarder(lookup, inspect.iscoroutinefunction(inner))
        return staticmethod(_dress(forward, name, inner))

    if isinstance(func, classmethod):
        inner = func.__func__

        def lookup(args: tuple) -> tuple[Callable[..., Any], tuple]:
            cls, *rest = args
            owner = cls if isinstance(cls, type) and issubclass(cls, double_cls) else double_cls
            return getattr(owner, name), tuple(rest)

        forward = _forwarder(lookup, inspect.iscoroutinefunction(inner))
        return classmethod(_dress(forward, name, inner))

    if not inspect.isfunction(func):
        raise TypeError(f"cannot forward {name!r}: {func!r} is not a method")

    def lookup(args: tuple) -> tuple[Callable[..., Any], tuple]:
        if not args:
            raise TypeError(f"{name}() needs a receiver implementing {double_cls.__name__}")
        receiver, *rest = args
        if not isinstance(receiver, double_cls):
            raise TypeError(
                f"{type(receiver).__name__} does not implement {double_cls.__name__}"
            )
        return getattr(receiver, name), tuple(rest)

    forward = _forwarder(lookup, inspect.iscoroutinefunction(func))
    return _dress(forward, name, func)


def forward_type(double_cls: type, name: str) -> _ForwardedType:
    """A descriptor yielding the associated type ``name`` bound by the implementor."""
    return _ForwardedType(double_cls, name)


def trait_impl(double_cls: type, org: type) -> type:
    """Implement ``org`` for every implementor of ``double_cls``.

    Returns a subclass of ``org`` whose methods and associated types forward
    to the implementor of ``double_cls``. When ``org`` is an abstract base
    class, ``double_cls`` is also registered as a virtual subclass of it, so
    that every implementor of the double counts as an instance of ``org``.
    """
    if not isinstance(org, type):
        raise TypeError(f"expected a class, got {org!r}")
    if not isinstance(double_cls, type):
        raise TypeError(f"expected a class, got {double_cls!r}")

    namespace: dict[str, Any] = {
        name: forward_method(double_cls, name, member)
        for name, member in vars(org).items()
        if not _is_dunder(name)
        and (isinstance(member, (staticmethod, classmethod)) or inspect.isfunction(member))
    }
    for name in associated_types(org):
        namespace[name] = forward_type(double_cls, name)

    impl_name = f"{org.__name__}Via{double_cls.__name__}"
    prefix = org.__qualname__.rpartition(".")[0]
    namespace["__module__"] = org.__module__
    namespace["__qualname__"] = f"{prefix}.{impl_name}" if prefix else impl_name
    namespace["__doc__"] = (
        f"Implementation of {org.__name__} for every implementor of {double_cls.__name__}."
    )
    impl = type(org)(impl_name, (org,), namespace)

    if isinstance(org, abc.ABCMeta):
        org.register(double_cls)
    return impl