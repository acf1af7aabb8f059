"""Build a double of a class whose abstract methods receive default bodies."""

from __future__ import annotations

import collections.abc
import enum
import inspect
from typing import Any, Callable, get_origin

_AWAITABLE_TYPES = (collections.abc.Awaitable, collections.abc.Coroutine)
_AWAITABLE_NAMES = frozenset({"Awaitable", "Coroutine"})
_SKIPPED = frozenset({"__dict__", "__weakref__", "__abstractmethods__", "_abc_impl"})


class ReturnKind(enum.Enum):
    """What a method's return annotation says about the default body it needs."""

    EMPTY = "empty"
    AWAITABLE = "awaitable"
    OTHER = "other"


def _kind_from_text(text: str) -> ReturnKind:
    text = text.strip()
    if text == "None":
        return ReturnKind.EMPTY
    head = text.split("[", 1)[0].strip().rsplit(".", 1)[-1]
    if head in _AWAITABLE_NAMES:
        return ReturnKind.AWAITABLE
    return ReturnKind.OTHER


def return_kind(func: Any) -> ReturnKind:
    """Classify ``func`` by its return annotation.

    ``-> None`` gives EMPTY, an awaitable annotation gives AWAITABLE and
    anything else, a missing annotation included, gives OTHER.
    """
    if isinstance(func, (staticmethod, classmethod)):
        func = func.__func__
    annotations = getattr(func, "__annotations__", None) or {}
    if "return" not in annotations:
        return ReturnKind.OTHER
    annotation = annotations["return"]
    if annotation is None or annotation is type(None):
        return ReturnKind.EMPTY
    if isinstance(annotation, str):
        return _kind_from_text(annotation)
    origin = get_origin(annotation)
    if origin is not None:
        return ReturnKind.AWAITABLE if origin in _AWAITABLE_TYPES else ReturnKind.OTHER
    if annotation in _AWAITABLE_TYPES:
        return ReturnKind.AWAITABLE
    if isinstance(annotation, type) and issubclass(annotation, collections.abc.Awaitable):
        return ReturnKind.AWAITABLE
    return ReturnKind.OTHER


def _default_result(kind: ReturnKind, message: str) -> Any:
    """Produce what a default body of the given kind yields, or raise."""
    if kind is ReturnKind.EMPTY:
        return None
    if kind is ReturnKind.AWAITABLE:
        return _deferred_failure()
    raise NotImplementedError(message)


async def _deferred_failure() -> Any:
    return _default_result(ReturnKind.OTHER, "not implemented")


def _build_default(double_name: str, name: str, func: Callable[..., Any]) -> Callable[..., Any]:
    kind = return_kind(func)
    message = f"not implemented: {double_name}::{name}"

    body: Callable[..., Any]
    if inspect.iscoroutinefunction(func):
        async_kind = ReturnKind.EMPTY if kind is ReturnKind.EMPTY else ReturnKind.OTHER

        async def body(*args: Any, **kwargs: Any) -> Any:
            return _default_result(async_kind, message)

    else:

        def body(*args: Any, **kwargs: Any) -> Any:
            return _default_result(kind, message)

    body.__name__ = name
    body.__qualname__ = f"{double_name}.{name}"
    body.__module__ = func.__module__
    body.__doc__ = func.__doc__
    body.__annotations__ = dict(getattr(func, "__annotations__", None) or {})
    # Lets signature introspection report the original parameters.
    body.__wrapped__ = func  # type: ignore[attr-defined]
    return body


def default_method(double_name: str, name: str, func: Any) -> Any:
    """Give an abstract method a default body; return anything else unchanged.

    Methods returning ``None`` get an empty body, methods returning an
    awaitable get one that fails when awaited, and all others raise
    ``NotImplementedError`` naming ``double_name`` and ``name``.
    """
    if isinstance(func, (staticmethod, classmethod)):
        if not getattr(func, "__isabstractmethod__", False):
            return func
        return type(func)(_build_default(double_name, name, func.__func__))
    if not inspect.isfunction(func) or not getattr(func, "__isabstractmethod__", False):
        return func
    return _build_default(double_name, name, func)


def double_trait(double_name: str, org: type) -> type:
    """Create a class named ``double_name`` mirroring ``org``.

    It has the same bases, metaclass and members as ``org``, except that every
    abstract method receives a default body from :func:`default_method`.
    """
    if not isinstance(org, type):
        raise TypeError(f"expected a class, got {org!r}")
    if not double_name.isidentifier():
        raise ValueError(f"{double_name!r} is not a valid class name")

    members = vars(org)
    slots = members.get("__slots__", ())
    skipped = _SKIPPED | ({slots} if isinstance(slots, str) else set(slots))
    namespace = {
        key: default_method(double_name, key, value)
        for key, value in members.items()
        if key not in skipped
    }
    prefix = org.__qualname__.rpartition(".")[0]
    namespace["__qualname__"] = f"{prefix}.{double_name}" if prefix else double_name
    return type(org)(double_name, org.__bases__, namespace)