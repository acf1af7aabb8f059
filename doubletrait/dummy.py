"""The ``Dummy`` stand-in type and its implementation of generated doubles."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Dummy:
    """An empty value type; every generated double is implemented for it."""


def associated_types(org: type) -> tuple[str, ...]:
    """Names that ``org`` declares by annotation alone, without giving them a value.

    These play the part of associated types: the class announces that a type
    exists under that name but leaves it to implementations to choose it.
    """
    own = vars(org)
    annotations = getattr(org, "__annotations__", None) or {}
    return tuple(name for name in annotations if name not in own)


def dummy_impl(double_cls: type, org: type) -> type:
    """Implement ``double_cls`` for :class:`Dummy`.

    The returned class derives from both ``double_cls`` and :class:`Dummy`.
    Every associated type declared by ``org`` is bound to :class:`Dummy`.
    """
    namespace: dict[str, object] = {name: Dummy for name in associated_types(org)}
    namespace["__module__"] = double_cls.__module__
    namespace["__qualname__"] = f"{double_cls.__qualname__}.Dummy"
    namespace["__doc__"] = f"Implementation of {double_cls.__name__} for Dummy."
    return type(double_cls)("Dummy", (double_cls, Dummy), namespace)