"""Derive a double of a class and implement the class through it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .dummy import dummy_impl
from .forwarding import trait_impl
from .mirror import double_trait


@dataclass(frozen=True)
class Expansion:
    """Everything generated for one class.

    ``org`` is the class itself, left unaltered; ``double`` mirrors it with
    default bodies; ``impl`` implements ``org`` by forwarding to whatever
    implements ``double``; ``dummy`` implements ``double`` for ``Dummy``.
    """

    org: type
    double: type
    impl: type
    dummy: type


def expand(double_name: str, org: type) -> Expansion:
    """Generate the double named ``double_name`` of ``org`` and its implementations."""
    double_cls = double_trait(double_name, org)
    impl = trait_impl(double_cls, org)
    dummy = dummy_impl(double_cls, org)
    return Expansion(org=org, double=double_cls, impl=impl, dummy=dummy)


def double(double_name: str) -> Callable[[type], type]:
    """Class decorator deriving a double named ``double_name``.

    The decorated class is returned with the double attached under
    ``double_name``; the double in turn carries its implementation for
    ``Dummy`` as ``Dummy``.
    """
    if not isinstance(double_name, str):
        raise TypeError(f"double name must be a string, got {double_name!r}")

    def decorate(org: type) -> type:
        if not isinstance(org, type):
            raise TypeError(f"expected a class, got {org!r}")
        if double_name in vars(org):
            raise ValueError(f"{org.__name__} already defines {double_name!r}")
        expansion = expand(double_name, org)
        if "Dummy" not in vars(expansion.double):
            setattr(expansion.double, "Dummy", expansion.dummy)
        setattr(org, double_name, expansion.double)
        return org

    return decorate