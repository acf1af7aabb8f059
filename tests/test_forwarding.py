import inspect
from abc import ABC, ABCMeta, abstractmethod

import pytest

from doubletrait.dummy import Dummy, dummy_impl
from doubletrait.forwarding import forward_method, forward_type, trait_impl
from doubletrait.mirror import double_trait

ASSOCIATED = {"__annotations__": {"AssociatedType": type}}


def _trait(name="MyTrait", *, abstract=True, **members):
    namespace = {"__module__": __name__, "__qualname__": name, **members}
    return ABCMeta(name, (ABC,), namespace) if abstract else type(name, (), namespace)


def _setup(**members):
    org = _trait(**members)
    return org, double_trait("MyTraitDummy", org)


def _method(name, returns=None, *, is_async=False):
    if is_async:
        async def method(self): ...
    else:
        def method(self): ...
    method.__name__ = method.__qualname__ = name
    method.__annotations__ = {"return": returns}
    return abstractmethod(method)


def _static_foobar():
    def foobar(x): ...

    foobar.__annotations__ = {"x": int, "return": int}
    return staticmethod(abstractmethod(foobar))


async def _forty_two(self):
    return 42


def test_forward_self():
    org, double_cls = _setup(foobar=_method("foobar"))
    calls = []
    stub = type("Stub", (double_cls,), {"foobar": lambda self: calls.append(self)})()
    impl = trait_impl(double_cls, org)
    impl.foobar(stub)
    impl.foobar(stub)
    assert calls == [stub, stub]


def test_forward_non_self_parameter():
    hand = type("Hand", (), {"foobar": staticmethod(lambda x: x * 2)})
    impl = trait_impl(hand, _trait(foobar=_static_foobar()))
    assert impl.foobar(21) == 42


def test_forward_static_to_generated_default():
    org, double_cls = _setup(foobar=_static_foobar())
    with pytest.raises(NotImplementedError, match="not implemented: MyTraitDummy::foobar"):
        trait_impl(double_cls, org).foobar(1)


def test_forward_multiple_arguments():
    def foobar(self, one: int, two: int) -> tuple: ...

    org, double_cls = _setup(foobar=abstractmethod(foobar))
    stub = type("Stub", (double_cls,), {"foobar": lambda self, one, two: (one, two)})()
    impl = trait_impl(double_cls, org)
    assert impl.foobar(stub, 1, 2) == (1, 2)
    assert impl.foobar(stub, one=3, two=4) == (3, 4)


@pytest.mark.asyncio
async def test_forward_async():
    org, double_cls = _setup(foobar=_method("foobar", int, is_async=True))
    stub = type("Stub", (double_cls,), {"foobar": _forty_two})()
    impl = trait_impl(double_cls, org)
    assert inspect.iscoroutinefunction(impl.foobar)
    assert await impl.foobar(stub) == 42


def test_forward_type():
    org, double_cls = _setup(**ASSOCIATED)
    stub_cls = type("Stub", (double_cls,), {"AssociatedType": int})
    forwarded = forward_type(double_cls, "AssociatedType")
    assert forwarded.resolve(stub_cls) is int
    assert forwarded.resolve(dummy_impl(double_cls, org)) is Dummy
    with pytest.raises(AttributeError, match="AssociatedType"):
        forwarded.resolve(object)


def test_trait_impl_carries_forwarded_type():
    org, double_cls = _setup(**ASSOCIATED)
    impl = trait_impl(double_cls, org)
    assert repr(vars(impl)["AssociatedType"]) == "<forwarded type MyTraitDummy.AssociatedType>"
    with pytest.raises(AttributeError) as excinfo:
        impl.AssociatedType
    assert str(excinfo.value) == "MyTraitDummy binds no type AssociatedType of MyTraitDummy"


def test_forward_to_default_of_dummy():
    org, double_cls = _setup(answer=_method("answer", int))
    dummy = dummy_impl(double_cls, org)()
    with pytest.raises(NotImplementedError, match="not implemented: MyTraitDummy::answer"):
        trait_impl(double_cls, org).answer(dummy)


def test_receiver_must_implement_double():
    org, double_cls = _setup(foobar=_method("foobar"))
    with pytest.raises(TypeError, match="does not implement MyTraitDummy"):
        trait_impl(double_cls, org).foobar(object())


def test_forward_classmethod():
    def make(cls) -> str: ...

    class Hand:
        @classmethod
        def make(cls):
            return cls.__name__

    class SubHand(Hand):
        pass

    impl = trait_impl(Hand, _trait(make=classmethod(abstractmethod(make))))
    assert impl.make() == "Hand"
    assert impl.make.__func__(SubHand) == "SubHand"


def test_signature_is_preserved():
    def foobar(self, one: int, two: str = "x") -> int: ...

    org, double_cls = _setup(foobar=abstractmethod(foobar))
    impl = trait_impl(double_cls, org)
    assert impl.foobar.__wrapped__ is vars(org)["foobar"]
    assert impl.foobar.__annotations__ == {"one": int, "two": str, "return": int}
    assert impl.foobar.__name__ == "foobar"


def test_impl_is_concrete_subclass_and_double_is_registered():
    org, double_cls = _setup(foobar=_method("foobar"))
    stub_cls = type("Stub", (double_cls,), {})
    impl = trait_impl(double_cls, org)
    assert issubclass(impl, org)
    assert impl.__abstractmethods__ == frozenset()
    assert issubclass(double_cls, org)
    assert isinstance(stub_cls(), org)


def test_plain_class_is_not_registered():
    def foobar(self) -> int:
        return 1

    org = _trait(abstract=False, foobar=foobar)
    double_cls = double_trait("MyTraitDummy", org)
    impl = trait_impl(double_cls, org)
    assert impl.__name__ == "MyTraitViaMyTraitDummy"
    assert impl.foobar(double_cls()) == 1
    assert issubclass(impl, org)
    assert not issubclass(double_cls, org)


@pytest.mark.parametrize(
    ("func", "args", "message"),
    [
        (forward_method, (object, "x", 3), "is not a method"),
        (trait_impl, (object, "not a class"), "expected a class"),
    ],
)
def test_invalid_arguments_are_rejected(func, args, message):
    with pytest.raises(TypeError, match=message):
        func(*args)