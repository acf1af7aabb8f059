# doubletrait

Test doubles for abstract interface classes without writing every method.

When a test needs an object that satisfies an interface, but the code under
test only calls one or two of its methods, you still have to implement every
abstract method before the class can be instantiated. `doubletrait` derives
from an interface class a *double*: a class that mirrors the interface
member for member, with a default body for every abstract method. You
subclass the double, override only what your test needs, and the result
counts as an instance of the original interface.

## Installation

```
pip install doubletrait
```

The package has no runtime dependencies. To run its test suite, install the
`test` extra and run `pytest`:

```
pip install "doubletrait[test]"
pytest
```

## Quick start

```python
import abc

from doubletrait.double import double


@double("MyTraitDouble")
class MyTrait(abc.ABC):
    @abc.abstractmethod
    def answer(self) -> int: ...

    @abc.abstractmethod
    def some_other_method(self) -> None: ...


class MyStub(MyTrait.MyTraitDouble):
    def answer(self) -> int:
        return 42


stub = MyStub()
assert stub.answer() == 42
stub.some_other_method()          # empty default body, returns None
assert isinstance(stub, MyTrait)  # the double is registered with MyTrait
```

Calling a method the stub did not override, and which returns a value,
raises `NotImplementedError` with a message such as
`not implemented: MyTraitDouble::answer`.

## The modules

- `doubletrait.double`
  - `double(double_name)` – class decorator. It generates the double, attaches
    it to the decorated class under `double_name`, and attaches the double's
    implementation for `Dummy` to the double as `Dummy`. It raises
    `TypeError` if `double_name` is not a string or the decorated object is
    not a class, and `ValueError` if the class already defines
    `double_name`.
  - `expand(double_name, org)` – the same generation without a decorator. It
    returns an `Expansion`, a frozen dataclass with the fields `org` (the
    class, unaltered), `double` (the double), `impl` (an implementation of
    `org` that forwards to the double) and `dummy` (the double implemented for
    `Dummy`).
- `doubletrait.mirror`
  - `double_trait(double_name, org)` – builds the double: a class named
    `double_name` with the same bases, metaclass and members as `org`, with
    defaults for its abstract methods. Raises `TypeError` if `org` is not a
    class and `ValueError` if `double_name` is not a valid identifier.
  - `default_method(double_name, name, func)` – gives one abstract method
    (plain, `staticmethod` or `classmethod`) a default body; anything else is
    returned unchanged.
  - `return_kind(func)` and the enum `ReturnKind` (`EMPTY`, `AWAITABLE`,
    `OTHER`) – classify a method by its return annotation.
- `doubletrait.forwarding`
  - `trait_impl(double_cls, org)` – a subclass of `org`, named
    `<Org>Via<Double>`, whose methods call the method of the same name on
    whatever implements `double_cls`. When `org` is an abstract base class,
    `double_cls` is registered as a virtual subclass of it.
  - `forward_method(double_cls, name, func)` and `forward_type(double_cls,
    name)` – the single forwarding members it is built from.
- `doubletrait.dummy`
  - `Dummy` – an empty, frozen, ordered dataclass.
  - `dummy_impl(double_cls, org)` – a class derived from both `double_cls`
    and `Dummy`, with every associated type of `org` bound to `Dummy`.
  - `associated_types(org)` – the names `org` annotates without assigning a
    value.

## How the double behaves

Only methods marked with `abc.abstractmethod` receive a default body; every
other member is copied as it is, so existing method bodies are respected.
The default body depends on the method:

- **Return annotation `None`** – an empty body; the call returns `None`.
- **`async def`** – stays a coroutine function. Awaiting it returns `None`
  when annotated `-> None`, and otherwise raises `NotImplementedError`
  naming the double and the method.
- **Return annotation `Awaitable[...]` or `Coroutine[...]`** (on a plain
  `def`) – returns a coroutine that raises `NotImplementedError` when
  awaited.
- **Anything else, including no annotation** – raises `NotImplementedError`
  with the message `not implemented: <Double>::<method>`.

The defaults keep the original method's name, docstring, annotations and
signature.

## Forwarding

`Expansion.impl` implements the interface by forwarding:

```python
import abc

from doubletrait.double import expand


class Greeter(abc.ABC):
    @abc.abstractmethod
    def greet(self, name: str) -> str: ...


expansion = expand("GreeterDouble", Greeter)


class Polite(expansion.double):
    def greet(self, name: str) -> str:
        return f"Hello, {name}"


assert expansion.impl.greet(Polite(), "Ann") == "Hello, Ann"
```

Plain methods dispatch on their receiver, which must be an instance of the
double (otherwise `TypeError`). Class methods dispatch on the class they are
called with when it implements the double, and on the double otherwise;
static methods call the double directly. Coroutine methods are awaited.
Associated types – names annotated on the interface without a value, such
as `Item: type` – are looked up on the implementor of the double.

## Dummy

Every double is implemented for `Dummy`. Use it where code needs *some*
implementation of the interface and must not call into it:

```python
dummy = MyTrait.MyTraitDouble.Dummy()
assert isinstance(dummy, MyTrait)
dummy.answer()  # raises NotImplementedError: not implemented: MyTraitDouble::answer
```

## What it does not do

`doubletrait` only supplies default bodies and forwarding. It does not
record calls, count them, or offer assertions about how a double was used,
and it does not generate return values: any behaviour beyond an empty body
or a `NotImplementedError` comes from the methods you write on your subclass
of the double.