"""Declarative and imperative test registration API.

Decorating a class with ``@test_class`` registers it when its module is
imported::

    @test_class
    class Calculator:
        @test_initialize
        def reset(self):
            self.total = 0

        @test_method
        def adds(self):
            assert_.are_equal(2, 1 + 1)

Methods are collected in class-body order, including methods inherited from
base classes. Bodies are bound by attribute name, so an override in a
subclass replaces the inherited body.
"""

from __future__ import annotations

import inspect
import operator
import os
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar, overload

from simple_unit_tester.outcomes import SourceLocation

from .test_descriptors import ClassFactory, TestBody, TestClassDescriptor, TestDescriptor
from .test_registry import RegistrationError, TestRegistry, default_registry

_MARKER = "__unit_test_declaration__"
_TEST = "test"

ClassT = TypeVar("ClassT", bound=type)
FuncT = TypeVar("FuncT", bound=Callable[..., Any])


@dataclass(frozen=True)
class _Declaration:
    kind: str
    ignored: bool = False


@overload
def test_class(target: ClassT) -> ClassT: ...


@overload
def test_class(
    target: str | None = None, *, registry: TestRegistry | None = None
) -> Callable[[ClassT], ClassT]: ...


def test_class(target=None, *, registry=None):
    """Register the decorated class as a test class.

    Usable bare (``@test_class``) or with an explicit name
    (``@test_class("name")``). The class is instantiated once per class
    execution with no arguments.
    """
    if isinstance(target, type):
        return _register_class(target, target.__name__, registry)

    def decorator(cls: ClassT) -> ClassT:
        return _register_class(cls, target or cls.__name__, registry)

    return decorator


@overload
def test_method(func: FuncT) -> FuncT: ...


@overload
def test_method(*, ignore: bool = False) -> Callable[[FuncT], FuncT]: ...


def test_method(func=None, *, ignore=False):
    """Mark a method as a test; ``ignore=True`` declares it ignored."""
    if func is not None:
        return _mark(func, _Declaration(_TEST, ignored=ignore))

    def decorator(inner: FuncT) -> FuncT:
        return _mark(inner, _Declaration(_TEST, ignored=ignore))

    return decorator


def ignore_test_method(func: FuncT) -> FuncT:
    """Mark a method as a test that is reported ignored unless ignored tests are run."""
    return _mark(func, _Declaration(_TEST, ignored=True))


def class_initialize(func: FuncT) -> FuncT:
    return _mark(func, _Declaration("class_initialize"))


def class_cleanup(func: FuncT) -> FuncT:
    return _mark(func, _Declaration("class_cleanup"))


def test_initialize(func: FuncT) -> FuncT:
    return _mark(func, _Declaration("test_initialize"))


def test_cleanup(func: FuncT) -> FuncT:
    return _mark(func, _Declaration("test_cleanup"))


for _decorator in (test_class, test_method, test_initialize, test_cleanup):
    setattr(_decorator, "__test__", False)


def register_test_class(
    name: str,
    factory: ClassFactory,
    *,
    registry: TestRegistry | None = None,
) -> TestClassDescriptor:
    """Introduce a test class; tests and hooks are attached afterwards."""
    return _resolve(registry).register(name, factory, location=body_location(factory))


def register_test_method(
    class_name: str,
    name: str,
    body: TestBody,
    *,
    ignore: bool = False,
    registry: TestRegistry | None = None,
) -> TestClassDescriptor:
    """Attach ``body`` as test ``name``; ``body`` receives the class instance."""
    test = TestDescriptor(name=name, body=body, location=body_location(body), ignored=ignore)
    return _resolve(registry).add_test(class_name, test)


def register_class_initialize(
    class_name: str, body: TestBody, *, registry: TestRegistry | None = None
) -> TestClassDescriptor:
    return _resolve(registry).set_hook(class_name, "class_initialize", body)


def register_class_cleanup(
    class_name: str, body: TestBody, *, registry: TestRegistry | None = None
) -> TestClassDescriptor:
    return _resolve(registry).set_hook(class_name, "class_cleanup", body)


def register_test_initialize(
    class_name: str, body: TestBody, *, registry: TestRegistry | None = None
) -> TestClassDescriptor:
    return _resolve(registry).set_hook(class_name, "test_initialize", body)


def register_test_cleanup(
    class_name: str, body: TestBody, *, registry: TestRegistry | None = None
) -> TestClassDescriptor:
    return _resolve(registry).set_hook(class_name, "test_cleanup", body)


setattr(register_test_initialize, "__test__", False)
setattr(register_test_cleanup, "__test__", False)


def body_location(body: object) -> SourceLocation | None:
    """Return the file and first line where ``body`` is defined, when known."""
    target = inspect.unwrap(body) if callable(body) else body
    code = getattr(target, "__code__", None)
    if code is not None:
        return SourceLocation(
            file_path=os.path.abspath(code.co_filename), line_number=code.co_firstlineno
        )
    if isinstance(target, type):
        try:
            source_file = inspect.getsourcefile(target)
            _, line_number = inspect.getsourcelines(target)
        except (OSError, TypeError):
            return None
        if source_file is None:
            return None
        return SourceLocation(file_path=os.path.abspath(source_file), line_number=line_number)
    return None


def _register_class(cls: ClassT, name: str, registry: TestRegistry | None) -> ClassT:
    tests: list[TestDescriptor] = []
    hooks: dict[str, TestBody] = {}
    for attribute, member in _declared_members(cls):
        declaration: _Declaration = getattr(member, _MARKER)
        if declaration.kind == _TEST:
            tests.append(
                TestDescriptor(
                    name=attribute,
                    body=operator.methodcaller(attribute),
                    location=body_location(member),
                    ignored=declaration.ignored,
                )
            )
        elif declaration.kind in hooks:
            raise RegistrationError(
                f"Test class '{name}' declares more than one {declaration.kind} hook."
            )
        else:
            hooks[declaration.kind] = operator.methodcaller(attribute)
    _resolve(registry).register(name, cls, tests, location=body_location(cls), **hooks)
    return cls


def _declared_members(cls: type) -> list[tuple[str, Any]]:
    members: dict[str, Any] = {}
    for klass in reversed(cls.__mro__[:-1]):
        for attribute, member in vars(klass).items():
            if getattr(member, _MARKER, None) is not None:
                members[attribute] = member
    return list(members.items())


def _mark(func: FuncT, declaration: _Declaration) -> FuncT:
    if getattr(func, _MARKER, None) is not None:
        raise RegistrationError(f"'{func.__name__}' is already declared as a test or hook.")
    setattr(func, _MARKER, declaration)
    return func


def _resolve(registry: TestRegistry | None) -> TestRegistry:
    return registry if registry is not None else default_registry()
