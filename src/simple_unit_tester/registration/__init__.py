"""Registration domain exports."""

from .declarations import (
    body_location,
    class_cleanup,
    class_initialize,
    ignore_test_method,
    register_class_cleanup,
    register_class_initialize,
    register_test_class,
    register_test_cleanup,
    register_test_initialize,
    register_test_method,
    test_class,
    test_cleanup,
    test_initialize,
    test_method,
)
from .test_descriptors import TestClassDescriptor, TestDescriptor, TestExecution, TestState
from .test_registry import RegistrationError, TestRegistry, default_registry

__all__ = [
    "body_location",
    "class_cleanup",
    "class_initialize",
    "ignore_test_method",
    "register_class_cleanup",
    "register_class_initialize",
    "register_test_class",
    "register_test_cleanup",
    "register_test_initialize",
    "register_test_method",
    "test_class",
    "test_cleanup",
    "test_initialize",
    "test_method",
    "TestClassDescriptor",
    "TestDescriptor",
    "TestExecution",
    "TestState",
    "RegistrationError",
    "TestRegistry",
    "default_registry",
]
