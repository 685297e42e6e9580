"""Port interfaces for zigunit.

These abstract base classes define the boundaries between core
domain logic and external adapters. Implementations live in the
adapters/ package.

Port Interface Categories:

1. **NativeModulePort**: call compiled zero-argument test functions by name
2. **TestSessionPort**: register named test cases with a live test session
"""

from abc import ABC, abstractmethod


class NativeModulePort(ABC):
    """Port for invoking functions of an already compiled native module.

    Adapters wrap whatever loaded the module (ctypes, a CPython extension
    module, ...). The core only needs name-based lookup and invocation.
    """

    @abstractmethod
    def has_symbol(self, symbol: str) -> bool:
        """Whether the compiled module exports ``symbol``."""

    @abstractmethod
    def invoke(self, symbol: str) -> None:
        """Call the zero-argument function exported as ``symbol``.

        Args:
            symbol: Flat, unqualified function name.

        Raises:
            NativeFault: If the native runtime trapped, panicked or
                returned an error from the test function.
            Exception: Anything else the adapter or module raises is
                propagated unchanged.
        """


class TestSessionPort(ABC):
    """Port for registering tests with a running test session."""

    __test__ = False

    @abstractmethod
    def register(self, title: str) -> str:
        """Register a test titled ``title`` and return the name to bind it under.

        Called once per discovered test, before any test is invoked.
        Returned names are unique for the lifetime of the session object.
        """
