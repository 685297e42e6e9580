"""Adapter for compiled CPython extension modules.

Extension modules report failed tests by raising. The exception types a
given module uses for assertion failures and panics are passed in and
translated to ``NativeFault``; everything else propagates unchanged.
"""

from types import ModuleType
from typing import Any

from zigunit.core.errors import NativeFault
from zigunit.core.ports import NativeModulePort


class PythonNativeModule(NativeModulePort):
    """Calls zero-argument test functions of an imported extension module."""

    def __init__(
        self,
        module: ModuleType | Any,
        fault_types: tuple[type[BaseException], ...] = (),
    ):
        self.module = module
        self.fault_types = fault_types

    def has_symbol(self, symbol: str) -> bool:
        return callable(getattr(self.module, symbol, None))

    def invoke(self, symbol: str) -> None:
        function = getattr(self.module, symbol)
        try:
            function()
        except NativeFault:
            raise
        except self.fault_types as e:
            raise NativeFault(symbol, detail=str(e)) from e
