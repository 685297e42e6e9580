"""ctypes adapter for compiled shared libraries.

Test functions are expected to be exported with the C calling convention
as ``int fn(void)``: zero means the test passed, anything else is the
integer value of the Zig error (or trap code) that ended it.
"""

import ctypes
import logging
from pathlib import Path
from typing import Any

from zigunit.core.errors import NativeFault
from zigunit.core.ports import NativeModulePort

logger = logging.getLogger(__name__)


class CtypesNativeModule(NativeModulePort):
    """Calls exported test functions of a shared library."""

    def __init__(self, library_path: str | Path, library: Any | None = None):
        """Initialize the adapter.

        Args:
            library_path: Path of the shared library. Loaded on first use.
            library: Already loaded library object (mainly for tests).
        """
        self.library_path = Path(library_path)
        self._library = library

    @property
    def library(self) -> Any:
        if self._library is None:
            logger.debug(f"Loading native library {self.library_path}")
            self._library = ctypes.CDLL(str(self.library_path))
        return self._library

    def has_symbol(self, symbol: str) -> bool:
        try:
            getattr(self.library, symbol)
        except AttributeError:
            return False
        return True

    def invoke(self, symbol: str) -> None:
        function = getattr(self.library, symbol)
        function.argtypes = []
        function.restype = ctypes.c_int
        code = function()
        if code != 0:
            raise NativeFault(symbol, code=code)
