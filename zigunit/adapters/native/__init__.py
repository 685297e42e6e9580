"""Native module adapters for invoking compiled test functions.

Implementations support:
- ctypes shared libraries (C ABI, integer status return)
- Python extension modules (attribute lookup, exception translation)
"""

from .ctypes_module import CtypesNativeModule
from .python_module import PythonNativeModule

__all__ = ["CtypesNativeModule", "PythonNativeModule"]
