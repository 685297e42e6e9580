"""zigunit: run zig test blocks of compiled native modules as pytest tests."""

from zigunit.core.errors import (
    NameCollisionError,
    NativeFault,
    NativeTestFailure,
    ParseError,
    SourceReadError,
)
from zigunit.core.models import ModuleManifest, ModuleMetadata, SourceFragment
from zigunit.unit import zigtest

__all__ = [
    "ModuleManifest",
    "ModuleMetadata",
    "NameCollisionError",
    "NativeFault",
    "NativeTestFailure",
    "ParseError",
    "SourceFragment",
    "SourceReadError",
    "zigtest",
]
