"""Core domain logic for zigunit.

This package contains zero external dependencies: discovery of named
Zig test blocks, naming, binding and the invocation boundary. Loading
compiled modules and talking to a test runner are handled by the
adapters package.
"""

from .errors import (
    NameCollisionError,
    NativeFault,
    NativeTestFailure,
    ParseError,
    SourceReadError,
    ZigUnitError,
)
from .models import (
    BuildContext,
    CollectedSource,
    InvocationResult,
    ModuleManifest,
    ModuleMetadata,
    Outcome,
    RegisteredCase,
    ResolvedTest,
    SourceFragment,
    TestDescriptor,
)

__all__ = [
    "BuildContext",
    "CollectedSource",
    "InvocationResult",
    "ModuleManifest",
    "ModuleMetadata",
    "NameCollisionError",
    "NativeFault",
    "NativeTestFailure",
    "Outcome",
    "ParseError",
    "RegisteredCase",
    "ResolvedTest",
    "SourceFragment",
    "SourceReadError",
    "TestDescriptor",
    "ZigUnitError",
]
