"""Error types raised by the zigunit core.

Discovery errors (SourceReadError, ParseError, NameCollisionError) are fatal
for the module being discovered. Execution errors are raised per test.
"""

from pathlib import Path


class ZigUnitError(Exception):
    """Base class for all zigunit errors."""


class SourceReadError(ZigUnitError, OSError):
    """A module's source could not be read or located."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")

    def __str__(self) -> str:
        return f"{self.path}: {self.reason}"


class ParseError(ZigUnitError):
    """A test block is malformed or never closed.

    Attributes:
        origin: File (or other reference) the source text came from.
        offset: UTF-8 byte offset of the offending opening delimiter.
        line: 1-based line of the offset.
        column: 1-based column of the offset.
    """

    def __init__(
        self,
        message: str,
        origin: Path | str,
        offset: int,
        line: int | None = None,
        column: int | None = None,
    ):
        self.message = message
        self.origin = origin
        self.offset = offset
        self.line = line
        self.column = column
        location = f"{origin}:{line}:{column}" if line is not None else str(origin)
        super().__init__(f"{location}: {message} (byte offset {offset})")


class NameCollisionError(ZigUnitError, ValueError):
    """Two tests resolve to the same compiled symbol."""

    def __init__(self, symbol: str, first: str, second: str):
        self.symbol = symbol
        self.first = first
        self.second = second
        super().__init__(
            f"tests {first!r} and {second!r} both resolve to symbol {symbol!r}"
        )


class NativeFault(ZigUnitError):
    """The native runtime trapped while running a compiled test function.

    Native adapters raise this for assertion failures, panics and error
    returns coming out of the compiled module.
    """

    def __init__(self, symbol: str, detail: str = "", code: int | None = None):
        self.symbol = symbol
        self.detail = detail
        self.code = code
        message = f"{symbol} faulted"
        if code is not None:
            message += f" with code {code}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class NativeTestFailure(ZigUnitError, AssertionError):
    """Host-side failure raised for a native fault.

    Carries a fixed message; the native fault is available as ``__cause__``.
    """

    MESSAGE = "native test failed"

    def __init__(self, symbol: str, title: str | None = None):
        self.symbol = symbol
        self.title = title
        super().__init__(self.MESSAGE)
