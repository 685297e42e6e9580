"""Rewrites test blocks into plain functions for compilation.

Each ``test "<title>"`` header becomes ``pub fn <symbol>() !void`` so the
build step can export every test as a flat zero-argument function. Bodies
are left untouched.

The rewritten functions use the Zig calling convention and return an error
union, so ctypes cannot call them as they are. For
``CtypesNativeModule`` the build step must add the C-ABI ``int fn(void)``
export under each symbol: a wrapper that calls the test function (renamed
through ``header_template``) and returns 0, or the error code on failure.
Extension modules that raise on failure need no such wrapper.
"""

from .models import ResolvedTest

FUNCTION_HEADER = "pub fn {symbol}() !void "


class SourceRewriter:
    """Pure text transformation over one scanned source."""

    def __init__(self, header_template: str = FUNCTION_HEADER):
        self.header_template = header_template

    def rewrite(self, text: str, tests: list[ResolvedTest]) -> str:
        """Return ``text`` with the header of each test replaced.

        ``tests`` must all come from a scan of this exact text.
        """
        parts = []
        cursor = 0
        for test in sorted(tests, key=lambda t: t.descriptor.header_start):
            descriptor = test.descriptor
            parts.append(text[cursor : descriptor.header_start])
            parts.append(self.header_template.format(symbol=test.symbol))
            cursor = descriptor.body_start
        parts.append(text[cursor:])
        return "".join(parts)
