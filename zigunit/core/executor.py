"""Invocation boundary between the host test session and native code.

A native fault becomes a ``NativeTestFailure`` (an ``AssertionError``), which
every Python test runner reports as an ordinary test failure. The fault's
traceback is kept; structured assertion detail (expression, operands) is
not available from native code and is not reconstructed. Any other error
propagates unchanged.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from .errors import NativeFault, NativeTestFailure
from .models import InvocationResult, Outcome

logger = logging.getLogger(__name__)


class ExecutionWrapper:
    """Runs compiled test functions through a symbol table."""

    def __init__(
        self,
        symbols: Mapping[str, Callable[[], Any]],
        fault_types: tuple[type[BaseException], ...] = (NativeFault,),
    ):
        self.symbols = symbols
        self.fault_types = fault_types

    def classify(self, error: BaseException) -> Outcome:
        """Map an error raised by a native call to an outcome."""
        if isinstance(error, self.fault_types):
            return Outcome.NATIVE_FAULT
        return Outcome.OTHER_ERROR

    def invoke(self, symbol: str) -> InvocationResult:
        """Call ``symbol`` and return a tagged result instead of raising."""
        try:
            self.symbols[symbol]()
        except Exception as e:
            return InvocationResult(symbol=symbol, outcome=self.classify(e), error=e)
        return InvocationResult(symbol=symbol, outcome=Outcome.SUCCESS)

    def run(self, symbol: str, title: str | None = None) -> None:
        """Call ``symbol``, re-signalling native faults as test failures.

        Raises:
            NativeTestFailure: If the native call faulted.
            Exception: Any other error raised by the call, unmodified.
        """
        result = self.invoke(symbol)
        error = result.error
        if error is None:
            return
        if result.outcome is Outcome.NATIVE_FAULT:
            logger.debug(f"Native fault in {symbol}: {error}")
            raise NativeTestFailure(symbol, title).with_traceback(error.__traceback__) from error
        raise error
