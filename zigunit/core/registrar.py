"""Binding of discovered tests to invokable test functions.

The registrar is the only component with side effects on a build: it
fills the build's symbol table and binds one zero-argument test function
per test into a target namespace (usually a test module's globals).

In live mode each test is registered with the test session first and
bound under the name the session hands back. In headless mode no session
is involved and tests are bound under their content-addressed fallback id,
so tooling can still reach them by name.
"""

import logging
from collections.abc import Callable, MutableMapping
from functools import partial
from typing import Any

from .executor import ExecutionWrapper
from .models import BuildContext, RegisteredCase, ResolvedTest
from .ports import NativeModulePort, TestSessionPort

logger = logging.getLogger(__name__)

CASE_ATTRIBUTE = "__zigtest_case__"


class Registrar:
    """Turns resolved tests into bound test functions."""

    def __init__(
        self,
        native: NativeModulePort,
        fault_types: tuple[type[BaseException], ...] | None = None,
    ):
        self.native = native
        self.fault_types = fault_types

    def register(
        self,
        context: BuildContext,
        namespace: MutableMapping[str, Any],
        session: TestSessionPort | None = None,
    ) -> list[RegisteredCase]:
        """Bind every resolved test of ``context`` into ``namespace``.

        Args:
            context: Build whose ``resolved`` tests should be bound.
            namespace: Mapping the test functions are bound into.
            session: Live test session, or None for headless mode.

        Returns:
            The registered cases, in discovery order.

        Raises:
            RuntimeError: If this build was already registered.
        """
        if context.registered:
            raise RuntimeError("tests for this build are already registered")

        context.symbols = self._symbol_table(context.resolved)
        if self.fault_types is None:
            wrapper = ExecutionWrapper(context.symbols)
        else:
            wrapper = ExecutionWrapper(context.symbols, self.fault_types)
        module_name = namespace.get("__name__", __name__)

        cases = []
        for test in context.resolved:
            if session is not None:
                name = session.register(test.title)
            else:
                name = test.fallback_id
            case = RegisteredCase(
                title=test.title,
                name=name,
                symbol=test.symbol,
                fallback_id=test.fallback_id,
                live=session is not None,
            )
            namespace[name] = _make_test_function(wrapper, case, module_name)
            cases.append(case)
            logger.debug(f"Bound {test.qualified_name} as {module_name}.{name}")

        context.cases = cases
        context.registered = True
        mode = "live" if session is not None else "headless"
        logger.info(f"Registered {len(cases)} zig test(s) in {module_name} ({mode})")
        return cases

    def _symbol_table(self, resolved: list[ResolvedTest]) -> dict[str, Callable[[], Any]]:
        symbols: dict[str, Callable[[], Any]] = {}
        for test in resolved:
            if test.symbol in symbols:
                continue
            if not self.native.has_symbol(test.symbol):
                logger.warning(
                    f"Compiled module does not export {test.symbol} "
                    f"(test {test.title!r})"
                )
            symbols[test.symbol] = partial(self.native.invoke, test.symbol)
        return symbols


def _make_test_function(
    wrapper: ExecutionWrapper, case: RegisteredCase, module_name: str
) -> Callable[[], None]:
    def zig_test() -> None:
        wrapper.run(case.symbol, case.title)

    zig_test.__name__ = case.name
    zig_test.__qualname__ = case.name
    zig_test.__module__ = module_name
    zig_test.__doc__ = case.title
    setattr(zig_test, CASE_ATTRIBUTE, case)
    return zig_test
