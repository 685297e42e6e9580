"""pytest plugin for zigunit, loaded through the ``pytest11`` entry point."""

import pytest

from zigunit.adapters.session import pytest_session
from zigunit.core.registrar import CASE_ATTRIBUTE


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "zigtest(title): test converted from a named zig test block"
    )
    pytest_session.activate(config)


def pytest_unconfigure(config: pytest.Config) -> None:
    pytest_session.deactivate(config)


def pytest_itemcollected(item: pytest.Item) -> None:
    """Attach the zig title and symbol to items bound by the registrar."""
    case = getattr(getattr(item, "obj", None), CASE_ATTRIBUTE, None)
    if case is None:
        return
    item.add_marker(pytest.mark.zigtest(title=case.title))
    item.user_properties.append(("zig_title", case.title))
    item.user_properties.append(("zig_symbol", case.symbol))
