"""Live registration of zig tests with pytest.

pytest collects test functions by name from module globals, so
registering a test means handing out a fresh ``test_*`` name that the
registrar then binds the test function under. Names are derived from the
title and made unique within the target namespace.
"""

import logging
import re
from collections.abc import Iterable
from typing import Any

from zigunit.core.ports import TestSessionPort

logger = logging.getLogger(__name__)

_active_configs: list[Any] = []


def activate(config: Any) -> None:
    """Mark a pytest run as started. Called by the plugin."""
    _active_configs.append(config)


def deactivate(config: Any) -> None:
    """Mark a pytest run as finished. Called by the plugin."""
    if config in _active_configs:
        _active_configs.remove(config)


def session_active() -> bool:
    """Whether a pytest run with the zigunit plugin is in progress."""
    return bool(_active_configs)


def slugify(title: str) -> str:
    """Lowercase ASCII identifier fragment for a title. May be empty."""
    return re.sub(r"\W+", "_", title, flags=re.ASCII).strip("_").lower()


class PytestSession(TestSessionPort):
    """Hands out unique pytest test-function names for zig test titles."""

    def __init__(self, taken: Iterable[str] = (), prefix: str = "test_zig_"):
        """Initialize the session.

        Args:
            taken: Names already in use in the target namespace.
            prefix: Prefix matching pytest's ``python_functions`` pattern.
        """
        self.prefix = prefix
        self._taken = set(taken)
        self.registered: list[tuple[str, str]] = []

    def register(self, title: str) -> str:
        base = self.prefix + (slugify(title) or "unnamed")
        name = base
        suffix = 2
        while name in self._taken:
            name = f"{base}_{suffix}"
            suffix += 1
        self._taken.add(name)
        self.registered.append((title, name))
        logger.debug(f"Registered zig test {title!r} as {name}")
        return name
