"""Name derivation for discovered tests.

Every test gets two names:

- ``symbol``: the flat function name the compiled module exports for the
  test. The compiled artifact has no namespaces, so this is the last
  segment of the test's qualified name.
- ``fallback_id``: a content-addressed name derived from the title alone,
  used to bind tests when no live test session is available.
"""

import hashlib
import logging
from typing import Literal

from .errors import NameCollisionError
from .models import ResolvedTest, TestDescriptor

logger = logging.getLogger(__name__)

CollisionPolicy = Literal["error", "alias"]

DEFAULT_TAG = "test_"


def title_hash(title: str) -> str:
    """Uppercase hex MD5 digest of the UTF-8 encoded title."""
    return hashlib.md5(title.encode("utf-8")).hexdigest().upper()


def fallback_id(title: str, tag: str = DEFAULT_TAG) -> str:
    """Content-addressed identifier for a test title.

    Always a valid bare identifier, whatever the title contains:
    the tag followed by ``[0-9A-F]{32}``.
    """
    return tag + title_hash(title)


def leaf_symbol(qualified_name: str) -> str:
    """Last segment of a dotted name."""
    return qualified_name.rsplit(".", 1)[-1]


class NameResolver:
    """Resolves descriptors to symbols and fallback ids.

    Pure function over descriptors: nothing is bound or generated here.
    """

    def __init__(self, tag: str = DEFAULT_TAG, collision_policy: CollisionPolicy = "error"):
        if not tag.isidentifier():
            raise ValueError(f"tag must be a valid identifier, got {tag!r}")
        if collision_policy not in ("error", "alias"):
            raise ValueError(f"unknown collision policy: {collision_policy!r}")
        self.tag = tag
        self.collision_policy = collision_policy

    def fallback_id(self, title: str) -> str:
        return fallback_id(title, self.tag)

    def resolve(self, descriptors: list[TestDescriptor]) -> list[ResolvedTest]:
        """Resolve descriptors in order.

        Raises:
            NameCollisionError: If two tests share a symbol and the
                policy is ``error``.
        """
        seen: dict[str, TestDescriptor] = {}
        resolved = []

        for descriptor in descriptors:
            symbol = leaf_symbol(descriptor.qualified_name)
            previous = seen.get(symbol)
            if previous is not None:
                if self.collision_policy == "error":
                    raise NameCollisionError(
                        symbol, previous.qualified_name, descriptor.qualified_name
                    )
                logger.warning(
                    f"Test {descriptor.qualified_name!r} aliases "
                    f"{previous.qualified_name!r} (symbol {symbol})"
                )
            seen[symbol] = descriptor
            resolved.append(
                ResolvedTest(
                    descriptor=descriptor,
                    symbol=symbol,
                    fallback_id=self.fallback_id(descriptor.title),
                )
            )

        return resolved
