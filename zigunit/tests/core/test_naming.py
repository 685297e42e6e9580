"""Unit tests for symbol and fallback id derivation."""

import logging
import re

import pytest

from zigunit.core.errors import NameCollisionError
from zigunit.core.models import TestDescriptor
from zigunit.core.naming import NameResolver, fallback_id, leaf_symbol, title_hash

SYMBOL_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

AWKWARD_TITLES = [
    "",
    "   ",
    "the one function returns one",
    'edge: quotes " and braces { }',
    "größer als ≥ ✓",
    "tabs\tand\nnewlines",
    "dots.in.title",
    "$pecial #chars! @all (over) [the] <place>",
    "x" * 500,
]


def make_descriptor(title: str, qualified_name: str) -> TestDescriptor:
    return TestDescriptor(
        title=title,
        qualified_name=qualified_name,
        origin="test.zig",
        offset=0,
        line=1,
        header_start=0,
        body_start=0,
        end=1,
    )


class TestFallbackId:
    """Content-addressed identifiers."""

    def test_known_digests(self) -> None:
        assert fallback_id("") == "test_D41D8CD98F00B204E9800998ECF8427E"
        assert fallback_id("abc") == "test_900150983CD24FB0D6963F7D28E17F72"

    def test_is_idempotent_for_edge_title(self) -> None:
        title = 'edge: quotes " and braces { }'

        assert fallback_id(title) == fallback_id(title)

    @pytest.mark.parametrize("title", AWKWARD_TITLES)
    def test_is_idempotent(self, title: str) -> None:
        assert fallback_id(title) == fallback_id(title)
        assert NameResolver().fallback_id(title) == fallback_id(title)

    @pytest.mark.parametrize("title", AWKWARD_TITLES)
    def test_is_a_valid_symbol(self, title: str) -> None:
        identifier = fallback_id(title)

        assert SYMBOL_RE.match(identifier)
        assert identifier.isidentifier()

    def test_different_titles_differ(self) -> None:
        ids = {fallback_id(title) for title in AWKWARD_TITLES}

        assert len(ids) == len(AWKWARD_TITLES)

    def test_custom_tag(self) -> None:
        resolver = NameResolver(tag="zig_")

        assert resolver.fallback_id("abc") == "zig_" + title_hash("abc")

    def test_hash_alphabet_is_uppercase_hex(self) -> None:
        assert re.fullmatch(r"[0-9A-F]{32}", title_hash("anything"))


class TestLeafSymbol:
    """Stripping namespaces."""

    @pytest.mark.parametrize(
        "qualified_name, expected",
        [
            ("test_ABC", "test_ABC"),
            ("dependent.test_ABC", "test_ABC"),
            ("dependent.Outer.Inner.test_ABC", "test_ABC"),
        ],
    )
    def test_last_segment(self, qualified_name: str, expected: str) -> None:
        assert leaf_symbol(qualified_name) == expected


class TestNameResolver:
    """Resolution of descriptor lists."""

    def test_resolve_preserves_order(self) -> None:
        descriptors = [
            make_descriptor("b", "m.test_B"),
            make_descriptor("a", "m.test_A"),
        ]

        resolved = NameResolver().resolve(descriptors)

        assert [r.title for r in resolved] == ["b", "a"]
        assert [r.symbol for r in resolved] == ["test_B", "test_A"]
        assert [r.fallback_id for r in resolved] == [fallback_id("b"), fallback_id("a")]
        assert resolved[0].descriptor is descriptors[0]

    def test_collision_fails_fast_by_default(self) -> None:
        descriptors = [
            make_descriptor("same", "first.test_X"),
            make_descriptor("same", "second.test_X"),
        ]

        with pytest.raises(NameCollisionError) as excinfo:
            NameResolver().resolve(descriptors)

        assert excinfo.value.symbol == "test_X"
        assert excinfo.value.first == "first.test_X"
        assert excinfo.value.second == "second.test_X"

    def test_alias_policy_keeps_both(self, caplog: pytest.LogCaptureFixture) -> None:
        descriptors = [
            make_descriptor("same", "first.test_X"),
            make_descriptor("same", "second.test_X"),
        ]

        with caplog.at_level(logging.WARNING, logger="zigunit.core.naming"):
            resolved = NameResolver(collision_policy="alias").resolve(descriptors)

        assert [r.symbol for r in resolved] == ["test_X", "test_X"]
        assert "aliases" in caplog.text

    def test_empty_input(self) -> None:
        assert NameResolver().resolve([]) == []

    def test_invalid_tag_rejected(self) -> None:
        with pytest.raises(ValueError):
            NameResolver(tag="not-valid")

    def test_invalid_policy_rejected(self) -> None:
        with pytest.raises(ValueError):
            NameResolver(collision_policy="ignore")  # type: ignore[arg-type]


class TestDescriptorInvariants:
    """TestDescriptor validation."""

    def test_blank_title_rejected(self) -> None:
        with pytest.raises(ValueError):
            make_descriptor("  ", "m.test_X")

    def test_empty_qualified_name_rejected(self) -> None:
        with pytest.raises(ValueError):
            make_descriptor("x", "")
