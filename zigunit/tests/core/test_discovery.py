"""Unit tests for the discovery pass and source rewriting."""

from pathlib import Path

import pytest

from zigunit.core.collector import SourceCollector
from zigunit.core.discovery import DiscoveryService
from zigunit.core.errors import NameCollisionError, ParseError, SourceReadError
from zigunit.core.models import ModuleManifest, ModuleMetadata, SourceFragment
from zigunit.core.naming import NameResolver, fallback_id
from zigunit.core.parser import TestParser
from zigunit.core.rewriter import SourceRewriter

DATA = Path(__file__).parent.parent / "data"


def make_service(policy: str = "error") -> DiscoveryService:
    resolver = NameResolver(collision_policy=policy)  # type: ignore[arg-type]
    return DiscoveryService(
        collector=SourceCollector(),
        parser=TestParser(leaf_name=resolver.fallback_id),
        resolver=resolver,
        rewriter=SourceRewriter(),
    )


@pytest.fixture
def service() -> DiscoveryService:
    return make_service()


@pytest.fixture
def data_manifest() -> ModuleManifest:
    return ModuleManifest(
        source_file=DATA / "my_module.py",
        fragments=(
            SourceFragment(DATA / "dependent.zig"),
            SourceFragment(DATA / "examples" / "example.zig"),
        ),
        metadata=ModuleMetadata(target_app="my_app", toolchain_version="0.11.0"),
    )


class TestDiscoveryService:
    """End-to-end discovery over real files."""

    def test_discovers_tests_in_code_dir_only(
        self, service: DiscoveryService, data_manifest: ModuleManifest
    ) -> None:
        context = service.discover(data_manifest)

        assert [t.title for t in context.resolved] == [
            "the one function returns one",
            "open returns an opening brace",
            "strings with braces { } do not confuse the scanner",
        ]

    def test_qualified_names_and_symbols(
        self, service: DiscoveryService, data_manifest: ModuleManifest
    ) -> None:
        context = service.discover(data_manifest)
        brace_test = context.resolved[1]

        leaf = fallback_id("open returns an opening brace")
        assert brace_test.qualified_name == f"dependent.Brackets.{leaf}"
        assert brace_test.symbol == leaf
        assert brace_test.descriptor.origin == str(DATA / "dependent.zig")

    def test_metadata_passes_through(
        self, service: DiscoveryService, data_manifest: ModuleManifest
    ) -> None:
        context = service.discover(data_manifest)

        assert context.metadata.target_app == "my_app"
        assert context.metadata.toolchain_version == "0.11.0"
        assert not context.registered

    def test_order_across_fragments(self, service: DiscoveryService, tmp_path: Path) -> None:
        (tmp_path / "b.zig").write_text('test "b1" {}\ntest "b2" {}\n', encoding="utf-8")
        (tmp_path / "a.zig").write_text('test "a1" {}\n', encoding="utf-8")
        manifest = ModuleManifest(
            source_file=tmp_path / "m.py",
            fragments=(SourceFragment(tmp_path / "b.zig"), SourceFragment(tmp_path / "a.zig")),
        )

        context = service.discover(manifest)

        assert [t.title for t in context.resolved] == ["b1", "b2", "a1"]

    def test_collision_across_namespaces(self, tmp_path: Path) -> None:
        (tmp_path / "one.zig").write_text('test "shared" {}\n', encoding="utf-8")
        (tmp_path / "two.zig").write_text('test "shared" {}\n', encoding="utf-8")
        manifest = ModuleManifest(
            source_file=tmp_path / "m.py",
            fragments=(SourceFragment(tmp_path / "one.zig"), SourceFragment(tmp_path / "two.zig")),
        )

        with pytest.raises(NameCollisionError):
            make_service("error").discover(manifest)

        context = make_service("alias").discover(manifest)
        assert [t.qualified_name.split(".")[0] for t in context.resolved] == ["one", "two"]

    def test_parse_error_names_the_file(self, service: DiscoveryService, tmp_path: Path) -> None:
        (tmp_path / "ok.zig").write_text('test "fine" {}\n', encoding="utf-8")
        (tmp_path / "broken.zig").write_text('test "x" { ', encoding="utf-8")
        manifest = ModuleManifest(
            source_file=tmp_path / "m.py",
            fragments=(SourceFragment(tmp_path / "ok.zig"), SourceFragment(tmp_path / "broken.zig")),
        )

        with pytest.raises(ParseError) as excinfo:
            service.discover(manifest)

        assert excinfo.value.origin == str(tmp_path / "broken.zig")
        assert excinfo.value.offset == 9

    def test_parse_error_offset_counts_crlf_bytes(
        self, service: DiscoveryService, tmp_path: Path
    ) -> None:
        source = b'const a = 1;\r\nconst b = 2;\r\ntest "x" { '
        (tmp_path / "windows.zig").write_bytes(source)
        manifest = ModuleManifest(
            source_file=tmp_path / "m.py",
            fragments=(SourceFragment(tmp_path / "windows.zig"),),
        )

        with pytest.raises(ParseError) as excinfo:
            service.discover(manifest)

        assert excinfo.value.offset == source.index(b"{") == 37
        assert excinfo.value.line == 3

    def test_unreadable_source_aborts(self, service: DiscoveryService, tmp_path: Path) -> None:
        manifest = ModuleManifest(
            source_file=tmp_path / "m.py",
            fragments=(SourceFragment(tmp_path / "gone.zig"),),
        )

        with pytest.raises(SourceReadError):
            service.discover(manifest)

    def test_without_rewriter(self, data_manifest: ModuleManifest) -> None:
        resolver = NameResolver()
        service = DiscoveryService(SourceCollector(), TestParser(), resolver)

        context = service.discover(data_manifest)

        assert context.rewritten == {}
        assert len(context.resolved) == 3


class TestSourceRewriting:
    """Rewritten source handed to the compile step."""

    def test_headers_become_functions(
        self, service: DiscoveryService, data_manifest: ModuleManifest
    ) -> None:
        context = service.discover(data_manifest)
        rewritten = context.rewritten[str(DATA / "dependent.zig")]

        assert 'test "' not in rewritten
        for test in context.resolved:
            assert f"pub fn {test.symbol}() !void {{" in rewritten
        assert "\\\\ a line string with { and without its partner" in rewritten
        assert "fn open() u8 {" in rewritten

    def test_bodies_are_untouched(self) -> None:
        source = 'const x = 1;\ntest "t" {\n    _ = x;\n}\n'
        parser = TestParser()
        tests = NameResolver().resolve(parser.parse(source, "m.zig"))

        rewritten = SourceRewriter().rewrite(source, tests)

        symbol = fallback_id("t")
        assert rewritten == f"const x = 1;\npub fn {symbol}() !void {{\n    _ = x;\n}}\n"

    def test_header_template_leaves_symbol_free_for_export_wrapper(self) -> None:
        source = 'test "t" {}\n'
        tests = NameResolver().resolve(TestParser().parse(source, "m.zig"))

        rewritten = SourceRewriter(header_template="fn {symbol}_body() !void ").rewrite(
            source, tests
        )

        assert rewritten == f"fn {fallback_id('t')}_body() !void {{}}\n"

    def test_no_tests_means_no_change(self) -> None:
        assert SourceRewriter().rewrite("fn f() void {}", []) == "fn f() void {}"

    def test_inline_fragments_of_one_file_are_rewritten_separately(self, tmp_path: Path) -> None:
        module = tmp_path / "m.py"
        manifest = ModuleManifest(
            source_file=module,
            fragments=(
                SourceFragment(module, text='test "one" {}\n'),
                SourceFragment(module, text='const pad = 0;\ntest "two" {}\n'),
            ),
        )

        context = make_service().discover(manifest)

        assert context.rewritten[str(module)] == (
            f"pub fn {fallback_id('one')}() !void {{}}\n"
            f"const pad = 0;\npub fn {fallback_id('two')}() !void {{}}\n"
        )
