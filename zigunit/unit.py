"""Hooks zig code into pytest by converting zig tests into pytest tests.

Inside the zig code (``dependent.zig``)::

    const std = @import("std");

    fn one() i64 {
        return 1;
    }

    test "the one function returns one" {
        try std.testing.expect(one() == 1);
    }

Inside a test module::

    from zigunit import zigtest

    zigtest("build/my_module.manifest.json")

Every named test block in the module's code directory becomes a pytest
test. Zig code in subdirectories is compiled in but not converted, so
tests that should only run under ``zig test`` belong in subdirectories.

Outside a pytest run (headless mode) the tests are still bound, under
their content-addressed fallback ids, so they can be called directly.

Headless mode is also what a pytest run gets when the zigunit plugin is
not installed. The fallback ids (``test_<HEX>``) match pytest's default
``test_*`` pattern, so the tests are still collected and run, but under
hashed names and without the ``zigtest`` marker. Install the package (or
pass ``live=True``) to get readable names.
"""

import inspect
from collections.abc import MutableMapping
from pathlib import Path
from types import ModuleType
from typing import Any

from zigunit.adapters.manifest.file import load_manifest
from zigunit.adapters.native.ctypes_module import CtypesNativeModule
from zigunit.adapters.native.python_module import PythonNativeModule
from zigunit.adapters.session.pytest_session import PytestSession, session_active
from zigunit.config import Settings, load_settings
from zigunit.core.collector import SourceCollector
from zigunit.core.discovery import DiscoveryService
from zigunit.core.models import ModuleManifest, RegisteredCase
from zigunit.core.naming import NameResolver
from zigunit.core.parser import TestParser
from zigunit.core.ports import NativeModulePort
from zigunit.core.registrar import Registrar
from zigunit.core.rewriter import SourceRewriter


def build_discovery(settings: Settings) -> DiscoveryService:
    """Wire a DiscoveryService from settings."""
    resolver = NameResolver(
        tag=settings.symbol_tag,
        collision_policy=settings.collision_policy,
    )
    parser = TestParser(keyword=settings.test_keyword, leaf_name=resolver.fallback_id)
    return DiscoveryService(
        collector=SourceCollector(encoding=settings.source_encoding),
        parser=parser,
        resolver=resolver,
        rewriter=SourceRewriter(),
    )


def open_native(
    manifest: ModuleManifest,
    native: NativeModulePort | ModuleType | None = None,
    fault_types: tuple[type[BaseException], ...] = (),
) -> NativeModulePort:
    """Adapter for the compiled module described by ``manifest``."""
    if isinstance(native, NativeModulePort):
        return native
    if native is not None:
        return PythonNativeModule(native, fault_types=fault_types)
    if manifest.library is None:
        raise ValueError(
            f"manifest for {manifest.source_file} names no library; pass the compiled module"
        )
    return CtypesNativeModule(manifest.library)


def zigtest(
    manifest: ModuleManifest | str | Path,
    native: NativeModulePort | ModuleType | None = None,
    namespace: MutableMapping[str, Any] | None = None,
    *,
    live: bool | None = None,
    settings: Settings | None = None,
    fault_types: tuple[type[BaseException], ...] = (),
) -> list[RegisteredCase]:
    """Discover the zig tests of a compiled module and bind them as test functions.

    Args:
        manifest: The module's manifest, or the path of a manifest file.
        native: Compiled module to call into. A NativeModulePort is used
            as is; an imported extension module is wrapped. Defaults to
            loading ``manifest.library`` with ctypes.
        namespace: Where to bind test functions. Defaults to the
            caller's globals.
        live: Register with pytest (True) or bind under fallback ids
            (False). Defaults to whether a pytest run is in progress.
        settings: Discovery settings. Defaults to the environment.
        fault_types: Exception types an extension module raises for
            failed zig tests.

    Returns:
        The registered cases in discovery order.

    Raises:
        SourceReadError: If the module's source cannot be read.
        ParseError: If a test block is malformed.
        NameCollisionError: If two tests share a compiled symbol.
    """
    if namespace is None:
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        if caller is None:
            raise RuntimeError("cannot determine the calling module; pass namespace")
        namespace = caller.f_globals

    settings = settings or load_settings()
    if not isinstance(manifest, ModuleManifest):
        manifest = load_manifest(manifest)
    if live is None:
        live = session_active()

    context = build_discovery(settings).discover(manifest)
    session = PytestSession(taken=namespace.keys()) if live else None
    registrar = Registrar(open_native(manifest, native, fault_types))
    return registrar.register(context, namespace, session)
