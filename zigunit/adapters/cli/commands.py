"""CLI command implementations for zigunit.

Maps CLI commands (list, rewrite, run) onto the discovery pipeline and
the registrar. Commands return result dictionaries; domain errors are
reported as ``{"status": "error", ...}`` rather than raised.
"""

import logging
from pathlib import Path
from typing import Any

from zigunit.adapters.manifest.file import load_manifest
from zigunit.adapters.native.ctypes_module import CtypesNativeModule
from zigunit.core.discovery import DiscoveryService
from zigunit.core.errors import NativeTestFailure, ZigUnitError
from zigunit.core.ports import NativeModulePort
from zigunit.core.registrar import Registrar

logger = logging.getLogger(__name__)


class CLICommandHandler:
    """Handles CLI commands by delegating to the discovery pipeline."""

    def __init__(self, discovery: DiscoveryService):
        """Initialize the CLI command handler.

        Args:
            discovery: Configured DiscoveryService.
        """
        self.discovery = discovery

    def list_tests(self, manifest_path: str | Path) -> dict[str, Any]:
        """List the tests discovered for a manifest."""
        try:
            context = self.discovery.discover(load_manifest(manifest_path))
        except ZigUnitError as e:
            logger.error(f"Failed to discover tests: {e}")
            return _error("list", manifest_path, e)

        return {
            "status": "success",
            "operation": "list",
            "manifest": str(manifest_path),
            "code_dir": str(context.source.code_dir) if context.source else None,
            "tests": [
                {
                    "title": test.title,
                    "qualified_name": test.qualified_name,
                    "symbol": test.symbol,
                    "fallback_id": test.fallback_id,
                    "origin": test.descriptor.origin,
                    "line": test.descriptor.line,
                }
                for test in context.resolved
            ],
        }

    def rewrite_source(
        self, manifest_path: str | Path, output_dir: str | Path | None = None
    ) -> dict[str, Any]:
        """Rewrite test blocks into functions, optionally writing the results.

        Rewritten files keep their names and are written into
        ``output_dir`` when given.
        """
        try:
            context = self.discovery.discover(load_manifest(manifest_path))
        except ZigUnitError as e:
            logger.error(f"Failed to rewrite source: {e}")
            return _error("rewrite", manifest_path, e)

        written = []
        if output_dir is not None:
            out = Path(output_dir)
            out.mkdir(parents=True, exist_ok=True)
            for origin, text in context.rewritten.items():
                target = out / Path(origin).name
                target.write_text(text, encoding="utf-8")
                written.append(str(target))
            logger.info(f"Wrote {len(written)} rewritten file(s) to {out}")

        return {
            "status": "success",
            "operation": "rewrite",
            "manifest": str(manifest_path),
            "sources": dict(context.rewritten),
            "written": written,
        }

    def run_tests(
        self, manifest_path: str | Path, native: NativeModulePort | None = None
    ) -> dict[str, Any]:
        """Run every discovered test headlessly and report per-test results.

        Args:
            manifest_path: Manifest of the compiled module.
            native: Compiled module adapter. Defaults to loading the
                manifest's library with ctypes.
        """
        try:
            manifest = load_manifest(manifest_path)
            context = self.discovery.discover(manifest)
            if native is None:
                if manifest.library is None:
                    raise ValueError("manifest names no library to run")
                native = CtypesNativeModule(manifest.library)
            namespace: dict[str, Any] = {"__name__": "zigunit.headless"}
            cases = Registrar(native).register(context, namespace)
        except (ZigUnitError, ValueError, OSError) as e:
            logger.error(f"Failed to prepare tests: {e}")
            return _error("run", manifest_path, e)

        results = []
        for case in cases:
            entry = {"title": case.title, "symbol": case.symbol}
            try:
                namespace[case.name]()
                entry["outcome"] = "passed"
            except NativeTestFailure as e:
                entry["outcome"] = "failed"
                entry["message"] = str(e)
                entry["detail"] = str(e.__cause__) if e.__cause__ else ""
            except Exception as e:
                logger.error(f"Test {case.title!r} errored: {e}", exc_info=True)
                entry["outcome"] = "error"
                entry["message"] = f"{type(e).__name__}: {e}"
            results.append(entry)

        failed = sum(1 for r in results if r["outcome"] != "passed")
        return {
            "status": "success" if failed == 0 else "failure",
            "operation": "run",
            "manifest": str(manifest_path),
            "passed": len(results) - failed,
            "failed": failed,
            "results": results,
        }


def _error(operation: str, manifest_path: str | Path, error: Exception) -> dict[str, Any]:
    return {
        "status": "error",
        "operation": operation,
        "manifest": str(manifest_path),
        "message": str(error),
    }


def format_text(result: dict[str, Any]) -> str:
    """Human-readable rendering of a command result."""
    if result["status"] == "error":
        return f"error: {result['message']}"

    operation = result["operation"]
    lines = []
    if operation == "list":
        for test in result["tests"]:
            lines.append(f"{test['origin']}:{test['line']}: {test['title']} ({test['symbol']})")
        lines.append(f"{len(result['tests'])} test(s)")
    elif operation == "rewrite":
        if result["written"]:
            lines.extend(result["written"])
        else:
            for origin, text in result["sources"].items():
                lines.append(f"// {origin}")
                lines.append(text)
    elif operation == "run":
        for entry in result["results"]:
            line = f"{entry['outcome'].upper():7} {entry['title']}"
            if entry.get("message"):
                line += f" - {entry['message']}"
            lines.append(line)
        lines.append(f"{result['passed']} passed, {result['failed']} failed")
    return "\n".join(lines)
