"""Discovery pass: collect, parse, resolve and rewrite a module's tests.

Produces a BuildContext holding plain data only. Binding the results to
callables is the Registrar's job.
"""

import logging

from .collector import SourceCollector
from .models import BuildContext, ModuleManifest, ResolvedTest
from .naming import NameResolver
from .parser import TestParser
from .rewriter import SourceRewriter

logger = logging.getLogger(__name__)


class DiscoveryService:
    """Runs SourceCollector -> TestParser -> NameResolver over one manifest."""

    def __init__(
        self,
        collector: SourceCollector,
        parser: TestParser,
        resolver: NameResolver,
        rewriter: SourceRewriter | None = None,
    ):
        self.collector = collector
        self.parser = parser
        self.resolver = resolver
        self.rewriter = rewriter

    def discover(self, manifest: ModuleManifest) -> BuildContext:
        """Discover the tests of one module.

        Each in-scope fragment is scanned separately, in insertion order,
        so diagnostics point into the file a test was written in.

        Raises:
            SourceReadError: If source cannot be read.
            ParseError: If a test block is malformed.
            NameCollisionError: If two tests share a symbol under the
                ``error`` collision policy.
        """
        context = BuildContext(manifest=manifest)
        context.source = self.collector.collect(manifest)

        counts = []
        for fragment, text in context.source.fragments:
            found = self.parser.parse(text, str(fragment.path), fragment.namespace)
            context.descriptors.extend(found)
            counts.append(len(found))

        context.resolved = self.resolver.resolve(context.descriptors)

        if self.rewriter is not None:
            start = 0
            for (fragment, text), count in zip(context.source.fragments, counts):
                tests: list[ResolvedTest] = context.resolved[start : start + count]
                start += count
                origin = str(fragment.path)
                rewritten = self.rewriter.rewrite(text, tests)
                context.rewritten[origin] = context.rewritten.get(origin, "") + rewritten

        logger.info(
            f"Discovered {len(context.resolved)} zig test(s) for "
            f"{manifest.source_file} in {context.source.code_dir}"
        )
        return context
