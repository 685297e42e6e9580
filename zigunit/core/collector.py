"""Source collection with the code-directory scope rule.

Only fragments that live directly in the module's code directory are
scanned for tests. Fragments pulled in from subdirectories are still
compiled into the module but their tests are not converted, so library
authors can keep example or integration code out of the test run.
"""

import logging
from pathlib import Path

from .errors import SourceReadError
from .models import CollectedSource, ModuleManifest, SourceFragment

logger = logging.getLogger(__name__)


class SourceCollector:
    """Gathers the in-scope source text of a module."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def resolve_code_dir(self, manifest: ModuleManifest) -> Path:
        """Code directory of the module: the override, or the source file's directory."""
        if manifest.code_dir is None:
            return manifest.source_file.parent

        code_dir = manifest.code_dir
        if not code_dir.is_dir():
            raise SourceReadError(code_dir, "code directory does not exist")
        if not any(self._in_scope(fragment, code_dir) for fragment in manifest.fragments):
            raise SourceReadError(
                code_dir, "code directory contains none of the module's source"
            )
        return code_dir

    def collect(self, manifest: ModuleManifest) -> CollectedSource:
        """Read every in-scope fragment, preserving insertion order.

        Raises:
            SourceReadError: If a fragment cannot be read or the code
                directory override is unusable.
        """
        code_dir = self.resolve_code_dir(manifest)
        collected: list[tuple[SourceFragment, str]] = []

        for fragment in manifest.fragments:
            if not self._in_scope(fragment, code_dir):
                logger.debug(f"Skipping {fragment.path}: outside {code_dir}")
                continue
            collected.append((fragment, self._read(fragment)))

        logger.debug(
            f"Collected {len(collected)} of {len(manifest.fragments)} fragments "
            f"from {code_dir}"
        )
        return CollectedSource(code_dir=code_dir, fragments=tuple(collected))

    def _read(self, fragment: SourceFragment) -> str:
        if fragment.text is not None:
            return fragment.text
        try:
            return fragment.path.read_bytes().decode(self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(fragment.path, f"cannot read source: {e}") from e

    @staticmethod
    def _in_scope(fragment: SourceFragment, code_dir: Path) -> bool:
        return _normalize(fragment.path.parent) == _normalize(code_dir)


def _normalize(path: Path) -> Path:
    return Path(path).expanduser().resolve(strict=False)
