"""JSON build manifest reader.

The compile step records what went into a native module in a JSON file:

    {
        "source_file": "lib/my_module.py",
        "fragments": [{"path": "lib/dependent.zig"}, {"path": "lib/my_module.py", "text": "..."}],
        "code_dir": null,
        "library": "build/libmy_module.so",
        "target_app": "my_app",
        "toolchain_version": "0.11.0",
        "resources": []
    }

Relative paths are resolved against the manifest's own directory. The
manifest is validated with pydantic and converted to core models.
"""

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from zigunit.core.errors import SourceReadError
from zigunit.core.models import ModuleManifest, ModuleMetadata, SourceFragment

logger = logging.getLogger(__name__)


class FragmentEntry(BaseModel):
    """One source fragment of the module."""

    model_config = ConfigDict(extra="forbid")

    path: str
    text: str | None = None

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Ensure path is not empty."""
        if not v.strip():
            raise ValueError("fragment path must be a non-empty string")
        return v


class ManifestFile(BaseModel):
    """Schema of a build manifest file."""

    model_config = ConfigDict(extra="ignore")

    source_file: str
    fragments: list[FragmentEntry] = Field(default_factory=list)
    code_dir: str | None = None
    library: str | None = None
    target_app: str | None = None
    toolchain_version: str | None = None
    resources: list[str] = Field(default_factory=list)

    def to_manifest(self, base_dir: Path) -> ModuleManifest:
        """Convert to a core ModuleManifest, resolving relative paths."""

        def resolve(path: str) -> Path:
            candidate = Path(path)
            return candidate if candidate.is_absolute() else base_dir / candidate

        return ModuleManifest(
            source_file=resolve(self.source_file),
            fragments=tuple(
                SourceFragment(path=resolve(entry.path), text=entry.text)
                for entry in self.fragments
            ),
            code_dir=resolve(self.code_dir) if self.code_dir else None,
            library=resolve(self.library) if self.library else None,
            metadata=ModuleMetadata(
                target_app=self.target_app,
                toolchain_version=self.toolchain_version,
                resources=tuple(self.resources),
            ),
        )


def load_manifest(path: str | Path) -> ModuleManifest:
    """Read and validate a manifest file.

    Raises:
        SourceReadError: If the file is missing, unreadable or invalid.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SourceReadError(path, f"cannot read manifest: {e}") from e

    try:
        manifest_file = ManifestFile.model_validate_json(raw)
    except ValidationError as e:
        raise SourceReadError(path, f"invalid manifest: {e}") from e

    logger.debug(f"Loaded manifest {path} with {len(manifest_file.fragments)} fragment(s)")
    return manifest_file.to_manifest(path.parent)
