"""Build manifest adapters."""

from .file import ManifestFile, load_manifest

__all__ = ["ManifestFile", "load_manifest"]
