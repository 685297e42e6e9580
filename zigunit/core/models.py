"""Domain models for zigunit.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class SourceFragment:
    """A piece of source text incorporated into a compiled module.

    ``text`` is None for fragments that must be read from ``path``.
    Inline fragments (source embedded in the module file itself) carry
    their text and are attributed to the file they were written in.
    """

    path: Path
    text: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.path, Path):
            object.__setattr__(self, "path", Path(self.path))

    @property
    def namespace(self) -> str:
        return self.path.stem


@dataclass(frozen=True)
class ModuleMetadata:
    """Build metadata of a compiled module. Passed through, never interpreted."""

    target_app: str | None = None
    toolchain_version: str | None = None
    resources: tuple[str, ...] = ()


@dataclass(frozen=True)
class ModuleManifest:
    """What the build step knows about a compiled module."""

    source_file: Path
    fragments: tuple[SourceFragment, ...]
    code_dir: Path | None = None
    library: Path | None = None
    metadata: ModuleMetadata = field(default_factory=ModuleMetadata)

    def __post_init__(self) -> None:
        object.__setattr__(self, "source_file", Path(self.source_file))
        object.__setattr__(self, "fragments", tuple(self.fragments))
        if self.code_dir is not None:
            object.__setattr__(self, "code_dir", Path(self.code_dir))
        if self.library is not None:
            object.__setattr__(self, "library", Path(self.library))


@dataclass(frozen=True)
class CollectedSource:
    """In-scope source of a module, in insertion order."""

    code_dir: Path
    fragments: tuple[tuple[SourceFragment, str], ...]

    @property
    def text(self) -> str:
        return "".join(text for _, text in self.fragments)


@dataclass(frozen=True)
class TestDescriptor:
    """One named test block found in source text.

    ``offset`` is the UTF-8 byte offset of the block's opening brace.
    ``header_start``, ``body_start`` and ``end`` are character indices into
    the scanned text: the keyword, the opening brace, and one past the
    closing brace.
    """

    __test__ = False

    title: str
    qualified_name: str
    origin: str
    offset: int
    line: int
    header_start: int
    body_start: int
    end: int

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValueError("title must be a non-empty string")
        if not self.qualified_name:
            raise ValueError("qualified_name must be a non-empty string")


@dataclass(frozen=True)
class ResolvedTest:
    """A descriptor with its compiled symbol and content-addressed fallback id."""

    __test__ = False

    descriptor: TestDescriptor
    symbol: str
    fallback_id: str

    @property
    def title(self) -> str:
        return self.descriptor.title

    @property
    def qualified_name(self) -> str:
        return self.descriptor.qualified_name


@dataclass(frozen=True)
class RegisteredCase:
    """A bound, invokable test.

    ``name`` is the attribute the test function was bound under: the name
    handed out by the live session, or ``fallback_id`` in headless mode.
    """

    title: str
    name: str
    symbol: str
    fallback_id: str
    live: bool


class Outcome(Enum):
    """Classification of a single native invocation."""

    SUCCESS = "success"
    NATIVE_FAULT = "native_fault"
    OTHER_ERROR = "other_error"


@dataclass(frozen=True)
class InvocationResult:
    """Tagged result of invoking one compiled symbol."""

    symbol: str
    outcome: Outcome
    error: BaseException | None = None

    def __post_init__(self) -> None:
        if (self.error is None) != (self.outcome is Outcome.SUCCESS):
            raise ValueError("error must be set exactly when the outcome is not SUCCESS")

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS


@dataclass
class BuildContext:
    """State threaded through one discovery and registration pass.

    Intentionally mutable: each stage fills in its own fields. Discarded
    once registration completes.
    """

    manifest: ModuleManifest
    source: CollectedSource | None = None
    descriptors: list[TestDescriptor] = field(default_factory=list)
    resolved: list[ResolvedTest] = field(default_factory=list)
    rewritten: dict[str, str] = field(default_factory=dict)
    symbols: dict[str, Callable[[], Any]] = field(default_factory=dict)
    cases: list[RegisteredCase] = field(default_factory=list)
    registered: bool = False

    @property
    def metadata(self) -> ModuleMetadata:
        return self.manifest.metadata
