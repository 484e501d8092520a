"""Data model for the traceability index.

Candidates and refs are transient values produced during one build pass.
``TraceabilityIndex`` is the only long-lived object: it is built once,
never mutated, and replaced wholesale on rebuild.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import PurePosixPath

from ..constants import LinkOrigin, SymbolKind


def artifact_key(file: str, member: str, container: str | None = None) -> str:
    """Composite reverse-index key: ``container.member``.

    Falls back to the artifact filename without extension when the
    container is unknown (explicit markers only name the file).
    """
    owner = container or PurePosixPath(file.replace('\\', '/')).stem
    return f"{owner}.{member}"


@dataclass(frozen=True)
class RawCandidate:
    """A link candidate emitted by one of the scanners."""

    origin: LinkOrigin
    source_file: str
    artifact_file: str
    artifact_member: str
    source_symbol: str | None = None
    source_type: SymbolKind | None = None
    source_line: int | None = None
    artifact_container: str | None = None
    artifact_line: int | None = None

    @property
    def artifact_key(self) -> str:
        return artifact_key(self.artifact_file, self.artifact_member, self.artifact_container)


@dataclass(frozen=True)
class SourceRef:
    """A code symbol on the source side of an edge."""

    file: str
    symbol: str
    kind: SymbolKind
    line: int | None = None


@dataclass(frozen=True)
class ArtifactRef:
    """A test method (or other artifact member) on the artifact side of an edge."""

    file: str
    member: str
    container: str | None = None
    line: int | None = None

    @property
    def key(self) -> str:
        return artifact_key(self.file, self.member, self.container)


@dataclass(frozen=True)
class LinkEdge:
    source: SourceRef
    artifact: ArtifactRef
    origin: LinkOrigin


@dataclass(frozen=True)
class IndexMetadata:
    generated_at: str
    source_file_count: int
    artifact_file_count: int
    symbol_count: int = 0
    artifact_count: int = 0
    total_links: int = 0


@dataclass(frozen=True)
class TraceabilityIndex:
    """Bidirectional symbol <-> artifact index.

    ``forward`` maps symbol names to edges, ``reverse`` maps artifact keys
    to edges. Both are read-only mappings of tuples in first-discovered
    order.
    """

    forward: Mapping[str, tuple[LinkEdge, ...]]
    reverse: Mapping[str, tuple[LinkEdge, ...]]
    metadata: IndexMetadata

    def iter_edges(self):
        """Yield every edge once, in forward-index order."""
        for edges in self.forward.values():
            yield from edges
