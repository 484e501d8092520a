"""Merge resolved candidates into the bidirectional traceability index."""

from collections.abc import Iterable
from datetime import datetime
from types import MappingProxyType

from ..constants import LinkOrigin, SymbolKind
from .models import (
    ArtifactRef,
    IndexMetadata,
    LinkEdge,
    RawCandidate,
    SourceRef,
    TraceabilityIndex,
)


class TraceabilityIndexBuilder:
    """Accumulates edges for one build pass, then freezes them.

    Dedup rules:
    - forward[symbol]: one edge per (artifact file, artifact member)
    - reverse[key]: one edge per source file, except that Explicit edges
      for different symbols in the same file are all kept

    Each list is checked independently. Since Explicit candidates are added
    first, a Convention rediscovery of an explicitly linked file is dropped
    from reverse[key], and Explicit edges always sort first.
    """

    def __init__(self):
        self._forward: dict[str, list[LinkEdge]] = {}
        self._reverse: dict[str, list[LinkEdge]] = {}
        self._built = False

    def add_explicit(self, candidate: RawCandidate) -> LinkEdge | None:
        """Add an Explicit candidate; returns the edge, or None if it was a duplicate."""
        source = SourceRef(
            file=candidate.source_file,
            symbol=candidate.source_symbol or "",
            kind=candidate.source_type or SymbolKind.CLASS,
            line=candidate.source_line,
        )
        return self._add(source, candidate, LinkOrigin.EXPLICIT)

    def add_convention(self, candidate: RawCandidate, source: SourceRef) -> LinkEdge | None:
        """Add a Convention candidate paired with its resolved source."""
        return self._add(source, candidate, LinkOrigin.CONVENTION)

    def _add(self, source: SourceRef, candidate: RawCandidate, origin: LinkOrigin) -> LinkEdge | None:
        if self._built:
            raise RuntimeError("Index already built; create a new builder for a rebuild")
        if not source.symbol:
            return None

        edge = LinkEdge(
            source=source,
            artifact=ArtifactRef(
                file=candidate.artifact_file,
                member=candidate.artifact_member,
                container=candidate.artifact_container,
                line=candidate.artifact_line,
            ),
            origin=origin,
        )

        forward = self._forward.setdefault(source.symbol, [])
        forward_dup = any(
            e.artifact.file == edge.artifact.file and e.artifact.member == edge.artifact.member
            for e in forward
        )

        reverse = self._reverse.setdefault(edge.artifact.key, [])
        if origin is LinkOrigin.EXPLICIT:
            reverse_dup = any(
                e.source.file == source.file and e.source.symbol == source.symbol
                for e in reverse
            )
        else:
            reverse_dup = any(e.source.file == source.file for e in reverse)

        if not forward_dup:
            forward.append(edge)
        if not reverse_dup:
            reverse.append(edge)

        return None if (forward_dup and reverse_dup) else edge

    def build(
        self,
        source_file_count: int,
        artifact_file_count: int,
        generated_at: str | None = None
    ) -> TraceabilityIndex:
        """Freeze the accumulated edges into an immutable index."""
        self._built = True
        forward = {symbol: tuple(edges) for symbol, edges in self._forward.items()}
        reverse = {key: tuple(edges) for key, edges in self._reverse.items()}
        metadata = IndexMetadata(
            generated_at=generated_at or datetime.now().isoformat(),
            source_file_count=source_file_count,
            artifact_file_count=artifact_file_count,
            symbol_count=len(forward),
            artifact_count=len(reverse),
            total_links=sum(len(edges) for edges in forward.values()),
        )
        return TraceabilityIndex(
            forward=MappingProxyType(forward),
            reverse=MappingProxyType(reverse),
            metadata=metadata,
        )


def build_index(
    explicit: Iterable[RawCandidate],
    convention: Iterable[tuple[RawCandidate, SourceRef]],
    source_file_count: int = 0,
    artifact_file_count: int = 0,
    generated_at: str | None = None
) -> TraceabilityIndex:
    """Build an index from Explicit candidates and resolved Convention pairs.

    All Explicit candidates are merged before any Convention candidate.
    """
    builder = TraceabilityIndexBuilder()
    for candidate in explicit:
        builder.add_explicit(candidate)
    for candidate, source in convention:
        builder.add_convention(candidate, source)
    return builder.build(source_file_count, artifact_file_count, generated_at)
