"""Static scanners and the traceability index they feed."""

from .builder import TraceabilityIndexBuilder, build_index
from .conventions import infer_subject, scan_artifact_content, scan_artifact_files
from .docs_tags import DocLink, DocsMap, load_docs_map, save_docs_map, scan_docs_content
from .explicit import parse_tests_marker, scan_source_content, scan_source_files
from .models import (
    ArtifactRef,
    IndexMetadata,
    LinkEdge,
    RawCandidate,
    SourceRef,
    TraceabilityIndex,
    artifact_key,
)
from .pipeline import BuildResult, build_traceability
from .resolver import SourceFileIndex, resolve_candidates
from .store import IndexHolder, get_holder, load_snapshot, publish, save_snapshot
from .symbols import (
    DECLARATION_MATCHERS,
    DeclarationMatcher,
    MethodDeclarationMatcher,
    PropertyDeclarationMatcher,
    SymbolMatch,
    TypeDeclarationMatcher,
    extract_symbol,
)

__all__ = [
    "DECLARATION_MATCHERS",
    "ArtifactRef",
    "BuildResult",
    "DeclarationMatcher",
    "DocLink",
    "DocsMap",
    "IndexHolder",
    "IndexMetadata",
    "LinkEdge",
    "MethodDeclarationMatcher",
    "PropertyDeclarationMatcher",
    "RawCandidate",
    "SourceFileIndex",
    "SourceRef",
    "SymbolMatch",
    "TraceabilityIndex",
    "TraceabilityIndexBuilder",
    "TypeDeclarationMatcher",
    "artifact_key",
    "build_index",
    "build_traceability",
    "extract_symbol",
    "get_holder",
    "infer_subject",
    "load_docs_map",
    "load_snapshot",
    "parse_tests_marker",
    "publish",
    "resolve_candidates",
    "save_docs_map",
    "save_snapshot",
    "scan_artifact_content",
    "scan_artifact_files",
    "scan_docs_content",
    "scan_source_content",
    "scan_source_files",
]
