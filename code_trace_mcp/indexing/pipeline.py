"""The build pass: list, scan, resolve, merge.

Single-threaded and synchronous. Scanner results are collected into lists
and merged by one builder after every scan has finished.
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path

from ..constants import LinkOrigin
from ..core.files import list_files, relative_posix
from ..schemas.config import TraceConfig
from .builder import build_index
from .conventions import scan_artifact_files
from .docs_tags import DocsMap, scan_docs_files
from .explicit import scan_source_files
from .models import TraceabilityIndex
from .resolver import SourceFileIndex, resolve_candidates


@dataclass
class BuildResult:
    index: TraceabilityIndex
    docs_map: DocsMap
    stats: dict[str, int] = field(default_factory=dict)


def build_traceability(project_path: Path, config: TraceConfig | None = None) -> BuildResult:
    """Run a full build over ``project_path``.

    Raises:
        FileNotFoundError, NotADirectoryError: If the project root can't be read
    """
    config = config or TraceConfig()
    excludes = config.exclude_patterns

    source_files = list_files(project_path, config.sources, excludes)
    test_files = list_files(project_path, config.tests, excludes)
    print(
        f"Found {len(source_files)} source files and {len(test_files)} test files",
        file=sys.stderr
    )

    explicit = scan_source_files(source_files, project_path, config.lookahead)
    convention = scan_artifact_files(
        test_files, project_path, config.test_suffixes, config.test_markers
    )

    file_index = SourceFileIndex(relative_posix(f, project_path) for f in source_files)
    resolved = resolve_candidates(convention, file_index)

    index = build_index(
        explicit,
        resolved,
        source_file_count=len(source_files),
        artifact_file_count=len(test_files),
    )
    docs_map = scan_docs_files(source_files, project_path, config.lookahead)

    origin_counts = {origin: 0 for origin in LinkOrigin}
    for edge in index.iter_edges():
        origin_counts[edge.origin] += 1

    stats = {
        "explicit_candidates": len(explicit),
        "convention_candidates": len(convention),
        "convention_resolved": len(resolved),
        "explicit_links": origin_counts[LinkOrigin.EXPLICIT],
        "convention_links": origin_counts[LinkOrigin.CONVENTION],
        "symbols": index.metadata.symbol_count,
        "artifacts": index.metadata.artifact_count,
        "doc_links": len(docs_map),
    }
    print(
        f"Indexed {stats['symbols']} symbols and {stats['artifacts']} test methods "
        f"({stats['explicit_candidates']} <tests> tags, {stats['convention_candidates']} convention matches)",
        file=sys.stderr
    )
    return BuildResult(index=index, docs_map=docs_map, stats=stats)
