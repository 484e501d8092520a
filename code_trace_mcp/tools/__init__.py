"""Tool implementations exposed by the MCP server."""

from .build import build_index
from .docs import code_location, find_code_by_docs, find_docs_by_symbol, related_docs
from .queries import (
    CoverageStats,
    coverage_stats,
    find_untested_symbols,
    get_code_for_test,
    get_coverage_stats,
    get_tests_for_code,
    lookup_artifacts_for_symbol,
    lookup_symbols_for_artifact,
)
from .validation import (
    build_valid_doc_targets,
    normalize_doc_target,
    validate_doc_links,
    validate_doc_links_tool,
    validate_test_links,
    validate_test_links_tool,
)

__all__ = [
    "CoverageStats",
    "build_index",
    "build_valid_doc_targets",
    "code_location",
    "coverage_stats",
    "find_code_by_docs",
    "find_docs_by_symbol",
    "find_untested_symbols",
    "get_code_for_test",
    "get_coverage_stats",
    "get_tests_for_code",
    "lookup_artifacts_for_symbol",
    "lookup_symbols_for_artifact",
    "normalize_doc_target",
    "related_docs",
    "validate_doc_links",
    "validate_doc_links_tool",
    "validate_test_links",
    "validate_test_links_tool",
]
