"""Lookups and coverage statistics over the traceability index."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..constants import LinkOrigin
from ..core.errors import handle_error
from ..core.responses import enforce_response_limit
from ..indexing.models import LinkEdge, TraceabilityIndex
from ..models import CoverageStatsInput, GetCodeForTestInput, GetTestsForCodeInput
from ._internal.project import current_index


@dataclass(frozen=True)
class CoverageStats:
    total_symbols: int
    total_artifacts: int
    total_links: int
    avg_artifacts_per_symbol: float
    origin_breakdown: dict[str, int] = field(default_factory=dict)


def lookup_artifacts_for_symbol(index: TraceabilityIndex, symbol: str) -> tuple[LinkEdge, ...]:
    return index.forward.get(symbol, ())


def lookup_symbols_for_artifact(index: TraceabilityIndex, key: str) -> tuple[LinkEdge, ...]:
    return index.reverse.get(key, ())


def coverage_stats(index: TraceabilityIndex) -> CoverageStats:
    """Summarize the index.

    The average is edges per forward key and is 0.0 for an empty index.
    Both origins always appear in the breakdown.
    """
    breakdown = {origin.value: 0 for origin in LinkOrigin}
    for edge in index.iter_edges():
        breakdown[edge.origin.value] += 1

    total_symbols = len(index.forward)
    total_links = sum(breakdown.values())
    avg = total_links / total_symbols if total_symbols else 0.0
    return CoverageStats(
        total_symbols=total_symbols,
        total_artifacts=len(index.reverse),
        total_links=total_links,
        avg_artifacts_per_symbol=avg,
        origin_breakdown=breakdown,
    )


def find_untested_symbols(index: TraceabilityIndex, all_symbols: Iterable[str]) -> list[str]:
    """Symbols with no linked tests, in the order given."""
    return [s for s in all_symbols if s not in index.forward]


def _test_record(edge: LinkEdge) -> dict[str, Any]:
    record = {
        "test_file": edge.artifact.file,
        "test_method": edge.artifact.member,
        "test_line": edge.artifact.line,
        "test_class": edge.artifact.container,
        "link_source": edge.origin.value,
    }
    return {k: v for k, v in record.items() if v is not None}


def _code_record(edge: LinkEdge) -> dict[str, Any]:
    record = {
        "source_file": edge.source.file,
        "source_line": edge.source.line,
        "source_symbol": edge.source.symbol,
        "source_type": edge.source.kind.value,
        "link_source": edge.origin.value,
    }
    return {k: v for k, v in record.items() if v is not None}


async def get_tests_for_code(params: GetTestsForCodeInput, ctx=None) -> dict[str, Any]:
    """Find the tests linked to a code symbol.

    Returns:
        {"found": False} when the symbol has no links, otherwise the symbol,
        its tests and a count
    """
    try:
        index = current_index(Path(params.project_path))
        edges = lookup_artifacts_for_symbol(index, params.symbol)
        if not edges:
            return {"found": False}
        return enforce_response_limit({
            "found": True,
            "symbol": params.symbol,
            "tests": [_test_record(e) for e in edges],
            "test_count": len(edges),
        })
    except Exception as e:
        return {"status": "error", "message": handle_error(e, "get_tests_for_code")}


async def get_code_for_test(params: GetCodeForTestInput, ctx=None) -> dict[str, Any]:
    """Find the code exercised by a test method ("TestClass.TestMethod")."""
    try:
        index = current_index(Path(params.project_path))
        edges = lookup_symbols_for_artifact(index, params.test_key)
        if not edges:
            return {"found": False}
        return enforce_response_limit({
            "found": True,
            "test_key": params.test_key,
            "code": [_code_record(e) for e in edges],
            "code_count": len(edges),
        })
    except Exception as e:
        return {"status": "error", "message": handle_error(e, "get_code_for_test")}


async def get_coverage_stats(params: CoverageStatsInput, ctx=None) -> dict[str, Any]:
    try:
        index = current_index(Path(params.project_path))
        stats = coverage_stats(index)
        meta = index.metadata
        return {
            "total_symbols": stats.total_symbols,
            "total_artifacts": stats.total_artifacts,
            "total_links": stats.total_links,
            "avg_artifacts_per_symbol": stats.avg_artifacts_per_symbol,
            "origin_breakdown": stats.origin_breakdown,
            "metadata": {
                "generated_at": meta.generated_at,
                "source_files": meta.source_file_count,
                "test_files": meta.artifact_file_count,
            },
        }
    except Exception as e:
        return {"status": "error", "message": handle_error(e, "get_coverage_stats")}
