"""Link validation against caller-supplied sets of valid targets.

Validation never raises on a bad link. Each link becomes a detail entry
with status "valid", "broken", or (when no target set was supplied)
"warning".
"""

import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ..constants import LinkStatus
from ..core.errors import handle_error
from ..core.files import list_files, relative_posix
from ..core.responses import enforce_response_limit
from ..indexing.docs_tags import DocsMap
from ..indexing.models import LinkEdge, TraceabilityIndex
from ..models import ValidateDocLinksInput, ValidateTestLinksInput
from ._internal.corpus import load_doc_pages
from ._internal.project import current_docs_map, current_index, project_layout

_VERSION_PREFIX = re.compile(r'^v[\d.]+/')
_WHITESPACE = re.compile(r'\s+')


def normalize_doc_target(url: str) -> str:
    """Strip a leading '/', a 'vX.Y/' version prefix and a trailing '.md'."""
    normalized = url.lstrip('/')
    normalized = _VERSION_PREFIX.sub('', normalized)
    return normalized.removesuffix('.md')


def _rate(valid: int, total: int) -> str:
    if total == 0:
        return "0.0%"
    return f"{valid / total * 100:.1f}%"


def _edge_is_known(edge: LinkEdge, known: set[str]) -> bool:
    target = edge.artifact.file
    if target in known or edge.artifact.key in known:
        return True
    suffix = "/" + target
    return any(path.endswith(suffix) for path in known)


def validate_test_links(
    index: TraceabilityIndex,
    known_valid_targets: Iterable[str] | None = None
) -> dict[str, Any]:
    """Classify every forward edge.

    Args:
        index: Index to validate
        known_valid_targets: Test file paths or "Class.Method" keys known to
            exist. When None, existence is not checked and every link is
            reported as a warning.

    Returns:
        Counts, validation rate and one detail entry per edge
    """
    known = set(known_valid_targets) if known_valid_targets is not None else None
    counts = {status: 0 for status in LinkStatus}
    details = []

    for symbol, edges in index.forward.items():
        for edge in edges:
            detail = {
                "symbol": symbol,
                "test_file": edge.artifact.file,
                "test_method": edge.artifact.member,
                "link_source": edge.origin.value,
            }
            if known is None:
                status = LinkStatus.WARNING
                detail["message"] = "existence not verified"
            elif _edge_is_known(edge, known):
                status = LinkStatus.VALID
            else:
                status = LinkStatus.BROKEN
                detail["message"] = f"test file not found: {edge.artifact.file}"
            detail["status"] = status.value
            counts[status] += 1
            details.append(detail)

    total = len(details)
    return {
        "valid_count": counts[LinkStatus.VALID],
        "broken_count": counts[LinkStatus.BROKEN],
        "warning_count": counts[LinkStatus.WARNING],
        "total_links": total,
        "validation_rate": _rate(counts[LinkStatus.VALID], total),
        "details": details,
    }


def build_valid_doc_targets(pages: Iterable[dict[str, Any]]) -> set[str]:
    """Every URL form under which a corpus page may be referenced."""
    targets = set()
    for page in pages:
        slug = str(page.get("slug") or "")
        if not slug:
            continue
        targets.add(slug)
        targets.add(slug.removesuffix('.md'))
        category = str(page.get("category") or "")
        if category:
            url_path = f"{_WHITESPACE.sub('-', category.lower())}/{slug}"
            targets.add(url_path)
            targets.add(url_path.removesuffix('.md'))
    return targets


def validate_doc_links(docs_map: DocsMap, known_valid_targets: Iterable[str]) -> dict[str, Any]:
    known = {normalize_doc_target(t) for t in known_valid_targets}
    details = []
    valid = 0
    for symbol, link in docs_map.items():
        is_valid = normalize_doc_target(link.docs) in known
        valid += is_valid
        status = LinkStatus.VALID if is_valid else LinkStatus.BROKEN
        details.append({"symbol": symbol, "docs": link.docs, "status": status.value})

    total = len(details)
    return {
        "valid_count": valid,
        "broken_count": total - valid,
        "total_links": total,
        "validation_rate": _rate(valid, total),
        "details": details,
    }


async def validate_test_links_tool(params: ValidateTestLinksInput, ctx=None) -> dict[str, Any]:
    """Validate code-to-test links, optionally against the test files on disk."""
    try:
        project_path = Path(params.project_path)
        config = project_layout(project_path).config
        index = current_index(project_path)

        known = None
        if params.check_files:
            test_files = list_files(project_path, config.tests, config.exclude_patterns)
            known = {relative_posix(f, project_path) for f in test_files}

        return enforce_response_limit(validate_test_links(index, known))
    except Exception as e:
        return {"status": "error", "message": handle_error(e, "validate_test_links")}


async def validate_doc_links_tool(params: ValidateDocLinksInput, ctx=None) -> dict[str, Any]:
    """Validate code-to-documentation links against the search corpus."""
    try:
        project_path = Path(params.project_path)
        config = project_layout(project_path).config
        pages_path = params.doc_pages or config.doc_pages
        if not pages_path:
            return {
                "status": "error",
                "message": "No documentation corpus configured. Set 'doc_pages' in .code-trace.yml or pass doc_pages."
            }

        pages = load_doc_pages(project_path / pages_path)
        docs_map = current_docs_map(project_path)
        return enforce_response_limit(validate_doc_links(docs_map, build_valid_doc_targets(pages)))
    except Exception as e:
        return {"status": "error", "message": handle_error(e, "validate_doc_links")}
