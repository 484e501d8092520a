"""Code <-> documentation lookups backed by the ``<docs>`` marker map."""

from pathlib import Path
from typing import Any

from ..core.errors import handle_error
from ..indexing.docs_tags import DocLink, DocsMap
from ..models import CodeLocationInput, RelatedDocsInput
from ._internal.corpus import load_doc_pages
from ._internal.project import current_docs_map, project_layout
from .validation import build_valid_doc_targets, normalize_doc_target


def find_docs_by_symbol(docs_map: DocsMap, symbol: str) -> DocLink | None:
    return docs_map.get(symbol)


def find_code_by_docs(docs_map: DocsMap, concept: str) -> DocLink | None:
    """First link whose docs URL equals or contains the normalized concept."""
    normalized = normalize_doc_target(concept)
    if not normalized:
        return None
    for link in docs_map.values():
        if link.docs == normalized or normalized in link.docs:
            return link
    return None


def find_page(pages: list[dict[str, Any]], url: str) -> dict[str, Any] | None:
    """Corpus page that ``url`` refers to, by any of its URL forms."""
    target = normalize_doc_target(url)
    for page in pages:
        forms = {normalize_doc_target(t) for t in build_valid_doc_targets([page])}
        if target in forms:
            return page
    return None


async def related_docs(params: RelatedDocsInput, ctx=None) -> dict[str, Any]:
    """Documentation page for a code symbol, with title and category when the corpus knows it."""
    try:
        project_path = Path(params.project_path)
        config = project_layout(project_path).config
        link = find_docs_by_symbol(current_docs_map(project_path), params.symbol)
        if link is None:
            return {"found": False}

        result: dict[str, Any] = {
            "found": True,
            "url": link.docs,
            "file": link.file,
            "line": link.line,
        }
        pages_path = params.doc_pages or config.doc_pages
        if pages_path:
            page = find_page(load_doc_pages(project_path / pages_path), link.docs)
            if page is not None:
                result["title"] = page.get("title")
                result["category"] = page.get("category")
        return result
    except Exception as e:
        return {"status": "error", "message": handle_error(e, "related_docs")}


async def code_location(params: CodeLocationInput, ctx=None) -> dict[str, Any]:
    """Code location documented by a URL or concept."""
    try:
        link = find_code_by_docs(current_docs_map(Path(params.project_path)), params.concept)
        if link is None:
            return {"found": False}
        return {
            "found": True,
            "file": link.file,
            "line": link.line,
            "symbol": link.symbol,
            "docs": link.docs,
        }
    except Exception as e:
        return {"status": "error", "message": handle_error(e, "code_location")}
