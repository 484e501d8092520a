"""Rebuild tool: scan the project, persist both snapshots, swap them in."""

import asyncio
from pathlib import Path
from typing import Any

from ..core.config import load_config
from ..core.errors import handle_error
from ..indexing.docs_tags import save_docs_map
from ..indexing.pipeline import build_traceability
from ..indexing.store import publish, save_snapshot
from ..models import BuildIndexInput
from ._internal.project import remember_layout


async def build_index(params: BuildIndexInput, ctx=None) -> dict[str, Any]:
    """Rebuild code-tests-map.json and code-docs-map.json for a project.

    The build runs in a worker thread. Queries keep reading the previous
    snapshot until the new one has been written and published.

    Args:
        params: BuildIndexInput with project_path
        ctx: Optional context for progress reporting

    Returns:
        dict with status, output paths and build statistics
    """
    try:
        project_path = Path(params.project_path)
        config = load_config(project_path)
        layout = remember_layout(project_path, config)
        tests_path, docs_path = layout.tests_map, layout.docs_map

        if ctx:
            await ctx.info("Scanning source and test files...")

        result = await asyncio.to_thread(build_traceability, project_path, config)

        if ctx:
            await ctx.info("Writing snapshots...")

        save_snapshot(result.index, tests_path)
        save_docs_map(result.docs_map, docs_path)
        publish(tests_path, result.index)
        publish(docs_path, result.docs_map)

        meta = result.index.metadata
        return {
            "status": "success",
            "message": f"Indexed {meta.symbol_count} symbols linked to {meta.artifact_count} tests",
            "files": {
                "tests_map": tests_path.relative_to(project_path.resolve()).as_posix(),
                "docs_map": docs_path.relative_to(project_path.resolve()).as_posix(),
            },
            "metadata": {
                "generated_at": meta.generated_at,
                "source_files": meta.source_file_count,
                "test_files": meta.artifact_file_count,
                "total_links": meta.total_links,
            },
            "stats": result.stats,
        }
    except Exception as e:
        return {"status": "error", "message": handle_error(e, "build_index")}
