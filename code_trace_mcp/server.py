#!/usr/bin/env python3
"""
Code Traceability MCP Server

An MCP server answering traceability questions about a C# code base:
- Which tests cover a symbol, and which symbols does a test exercise
- Coverage statistics by link origin (explicit marker vs naming convention)
- Where a symbol is documented, and which code a documentation page describes
- Whether declared test and documentation links still resolve
"""

from typing import Any

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import ToolAnnotations

from .models import (
    BuildIndexInput,
    CodeLocationInput,
    CoverageStatsInput,
    GetCodeForTestInput,
    GetTestsForCodeInput,
    RelatedDocsInput,
    ValidateDocLinksInput,
    ValidateTestLinksInput,
)
from .tools.build import build_index
from .tools.docs import code_location, related_docs
from .tools.queries import get_code_for_test, get_coverage_stats, get_tests_for_code
from .tools.validation import validate_doc_links_tool, validate_test_links_tool

# Initialize the MCP server
mcp = FastMCP("code_trace_mcp")

# ============================================================================
# Register Tools
# ============================================================================

# ----------------------------------------------------------------------------
# Index maintenance
# ----------------------------------------------------------------------------

@mcp.tool(
    name="trace_build_index",
    annotations=ToolAnnotations(
        title="Build Traceability Index",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False
    )
)
async def trace_build_index(
    project_path: str,
    ctx: Context | None = None
) -> dict[str, Any]:
    """Scan the project and rebuild the code-to-test and code-to-docs snapshots.

    Reads <tests>File.cs:Method</tests> and <docs>url</docs> markers from source
    files, infers convention links from test class names (FooTests -> Foo.cs), and
    writes code-tests-map.json and code-docs-map.json under the output directory.
    """
    params = BuildIndexInput(project_path=project_path)
    return await build_index(params, ctx)

# ----------------------------------------------------------------------------
# Read-only queries
# ----------------------------------------------------------------------------

@mcp.tool(
    name="trace_get_tests_for_code",
    annotations=ToolAnnotations(
        title="Get Tests for Code Symbol",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False
    )
)
async def trace_get_tests_for_code(
    project_path: str,
    symbol: str
) -> dict[str, Any]:
    """Find the test methods linked to a code symbol (class, method or property name)."""
    params = GetTestsForCodeInput(project_path=project_path, symbol=symbol)
    return await get_tests_for_code(params)


@mcp.tool(
    name="trace_get_code_for_test",
    annotations=ToolAnnotations(
        title="Get Code for Test",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False
    )
)
async def trace_get_code_for_test(
    project_path: str,
    test_key: str
) -> dict[str, Any]:
    """Find the code symbols exercised by a test, keyed as "TestClassName.TestMethodName"."""
    params = GetCodeForTestInput(project_path=project_path, test_key=test_key)
    return await get_code_for_test(params)


@mcp.tool(
    name="trace_get_coverage_stats",
    annotations=ToolAnnotations(
        title="Get Traceability Coverage Statistics",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False
    )
)
async def trace_get_coverage_stats(project_path: str) -> dict[str, Any]:
    """Symbol and test counts, average tests per symbol, and links by origin."""
    params = CoverageStatsInput(project_path=project_path)
    return await get_coverage_stats(params)

# ----------------------------------------------------------------------------
# Validation
# ----------------------------------------------------------------------------

@mcp.tool(
    name="trace_validate_test_links",
    annotations=ToolAnnotations(
        title="Validate Code-Test Links",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False
    )
)
async def trace_validate_test_links(
    project_path: str,
    check_files: bool = False
) -> dict[str, Any]:
    """Validate every code-to-test link.

    With check_files=false links are reported as warnings, since test existence
    is not checked. With check_files=true each linked test file is looked up
    among the files matched by the configured test patterns.
    """
    params = ValidateTestLinksInput(project_path=project_path, check_files=check_files)
    return await validate_test_links_tool(params)


@mcp.tool(
    name="trace_validate_doc_links",
    annotations=ToolAnnotations(
        title="Validate Code-Docs Links",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False
    )
)
async def trace_validate_doc_links(
    project_path: str,
    doc_pages: str | None = None
) -> dict[str, Any]:
    """Check every <docs> link against the pages of the documentation search corpus."""
    params = ValidateDocLinksInput(project_path=project_path, doc_pages=doc_pages)
    return await validate_doc_links_tool(params)

# ----------------------------------------------------------------------------
# Documentation lookups
# ----------------------------------------------------------------------------

@mcp.tool(
    name="trace_related_docs",
    annotations=ToolAnnotations(
        title="Find Documentation for Code Symbol",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False
    )
)
async def trace_related_docs(
    project_path: str,
    symbol: str,
    doc_pages: str | None = None
) -> dict[str, Any]:
    """Documentation URL for a code symbol, plus page title and category from the corpus."""
    params = RelatedDocsInput(project_path=project_path, symbol=symbol, doc_pages=doc_pages)
    return await related_docs(params)


@mcp.tool(
    name="trace_code_location",
    annotations=ToolAnnotations(
        title="Find Code for Documentation",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False
    )
)
async def trace_code_location(
    project_path: str,
    concept: str
) -> dict[str, Any]:
    """Source location documented by a URL or concept (e.g. "core-concepts/dispatcher")."""
    params = CodeLocationInput(project_path=project_path, concept=concept)
    return await code_location(params)

def main():
    """Entry point for the MCP server."""
    mcp.run()

if __name__ == "__main__":
    main()
