"""Pydantic models for code traceability MCP server tool inputs."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _validate_project_path(v: str) -> str:
    """Shared validator for project_path fields.

    Reused across all input models so every tool applies the same path
    rules and none can be pointed outside an explicit absolute root.

    Args:
        v: Project path string

    Returns:
        Validated absolute path string

    Raises:
        ValueError: If path contains traversal sequences, doesn't exist, or isn't a directory
    """
    if not v:
        raise ValueError("Project path cannot be empty")

    if '..' in v:
        raise ValueError(
            "Invalid project path: contains path traversal sequence '..'. "
            "Use absolute paths only to prevent directory traversal attacks."
        )

    path = Path(v)
    if not path.is_absolute():
        raise ValueError(
            "Invalid project path: must be absolute path (e.g., '/home/user/project'). "
            f"Got relative path: '{v}'"
        )

    if not path.exists():
        raise ValueError(f"Project path does not exist: {v}")

    if not path.is_dir():
        raise ValueError(f"Project path is not a directory: {v}")

    return str(path.resolve())


class _ProjectInput(BaseModel):
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra='forbid'
    )

    project_path: str = Field(
        ...,
        description="Absolute path to project root directory (e.g., '/home/user/my-library')",
        min_length=1
    )

    @field_validator('project_path')
    @classmethod
    def validate_project_path(cls, v: str) -> str:
        return _validate_project_path(v)


class BuildIndexInput(_ProjectInput):
    """Input for rebuilding the traceability snapshots."""


class GetTestsForCodeInput(_ProjectInput):
    """Input for looking up the tests linked to a code symbol."""

    symbol: str = Field(
        ...,
        description="Code symbol name as declared (e.g., 'Dispatcher', 'PublishAsync')",
        min_length=1,
        max_length=200
    )


class GetCodeForTestInput(_ProjectInput):
    """Input for looking up the code exercised by a test method."""

    test_key: str = Field(
        ...,
        description="Test key in 'TestClassName.TestMethodName' form (e.g., 'DispatcherTests.Publish_Works')",
        min_length=1,
        max_length=400
    )


class CoverageStatsInput(_ProjectInput):
    """Input for traceability coverage statistics."""


class ValidateTestLinksInput(_ProjectInput):
    """Input for validating code-to-test links."""

    check_files: bool = Field(
        default=False,
        description=(
            "Check each linked test file against the files matched by the 'tests' patterns. "
            "When false, links are reported as warnings (existence not verified)"
        )
    )


class ValidateDocLinksInput(_ProjectInput):
    """Input for validating code-to-documentation links."""

    doc_pages: str | None = Field(
        default=None,
        description=(
            "Path to the search corpus JSON (list of {slug, title, category}), relative to "
            "the project root. Defaults to 'doc_pages' from .code-trace.yml"
        )
    )

    @field_validator('doc_pages')
    @classmethod
    def validate_doc_pages(cls, v: str | None) -> str | None:
        if v is None:
            return v
        if '..' in v:
            raise ValueError("Invalid doc_pages: contains path traversal sequence '..'")
        if Path(v).is_absolute():
            raise ValueError(f"Invalid doc_pages: must be relative to project root. Got: '{v}'")
        return v


class RelatedDocsInput(ValidateDocLinksInput):
    """Input for finding the documentation page of a code symbol."""

    symbol: str = Field(
        ...,
        description="Code symbol name (e.g., 'Dispatcher')",
        min_length=1,
        max_length=200
    )


class CodeLocationInput(_ProjectInput):
    """Input for finding code from a documentation URL or concept."""

    concept: str = Field(
        ...,
        description="Documentation URL or concept (e.g., '/v1.2/core-concepts/dispatcher.md', 'dispatcher')",
        min_length=1,
        max_length=500
    )
