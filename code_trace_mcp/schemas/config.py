"""Pydantic schema for the .code-trace.yml configuration file.

This file is user-created and user-edited. Every field has a default, so an
empty or missing file yields a working configuration for a conventional
``src/`` + ``tests/`` C# layout.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from ..constants import (
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SOURCE_PATTERNS,
    DEFAULT_TEST_MARKERS,
    DEFAULT_TEST_PATTERNS,
    DEFAULT_TEST_SUFFIXES,
    LOOKAHEAD_WINDOW,
)


class TraceConfig(BaseModel):
    """Schema for .code-trace.yml."""

    model_config = ConfigDict(extra="allow")

    sources: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SOURCE_PATTERNS),
        description="Glob patterns for source files scanned for <tests>/<docs> markers"
    )
    tests: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TEST_PATTERNS),
        description="Glob patterns for test files scanned for naming conventions"
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Additional glob patterns to exclude (merged with defaults)"
    )
    output_dir: str = Field(
        default=DEFAULT_OUTPUT_DIR,
        description="Directory (relative to project root) receiving the snapshots"
    )
    test_suffixes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TEST_SUFFIXES),
        description="Suffixes identifying a test container, stripped to infer the subject"
    )
    test_markers: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TEST_MARKERS),
        description="Attribute names marking a test method (e.g. Test, Fact)"
    )
    lookahead: int = Field(
        default=LOOKAHEAD_WINDOW,
        ge=1,
        le=50,
        description="Lines searched after a marker for the declared symbol"
    )
    doc_pages: str | None = Field(
        default=None,
        description="Path to the pre-built search corpus (JSON list of {slug, title, category})"
    )

    @field_validator("sources", "tests", "test_suffixes", "test_markers", mode="before")
    @classmethod
    def default_empty_lists(cls, v: Any, info: ValidationInfo) -> list[str]:
        """Treat a blank YAML key as "use the default"."""
        if v is None:
            return list(cls.model_fields[info.field_name].default_factory())
        return v

    @field_validator("exclude", mode="before")
    @classmethod
    def normalize_exclude(cls, v: Any) -> list[str]:
        if v is None:
            return []
        return v

    @property
    def exclude_patterns(self) -> list[str]:
        """User excludes merged with the built-in defaults."""
        return list(DEFAULT_EXCLUDE_PATTERNS) + [p for p in self.exclude if p not in DEFAULT_EXCLUDE_PATTERNS]


def validate_config(data: dict[str, Any] | None) -> TraceConfig:
    """Validate .code-trace.yml data.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return TraceConfig.model_validate(data or {})
