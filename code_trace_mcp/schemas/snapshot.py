"""Pydantic schema for the serialized traceability snapshots.

The snapshot is machine-generated by the build pass and loaded read-only at
server startup. Validation here guards against hand edits and stale formats.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..constants import LinkOrigin


class EdgeRecord(BaseModel):
    """One link edge as stored in either direction of the snapshot."""

    model_config = ConfigDict(extra="ignore")

    artifact_file: str
    artifact_member: str
    artifact_line: int | None = None
    container_name: str | None = None
    source_file: str
    source_line: int | None = None
    source_symbol: str
    source_type: str | None = None
    origin: LinkOrigin


class SnapshotMetadata(BaseModel):
    model_config = ConfigDict(extra="ignore")

    generated_at: str
    source_file_count: int = Field(default=0, ge=0)
    artifact_file_count: int = Field(default=0, ge=0)
    symbol_count: int = Field(default=0, ge=0)
    artifact_count: int = Field(default=0, ge=0)
    total_links: int = Field(default=0, ge=0)


class TraceabilitySnapshot(BaseModel):
    """Schema for code-tests-map.json."""

    forward: dict[str, list[EdgeRecord]] = Field(default_factory=dict)
    reverse: dict[str, list[EdgeRecord]] = Field(default_factory=dict)
    metadata: SnapshotMetadata


class DocLinkRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    file: str
    line: int
    symbol: str
    docs: str


def validate_snapshot(data: dict[str, Any]) -> TraceabilitySnapshot:
    """Validate snapshot data.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return TraceabilitySnapshot.model_validate(data)


def validate_docs_map(data: dict[str, Any]) -> dict[str, DocLinkRecord]:
    """Validate code-docs-map.json data (symbol -> link).

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return {symbol: DocLinkRecord.model_validate(record) for symbol, record in data.items()}
