"""Pydantic schemas for files read from disk."""

from .config import TraceConfig, validate_config
from .snapshot import TraceabilitySnapshot, validate_docs_map, validate_snapshot

__all__ = [
    "TraceConfig",
    "TraceabilitySnapshot",
    "validate_config",
    "validate_docs_map",
    "validate_snapshot",
]
