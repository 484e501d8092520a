"""Snapshot persistence and the swappable in-memory index holder.

Snapshots are written to a temp file and moved into place with
``os.replace``, so a reader never sees a half-written file. In memory, the
current index is a single reference: rebuilds construct a new index and
swap it in, and readers keep whatever snapshot they already hold.
"""

import json
import os
import tempfile
import threading
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from ..constants import LinkOrigin, SymbolKind
from ..core.errors import warn
from ..schemas.snapshot import EdgeRecord, validate_snapshot
from .models import ArtifactRef, IndexMetadata, LinkEdge, SourceRef, TraceabilityIndex

T = TypeVar("T")


def empty_index() -> TraceabilityIndex:
    return TraceabilityIndex(
        forward=MappingProxyType({}),
        reverse=MappingProxyType({}),
        metadata=IndexMetadata(
            generated_at=datetime.now().isoformat(),
            source_file_count=0,
            artifact_file_count=0,
        ),
    )


def edge_to_dict(edge: LinkEdge) -> dict[str, Any]:
    """Serialize an edge, leaving out optional fields that are unset."""
    record = {
        "artifact_file": edge.artifact.file,
        "artifact_member": edge.artifact.member,
        "artifact_line": edge.artifact.line,
        "container_name": edge.artifact.container,
        "source_file": edge.source.file,
        "source_line": edge.source.line,
        "source_symbol": edge.source.symbol,
        "source_type": edge.source.kind.value,
        "origin": edge.origin.value,
    }
    return {k: v for k, v in record.items() if v is not None}


def _edge_from_record(record: EdgeRecord) -> LinkEdge:
    try:
        kind = SymbolKind(record.source_type) if record.source_type else SymbolKind.CLASS
    except ValueError:
        kind = SymbolKind.CLASS
    return LinkEdge(
        source=SourceRef(
            file=record.source_file,
            symbol=record.source_symbol,
            kind=kind,
            line=record.source_line,
        ),
        artifact=ArtifactRef(
            file=record.artifact_file,
            member=record.artifact_member,
            container=record.container_name,
            line=record.artifact_line,
        ),
        origin=LinkOrigin(record.origin),
    )


def index_to_dict(index: TraceabilityIndex) -> dict[str, Any]:
    """Snapshot shape: {forward, reverse, metadata}."""
    meta = index.metadata
    return {
        "forward": {symbol: [edge_to_dict(e) for e in edges] for symbol, edges in index.forward.items()},
        "reverse": {key: [edge_to_dict(e) for e in edges] for key, edges in index.reverse.items()},
        "metadata": {
            "generated_at": meta.generated_at,
            "source_file_count": meta.source_file_count,
            "artifact_file_count": meta.artifact_file_count,
            "symbol_count": meta.symbol_count,
            "artifact_count": meta.artifact_count,
            "total_links": meta.total_links,
        },
    }


def index_from_dict(data: dict[str, Any]) -> TraceabilityIndex:
    """Rebuild an index from snapshot data.

    Raises:
        pydantic.ValidationError: If the data does not match the snapshot schema
    """
    snapshot = validate_snapshot(data)
    forward = {
        symbol: tuple(_edge_from_record(r) for r in records)
        for symbol, records in snapshot.forward.items()
    }
    reverse = {
        key: tuple(_edge_from_record(r) for r in records)
        for key, records in snapshot.reverse.items()
    }
    meta = snapshot.metadata
    return TraceabilityIndex(
        forward=MappingProxyType(forward),
        reverse=MappingProxyType(reverse),
        metadata=IndexMetadata(
            generated_at=meta.generated_at,
            source_file_count=meta.source_file_count,
            artifact_file_count=meta.artifact_file_count,
            symbol_count=meta.symbol_count or len(forward),
            artifact_count=meta.artifact_count or len(reverse),
            total_links=meta.total_links or sum(len(e) for e in forward.values()),
        ),
    )


def write_json_atomic(path: Path, data: Any) -> None:
    """Write JSON next to ``path`` and move it into place."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def read_json(path: Path) -> Any | None:
    """Read a JSON file; None (with a warning) if missing or unreadable."""
    if not path.exists():
        warn(f"Snapshot not found at {path}")
        return None
    try:
        with open(path, encoding='utf-8') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        warn(f"Failed to load snapshot from {path}: {e}")
        return None


def save_snapshot(index: TraceabilityIndex, path: Path) -> None:
    write_json_atomic(path, index_to_dict(index))


def load_snapshot(path: Path) -> TraceabilityIndex:
    """Load a snapshot, falling back to an empty index if it is missing or invalid."""
    data = read_json(path)
    if data is None:
        return empty_index()
    try:
        return index_from_dict(data)
    except (ValidationError, ValueError) as e:
        warn(f"Invalid snapshot at {path}: {e}")
        return empty_index()


class IndexHolder(Generic[T]):
    """Holds the current published value (index or docs map) for one snapshot path.

    Rebuilds swap in a new value under a lock; readers call ``current()``
    without locking and keep using whatever object they received.
    """

    def __init__(self, value: T):
        self._value = value
        self._lock = threading.Lock()

    def current(self) -> T:
        return self._value

    def swap(self, value: T) -> T:
        """Publish ``value`` and return the one it replaced."""
        with self._lock:
            previous, self._value = self._value, value
        return previous


_holders: dict[Path, IndexHolder[Any]] = {}
_holders_lock = threading.Lock()


def get_holder(snapshot_path: Path, loader: Callable[[Path], T] = load_snapshot) -> IndexHolder[T]:
    """Holder for ``snapshot_path``, loading it with ``loader`` on first use."""
    key = snapshot_path.resolve()
    with _holders_lock:
        holder = _holders.get(key)
        if holder is None:
            holder = IndexHolder(loader(key))
            _holders[key] = holder
        return holder


def publish(snapshot_path: Path, value: Any) -> None:
    """Swap ``value`` into the holder for ``snapshot_path``, creating it if needed."""
    key = snapshot_path.resolve()
    with _holders_lock:
        holder = _holders.get(key)
        if holder is None:
            _holders[key] = IndexHolder(value)
            return
    holder.swap(value)


def clear_holders() -> None:
    """Forget every loaded snapshot."""
    with _holders_lock:
        _holders.clear()
