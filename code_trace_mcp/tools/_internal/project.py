"""Project layout and access to the published snapshots.

Every tool resolves the same two files under ``<project>/<output_dir>/``:
the traceability snapshot and the docs map. The project config is read
once per process (or again by a rebuild) and kept with the resolved paths,
so queries only touch the in-memory holders.
"""

import threading
from dataclasses import dataclass
from pathlib import Path

from ...constants import DOCS_MAP_FILENAME, TESTS_MAP_FILENAME
from ...core.config import load_config
from ...indexing.docs_tags import DocsMap, load_docs_map
from ...indexing.models import TraceabilityIndex
from ...indexing.store import get_holder, load_snapshot
from ...schemas.config import TraceConfig


@dataclass(frozen=True)
class ProjectLayout:
    """Config and snapshot locations for one project."""

    config: TraceConfig
    tests_map: Path
    docs_map: Path


_layouts: dict[Path, ProjectLayout] = {}
_layouts_lock = threading.Lock()


def output_dir(project_path: Path, config: TraceConfig) -> Path:
    """Resolve the snapshot directory, which must stay inside the project.

    Raises:
        ValueError: If ``output_dir`` points outside the project root
    """
    root = project_path.resolve()
    out = (root / config.output_dir).resolve()
    try:
        out.relative_to(root)
    except ValueError:
        raise ValueError(f"output_dir must be inside the project: {config.output_dir}") from None
    return out


def snapshot_paths(project_path: Path, config: TraceConfig) -> tuple[Path, Path]:
    """(code-tests-map.json, code-docs-map.json) for this project."""
    out = output_dir(project_path, config)
    return out / TESTS_MAP_FILENAME, out / DOCS_MAP_FILENAME


def remember_layout(project_path: Path, config: TraceConfig) -> ProjectLayout:
    """Resolve and cache the layout for ``config``, replacing any earlier one."""
    tests_map, docs_map = snapshot_paths(project_path, config)
    layout = ProjectLayout(config=config, tests_map=tests_map, docs_map=docs_map)
    with _layouts_lock:
        _layouts[project_path.resolve()] = layout
    return layout


def project_layout(project_path: Path) -> ProjectLayout:
    """Cached layout, loading the config on first use."""
    layout = _layouts.get(project_path.resolve())
    if layout is None:
        layout = remember_layout(project_path, load_config(project_path))
    return layout


def forget_layouts() -> None:
    with _layouts_lock:
        _layouts.clear()


def current_index(project_path: Path) -> TraceabilityIndex:
    return get_holder(project_layout(project_path).tests_map, load_snapshot).current()


def current_docs_map(project_path: Path) -> DocsMap:
    return get_holder(project_layout(project_path).docs_map, load_docs_map).current()
