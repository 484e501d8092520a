"""Read-only access to the pre-built documentation search corpus."""

import json
from pathlib import Path
from typing import Any

from ...core.errors import warn


def load_doc_pages(path: Path) -> list[dict[str, Any]]:
    """Load the corpus pages ({slug, title, category}).

    Accepts either a bare JSON list or an object with a "documents" list.
    A missing or malformed corpus yields an empty list.
    """
    if not path.exists():
        warn(f"Documentation corpus not found at {path}")
        return []
    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        warn(f"Failed to load documentation corpus from {path}: {e}")
        return []

    if isinstance(data, dict):
        data = data.get("documents", [])
    if not isinstance(data, list):
        warn(f"Documentation corpus at {path} is not a list of pages")
        return []
    return [page for page in data if isinstance(page, dict) and page.get("slug")]
