"""Core utilities for the code traceability MCP server.

- config: .code-trace.yml loading
- errors: stderr diagnostics and error formatting
- files: glob listing and UTF-8 reading for the build pass
- patterns: exclusion glob matching
- responses: response size limits and JSON safety
"""

from .config import load_config
from .errors import handle_error, info, warn
from .files import list_files, read_text, relative_posix
from .patterns import matches_exclude_pattern
from .responses import enforce_response_limit, safe_json_dumps

__all__ = [
    "enforce_response_limit",
    "handle_error",
    "info",
    "list_files",
    "load_config",
    "matches_exclude_pattern",
    "read_text",
    "relative_posix",
    "safe_json_dumps",
    "warn",
]
