"""Error handling and diagnostic output.

Diagnostics go to stderr so stdout stays reserved for the MCP stdio
transport. Scanner problems are reported with ``warn`` and never raised.
"""

import re
import sys
from datetime import datetime


def warn(message: str) -> None:
    """Report a recoverable per-file or per-marker problem."""
    print(f"Warning: {message}", file=sys.stderr)


def info(message: str) -> None:
    """Report an expected, low-severity miss (e.g. unresolved convention subject)."""
    print(f"Info: {message}", file=sys.stderr)


def handle_error(e: Exception, context: str = "", log_to_stderr: bool = True) -> str:
    """Consistent error formatting across all tools.

    Args:
        e: Exception that occurred
        context: Context where error occurred (e.g., tool name, operation)
        log_to_stderr: Whether to log error to stderr

    Returns:
        Formatted error message string with filesystem paths removed
    """
    error_msg = f"Error: {type(e).__name__}"
    if context:
        error_msg += f" in {context}"

    error_str = str(e)
    # Windows paths (C:\...)
    error_str = re.sub(r'[A-Z]:\\[^\s]+', '[path]', error_str)
    # Unix paths (/home/..., /usr/...)
    error_str = re.sub(r'/[\w.\-/]+/[\w.\-/]+', '[path]', error_str)

    error_msg += f": {error_str}"

    if log_to_stderr:
        timestamp = datetime.now().isoformat()
        print(f"[{timestamp}] {error_msg}", file=sys.stderr)

    return error_msg
