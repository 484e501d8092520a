"""Glob matching for scan exclusions.

Supports ``**/`` prefixes (any depth), ``/**`` suffixes (a directory and
everything below it) and plain fnmatch patterns. ``**/obj/**`` therefore
excludes an ``obj`` directory at any depth.
"""

import fnmatch


def _normalize(path: str) -> str:
    return path.replace('\\', '/').strip('/')


def _matches(path: str, pattern: str) -> bool:
    if pattern.startswith('**/'):
        rest = pattern[3:]
        parts = path.split('/')
        # Try the remainder of the pattern against every suffix of the path
        return any(_matches('/'.join(parts[i:]), rest) for i in range(len(parts)))

    if pattern.endswith('/**'):
        directory = pattern[:-3]
        if '*' in directory or '?' in directory:
            parts = path.split('/')
            return any(
                fnmatch.fnmatchcase('/'.join(parts[:i]), directory)
                for i in range(1, len(parts) + 1)
            )
        return path == directory or path.startswith(directory + '/')

    return fnmatch.fnmatchcase(path, pattern)


def matches_exclude_pattern(path: str, exclude_patterns: list[str]) -> bool:
    """Check if a relative path matches any of the exclude patterns.

    Args:
        path: Path relative to the scan root
        exclude_patterns: Glob patterns (e.g., ["**/obj/**", "**/*.g.cs"])

    Returns:
        True if the path should be skipped
    """
    normalized_path = _normalize(path)
    return any(_matches(normalized_path, _normalize(p)) for p in exclude_patterns)
