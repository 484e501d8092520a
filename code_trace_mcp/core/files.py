"""File listing and reading for the build pass.

``list_files`` is the glob-listing service the scanners consume: it returns
a sorted, de-duplicated list so convention resolution ("first match wins")
is reproducible across runs and platforms.
"""

from pathlib import Path

from ..constants import MAX_FILES
from .errors import warn
from .patterns import matches_exclude_pattern


def relative_posix(file_path: Path, root: Path) -> str:
    """Path of ``file_path`` relative to ``root`` with forward slashes."""
    try:
        return file_path.relative_to(root).as_posix()
    except ValueError:
        return file_path.as_posix()


def list_files(root: Path, patterns: list[str], exclude_patterns: list[str]) -> list[Path]:
    """List files under ``root`` matching any glob in ``patterns``.

    Raises:
        FileNotFoundError: If ``root`` does not exist
        NotADirectoryError: If ``root`` is not a directory
    """
    if not root.exists():
        raise FileNotFoundError(f"Scan root does not exist: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Scan root is not a directory: {root}")

    seen: set[Path] = set()
    files: list[Path] = []
    for pattern in patterns:
        for file_path in root.glob(pattern):
            if file_path in seen or not file_path.is_file():
                continue
            if matches_exclude_pattern(relative_posix(file_path, root), exclude_patterns):
                continue
            seen.add(file_path)
            files.append(file_path)

    files.sort(key=lambda p: relative_posix(p, root))
    if len(files) > MAX_FILES:
        warn(f"File count limit exceeded ({len(files):,} > {MAX_FILES:,}); scanning the first {MAX_FILES:,}")
        files = files[:MAX_FILES]
    return files


def read_text(file_path: Path) -> str | None:
    """Read a UTF-8 file, returning None (with a warning) if it can't be read.

    Undecodable bytes are replaced rather than failing the whole file.
    """
    try:
        with open(file_path, encoding='utf-8', errors='replace') as f:
            return f.read()
    except OSError as e:
        warn(f"Failed to read {file_path}: {e}")
        return None
