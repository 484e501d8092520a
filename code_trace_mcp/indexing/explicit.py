"""Explicit link scanning: ``<tests>File.cs:Method</tests>`` markers in source.

Each well-formed marker followed (within the lookahead window) by a
declaration yields one Explicit candidate. Malformed markers and markers
with no recognizable declaration are reported and skipped; scanning never
raises on bad input.
"""

import re
from pathlib import Path

from ..constants import LOOKAHEAD_WINDOW, LinkOrigin
from ..core.errors import warn
from ..core.files import read_text, relative_posix
from .models import RawCandidate
from .symbols import extract_symbol

TESTS_TAG_PATTERN = re.compile(r'<tests>(.*?)</tests>')


def parse_tests_marker(payload: str) -> tuple[str, str] | None:
    """Split a marker payload into (artifact file, artifact member).

    Returns None unless the payload has exactly two non-empty
    colon-delimited parts.
    """
    parts = payload.split(':')
    if len(parts) != 2:
        return None
    artifact_file, member = (part.strip() for part in parts)
    if not artifact_file or not member:
        return None
    return artifact_file, member


def scan_source_content(
    content: str,
    source_file: str,
    lookahead: int = LOOKAHEAD_WINDOW
) -> list[RawCandidate]:
    """Extract Explicit candidates from one source file's text.

    Args:
        content: File contents
        source_file: Project-relative path recorded on each candidate
        lookahead: Lines after the marker searched for the declaration

    Returns:
        Candidates in marker order
    """
    lines = content.split('\n')
    candidates = []

    for i, line in enumerate(lines):
        for match in TESTS_TAG_PATTERN.finditer(line):
            parsed = parse_tests_marker(match.group(1))
            if parsed is None:
                warn(
                    f"Invalid <tests> tag format at {source_file}:{i + 1}. "
                    f"Expected \"TestFile.cs:TestMethod\", got \"{match.group(1)}\""
                )
                continue

            symbol = extract_symbol(lines, i + 1, lookahead)
            if symbol is None:
                warn(f"Found <tests> tag at {source_file}:{i + 1} but couldn't extract symbol name")
                continue

            artifact_file, member = parsed
            candidates.append(RawCandidate(
                origin=LinkOrigin.EXPLICIT,
                source_file=source_file,
                source_line=i + 1,
                source_symbol=symbol.name,
                source_type=symbol.kind,
                artifact_file=artifact_file,
                artifact_member=member,
            ))

    return candidates


def scan_source_files(
    files: list[Path],
    root: Path,
    lookahead: int = LOOKAHEAD_WINDOW
) -> list[RawCandidate]:
    """Scan source files sequentially; an unreadable file is skipped."""
    candidates = []
    for file_path in files:
        content = read_text(file_path)
        if content is None:
            continue
        candidates.extend(scan_source_content(content, relative_posix(file_path, root), lookahead))
    return candidates
