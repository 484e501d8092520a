"""Convention link scanning over test files.

A file is a test file when it declares a class whose name ends in a
recognized suffix (``DispatcherTests``). The class under test is inferred by
stripping that suffix (``Dispatcher``), and every test-marked method in the
file becomes a Convention candidate for that subject.
"""

import re
from collections.abc import Sequence
from pathlib import Path

from ..constants import DEFAULT_TEST_MARKERS, DEFAULT_TEST_SUFFIXES, LinkOrigin
from ..core.files import read_text, relative_posix
from .models import RawCandidate

CLASS_DECLARATION_PATTERN = re.compile(r'\bclass\s+(\w+)')


def infer_subject(container: str, suffixes: Sequence[str] = DEFAULT_TEST_SUFFIXES) -> str | None:
    """Strip the first matching suffix; None if no suffix applies or nothing remains."""
    for suffix in suffixes:
        if container.endswith(suffix) and len(container) > len(suffix):
            return container[:-len(suffix)]
    return None


def find_test_container(content: str, suffixes: Sequence[str] = DEFAULT_TEST_SUFFIXES) -> tuple[str, str] | None:
    """Return (container name, inferred subject) for the first test class in the file."""
    for match in CLASS_DECLARATION_PATTERN.finditer(content):
        name = match.group(1)
        subject = infer_subject(name, suffixes)
        if subject:
            return name, subject
    return None


def build_test_method_pattern(markers: Sequence[str] = DEFAULT_TEST_MARKERS) -> re.Pattern[str]:
    """Pattern for a marker attribute followed (possibly lines later) by a method signature.

    Group 1 is the method name. The span between attribute and signature
    never crosses another marker attribute, so a marked member with some
    other return type is skipped instead of lending its line to the next test.
    """
    alternation = "|".join(re.escape(m) for m in markers)
    attribute = rf'\[\s*(?:{alternation})\b[^\]]*\]'
    return re.compile(
        attribute +
        rf'(?:(?!{attribute})[\s\S])*?'
        r'(?:(?:public|internal|private|protected)\s+)?(?:static\s+)?(?:async\s+)?'
        r'(?:Task|ValueTask|void)(?:<[\w<>,\s]+>)?\s+(\w+)\s*\('
    )


def scan_artifact_content(
    content: str,
    artifact_file: str,
    suffixes: Sequence[str] = DEFAULT_TEST_SUFFIXES,
    markers: Sequence[str] = DEFAULT_TEST_MARKERS
) -> list[RawCandidate]:
    """Extract Convention candidates from one test file's text."""
    container = find_test_container(content, suffixes)
    if container is None:
        return []  # Not a test file

    container_name, subject = container
    pattern = build_test_method_pattern(markers)
    candidates = []

    for match in pattern.finditer(content):
        # Marker and signature may span lines, so count newlines up to the match
        line = content.count('\n', 0, match.start()) + 1
        candidates.append(RawCandidate(
            origin=LinkOrigin.CONVENTION,
            source_file="",
            source_symbol=subject,
            artifact_file=artifact_file,
            artifact_member=match.group(1),
            artifact_container=container_name,
            artifact_line=line,
        ))

    return candidates


def scan_artifact_files(
    files: list[Path],
    root: Path,
    suffixes: Sequence[str] = DEFAULT_TEST_SUFFIXES,
    markers: Sequence[str] = DEFAULT_TEST_MARKERS
) -> list[RawCandidate]:
    """Scan test files sequentially; an unreadable file is skipped."""
    candidates = []
    for file_path in files:
        content = read_text(file_path)
        if content is None:
            continue
        candidates.extend(scan_artifact_content(content, relative_posix(file_path, root), suffixes, markers))
    return candidates
