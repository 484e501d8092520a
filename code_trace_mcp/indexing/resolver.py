"""Resolution of convention subjects to source files.

A subject resolves to the first source file, in listing order, whose
filename (without extension) equals the subject, equals ``"I" + subject``,
or contains the subject. There is no scoring: with a loose subject such as
``Dispatcher`` the first of ``IDispatcher.cs`` / ``EventDispatcherFactory.cs``
in listing order wins, which is why ``list_files`` returns sorted paths.
"""

from collections.abc import Iterable
from pathlib import PurePosixPath

from ..constants import SymbolKind
from ..core.errors import info
from .models import RawCandidate, SourceRef


def stem_matches(stem: str, subject: str) -> bool:
    """Combined name predicate: exact, interface-prefixed, or substring."""
    return stem == subject or stem == f"I{subject}" or subject in stem


class SourceFileIndex:
    """Filename index over the source listing, built once per build pass."""

    def __init__(self, source_files: Iterable[str]):
        self._entries: list[tuple[str, str]] = [
            (PurePosixPath(path).stem, path) for path in source_files
        ]
        # Exact and interface-prefixed names → earliest position
        self._positions: dict[str, int] = {}
        for position, (stem, _path) in enumerate(self._entries):
            self._positions.setdefault(stem, position)
        self._cache: dict[str, str | None] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def resolve(self, subject: str) -> str | None:
        """Return the first source path whose stem satisfies ``stem_matches``."""
        if not subject:
            return None
        if subject in self._cache:
            return self._cache[subject]

        # Earliest exact/interface hit bounds the substring search
        bound = min(
            (self._positions[name] for name in (subject, f"I{subject}") if name in self._positions),
            default=len(self._entries)
        )
        resolved = None
        for stem, path in self._entries[:bound]:
            if stem_matches(stem, subject):
                resolved = path
                break
        if resolved is None and bound < len(self._entries):
            resolved = self._entries[bound][1]

        self._cache[subject] = resolved
        return resolved


def resolve_candidates(
    candidates: Iterable[RawCandidate],
    index: SourceFileIndex
) -> list[tuple[RawCandidate, SourceRef]]:
    """Pair each Convention candidate with its resolved source, dropping the unresolved."""
    resolved = []
    unresolved: dict[str, int] = {}

    for candidate in candidates:
        subject = candidate.source_symbol or ""
        source_file = index.resolve(subject)
        if source_file is None:
            unresolved[subject] = unresolved.get(subject, 0) + 1
            continue
        resolved.append((candidate, SourceRef(
            file=source_file,
            symbol=subject,
            kind=SymbolKind.CLASS,  # Inferred from a test class name
        )))

    if unresolved:
        subjects = ", ".join(sorted(unresolved))
        info(
            f"{sum(unresolved.values())} convention candidate(s) dropped; "
            f"no source file for: {subjects}"
        )
    return resolved
