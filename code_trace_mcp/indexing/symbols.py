"""Regex-based declaration matching for marker-annotated symbols.

Given the lines following a ``<tests>`` or ``<docs>`` marker, find the
declaration the marker documents. Three matcher strategies are tried in
priority order on each line (type, then method, then property); lines are
visited strictly top to bottom, so the first line that any matcher accepts
wins.
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from ..constants import ACCESS_MODIFIERS, LOOKAHEAD_WINDOW, SymbolKind

_MODIFIER = "(?:" + "|".join(ACCESS_MODIFIERS) + ")"
_MEMBER_MODIFIERS = (
    "static", "virtual", "override", "abstract", "sealed", "async",
    "readonly", "new", "extern", "unsafe", "partial",
)

# A type token: never a modifier keyword, optionally generic (nested, multi-argument),
# array or nullable
_TYPE_NAME = (
    r"\b(?!(?:" + "|".join(ACCESS_MODIFIERS + _MEMBER_MODIFIERS) + r")\b)"
    r"[\w.]+(?:<[\w\s,.?<>\[\]]*>)?(?:\[,*\]|\?)*"
)

# Lines that are only comments never hold a declaration
COMMENT_LINE_PATTERN = re.compile(r'^\s*(?://|/\*|\*)')


@dataclass(frozen=True)
class SymbolMatch:
    """A declaration found near a marker."""

    name: str
    kind: SymbolKind
    line: int  # 0-based index into the scanned line list


class DeclarationMatcher(ABC):
    """One declaration shape."""

    pattern: re.Pattern[str]

    @abstractmethod
    def match(self, line: str) -> tuple[str, SymbolKind] | None:
        """Return (symbol name, kind) if ``line`` declares this shape."""


class TypeDeclarationMatcher(DeclarationMatcher):
    """``public interface IFoo``, ``sealed record Bar``, ``enum Mode``."""

    pattern = re.compile(
        rf'(?:{_MODIFIER}\s+)?(?:(?:static|sealed|abstract|partial|readonly|ref)\s+)*'
        r'\b(interface|class|struct|record|enum)\s+(?:(?:class|struct)\s+)?(\w+)'
    )

    def match(self, line: str) -> tuple[str, SymbolKind] | None:
        m = self.pattern.search(line)
        if not m:
            return None
        return m.group(2), SymbolKind(m.group(1).capitalize())


class MethodDeclarationMatcher(DeclarationMatcher):
    """``public async Task SendAsync(``, ``void Run<T>(``, ``public Dispatcher(``."""

    pattern = re.compile(
        rf'{_TYPE_NAME}\s+(\w+)\s*[(<]'
        rf'|\b{_MODIFIER}\s+(\w+)\s*\('  # constructor
    )

    def match(self, line: str) -> tuple[str, SymbolKind] | None:
        m = self.pattern.search(line)
        if not m:
            return None
        return m.group(1) or m.group(2), SymbolKind.METHOD


class PropertyDeclarationMatcher(DeclarationMatcher):
    """``public string Name { get; }``, ``int? Count {``, ``Task<int> Result {``."""

    pattern = re.compile(rf'{_TYPE_NAME}\s+(\w+)\s*\{{')

    def match(self, line: str) -> tuple[str, SymbolKind] | None:
        m = self.pattern.search(line)
        if not m:
            return None
        return m.group(1), SymbolKind.PROPERTY


DECLARATION_MATCHERS: tuple[DeclarationMatcher, ...] = (
    TypeDeclarationMatcher(),
    MethodDeclarationMatcher(),
    PropertyDeclarationMatcher(),
)


def match_declaration(
    line: str,
    matchers: Sequence[DeclarationMatcher] = DECLARATION_MATCHERS
) -> tuple[str, SymbolKind] | None:
    """Try each matcher on a single line, in priority order."""
    if COMMENT_LINE_PATTERN.match(line):
        return None
    for matcher in matchers:
        result = matcher.match(line)
        if result:
            return result
    return None


def extract_symbol(
    lines: Sequence[str],
    start: int,
    lookahead: int = LOOKAHEAD_WINDOW,
    matchers: Sequence[DeclarationMatcher] = DECLARATION_MATCHERS
) -> SymbolMatch | None:
    """Find the first declaration in ``lines[start:start + lookahead]``.

    Returns None when the window holds no declaration; callers report that
    as a diagnostic.
    """
    end = min(start + lookahead, len(lines))
    for index in range(max(start, 0), end):
        result = match_declaration(lines[index], matchers)
        if result:
            name, kind = result
            return SymbolMatch(name=name, kind=kind, line=index)
    return None
