"""Documentation link scanning: ``<docs>core-concepts/dispatcher</docs>`` markers.

Uses the same declaration matchers as the ``<tests>`` scanner. The result
maps each symbol to a single documentation location; when a symbol is
tagged more than once, the first occurrence is kept.
"""

import re
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from pathlib import Path
from types import MappingProxyType

from pydantic import ValidationError

from ..constants import LOOKAHEAD_WINDOW
from ..core.errors import warn
from ..core.files import read_text, relative_posix
from ..schemas.snapshot import validate_docs_map
from .store import read_json, write_json_atomic
from .symbols import extract_symbol

DOCS_TAG_PATTERN = re.compile(r'<docs>(.*?)</docs>')

DocsMap = Mapping[str, "DocLink"]


@dataclass(frozen=True)
class DocLink:
    file: str
    line: int
    symbol: str
    docs: str


def scan_docs_content(content: str, source_file: str, lookahead: int = LOOKAHEAD_WINDOW) -> list[DocLink]:
    lines = content.split('\n')
    links = []
    for i, line in enumerate(lines):
        for match in DOCS_TAG_PATTERN.finditer(line):
            docs_url = match.group(1).strip()
            if not docs_url:
                warn(f"Empty <docs> tag at {source_file}:{i + 1}")
                continue
            symbol = extract_symbol(lines, i + 1, lookahead)
            if symbol is None:
                warn(f"Found <docs> tag at {source_file}:{i + 1} but couldn't extract symbol name")
                continue
            links.append(DocLink(file=source_file, line=i + 1, symbol=symbol.name, docs=docs_url))
    return links


def build_docs_map(links: list[DocLink]) -> DocsMap:
    """Key links by symbol, keeping the first occurrence."""
    docs_map: dict[str, DocLink] = {}
    for link in links:
        if link.symbol in docs_map:
            warn(f"Duplicate <docs> symbol \"{link.symbol}\" at {link.file}:{link.line}. Using first occurrence.")
            continue
        docs_map[link.symbol] = link
    return MappingProxyType(docs_map)


def scan_docs_files(files: list[Path], root: Path, lookahead: int = LOOKAHEAD_WINDOW) -> DocsMap:
    links = []
    for file_path in files:
        content = read_text(file_path)
        if content is None:
            continue
        links.extend(scan_docs_content(content, relative_posix(file_path, root), lookahead))
    return build_docs_map(links)


def save_docs_map(docs_map: DocsMap, path: Path) -> None:
    write_json_atomic(path, {symbol: asdict(link) for symbol, link in docs_map.items()})


def load_docs_map(path: Path) -> DocsMap:
    """Load code-docs-map.json; an empty map if missing or invalid."""
    data = read_json(path)
    if data is None:
        return MappingProxyType({})
    try:
        records = validate_docs_map(data)
    except (ValidationError, AttributeError) as e:
        warn(f"Invalid docs map at {path}: {e}")
        return MappingProxyType({})
    return MappingProxyType({
        symbol: DocLink(file=r.file, line=r.line, symbol=r.symbol, docs=r.docs)
        for symbol, r in records.items()
    })
