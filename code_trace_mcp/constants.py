"""Constants and enums for the code traceability MCP server."""

from enum import Enum

# Response size limit
CHARACTER_LIMIT = 25000  # Maximum response size in characters

# Resource limits
MAX_FILES = 10_000  # Maximum files to scan per glob listing

# Project-level files
CONFIG_FILENAME = ".code-trace.yml"
DEFAULT_OUTPUT_DIR = ".code-trace"
TESTS_MAP_FILENAME = "code-tests-map.json"
DOCS_MAP_FILENAME = "code-docs-map.json"

# Scanning defaults
DEFAULT_SOURCE_PATTERNS = ["src/**/*.cs"]
DEFAULT_TEST_PATTERNS = ["tests/**/*.cs"]
DEFAULT_TEST_SUFFIXES = ["Tests", "Test"]
DEFAULT_TEST_MARKERS = ["Test", "Fact", "Theory", "TestMethod"]
LOOKAHEAD_WINDOW = 4  # Lines searched after a marker for the declared symbol

# Generated, binary and output paths are never scanned
DEFAULT_EXCLUDE_PATTERNS = [
    "**/obj/**",
    "**/bin/**",
    "**/Generated/**",
    "**/*.g.cs",
    "**/*.designer.cs",
    "**/.git/**",
    "**/node_modules/**",
    "**/.code-trace/**",
]

# Accepted-modifier alternation shared by the declaration matchers
ACCESS_MODIFIERS = ("public", "internal", "private", "protected")


class LinkOrigin(str, Enum):
    """Provenance of a link edge."""
    EXPLICIT = "Explicit"
    CONVENTION = "Convention"


class SymbolKind(str, Enum):
    """Kinds of declarations the symbol extractor recognizes."""
    INTERFACE = "Interface"
    CLASS = "Class"
    STRUCT = "Struct"
    RECORD = "Record"
    ENUM = "Enum"
    METHOD = "Method"
    PROPERTY = "Property"


class LinkStatus(str, Enum):
    """Validation outcome for a single link."""
    VALID = "valid"
    BROKEN = "broken"
    WARNING = "warning"
