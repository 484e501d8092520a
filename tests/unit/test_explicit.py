"""Unit tests for the <tests> marker scanner."""

import pytest

from code_trace_mcp.constants import LinkOrigin, SymbolKind
from code_trace_mcp.indexing.explicit import (
    parse_tests_marker,
    scan_source_content,
    scan_source_files,
)


class TestParseTestsMarker:
    """Tests for marker payload parsing."""

    def test_valid_payload(self):
        """Test a file:member payload is split and trimmed."""
        assert parse_tests_marker(" Tests/FooTests.cs : Foo_Works ") == ("Tests/FooTests.cs", "Foo_Works")

    @pytest.mark.parametrize("payload", [
        "BadFormatNoColon",
        "a:b:c",
        ":Foo_Works",
        "FooTests.cs:",
        "",
    ])
    def test_invalid_payloads(self, payload):
        """Test anything but exactly two non-empty parts is rejected."""
        assert parse_tests_marker(payload) is None


class TestScanSourceContent:
    """Tests for scan_source_content."""

    def test_marker_before_interface(self):
        """Test a marker two lines above an interface yields one Explicit candidate."""
        content = (
            "/// <tests>Tests/FooTests.cs:Foo_Works</tests>\n"
            "/// </summary>\n"
            "public interface IFoo\n"
            "{\n"
            "}\n"
        )
        candidates = scan_source_content(content, "src/IFoo.cs")

        assert len(candidates) == 1
        candidate = candidates[0]
        assert candidate.origin == LinkOrigin.EXPLICIT
        assert candidate.source_symbol == "IFoo"
        assert candidate.source_type == SymbolKind.INTERFACE
        assert candidate.source_file == "src/IFoo.cs"
        assert candidate.source_line == 1
        assert candidate.artifact_file == "Tests/FooTests.cs"
        assert candidate.artifact_member == "Foo_Works"
        assert candidate.artifact_key == "FooTests.Foo_Works"

    def test_malformed_marker_warns_and_continues(self, capsys):
        """Test a malformed marker is skipped with a warning naming file and line."""
        content = (
            "/// <tests>BadFormatNoColon</tests>\n"
            "/// <tests>FooTests.cs:Foo_Works</tests>\n"
            "public class Foo\n"
        )
        candidates = scan_source_content(content, "src/Foo.cs")

        assert [c.artifact_member for c in candidates] == ["Foo_Works"]
        err = capsys.readouterr().err
        assert "Warning: Invalid <tests> tag format at src/Foo.cs:1" in err
        assert err.count("Warning:") == 1

    def test_marker_without_declaration_warns(self, capsys):
        """Test a marker with no declaration in the window is skipped."""
        content = "// <tests>FooTests.cs:Foo_Works</tests>\n\n\n\n\npublic class TooFar\n"

        assert scan_source_content(content, "src/Foo.cs") == []
        assert "couldn't extract symbol name" in capsys.readouterr().err

    def test_multiple_markers_on_one_line(self):
        """Test every marker on a line is scanned."""
        content = (
            "/// <tests>FooTests.cs:A</tests> <tests>FooTests.cs:B</tests>\n"
            "public void Run()\n"
        )
        candidates = scan_source_content(content, "src/Foo.cs")

        assert [(c.source_symbol, c.artifact_member) for c in candidates] == [("Run", "A"), ("Run", "B")]
        assert all(c.source_type == SymbolKind.METHOD for c in candidates)

    def test_marker_before_generic_property(self):
        """Test a generic property is recorded under its own name as a Property."""
        content = (
            "public sealed class Order\n"
            "{\n"
            "    /// <tests>OrderTests.cs:Lines_StartsEmpty</tests>\n"
            "    public IReadOnlyList<OrderLine> Lines { get; }\n"
            "\n"
            "    /// <tests>OrderTests.cs:Totals_AreKeyedBySku</tests>\n"
            "    public Dictionary<string, decimal> Totals { get; } = new();\n"
            "\n"
            "    /// <tests>OrderTests.cs:Submit_Completes</tests>\n"
            "    public Task<bool> SubmitAsync<T>(T request) => Task.FromResult(true);\n"
            "}\n"
        )
        candidates = scan_source_content(content, "src/Order.cs")

        assert [(c.source_symbol, c.source_type) for c in candidates] == [
            ("Lines", SymbolKind.PROPERTY),
            ("Totals", SymbolKind.PROPERTY),
            ("SubmitAsync", SymbolKind.METHOD),
        ]

    def test_lookahead_is_configurable(self):
        """Test a wider lookahead reaches a distant declaration."""
        content = "// <tests>FooTests.cs:A</tests>\n\n\n\n\n\npublic class Far\n"

        assert scan_source_content(content, "src/Far.cs", lookahead=4) == []
        assert len(scan_source_content(content, "src/Far.cs", lookahead=6)) == 1


class TestScanSourceFiles:
    """Tests for scanning files from disk."""

    def test_paths_are_project_relative(self, tmp_path):
        """Test source_file is recorded relative to the root with forward slashes."""
        source = tmp_path / "src" / "Core" / "Foo.cs"
        source.parent.mkdir(parents=True)
        source.write_text("// <tests>FooTests.cs:A</tests>\npublic class Foo\n", encoding="utf-8")

        candidates = scan_source_files([source], tmp_path)

        assert candidates[0].source_file == "src/Core/Foo.cs"

    def test_invalid_bytes_are_replaced(self, tmp_path, capsys):
        """Test a file with stray non-UTF-8 bytes is still scanned."""
        legacy = tmp_path / "Legacy.cs"
        legacy.write_bytes(
            b"// Caf\xe9 \xff\n"
            b"/// <tests>LegacyTests.cs:Brew_Works</tests>\n"
            b"public class Legacy\n"
        )

        candidates = scan_source_files([legacy], tmp_path)

        assert [(c.source_symbol, c.artifact_member) for c in candidates] == [("Legacy", "Brew_Works")]
        assert "Warning:" not in capsys.readouterr().err

    def test_unreadable_file_is_skipped(self, tmp_path, capsys):
        """Test a file that can't be opened is skipped with a warning."""
        missing = tmp_path / "Missing.cs"
        good = tmp_path / "Good.cs"
        good.write_text("// <tests>GoodTests.cs:A</tests>\npublic class Good\n", encoding="utf-8")

        candidates = scan_source_files([missing, good], tmp_path)

        assert [c.source_symbol for c in candidates] == ["Good"]
        assert "Warning: Failed to read" in capsys.readouterr().err
