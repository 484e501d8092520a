"""Unit tests for <docs> marker scanning and docs lookups."""

import json
from types import MappingProxyType

from code_trace_mcp.indexing.docs_tags import (
    DocLink,
    build_docs_map,
    load_docs_map,
    save_docs_map,
    scan_docs_content,
)
from code_trace_mcp.tools._internal.corpus import load_doc_pages
from code_trace_mcp.tools.docs import find_code_by_docs, find_docs_by_symbol, find_page


class TestScanDocsContent:
    """Tests for scan_docs_content."""

    def test_marker_links_following_symbol(self):
        content = (
            "/// <docs>core-concepts/dispatcher</docs>\n"
            "public class Dispatcher\n"
        )
        assert scan_docs_content(content, "src/Dispatcher.cs") == [
            DocLink(file="src/Dispatcher.cs", line=1, symbol="Dispatcher", docs="core-concepts/dispatcher"),
        ]

    def test_empty_and_orphan_markers_warn(self, capsys):
        content = "/// <docs> </docs>\n/// <docs>guides/x</docs>\n\n\n\n\n"

        assert scan_docs_content(content, "src/X.cs") == []
        err = capsys.readouterr().err
        assert "Empty <docs> tag at src/X.cs:1" in err
        assert "Found <docs> tag at src/X.cs:2 but couldn't extract symbol name" in err


class TestBuildDocsMap:
    """Tests for build_docs_map."""

    def test_first_occurrence_wins(self, capsys):
        first = DocLink(file="src/A.cs", line=1, symbol="Run", docs="guides/run")
        second = DocLink(file="src/B.cs", line=9, symbol="Run", docs="guides/other")

        docs_map = build_docs_map([first, second])

        assert docs_map["Run"] is first
        assert "Duplicate <docs> symbol \"Run\" at src/B.cs:9" in capsys.readouterr().err


class TestDocsMapPersistence:
    """Tests for saving and loading code-docs-map.json."""

    def test_round_trip(self, tmp_path):
        path = tmp_path / "out" / "code-docs-map.json"
        docs_map = build_docs_map([DocLink(file="src/A.cs", line=2, symbol="A", docs="guides/a")])

        save_docs_map(docs_map, path)

        assert json.loads(path.read_text(encoding="utf-8")) == {
            "A": {"file": "src/A.cs", "line": 2, "symbol": "A", "docs": "guides/a"}
        }
        assert dict(load_docs_map(path)) == dict(docs_map)

    def test_invalid_map_is_empty(self, tmp_path, capsys):
        path = tmp_path / "code-docs-map.json"
        path.write_text(json.dumps({"A": {"file": "src/A.cs"}}), encoding="utf-8")

        assert dict(load_docs_map(path)) == {}
        assert "Invalid docs map" in capsys.readouterr().err


class TestLookups:
    """Tests for find_docs_by_symbol and find_code_by_docs."""

    docs_map = MappingProxyType({
        "Dispatcher": DocLink(file="src/Dispatcher.cs", line=5, symbol="Dispatcher", docs="core-concepts/dispatcher"),
        "PublishAsync": DocLink(file="src/Dispatcher.cs", line=10, symbol="PublishAsync", docs="core-concepts/publishing"),
    })

    def test_find_docs_by_symbol(self):
        assert find_docs_by_symbol(self.docs_map, "Dispatcher").line == 5
        assert find_docs_by_symbol(self.docs_map, "dispatcher") is None

    def test_find_code_by_versioned_url(self):
        """Test leading slash, version prefix and .md are ignored."""
        link = find_code_by_docs(self.docs_map, "/v1.2/core-concepts/dispatcher.md")

        assert link.symbol == "Dispatcher"

    def test_find_code_by_concept_substring(self):
        assert find_code_by_docs(self.docs_map, "publishing").symbol == "PublishAsync"

    def test_find_code_no_match(self):
        assert find_code_by_docs(self.docs_map, "routing") is None
        assert find_code_by_docs(self.docs_map, "/") is None


class TestDocPages:
    """Tests for the search corpus reader."""

    def test_list_and_wrapped_forms(self, tmp_path):
        pages = [{"slug": "dispatcher", "title": "Dispatcher", "category": "Core Concepts"}, {"title": "no slug"}]
        listed = tmp_path / "list.json"
        listed.write_text(json.dumps(pages), encoding="utf-8")
        wrapped = tmp_path / "wrapped.json"
        wrapped.write_text(json.dumps({"documents": pages}), encoding="utf-8")

        assert load_doc_pages(listed) == pages[:1]
        assert load_doc_pages(wrapped) == pages[:1]

    def test_missing_corpus(self, tmp_path, capsys):
        assert load_doc_pages(tmp_path / "missing.json") == []
        assert "Documentation corpus not found" in capsys.readouterr().err

    def test_find_page_by_category_path(self):
        pages = [
            {"slug": "getting-started.md", "title": "Getting Started", "category": "Guides"},
            {"slug": "dispatcher", "title": "Dispatcher", "category": "Core Concepts"},
        ]

        assert find_page(pages, "/v1.2/core-concepts/dispatcher.md")["title"] == "Dispatcher"
        assert find_page(pages, "getting-started")["title"] == "Getting Started"
        assert find_page(pages, "missing") is None
