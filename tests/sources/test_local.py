"""Tests for the filesystem template source."""

import pytest

from atpl.errors import DownloadError, ListingError
from atpl.sources.local import LocalTemplateSource
from atpl.tree import DIR, FILE, TreeEntry


class TestListEntries:
    """Test LocalTemplateSource.list_entries."""

    def test_lists_sorted_children_with_kinds(self, templates_root):
        entries = LocalTemplateSource(templates_root).list_entries("react/src")

        assert [(e.name, e.path, e.kind) for e in entries] == [
            ("components", "react/src/components", DIR),
            ("index.js", "react/src/index.js", FILE),
        ]

    def test_root_listing(self, templates_root):
        names = [e.name for e in LocalTemplateSource(templates_root).list_entries("")]

        assert names == [".shared", "README.md", "python", "react"]

    def test_missing_directory_is_not_found(self, templates_root):
        with pytest.raises(ListingError) as exc_info:
            LocalTemplateSource(templates_root).list_entries("vue")

        assert exc_info.value.not_found is True
        assert exc_info.value.path == "vue"

    def test_file_is_not_listable(self, templates_root):
        with pytest.raises(ListingError) as exc_info:
            LocalTemplateSource(templates_root).list_entries("react/README.md")

        assert exc_info.value.not_found is True


class TestListTemplates:
    """Test template discovery."""

    def test_only_visible_directories(self, templates_root):
        """Root files and hidden directories are not templates."""
        (templates_root / ".cache").mkdir()

        assert LocalTemplateSource(templates_root).list_templates() == ["python", "react"]

    def test_underscore_directories_are_listed(self, templates_root):
        """Anything that can be scaffolded shows up in the listing."""
        (templates_root / "_base").mkdir()

        assert LocalTemplateSource(templates_root).list_templates() == ["_base", "python", "react"]

    def test_missing_root_lists_nothing(self, tmp_path):
        assert LocalTemplateSource(tmp_path / "nope").list_templates() == []


class TestReadBytes:
    def test_reads_file_content(self, templates_root):
        source = LocalTemplateSource(templates_root)
        entry = TreeEntry("index.js", "react/src/index.js", FILE)

        assert source.read_bytes(entry) == b"console.log('hello');\n"

    def test_unreadable_file_raises_download_error(self, templates_root):
        source = LocalTemplateSource(templates_root)

        with pytest.raises(DownloadError) as exc_info:
            source.read_bytes(TreeEntry("gone.txt", "react/gone.txt", FILE))

        assert exc_info.value.path == "react/gone.txt"


class TestLocalPath:
    def test_maps_to_filesystem(self, templates_root):
        source = LocalTemplateSource(templates_root)

        assert source.local_path("react") == templates_root / "react"
        assert source.describe() == str(templates_root)

    def test_context_manager_returns_source(self, templates_root):
        with LocalTemplateSource(templates_root) as source:
            assert source.list_templates() == ["python", "react"]
