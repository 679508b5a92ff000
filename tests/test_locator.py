"""Tests for template source selection."""

from pathlib import Path

import pytest

from atpl import locator
from atpl.locator import default_local_root, select_source
from atpl.sources import GitHubTemplateSource, LocalTemplateSource
from atpl.utils.config import use_config


@pytest.fixture
def no_checkout(monkeypatch, tmp_path):
    """Pretend atpl was installed somewhere without a templates/ directory."""
    base = tmp_path / "site-packages"
    base.mkdir()
    monkeypatch.setattr(locator, "installation_base", lambda: base)
    return base


@pytest.fixture
def checkout(monkeypatch, tmp_path, make_tree):
    """Pretend atpl runs from a checkout that ships templates/."""
    base = tmp_path / "checkout"
    make_tree(base / "templates", {"react/README.md": "# React\n"})
    monkeypatch.setattr(locator, "installation_base", lambda: base)
    return base


def write_config(workdir, text):
    (workdir / "atpl.yml").write_text(text)


class TestDefaultLocalRoot:
    def test_templates_next_to_installation(self, checkout):
        assert default_local_root() == checkout / "templates"

    def test_configured_local_root(self, workdir, tmp_path):
        write_config(workdir, f"templates:\n  local_root: {tmp_path / 'mine'}\n")

        assert default_local_root() == tmp_path / "mine"


class TestSelectSource:
    """Test auto, local and remote selection."""

    def test_auto_prefers_local_checkout(self, checkout):
        with select_source() as source:
            assert isinstance(source, LocalTemplateSource)
            assert source.root == checkout / "templates"

    def test_auto_falls_back_to_remote(self, no_checkout):
        with select_source() as source:
            assert isinstance(source, GitHubTemplateSource)
            assert source.repo == "soundstep/app-templates"
            assert source.branch == "main"

    def test_templates_dir_implies_local(self, no_checkout, tmp_path):
        """An explicit directory is used even if it does not exist yet."""
        with select_source(templates_dir=tmp_path / "missing") as source:
            assert isinstance(source, LocalTemplateSource)
            assert source.list_templates() == []

    def test_forced_remote_ignores_checkout(self, checkout):
        with select_source("remote", repo="me/tpl", branch="dev") as source:
            assert isinstance(source, GitHubTemplateSource)
            assert source.repo == "me/tpl"
            assert source.branch == "dev"

    def test_forced_local_without_checkout(self, no_checkout):
        with select_source("LOCAL") as source:
            assert isinstance(source, LocalTemplateSource)
            assert source.root == no_checkout / "templates"

    def test_mode_from_config(self, checkout, workdir):
        write_config(workdir, "templates:\n  source: remote\n")

        with select_source() as source:
            assert isinstance(source, GitHubTemplateSource)

    def test_remote_settings_from_config(self, no_checkout, tmp_path):
        config_file = tmp_path / "custom.yml"
        config_file.write_text(
            "remote:\n"
            "  repo: acme/starters\n"
            "  branch: release\n"
            "  path: blueprints\n"
            "  api_url: https://github.example/api/v3/\n"
        )
        use_config(str(config_file))

        with select_source() as source:
            assert source.repo == "acme/starters"
            assert source.branch == "release"
            assert source.contents_url("react") == (
                "https://github.example/api/v3/repos/acme/starters/contents/blueprints/react"
            )

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="Unknown template source 'ftp'"):
            select_source("ftp")


class TestBundledTemplates:
    def test_repository_ships_templates(self):
        root = Path(__file__).resolve().parents[1] / "templates"

        assert LocalTemplateSource(root).list_templates() == ["python-cli", "static-site"]
