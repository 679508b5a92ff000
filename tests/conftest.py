"""
Pytest configuration and shared test utilities.

This module provides the fixtures shared by the atpl tests: an isolated
working directory, a local templates tree, and an in-memory GitHub
contents API served through ``httpx.MockTransport``.
"""

import logging
from pathlib import Path

import httpx
import pytest

from atpl.sources.github import GitHubTemplateSource
from atpl.utils import config as config_module

API_URL = "https://api.github.test"
RAW_URL = "https://raw.github.test"
REPO = "owner/app-templates"
BRANCH = "main"
BASE_PATH = "templates"

# ===================================================================
# Template trees
# ===================================================================

TEMPLATE_FILES = {
    "react/README.md": "# React starter\n",
    "react/package.json": '{"name": "react-starter"}\n',
    "react/src/index.js": "console.log('hello');\n",
    "react/src/components/App.js": "export default () => null;\n",
    "react/.gitignore": "node_modules/\n",
    "python/README.md": "# Python starter\n",
    "python/app/__init__.py": "",
    ".shared/NOTICE": "shared\n",
    "README.md": "templates index\n",
}


def write_tree(root: Path, files: dict[str, str | bytes]) -> Path:
    """Create ``files`` (relative posix path -> content) under ``root``."""
    root.mkdir(parents=True, exist_ok=True)
    for relative, content in files.items():
        path = root.joinpath(*relative.split("/"))
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content)
    return root


def read_tree(root: Path) -> dict[str, bytes]:
    """Map every file under ``root`` to its bytes, keyed by posix path."""
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep user config, tokens and cached configuration out of every test."""
    home = tmp_path / "home"
    home.mkdir()
    workdir = tmp_path / "work"
    workdir.mkdir()

    monkeypatch.setenv("HOME", str(home))
    for var in ("ATPL_CONFIG", "GH_TOKEN", "GITHUB_TOKEN"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(workdir)

    config_module.reset_config()
    yield workdir
    config_module.reset_config()
    logging.getLogger("atpl").setLevel(logging.NOTSET)


@pytest.fixture
def workdir(isolated_environment):
    """The (empty) current working directory of the test."""
    return isolated_environment


@pytest.fixture
def templates_root(tmp_path):
    """A local templates directory with ``react`` and ``python`` templates."""
    return write_tree(tmp_path / "templates", TEMPLATE_FILES)


# ===================================================================
# Fake GitHub contents API
# ===================================================================


class FakeGitHub:
    """In-memory GitHub repository answering contents API and raw requests.

    Attributes:
        files: Template files keyed by path relative to the templates root
        listing_failures: Relative directory -> HTTP status to answer with
        download_failures: Relative file paths whose download returns 500
        extra_items: Relative directory -> raw listing items appended as is
        requests: Every URL requested, in order
    """

    def __init__(self, files: dict[str, str | bytes]):
        self.files = {
            path: content.encode() if isinstance(content, str) else content
            for path, content in files.items()
        }
        self.listing_failures: dict[str, int] = {}
        self.download_failures: set[str] = set()
        self.extra_items: dict[str, list[dict]] = {}
        self.requests: list[httpx.URL] = []

    def _children(self, directory: str) -> list[dict] | None:
        prefix = f"{directory}/" if directory else ""
        found: dict[str, str] = {}
        for path in self.files:
            if not path.startswith(prefix):
                continue
            remainder = path[len(prefix):]
            name, _, rest = remainder.partition("/")
            found[name] = "dir" if rest else "file"

        if not found and directory:
            return None

        items = []
        for name, kind in sorted(found.items()):
            relative = f"{prefix}{name}"
            items.append(
                {
                    "name": name,
                    "path": f"{BASE_PATH}/{relative}",
                    "type": kind,
                    "download_url": (
                        f"{RAW_URL}/{REPO}/{BRANCH}/{BASE_PATH}/{relative}"
                        if kind == "file"
                        else None
                    ),
                }
            )
        return items + self.extra_items.get(directory, [])

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request.url)
        path = request.url.path

        if request.url.host == "raw.github.test":
            relative = path.removeprefix(f"/{REPO}/{BRANCH}/{BASE_PATH}/")
            if relative in self.download_failures or relative not in self.files:
                return httpx.Response(500, text="server error")
            return httpx.Response(200, content=self.files[relative])

        contents_prefix = f"/repos/{REPO}/contents/{BASE_PATH}"
        if not path.startswith(contents_prefix):
            return httpx.Response(404, json={"message": "Not Found"})
        relative = path[len(contents_prefix):].strip("/")

        if relative in self.listing_failures:
            return httpx.Response(self.listing_failures[relative], json={"message": "boom"})
        if relative in self.files:
            return httpx.Response(200, json={"name": relative.rsplit("/", 1)[-1], "type": "file"})

        children = self._children(relative)
        if children is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return httpx.Response(200, json=children)

    def source(self, **kwargs) -> GitHubTemplateSource:
        """A GitHubTemplateSource whose HTTP traffic is served by this fake."""
        client = httpx.Client(transport=httpx.MockTransport(self.handler), follow_redirects=True)
        return GitHubTemplateSource(
            repo=REPO,
            branch=BRANCH,
            base_path=BASE_PATH,
            api_url=API_URL,
            client=client,
            **kwargs,
        )

    def listing_paths(self) -> list[str]:
        """Contents API paths requested so far, relative to the templates root."""
        prefix = f"/repos/{REPO}/contents/{BASE_PATH}"
        return [
            url.path[len(prefix):].strip("/")
            for url in self.requests
            if url.path.startswith(prefix)
        ]


@pytest.fixture
def fake_github():
    """A FakeGitHub serving the standard template tree."""
    return FakeGitHub(TEMPLATE_FILES)


@pytest.fixture
def temp_downloads(tmp_path, monkeypatch):
    """Redirect ``tempfile`` to a directory the test can inspect."""
    import tempfile

    directory = tmp_path / "tmp"
    directory.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(directory))
    return directory


@pytest.fixture
def make_tree():
    """Factory fixture: ``make_tree(root, {"a/b.txt": "content"})``."""
    return write_tree


@pytest.fixture
def snapshot():
    """Factory fixture returning ``{posix_path: bytes}`` for a directory."""
    return read_tree
