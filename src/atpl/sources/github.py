"""GitHub-hosted template source.

Lists directories through the repository contents API and downloads each
file from the ``download_url`` the listing reports::

    GET {api_url}/repos/{repo}/contents/{base_path}/{path}?ref={branch}
    -> [{"name": ..., "path": ..., "type": "file" | "dir", "download_url": ...}, ...]
"""

import os

import httpx

from atpl.errors import DownloadError, ListingError
from atpl.sources.base import TemplateSource
from atpl.tree import DIR, FILE, TreeEntry
from atpl.utils.logger import get_logger

logger = get_logger("github")

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_REPO = "soundstep/app-templates"
DEFAULT_BRANCH = "main"
DEFAULT_BASE_PATH = "templates"


def github_token(explicit: str | None = None) -> str | None:
    """Return a sanitized GitHub token (explicit value first) or None."""
    return ((explicit or os.getenv("GH_TOKEN") or os.getenv("GITHUB_TOKEN") or "").strip()) or None


def github_headers(token: str | None = None) -> dict[str, str]:
    """Request headers for the contents API, with auth only when a token exists."""
    headers = {"Accept": "application/vnd.github+json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _join(*parts: str) -> str:
    cleaned = [part.strip("/") for part in parts if part and part.strip("/") not in ("", ".")]
    return "/".join(cleaned)


def _is_safe_name(name) -> bool:
    """A single path component that stays inside its parent directory."""
    return (
        isinstance(name, str)
        and name not in ("", ".", "..")
        and "/" not in name
        and "\\" not in name
        and "\0" not in name
    )


class GitHubTemplateSource(TemplateSource):
    """Templates stored under ``base_path`` in a GitHub repository.

    Attributes:
        repo: ``owner/name`` of the repository
        branch: Git ref the listing is read from
        base_path: Directory in the repository that holds the templates
        api_url: Root of the GitHub REST API
    """

    def __init__(
        self,
        repo: str = DEFAULT_REPO,
        branch: str = DEFAULT_BRANCH,
        *,
        base_path: str = DEFAULT_BASE_PATH,
        api_url: str = DEFAULT_API_URL,
        token: str | None = None,
        timeout: float = 30,
        client: httpx.Client | None = None,
    ):
        self.repo = repo
        self.branch = branch
        self.base_path = base_path
        self.api_url = api_url.rstrip("/")
        self._owns_client = client is None
        self.client = client or httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            headers=github_headers(github_token(token)),
        )

    def describe(self) -> str:
        return f"github.com/{self.repo}"

    def contents_url(self, path: str) -> str:
        return f"{self.api_url}/repos/{self.repo}/contents/{_join(self.base_path, path)}"

    def list_entries(self, path: str) -> list[TreeEntry]:
        url = self.contents_url(path)
        logger.debug(f"GET {url}?ref={self.branch}")

        try:
            response = self.client.get(url, params={"ref": self.branch})
        except httpx.HTTPError as e:
            raise ListingError(path, f"Request for {url} failed: {e}") from e

        if response.status_code == 404:
            raise ListingError(path, f"{_join(self.base_path, path)} not found", not_found=True)
        if response.status_code != 200:
            raise ListingError(path, f"GitHub API returned {response.status_code} for {url}")

        try:
            payload = response.json()
        except ValueError as e:
            raise ListingError(path, f"Failed to parse listing JSON for {url}: {e}") from e

        # A file path answers with a single object instead of a list
        if not isinstance(payload, list):
            raise ListingError(
                path, f"{_join(self.base_path, path)} is not a directory", not_found=True
            )

        entries = []
        for item in payload:
            if not isinstance(item, dict):
                raise ListingError(path, f"Malformed listing item in {url}: {item!r}")
            kind = item.get("type")
            if kind not in (FILE, DIR):
                # symlinks and submodules have no plain content to copy
                logger.debug(f"Skipping {item.get('path')} (type {kind})")
                continue
            name = item.get("name")
            if not _is_safe_name(name):
                raise ListingError(path, f"Invalid entry name {name!r} in {url}")
            entries.append(
                TreeEntry(
                    name=name,
                    path=_join(path, name),
                    kind=kind,
                    download_url=item.get("download_url"),
                )
            )
        return entries

    def read_bytes(self, entry: TreeEntry) -> bytes:
        if not entry.download_url:
            raise DownloadError(entry.path, f"No download URL for {entry.path}")

        logger.debug(f"GET {entry.download_url}")
        try:
            response = self.client.get(entry.download_url)
        except httpx.HTTPError as e:
            raise DownloadError(entry.path, f"Download of {entry.path} failed: {e}") from e

        if response.status_code != 200:
            raise DownloadError(
                entry.path, f"Download of {entry.path} failed with {response.status_code}"
            )
        return response.content

    def close(self) -> None:
        if self._owns_client:
            self.client.close()
