"""GitHub repository URL handling."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote, urlsplit, urlunsplit

from .errors import RepositoryUrlError

GITHUB_URL_PREFIX = "https://github.com/"
TOKEN_USERNAME = "ignored-username"


@dataclass(frozen=True)
class GitHubRepository:
    owner: str
    name: str
    url: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


def parse_github_url(url: str) -> GitHubRepository:
    value = url.strip()
    if not value.startswith(GITHUB_URL_PREFIX):
        raise RepositoryUrlError("The metadata repository must be hosted on GitHub")
    segments = value[len(GITHUB_URL_PREFIX) :].strip("/").split("/")
    if len(segments) < 2 or not segments[0] or not segments[1]:
        raise RepositoryUrlError(f"expected {GITHUB_URL_PREFIX}<owner>/<repository>, got {url!r}")
    owner, name = segments[0], segments[1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    if not name:
        raise RepositoryUrlError(f"missing repository name in {url!r}")
    return GitHubRepository(owner=owner, name=name, url=value)


def authenticated_url(url: str, token: str) -> str:
    """Embed token credentials in an HTTPS remote URL; GitHub ignores the user name."""
    parts = urlsplit(url)
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    netloc = f"{TOKEN_USERNAME}:{quote(token, safe='')}@{host}"
    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))
