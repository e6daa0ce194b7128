"""Minimal GitHub REST v3 client for registry pull requests."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

import requests
from requests.exceptions import RequestException

from .errors import GitHubApiError
from .security import redact_headers

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
_MAX_PAGES = 50


@dataclass(frozen=True)
class RepositoryInfo:
    full_name: str
    default_branch: str


@dataclass(frozen=True)
class PullRequest:
    number: int
    html_url: str
    title: str = ""
    labels: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "PullRequest":
        labels = payload.get("labels") or []
        return cls(
            number=int(payload["number"]),
            html_url=str(payload.get("html_url") or ""),
            title=str(payload.get("title") or ""),
            labels=tuple(str(item.get("name")) for item in labels if isinstance(item, dict) and item.get("name")),
        )


def _error_body_snippet(response: requests.Response, max_chars: int = 200) -> str:
    body = response.text or ""
    compact = " ".join(body.split())
    return compact[:max_chars]


def find_pull_request_with_label(pulls: Iterable[PullRequest], label: str) -> PullRequest | None:
    for pull in pulls:
        if label in pull.labels:
            return pull
    return None


class GitHubClient:
    def __init__(
        self,
        token: str,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = float(timeout)
        self.session = session or requests.Session()
        self.headers: dict[str, str] = {
            "accept": "application/vnd.github+json",
            "authorization": f"token {token}",
        }

    def get_repository(self, owner: str, name: str) -> RepositoryInfo:
        payload = self._request("GET", f"/repos/{owner}/{name}").json()
        return RepositoryInfo(
            full_name=str(payload.get("full_name") or f"{owner}/{name}"),
            default_branch=str(payload["default_branch"]),
        )

    def list_open_pull_requests(self, owner: str, name: str) -> list[PullRequest]:
        pulls: list[PullRequest] = []
        url: str | None = f"{self.api_url}/repos/{owner}/{name}/pulls"
        params: dict[str, Any] | None = {"state": "open", "per_page": 100}
        pages = 0
        while url and pages < _MAX_PAGES:
            response = self._request("GET", url, params=params)
            pulls.extend(PullRequest.from_payload(item) for item in response.json())
            # The next link already carries the query string.
            url = response.links.get("next", {}).get("url")
            params = None
            pages += 1
        return pulls

    def create_pull_request(
        self,
        owner: str,
        name: str,
        *,
        title: str,
        head: str,
        base: str,
        body: str = "",
    ) -> PullRequest:
        payload = {"title": title, "head": head, "base": base, "body": body}
        response = self._request("POST", f"/repos/{owner}/{name}/pulls", json=payload)
        return PullRequest.from_payload(response.json())

    def add_labels(self, owner: str, name: str, number: int, labels: Sequence[str]) -> None:
        self._request("POST", f"/repos/{owner}/{name}/issues/{number}/labels", json={"labels": list(labels)})

    def _request(self, method: str, path_or_url: str, **kwargs: Any) -> requests.Response:
        url = path_or_url if path_or_url.startswith(("http://", "https://")) else f"{self.api_url}{path_or_url}"
        logger.debug("github request method=%s url=%s headers=%s", method, url, redact_headers(self.headers))
        try:
            response = self.session.request(method, url, headers=self.headers, timeout=self.timeout, **kwargs)
        except RequestException as exc:
            raise GitHubApiError(f"github request failed method={method} url={url}: {exc}") from exc
        status = response.status_code
        if status >= 400:
            snippet = _error_body_snippet(response)
            raise GitHubApiError(
                f"github request failed method={method} url={url} status={status} body='{snippet}'",
                status=status,
            )
        return response
