from __future__ import annotations

import json
from typing import Any

import pytest
import requests

from prp_core.errors import GitHubApiError
from prp_core.github import GitHubClient, PullRequest, find_pull_request_with_label

HTTP_OK = 200
HTTP_CREATED = 201


class _FakeResponse:
    def __init__(self, status_code: int, payload: Any = None, links: dict[str, dict[str, str]] | None = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = json.dumps(payload) if payload is not None else ""
        self.links = links or {}

    def json(self) -> Any:
        return self._payload


class _FakeSession:
    def __init__(self, responses: list[_FakeResponse]) -> None:
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any) -> _FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        return self.responses.pop(0)


def _pull(number: int, *labels: str) -> dict[str, Any]:
    return {
        "number": number,
        "html_url": f"https://github.com/acme/plugins/pull/{number}",
        "title": f"PR {number}",
        "labels": [{"name": label} for label in labels],
    }


def test_get_repository_reads_default_branch() -> None:
    session = _FakeSession([_FakeResponse(HTTP_OK, {"full_name": "acme/plugins", "default_branch": "main"})])
    client = GitHubClient("ghp_token", session=session)

    info = client.get_repository("acme", "plugins")

    assert info.default_branch == "main"
    call = session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "https://api.github.com/repos/acme/plugins"
    assert call["headers"]["authorization"] == "token ghp_token"
    assert call["timeout"] == 30.0


def test_list_open_pull_requests_follows_pagination() -> None:
    next_url = "https://api.github.com/repositories/1/pulls?state=open&per_page=100&page=2"
    session = _FakeSession(
        [
            _FakeResponse(HTTP_OK, [_pull(1, "other")], links={"next": {"url": next_url}}),
            _FakeResponse(HTTP_OK, [_pull(2, "Acme.Plugin-1.0.0", "release")]),
        ]
    )
    client = GitHubClient("t", api_url="https://api.github.com/", session=session)

    pulls = client.list_open_pull_requests("acme", "plugins")

    assert [pull.number for pull in pulls] == [1, 2]
    assert pulls[1].labels == ("Acme.Plugin-1.0.0", "release")
    assert session.calls[0]["params"] == {"state": "open", "per_page": 100}
    assert session.calls[1]["url"] == next_url
    assert session.calls[1]["params"] is None


def test_create_pull_request_and_labels() -> None:
    session = _FakeSession([_FakeResponse(HTTP_CREATED, _pull(7)), _FakeResponse(HTTP_OK, [{"name": "b"}])])
    client = GitHubClient("t", session=session)

    pull = client.create_pull_request("acme", "plugins", title="Release X 1", head="acme:b", base="main")
    client.add_labels("acme", "plugins", pull.number, ["b"])

    assert pull.number == 7
    assert session.calls[0]["json"] == {"title": "Release X 1", "head": "acme:b", "base": "main", "body": ""}
    assert session.calls[1]["url"] == "https://api.github.com/repos/acme/plugins/issues/7/labels"
    assert session.calls[1]["json"] == {"labels": ["b"]}


def test_error_status_raises_with_status() -> None:
    session = _FakeSession([_FakeResponse(422, {"message": "Validation Failed"})])
    client = GitHubClient("t", session=session)

    with pytest.raises(GitHubApiError, match="Validation Failed") as excinfo:
        client.create_pull_request("acme", "plugins", title="t", head="acme:b", base="main")
    assert excinfo.value.status == 422


def test_transport_error_is_wrapped() -> None:
    class _BrokenSession:
        def request(self, method, url, **kwargs):
            del method, url, kwargs
            raise requests.ConnectionError("connection refused")

    client = GitHubClient("t", session=_BrokenSession())
    with pytest.raises(GitHubApiError, match="connection refused") as excinfo:
        client.get_repository("acme", "plugins")
    assert excinfo.value.status is None
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


def test_find_pull_request_with_label() -> None:
    pulls = [PullRequest(number=1, html_url="u1", labels=("x",)), PullRequest(number=2, html_url="u2", labels=("b",))]

    assert find_pull_request_with_label(pulls, "b") == pulls[1]
    assert find_pull_request_with_label(pulls, "missing") is None
