"""End-to-end release publishing: clone, merge, commit, push, pull request."""

from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path

from .config import PublisherSettings
from .git import GitClient, GitClientConfig
from .github import GitHubClient, find_pull_request_with_label
from .merge import merge_release
from .metadata import branch_name, release_title, validate_single_release
from .models import PluginRecord
from .registry_file import read_registry, write_registry
from .repository import GitHubRepository, authenticated_url

logger = logging.getLogger(__name__)

TEMP_DIR_PREFIX = "plugin-metadata-"


@dataclass(frozen=True)
class PublishRequest:
    metadata: PluginRecord
    binary_url: str
    repository: GitHubRepository
    token: str


@dataclass(frozen=True)
class PublishResult:
    branch: str
    title: str
    pull_request_url: str
    pull_request_number: int
    reused: bool


class ReleasePublisher:
    """Publishes one plugin release into a GitHub-hosted ``plugins.json`` registry.

    Git and GitHub collaborators are built from ``settings`` unless injected.
    Failures from either are not caught here; a failed run must be started
    again from scratch.
    """

    def __init__(
        self,
        settings: PublisherSettings | None = None,
        *,
        git: GitClient | None = None,
        github: GitHubClient | None = None,
    ) -> None:
        self.settings = settings or PublisherSettings()
        self._git = git
        self._github = github

    def _git_client(self) -> GitClient:
        if self._git is None:
            self._git = GitClient(
                GitClientConfig(
                    executable=self.settings.git_executable,
                    author_name=self.settings.commit_author_name,
                    author_email=self.settings.commit_author_email,
                )
            )
        return self._git

    def _github_client(self, token: str) -> GitHubClient:
        if self._github is None:
            self._github = GitHubClient(
                token,
                api_url=self.settings.github_api_url,
                timeout=self.settings.timeout_seconds,
            )
        return self._github

    def publish(self, request: PublishRequest) -> PublishResult:
        metadata = validate_single_release(request.metadata)
        repository = request.repository
        branch = branch_name(metadata)
        title = release_title(metadata)
        remote_url = authenticated_url(repository.url, request.token)
        git = self._git_client()

        with tempfile.TemporaryDirectory(prefix=TEMP_DIR_PREFIX) as tmp:
            workdir = Path(tmp)
            logger.info("Cloning repo %s...", repository.url)
            git.clone(remote_url, workdir)

            registry_path = workdir / self.settings.registry_file
            logger.info("Reading plugin metadata...")
            registry = read_registry(registry_path)

            logger.info("Updating plugin metadata...")
            registry = merge_release(registry, metadata, request.binary_url)

            logger.info("Writing plugin metadata updates to file...")
            write_registry(registry_path, registry)

            logger.info("Committing changes; branch is %s...", branch)
            git.checkout_new_branch(workdir, branch)
            git.commit_all(workdir, title)

            logger.info("Force-pushing changes to %s", repository.url)
            git.add_remote(workdir, self.settings.remote_name, remote_url)
            git.push(workdir, self.settings.remote_name, branch, force=True)

        github = self._github_client(request.token)
        info = github.get_repository(repository.owner, repository.name)

        # The branch was force-pushed, so an open PR for it already shows the new commit.
        existing = find_pull_request_with_label(
            github.list_open_pull_requests(repository.owner, repository.name),
            branch,
        )
        if existing is not None:
            logger.info("Found existing PR for repo %s: %s", repository.url, existing.html_url)
            return PublishResult(
                branch=branch,
                title=title,
                pull_request_url=existing.html_url,
                pull_request_number=existing.number,
                reused=True,
            )

        logger.info("Creating pull request for repo %s", repository.url)
        pull = github.create_pull_request(
            repository.owner,
            repository.name,
            title=title,
            head=f"{repository.owner}:{branch}",
            base=info.default_branch,
            body="",
        )
        github.add_labels(repository.owner, repository.name, pull.number, [branch])
        logger.info("Created pull request for %s: %s", repository.url, pull.html_url)
        return PublishResult(
            branch=branch,
            title=title,
            pull_request_url=pull.html_url,
            pull_request_number=pull.number,
            reused=False,
        )
