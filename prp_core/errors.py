"""Error types raised by the plugin registry publisher."""

from __future__ import annotations


class PublishError(Exception):
    """Base error for every publisher failure."""


class MetadataError(PublishError, ValueError):
    """Plugin release descriptor is malformed."""


class RepositoryUrlError(PublishError, ValueError):
    """Metadata repository URL is not a supported GitHub URL."""


class ConfigError(PublishError):
    """Publisher configuration could not be loaded."""


class RegistryFormatError(PublishError, ValueError):
    """Registry document is not a list of plugin records."""


class GitCommandError(PublishError):
    """A git invocation failed."""


class GitHubApiError(PublishError):
    """GitHub REST API call failed."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status
