"""Core library for publishing plugin releases into a GitHub-hosted registry."""

from .config import GITHUB_OAUTH_TOKEN_ENV_NAME, PublisherSettings, load_settings
from .errors import (
    ConfigError,
    GitCommandError,
    GitHubApiError,
    MetadataError,
    PublishError,
    RegistryFormatError,
    RepositoryUrlError,
)
from .merge import clean, find_plugin, insert_release, merge_release, normalize_version, with_url
from .metadata import branch_name, load_plugin_metadata, release_title, validate_single_release
from .models import PluginRecord, Registry, ReleaseRecord
from .publisher import PublishRequest, PublishResult, ReleasePublisher
from .registry_file import REGISTRY_FILENAME, parse_registry, read_registry, render_registry, write_registry
from .repository import GitHubRepository, parse_github_url

__all__ = [
    "GITHUB_OAUTH_TOKEN_ENV_NAME",
    "PublisherSettings",
    "load_settings",
    "PublishError",
    "MetadataError",
    "RepositoryUrlError",
    "ConfigError",
    "RegistryFormatError",
    "GitCommandError",
    "GitHubApiError",
    "PluginRecord",
    "ReleaseRecord",
    "Registry",
    "normalize_version",
    "clean",
    "with_url",
    "find_plugin",
    "insert_release",
    "merge_release",
    "load_plugin_metadata",
    "validate_single_release",
    "branch_name",
    "release_title",
    "REGISTRY_FILENAME",
    "parse_registry",
    "render_registry",
    "read_registry",
    "write_registry",
    "GitHubRepository",
    "parse_github_url",
    "PublishRequest",
    "PublishResult",
    "ReleasePublisher",
]
