from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer

from prp_core.config import GITHUB_OAUTH_TOKEN_ENV_NAME, load_settings
from prp_core.errors import ConfigError, MetadataError, PublishError, RepositoryUrlError
from prp_core.merge import merge_release
from prp_core.metadata import load_plugin_metadata, validate_single_release
from prp_core.models import PluginRecord
from prp_core.publisher import PublishRequest, ReleasePublisher
from prp_core.registry_file import REGISTRY_FILENAME, read_registry, render_registry, write_registry
from prp_core.repository import GitHubRepository, parse_github_url

app = typer.Typer(help="Publish plugin releases into a GitHub-hosted plugin registry", pretty_exceptions_enable=False)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# -------------------------
# Helpers
# -------------------------
def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)
    # urllib3 logs full request lines at DEBUG.
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def _read_metadata_text(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise typer.BadParameter(f"file not found: {source}", param_hint="--metadata")
    return path.read_text(encoding="utf-8")


def load_metadata_option(source: str) -> PluginRecord:
    try:
        return validate_single_release(load_plugin_metadata(_read_metadata_text(source)))
    except MetadataError as exc:
        raise typer.BadParameter(str(exc), param_hint="--metadata") from exc


def parse_repo_option(url: str) -> GitHubRepository:
    try:
        return parse_github_url(url)
    except RepositoryUrlError as exc:
        raise typer.BadParameter(str(exc), param_hint="--metadata-repo-url") from exc


# -------------------------
# Commands
# -------------------------
@app.command("publish")
def publish(
    metadata: str = typer.Option(
        ..., "--metadata", help="plugin metadata as produced by 'gradle releaseBundle' ('-' reads stdin)"
    ),
    binary_url: str = typer.Option(..., "--binary-url", help="plugin binary URL"),
    metadata_repo_url: str = typer.Option(..., "--metadata-repo-url", help="plugin metadata repository URL"),
    oauth_token: str = typer.Option(
        ...,
        "--oauth-token",
        envvar=GITHUB_OAUTH_TOKEN_ENV_NAME,
        help="GitHub OAuth token",
        show_default=False,
        show_envvar=True,
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="TOML file with a [publisher] section"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log git and HTTP detail"),
):
    """
    Merge one release into the registry and open (or reuse) its pull request.

    All input is validated before anything touches the network; git and
    GitHub failures are reported and re-raised.
    """
    _configure_logging(verbose)
    record = load_metadata_option(metadata)
    repository = parse_repo_option(metadata_repo_url)
    try:
        settings = load_settings(config_path=config)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc

    publisher = ReleasePublisher(settings)
    try:
        result = publisher.publish(
            PublishRequest(
                metadata=record,
                binary_url=binary_url,
                repository=repository,
                token=oauth_token,
            )
        )
    except Exception as e:
        typer.echo(f"ERROR publishing release: {type(e).__name__}: {e}", err=True)
        raise

    action = "reused" if result.reused else "created"
    typer.echo(f"[prp:publish] {action} pull request #{result.pull_request_number} for {result.branch}")
    typer.echo(f"[prp:publish] url={result.pull_request_url}")


@app.command("show-merge")
def show_merge(
    metadata: str = typer.Option(..., "--metadata", help="plugin metadata file ('-' reads stdin)"),
    binary_url: str = typer.Option(..., "--binary-url", help="plugin binary URL"),
    registry: Path = typer.Option(Path(REGISTRY_FILENAME), "--registry", help="local registry file"),
    write: bool = typer.Option(False, "--write", help="Write the merged registry back instead of printing it"),
):
    """Merge a release into a local registry file without git or network access."""
    record = load_metadata_option(metadata)
    if not registry.is_file():
        raise typer.BadParameter(f"file not found: {registry}", param_hint="--registry")
    try:
        merged = merge_release(read_registry(registry), record, binary_url)
    except PublishError as e:
        typer.echo(f"ERROR merging release: {type(e).__name__}: {e}", err=True)
        raise typer.Exit(1)

    if write:
        write_registry(registry, merged)
        typer.echo(f"[prp:show-merge] wrote {registry} ({len(merged)} plugins)")
        return
    typer.echo(render_registry(merged), nl=False)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        app(args=argv, prog_name="prp")
    except SystemExit as exc:
        if exc.code is None:
            return 0
        return exc.code if isinstance(exc.code, int) else 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
