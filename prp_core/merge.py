"""Merge a single plugin release into the registry."""

from __future__ import annotations

from dataclasses import replace

from .models import PluginRecord, Registry

VERSION_PREFIX = "v"


def normalize_version(version: str) -> str:
    # Literal prefix only: "version2" becomes "ersion2".
    if version.startswith(VERSION_PREFIX):
        return version[len(VERSION_PREFIX) :]
    return version


def clean(record: PluginRecord) -> PluginRecord:
    releases = [replace(release, version=normalize_version(release.version)) for release in record.releases]
    return replace(record, releases=releases)


def with_url(record: PluginRecord, url: str) -> PluginRecord:
    return replace(record, releases=[replace(record.releases[0], url=url)])


def find_plugin(registry: Registry, plugin_id: str) -> int | None:
    for index, entry in enumerate(registry):
        if entry.id == plugin_id:
            return index
    return None


def insert_release(registry: Registry, record: PluginRecord) -> Registry:
    """Prepend the release to a known plugin, or append the plugin itself.

    Only ``releases`` accumulates on a known plugin; its description and
    provider are kept as they are in the registry.
    """
    index = find_plugin(registry, record.id)
    if index is None:
        registry.append(record)
    else:
        registry[index].releases.insert(0, record.releases[0])
    return registry


def merge_release(registry: Registry, record: PluginRecord, binary_url: str) -> Registry:
    return insert_release(registry, with_url(clean(record), binary_url))
