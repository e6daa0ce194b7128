"""Plugin release descriptor loading and validation."""

from __future__ import annotations

import json

from .errors import MetadataError
from .models import PluginRecord


def load_plugin_metadata(payload: str) -> PluginRecord:
    try:
        document = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise MetadataError(f"plugin metadata is not valid JSON: {exc}") from exc
    return PluginRecord.from_dict(document)


def validate_single_release(record: PluginRecord) -> PluginRecord:
    if not record.releases:
        raise MetadataError("Plugin metadata does not include any releases")
    if len(record.releases) > 1:
        raise MetadataError("Plugin metadata cannot include more than one release")
    return record


def branch_name(record: PluginRecord) -> str:
    return f"{record.id}-{record.releases[0].version}"


def release_title(record: PluginRecord) -> str:
    return f"Release {record.id} {record.releases[0].version}"
