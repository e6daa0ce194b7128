"""Read and write the ``plugins.json`` registry document."""

from __future__ import annotations

import json
from pathlib import Path

from .errors import MetadataError, RegistryFormatError
from .models import PluginRecord, Registry

REGISTRY_FILENAME = "plugins.json"


def parse_registry(payload: str) -> Registry:
    try:
        document = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise RegistryFormatError(f"registry is not valid JSON: {exc}") from exc
    if not isinstance(document, list):
        raise RegistryFormatError("registry must be a JSON array of plugin records")
    try:
        return [PluginRecord.from_dict(item, path=f"[{index}].") for index, item in enumerate(document)]
    except MetadataError as exc:
        raise RegistryFormatError(f"invalid registry entry: {exc}") from exc


def render_registry(registry: Registry) -> str:
    document = [entry.to_dict() for entry in registry]
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def read_registry(path: Path) -> Registry:
    return parse_registry(path.read_text(encoding="utf-8"))


def write_registry(path: Path, registry: Registry) -> Path:
    path.write_text(render_registry(registry), encoding="utf-8")
    return path
