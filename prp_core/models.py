"""Plugin registry records and their JSON mapping."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .errors import MetadataError

CHECKSUM_KEY = "sha512sum"


def _ensure_mapping(data: Any, path: str) -> Mapping[str, Any]:
    if isinstance(data, Mapping):
        return data
    raise MetadataError(f"{path or 'metadata'} must be an object")


def _required_str(data: Mapping[str, Any], key: str, path: str) -> str:
    value = data.get(key)
    if value is None:
        raise MetadataError(f"{path}{key} is required")
    if not isinstance(value, str):
        raise MetadataError(f"{path}{key} must be a string")
    return value


def _optional_str(data: Mapping[str, Any], key: str, path: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise MetadataError(f"{path}{key} must be a string")
    return value


@dataclass
class ReleaseRecord:
    version: str
    date: str
    requires: str
    checksum: str
    state: str | None = None
    url: str = ""

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "") -> "ReleaseRecord":
        raw = _ensure_mapping(data, path.rstrip("."))
        return cls(
            version=_required_str(raw, "version", path),
            date=_required_str(raw, "date", path),
            requires=_required_str(raw, "requires", path),
            checksum=_required_str(raw, CHECKSUM_KEY, path),
            state=_optional_str(raw, "state", path),
            url=_optional_str(raw, "url", path) or "",
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "version": self.version,
            "date": self.date,
            "requires": self.requires,
            CHECKSUM_KEY: self.checksum,
        }
        if self.state is not None:
            payload["state"] = self.state
        payload["url"] = self.url
        return payload


@dataclass
class PluginRecord:
    """One plugin identity in the registry; ``releases`` is newest first."""

    id: str
    description: str
    provider: str
    releases: list[ReleaseRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "") -> "PluginRecord":
        raw = _ensure_mapping(data, path.rstrip("."))
        releases_raw = raw.get("releases")
        if releases_raw is None:
            releases_raw = []
        if not isinstance(releases_raw, list):
            raise MetadataError(f"{path}releases must be a list")
        releases = [
            ReleaseRecord.from_dict(item, path=f"{path}releases[{index}].")
            for index, item in enumerate(releases_raw)
        ]
        return cls(
            id=_required_str(raw, "id", path),
            description=_required_str(raw, "description", path),
            provider=_required_str(raw, "provider", path),
            releases=releases,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "provider": self.provider,
            "releases": [release.to_dict() for release in self.releases],
        }


Registry = list[PluginRecord]
