"""Credential redaction for log output."""

from __future__ import annotations

import re

_SENSITIVE_KEYS = ("password", "token", "authorization", "bearer")
_URL_CREDENTIALS_RE = re.compile(r"(://[^/\s:@]+:)[^@\s/]+@")


def redact_url(value: str) -> str:
    return _URL_CREDENTIALS_RE.sub(r"\1***@", value)


def redact_command_for_log(command: list[str]) -> list[str]:
    redacted: list[str] = []
    for item in command:
        lower = item.lower()
        if "://" in item:
            redacted.append(redact_url(item))
            continue
        if "=" in item and any(key in lower for key in _SENSITIVE_KEYS):
            key, _ = item.split("=", 1)
            redacted.append(f"{key}=***")
            continue
        redacted.append(item)
    return redacted


def redact_headers(headers: dict[str, str]) -> dict[str, str]:
    return {
        key: ("***" if any(marker in key.lower() for marker in _SENSITIVE_KEYS) else value)
        for key, value in headers.items()
    }
