"""git CLI wrapper used to clone, commit and push the registry repository."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from .errors import GitCommandError
from .security import redact_command_for_log, redact_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitClientConfig:
    executable: str = "git"
    timeout_seconds: float = 300.0
    author_name: str | None = None
    author_email: str | None = None


class GitClient:
    """Thin git CLI wrapper; every failure raises ``GitCommandError``."""

    def __init__(self, config: GitClientConfig | None = None) -> None:
        self.config = config or GitClientConfig()

    def clone(self, url: str, directory: Path) -> Path:
        self._run(["clone", url, str(directory)])
        return directory

    def checkout_new_branch(self, workdir: Path, branch: str) -> None:
        self._run(["checkout", "-b", branch], cwd=workdir)

    def commit_all(self, workdir: Path, message: str) -> None:
        self._run(["add", "--all"], cwd=workdir)
        self._run(["commit", "-m", message], cwd=workdir)

    def add_remote(self, workdir: Path, name: str, url: str) -> None:
        self._run(["remote", "add", name, url], cwd=workdir)

    def push(self, workdir: Path, remote: str, branch: str, *, force: bool = True) -> None:
        command = ["push", remote, f"{branch}:{branch}"]
        if force:
            command.append("--force")
        self._run(command, cwd=workdir)

    def _identity_args(self) -> list[str]:
        args: list[str] = []
        if self.config.author_name:
            args.extend(["-c", f"user.name={self.config.author_name}"])
        if self.config.author_email:
            args.extend(["-c", f"user.email={self.config.author_email}"])
        return args

    def _run(self, args: list[str], *, cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
        command = [self.config.executable, *self._identity_args(), *args]
        redacted = " ".join(redact_command_for_log(command))
        timeout = max(float(self.config.timeout_seconds), 1.0)
        logger.debug("git command cwd=%s cmd=%s", cwd, redacted)
        try:
            result = subprocess.run(
                command,
                check=False,
                capture_output=True,
                text=True,
                timeout=timeout,
                cwd=str(cwd) if cwd is not None else None,
            )
        except FileNotFoundError as exc:
            raise GitCommandError(
                f"git CLI not found ({self.config.executable}). Install git and ensure it is available in PATH."
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise GitCommandError(f"git command timed out after {timeout:.1f}s cmd='{redacted}'") from exc
        if result.returncode != 0:
            raise GitCommandError(_format_failure(redacted, result.returncode, result.stderr))
        return result


def _format_failure(redacted: str, code: int, stderr: str | None) -> str:
    detail = redact_url(" ".join((stderr or "").split()))
    if detail:
        return f"git command failed (exit={code}) cmd='{redacted}' err='{detail}'"
    return f"git command failed (exit={code}) cmd='{redacted}'"
