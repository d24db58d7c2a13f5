"""Git client used to stage the application source locally."""

import os
import shlex
import subprocess
from pathlib import Path
from typing import Optional
from urllib.parse import quote, urlsplit, urlunsplit

from hostdeploy.models.results import ExecutionResult


def authenticated_url(url: str, token: str) -> str:
    """
    Build a one-time clone URL carrying the token.

    Only https:// URLs can carry a token; SSH-style URLs authenticate with
    the user's keys and are returned unchanged.
    """
    if not token or not url.startswith("https://"):
        return url
    parts = urlsplit(url)
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    netloc = f"{quote(token, safe='')}@{host}"
    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))


class GitClient:
    """Thin wrapper over the git CLI."""

    def __init__(self, logger=None, git_binary: str = "git"):
        self.logger = logger
        self.git_binary = git_binary

    def run(self, args: list[str], cwd: Optional[Path] = None) -> ExecutionResult:
        """
        Run a git command.

        Args:
            args: Arguments after `git`
            cwd: Working directory

        Returns:
            ExecutionResult with captured output
        """
        cmd = [self.git_binary, *args]
        command = " ".join(shlex.quote(part) for part in cmd)
        if self.logger:
            self.logger.log_command(command)

        env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                env=env,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            return ExecutionResult(returncode=127, stderr=str(e), command=command)

        if self.logger:
            self.logger.log_output(result.stdout, "stdout")
            self.logger.log_output(result.stderr, "stderr")

        return ExecutionResult(
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            command=command,
        )

    def clone(self, url: str, branch: str, dest: Path) -> ExecutionResult:
        return self.run(["clone", "--branch", branch, url, str(dest)])

    def fetch(self, repo: Path, url: str, branch: str) -> ExecutionResult:
        # Fetch from an explicit URL so the credentials never touch .git/config
        refspec = f"+refs/heads/{branch}:refs/remotes/origin/{branch}"
        return self.run(["fetch", url, refspec], cwd=repo)

    def checkout(self, repo: Path, branch: str) -> ExecutionResult:
        result = self.run(["checkout", branch], cwd=repo)
        if result.is_failure:
            result = self.run(["checkout", "-b", branch, f"origin/{branch}"], cwd=repo)
        return result

    def fast_forward(self, repo: Path, branch: str) -> ExecutionResult:
        return self.run(["merge", "--ff-only", f"origin/{branch}"], cwd=repo)

    def set_remote_url(self, repo: Path, url: str, remote: str = "origin") -> ExecutionResult:
        return self.run(["remote", "set-url", remote, url], cwd=repo)

    def get_remote_url(self, repo: Path, remote: str = "origin") -> str:
        result = self.run(["remote", "get-url", remote], cwd=repo)
        return result.stdout.strip() if result.is_success else ""
