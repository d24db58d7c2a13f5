"""
SSH Configuration Models

Dataclass models for SSH operations.
"""

from dataclasses import dataclass
from pathlib import Path

from hostdeploy.constants import SSH_CONNECTION_TIMEOUT


@dataclass
class SSHConfig:
    """SSH configuration for connecting to the target host."""

    key_path: str
    user: str

    @property
    def key_path_expanded(self) -> Path:
        """Get expanded key path (resolves ~)."""
        return Path(self.key_path).expanduser()

    def __repr__(self) -> str:
        return f"SSHConfig(user={self.user}, key={self.key_path})"


@dataclass
class SSHConnection:
    """SSH connection details for a specific host."""

    host: str
    config: SSHConfig
    port: int = 22

    @property
    def connection_string(self) -> str:
        """Get SSH connection string (user@host)."""
        return f"{self.config.user}@{self.host}"

    @property
    def ssh_options(self) -> list[str]:
        """Options shared by ssh invocations and the rsync transport."""
        options = [
            "-i",
            str(self.config.key_path_expanded),
            "-o",
            "BatchMode=yes",
            "-o",
            "StrictHostKeyChecking=no",
            "-o",
            "LogLevel=ERROR",
        ]
        if self.port != 22:
            options.extend(["-p", str(self.port)])
        return options

    def ssh_command_prefix(self, connect_timeout: int = SSH_CONNECTION_TIMEOUT) -> list[str]:
        """Get SSH command prefix for subprocess."""
        return [
            "ssh",
            *self.ssh_options,
            "-o",
            f"ConnectTimeout={connect_timeout}",
            self.connection_string,
        ]

    def __repr__(self) -> str:
        return f"SSHConnection(host={self.host}, user={self.config.user})"
