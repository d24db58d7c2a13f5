"""
Deployment Models

Deployment parameters, deploy mode and the remote application identity.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from hostdeploy.constants import (
    APP_IMAGE,
    APP_NAME,
    APP_NETWORK,
    COMPOSE_PROJECT,
    NGINX_SITES_AVAILABLE,
    NGINX_SITES_ENABLED,
    REMOTE_APP_DIRNAME,
)
from hostdeploy.models.ssh import SSHConfig, SSHConnection


class DeployMode(Enum):
    """How the staged application is built on the remote host."""

    DOCKERFILE = "dockerfile"
    COMPOSE = "compose"


@dataclass
class DeploymentConfig:
    """
    Parameters for one deployment run.

    The access token lives only in memory: it is excluded from repr and
    equality, and is never persisted.
    """

    repository_url: str
    server_address: str
    ssh_key_path: str
    application_port: int
    access_token: str = field(default="", repr=False, compare=False)
    branch: str = "main"
    ssh_user: str = "ubuntu"

    @property
    def repository_name(self) -> str:
        """Repository directory name (basename without .git)."""
        name = self.repository_url.rstrip("/").rsplit("/", 1)[-1]
        name = name.rsplit(":", 1)[-1]
        if name.endswith(".git"):
            name = name[: -len(".git")]
        return name

    @property
    def ssh_config(self) -> SSHConfig:
        return SSHConfig(key_path=self.ssh_key_path, user=self.ssh_user)

    @property
    def connection(self) -> SSHConnection:
        return SSHConnection(host=self.server_address, config=self.ssh_config)


@dataclass
class ConnectionConfig:
    """Connection-only parameters (used by cleanup mode)."""

    server_address: str
    ssh_key_path: str
    ssh_user: str = "ubuntu"

    @property
    def ssh_config(self) -> SSHConfig:
        return SSHConfig(key_path=self.ssh_key_path, user=self.ssh_user)

    @property
    def connection(self) -> SSHConnection:
        return SSHConnection(host=self.server_address, config=self.ssh_config)


@dataclass
class StagedSource:
    """Local working copy ready for transfer."""

    path: Path
    mode: DeployMode
    manifest: str

    def __repr__(self) -> str:
        return f"StagedSource(path={self.path}, mode={self.mode.value})"


@dataclass(frozen=True)
class RemoteApplicationState:
    """
    Identity of the deployed application on the remote host.

    Every name derives from the fixed application identifier, so a later run
    can always find and replace (or remove) what an earlier run created.
    """

    container_name: str = APP_NAME
    image: str = APP_IMAGE
    network_name: str = APP_NETWORK
    compose_project: str = COMPOSE_PROJECT
    app_dirname: str = REMOTE_APP_DIRNAME

    @property
    def app_dir(self) -> str:
        """Remote application directory (shell form, relative to $HOME)."""
        return f"$HOME/{self.app_dirname}"

    @property
    def proxy_rule_name(self) -> str:
        return f"{self.container_name}.conf"

    @property
    def proxy_available_path(self) -> str:
        return f"{NGINX_SITES_AVAILABLE}/{self.proxy_rule_name}"

    @property
    def proxy_enabled_path(self) -> str:
        return f"{NGINX_SITES_ENABLED}/{self.proxy_rule_name}"


@dataclass
class DeploymentSummary:
    """What a finished pipeline run produced (for the closing report)."""

    server_address: str
    mode: Optional[DeployMode] = None
    container_action: Optional[str] = None
    proxy_action: Optional[str] = None

    @property
    def url(self) -> str:
        return f"http://{self.server_address}/"
