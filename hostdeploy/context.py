"""
Run context

One object carries everything a pipeline run shares between stages: the
logger, the collected parameters, the remote channel and the staged source.
It is opened at pipeline start and closed on every exit path.
"""

from pathlib import Path
from typing import Optional, Union

from hostdeploy.constants import DEFAULT_WORKDIR, SETTLE_SECONDS
from hostdeploy.logger import DeployLogger
from hostdeploy.models.deployment import (
    ConnectionConfig,
    DeploymentConfig,
    DeploymentSummary,
    RemoteApplicationState,
    StagedSource,
)
from hostdeploy.services.git_service import GitClient
from hostdeploy.services.ssh_service import SSHService


class RunContext:
    """State threaded through every stage of one run."""

    def __init__(
        self,
        logger: DeployLogger,
        workdir: Path = Path(DEFAULT_WORKDIR),
        settle_seconds: float = SETTLE_SECONDS,
        channel=None,
        git: Optional[GitClient] = None,
        external_probe: bool = True,
    ):
        """
        Args:
            logger: Open DeployLogger for this run
            workdir: Local directory holding working copies
            settle_seconds: Delay between container start and inspection
            channel: Remote execution channel (SSHService built from config if None)
            git: Git client (created if None)
            external_probe: Also probe the app from this machine after validation
        """
        self.logger = logger
        self.workdir = Path(workdir).expanduser()
        self.settle_seconds = settle_seconds
        self.git = git or GitClient(logger)
        self.external_probe = external_probe
        self.config: Optional[Union[DeploymentConfig, ConnectionConfig]] = None
        self.staged: Optional[StagedSource] = None
        self.app = RemoteApplicationState()
        self.summary: Optional[DeploymentSummary] = None
        self._channel = channel

    @property
    def channel(self):
        """Remote execution channel, built lazily once parameters are known."""
        if self._channel is None:
            if self.config is None:
                raise RuntimeError("Remote channel requested before parameters were collected")
            self._channel = SSHService(self.config.connection, self.logger, app=self.app)
        return self._channel

    @property
    def log_path(self) -> Path:
        return self.logger.log_path

    def close(self, exit_code: int) -> None:
        """Flush and close the run's log with its final status."""
        self.logger.close(exit_code)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return self.logger.__exit__(exc_type, exc_val, exc_tb)
