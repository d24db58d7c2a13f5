"""
Deploy Command

Run the full deployment pipeline: parameters, source, connectivity,
provisioning, deploy, proxy and validation.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Optional

from hostdeploy.base import BaseCommand
from hostdeploy.config import ParameterCollector
from hostdeploy.constants import DEFAULT_WORKDIR, SETTLE_SECONDS
from hostdeploy.context import RunContext
from hostdeploy.pipeline import DeploymentPipeline, deployment_stages
from hostdeploy.ui_components import show_deploy_summary, show_failure


@dataclass
class DeployOptions:
    """Options shared by the deploy and cleanup commands."""

    overrides: Dict[str, Optional[str]] = field(default_factory=dict)
    config_file: Optional[Path] = None
    workdir: Path = Path(DEFAULT_WORKDIR)
    interactive: bool = True
    settle_seconds: float = SETTLE_SECONDS
    external_probe: bool = True
    prompt: Optional[Callable[..., str]] = None

    def collector(self) -> ParameterCollector:
        return ParameterCollector(
            overrides=self.overrides,
            config_file=self.config_file,
            interactive=self.interactive,
            prompt=self.prompt,
        )


class DeployCommand(BaseCommand):
    """
    Deploy the repository's application to the remote host.

    Features:
    - Gated stages, first failure decides the exit code
    - Idempotent re-runs (fixed application name)
    - Per-run log file with the token redacted
    """

    operation = "deploy"

    def __init__(self, options: DeployOptions, channel=None, git=None, **kwargs):
        """
        Initialize deploy command.

        Args:
            options: DeployOptions with configuration
            channel: Remote channel override (SSHService built if None)
            git: Git client override
            **kwargs: verbose, log_dir, console (see BaseCommand)
        """
        super().__init__(**kwargs)
        self.options = options
        self.channel = channel
        self.git = git

    def header_details(self) -> dict:
        overrides = self.options.overrides
        return {
            "Host": overrides.get("server_address"),
            "Repository": overrides.get("repository_url"),
            "Branch": overrides.get("branch"),
        }

    def stages(self, collector: ParameterCollector):
        return deployment_stages(collector)

    def _context(self, logger) -> RunContext:
        return RunContext(
            logger,
            workdir=self.options.workdir,
            settle_seconds=self.options.settle_seconds,
            channel=self.channel,
            git=self.git,
            external_probe=self.options.external_probe,
        )

    def _pipeline(self) -> DeploymentPipeline:
        return DeploymentPipeline(self.stages(self.options.collector()))

    def execute(self) -> int:
        """Execute deploy command."""
        self.show_header(title="Deploy Application", details=self.header_details())
        logger = self.init_logger(self.operation)

        with self._context(logger) as ctx:
            result = self._pipeline().run(ctx)

        self._print_result(ctx, result)
        return result.exit_code

    def _print_result(self, ctx, result) -> None:
        if result.succeeded:
            show_deploy_summary(ctx.summary, ctx.log_path, console=self.console)
        else:
            show_failure(result, ctx.log_path, console=self.console)
