"""
Deployment pipeline

Runs stages in order and stops at the first failure. The result of the
failing stage (or a success result) decides the process exit code.
"""

from typing import Iterable, List

from hostdeploy.config import ParameterCollector
from hostdeploy.models.results import StageResult
from hostdeploy.stages import (
    CleanupOperator,
    CollectParameters,
    ConnectivityProber,
    DeploymentExecutor,
    DeploymentValidator,
    LocalSourceStager,
    RemoteProvisioner,
    ReverseProxyConfigurator,
    Stage,
)


class DeploymentPipeline:
    """Ordered, gated sequence of stages."""

    def __init__(self, stages: Iterable[Stage]):
        self.stages: List[Stage] = list(stages)

    def run(self, ctx) -> StageResult:
        """
        Run every stage until one fails.

        Args:
            ctx: RunContext shared by all stages

        Returns:
            The failing stage's result, or a success result for the last stage
        """
        result = StageResult.ok("pipeline")
        for stage in self.stages:
            result = stage.run(ctx)
            if not result.succeeded:
                ctx.logger.log(
                    f"Stopping after failed stage '{stage.name}' (exit {result.exit_code})",
                    "ERROR",
                )
                break
        ctx.logger.exit_code = int(result.exit_code)
        return result

    @property
    def stage_names(self) -> List[str]:
        return [stage.name for stage in self.stages]


def deployment_stages(collector: ParameterCollector) -> List[Stage]:
    """Stages of a full deployment run."""
    return [
        CollectParameters(collector),
        LocalSourceStager(),
        ConnectivityProber(),
        RemoteProvisioner(),
        DeploymentExecutor(),
        ReverseProxyConfigurator(),
        DeploymentValidator(),
    ]


def cleanup_stages(collector: ParameterCollector) -> List[Stage]:
    """Stages of a cleanup run: connection parameters, then removal."""
    return [
        CollectParameters(collector, connection_only=True),
        CleanupOperator(),
    ]
