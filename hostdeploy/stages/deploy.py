"""Deployment Executor: transfer the staged source, then build and run it."""

import time

from hostdeploy.exceptions import DeploymentError
from hostdeploy.logger import run_with_progress
from hostdeploy.models.deployment import DeploymentSummary, StagedSource
from hostdeploy.remote.operations import DeployApplication, InspectApplication
from hostdeploy.stages.base import Stage

# Remote failure markers -> operator-facing messages
DEPLOY_ERRORS = {
    "missing_app_dir": "Remote application directory is missing",
    "missing_build_context": "No Dockerfile or docker-compose file found on remote",
    "compose_missing": "No compose tool available on remote",
    "compose_up_failed": "docker compose up failed",
    "build_failed": "Docker image build failed",
    "run_failed": "Container failed to start (name collision or run error)",
}


class DeploymentExecutor(Stage):
    """Mirror the source to the host and replace the running application."""

    name = "deploy_application"
    title = "Deploying Application"

    def execute(self, ctx):
        action = self.deploy(ctx, ctx.staged)
        return f"Application container {action}"

    def deploy(self, ctx, staged: StagedSource) -> str:
        config = ctx.config
        logger = ctx.logger
        channel = ctx.channel
        app = ctx.app

        logger.log(f"Rsync to {config.connection.connection_string}:~/{app.app_dirname}")
        transfer = run_with_progress(
            logger, "Transferring project files", channel.mirror, staged.path, app.app_dirname
        )
        if transfer.is_failure:
            raise DeploymentError("File transfer failed", context=transfer.stderr.strip())
        logger.log("Files transferred, running remote build and start")

        operation = DeployApplication(
            mode=staged.mode, port=config.application_port, manifest=staged.manifest
        )
        result = run_with_progress(
            logger, f"Building and starting ({staged.mode.value})", channel.run_operation, operation
        )
        markers = result.markers()
        if result.is_failure:
            error = markers.get("error", "")
            raise DeploymentError(
                DEPLOY_ERRORS.get(error, "Remote build/run failed"),
                context=result.stderr.strip().splitlines()[-1] if result.stderr.strip() else None,
            )

        if markers.get("compose_stack") == "removed":
            logger.log("Removed the compose stack left by an earlier deployment")
        action = markers.get("container", "created")
        if action == "replaced":
            logger.log(f"Replaced previous container '{app.container_name}'")

        ctx.summary = DeploymentSummary(
            server_address=config.server_address, mode=staged.mode, container_action=action
        )
        self.inspect(ctx)
        return action

    def inspect(self, ctx) -> None:
        """Let the container settle, then surface status and recent logs."""
        logger = ctx.logger
        if ctx.settle_seconds:
            logger.log(f"Waiting {ctx.settle_seconds}s for the container to boot")
            time.sleep(ctx.settle_seconds)

        try:
            result = ctx.channel.run_operation(InspectApplication())
        except (OSError, RuntimeError) as e:
            logger.warning(f"Could not inspect containers: {e}")
            return

        logger.detail(result.without_markers())
        if result.markers().get("logs") != "captured":
            logger.warning("Container logs not available yet (container may still be starting)")
