"""Remote Provisioner: make sure docker, compose and nginx are installed and running."""

from hostdeploy.exceptions import ProvisioningError
from hostdeploy.logger import run_with_progress
from hostdeploy.remote.operations import ProvisionHost
from hostdeploy.stages.base import Stage

COMPONENTS = ("curl", "docker", "compose", "nginx")


class RemoteProvisioner(Stage):
    """Idempotent host preparation: install only what a presence check misses."""

    name = "provision_host"
    title = "Preparing Remote Host"

    def execute(self, ctx):
        markers = self.provision(ctx)
        installed = [c for c in COMPONENTS if markers.get(c) == "installed"]
        if installed:
            return f"Installed: {', '.join(installed)}"
        return "Remote host already provisioned"

    def provision(self, ctx) -> dict:
        logger = ctx.logger
        result = run_with_progress(
            logger, "Installing Docker, Compose and Nginx", ctx.channel.run_operation, ProvisionHost()
        )
        markers = result.markers()

        if result.is_failure:
            raise ProvisioningError(
                "Remote preparation failed (Docker/Compose/Nginx install)",
                context=_last_line(result.stderr) or f"exit status {result.returncode}",
            )

        for component in COMPONENTS:
            state = markers.get(component)
            if state == "present":
                logger.log(f"{component}: already installed, left untouched")
            elif state == "installed":
                logger.log(f"{component}: installed")

        for service in ("docker", "nginx"):
            if markers.get(f"service_{service}") == "started":
                logger.log(f"{service} service started")

        group = markers.get("docker_group")
        if group == "added":
            logger.warning("Added remote user to docker group (applies to new sessions)")
        elif group == "failed":
            logger.warning("Could not add remote user to docker group; commands will use sudo")

        for key in ("docker_version", "compose_version", "nginx_version"):
            if key in markers:
                logger.log(f"{key.replace('_', ' ').capitalize()}: {markers[key]}")
        return markers


def _last_line(text: str) -> str:
    lines = [line for line in text.strip().splitlines() if line.strip()]
    return lines[-1] if lines else ""
