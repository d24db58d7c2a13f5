"""Cleanup Operator: remove everything a deployment created on the host."""

from hostdeploy.constants import SSH_CHANNEL_FAILURE
from hostdeploy.exceptions import ConnectivityError
from hostdeploy.remote.operations import CleanupApplication
from hostdeploy.stages.base import Stage

# Marker key -> label used in the summary
CLEANUP_ITEMS = {
    "containers": "container(s)",
    "network": "network",
    "app_dir": "application directory",
    "proxy_rule": "proxy rule",
}


class CleanupOperator(Stage):
    """Exact inverse of deploy + proxy configuration; absent resources are fine."""

    name = "cleanup"
    title = "Cleaning Up Remote Host"

    def execute(self, ctx):
        markers = self.cleanup(ctx)
        removed = [label for key, label in CLEANUP_ITEMS.items() if markers.get(key) == "removed"]
        if removed:
            return f"Removed: {', '.join(removed)}"
        return "Nothing to remove, host already clean"

    def cleanup(self, ctx) -> dict:
        logger = ctx.logger
        logger.log("Running cleanup on remote host")
        result = ctx.channel.run_operation(CleanupApplication())

        # The script tolerates every absent resource; only a broken channel fails
        if result.returncode == SSH_CHANNEL_FAILURE:
            raise ConnectivityError(
                "SSH connectivity failed during cleanup",
                context=result.stderr.strip() or None,
            )
        markers = result.markers()
        if result.is_failure:
            logger.warning(f"Cleanup script exited with status {result.returncode}")

        for key, label in CLEANUP_ITEMS.items():
            state = markers.get(key)
            if state == "absent":
                logger.log(f"No {label} to remove")
            elif state == "removed":
                logger.log(f"Removed {label}")

        reload_state = markers.get("reload")
        if reload_state == "failed":
            logger.warning("Nginx reload failed after removing the rule (rule already gone)")
        elif reload_state == "done":
            logger.log("Nginx reloaded")
        return markers
