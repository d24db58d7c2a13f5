"""Connectivity Prober: best-effort ping, then a mandatory SSH sentinel check."""

from hostdeploy.constants import SSH_CONNECTION_TIMEOUT, SSH_SENTINEL
from hostdeploy.exceptions import ConnectivityError
from hostdeploy.remote.operations import ShellProbe
from hostdeploy.stages.base import Stage


class ConnectivityProber(Stage):
    """Verify the target host accepts authenticated non-interactive commands."""

    name = "probe_connectivity"
    title = "Checking Connectivity"

    def __init__(self, connect_timeout: int = SSH_CONNECTION_TIMEOUT):
        self.connect_timeout = connect_timeout

    def execute(self, ctx):
        self.probe(ctx)
        return "SSH connection test succeeded"

    def probe(self, ctx) -> None:
        config = ctx.config
        logger = ctx.logger
        channel = ctx.channel
        logger.log(f"Checking SSH connectivity to {config.connection.connection_string}")

        # ICMP may be filtered; an unanswered ping says nothing about SSH
        if channel.ping().is_success:
            logger.log("Ping OK")
        else:
            logger.warning("Ping failed (server may block ICMP), trying SSH anyway")

        try:
            result = channel.run_operation(
                ShellProbe(), timeout=self.connect_timeout * 3, connect_timeout=self.connect_timeout
            )
        except TimeoutError as e:
            raise ConnectivityError(
                "SSH connectivity failed: connection timed out", context=str(e)
            )

        if result.is_failure or SSH_SENTINEL not in result.stdout:
            raise ConnectivityError(
                "SSH connectivity failed. Check IP, username, and SSH key.",
                context=result.stderr.strip() or f"exit status {result.returncode}",
            )
