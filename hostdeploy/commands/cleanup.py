"""
Cleanup Command

Remove the deployed application, its network, remote directory and proxy
rule. Safe to run repeatedly.
"""

from hostdeploy.commands.deploy import DeployCommand
from hostdeploy.pipeline import cleanup_stages


class CleanupCommand(DeployCommand):
    """Run only the cleanup pipeline (connection parameters, then removal)."""

    operation = "cleanup"

    def header_details(self) -> dict:
        return {"Host": self.options.overrides.get("server_address")}

    def stages(self, collector):
        return cleanup_stages(collector)

    def execute(self) -> int:
        """Execute cleanup command."""
        self.show_header(title="Cleanup Deployment", details=self.header_details())
        logger = self.init_logger(self.operation)

        with self._context(logger) as ctx:
            result = self._pipeline().run(ctx)

        if result.succeeded:
            self.console.print("\n[color(248)]Remote host cleaned.[/color(248)]")
            self.console.print(f"\n[dim]Logs saved to:[/dim] {ctx.log_path}\n")
        else:
            self._print_result(ctx, result)
        return result.exit_code
