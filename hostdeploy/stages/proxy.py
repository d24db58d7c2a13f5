"""Reverse Proxy Configurator: route port 80 to the application through nginx."""

from hostdeploy.exceptions import ProxyConfigError
from hostdeploy.remote.operations import PROXY_SYNTAX_ERROR_STATUS, ConfigureProxy
from hostdeploy.stages.base import Stage


class ReverseProxyConfigurator(Stage):
    """Install the nginx rule; reload only after a passing syntax check."""

    name = "configure_proxy"
    title = "Configuring Nginx"

    def execute(self, ctx):
        action = self.configure_proxy(ctx)
        return f"Proxy rule {action}, nginx reloaded"

    def configure_proxy(self, ctx) -> str:
        config = ctx.config
        logger = ctx.logger
        app = ctx.app

        operation = ConfigureProxy(port=config.application_port)
        logger.log(f"Routing port 80 to 127.0.0.1:{config.application_port} via {app.proxy_available_path}")
        result = ctx.channel.run_operation(operation)
        markers = result.markers()

        if markers.get("syntax") == "invalid" or result.returncode == PROXY_SYNTAX_ERROR_STATUS:
            raise ProxyConfigError(
                "Nginx configuration test failed; previous configuration kept, nginx not reloaded",
                context=_nginx_error(result.stdout),
            )
        if result.is_failure:
            if markers.get("error") == "nginx_missing":
                raise ProxyConfigError("Nginx is not installed on the remote host")
            raise ProxyConfigError(
                "Failed to install proxy rule",
                context=result.stderr.strip() or f"exit status {result.returncode}",
            )

        action = markers.get("rule", "updated")
        if ctx.summary is not None:
            ctx.summary.proxy_action = action
        return action


def _nginx_error(output: str) -> str:
    for line in output.splitlines():
        if "emerg" in line or "error" in line.lower():
            return line.strip()
    return "nginx -t reported an error"
