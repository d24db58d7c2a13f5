"""Deployment Validator: confirm services, container and HTTP reachability."""

import requests

from hostdeploy.constants import EXPECTED_HTTP_STATUS, EXTERNAL_PROBE_TIMEOUT
from hostdeploy.exceptions import ValidationError
from hostdeploy.models.results import ValidationResult
from hostdeploy.remote.operations import (
    CheckApplicationRunning,
    CheckService,
    HttpProbe,
    application_logs,
)
from hostdeploy.stages.base import Stage


class DeploymentValidator(Stage):
    """
    Run all four post-deploy checks and fail if any of them failed.

    Checks:
    - container runtime service is active
    - the fixed-name application container is running
    - proxy service is active
    - HTTP through the proxy on the host returns 200
    """

    name = "validate_deployment"
    title = "Validating Deployment"

    def execute(self, ctx):
        result = self.validate(ctx)
        if result.has_errors:
            raise ValidationError(
                "Deployment validation failed",
                context="; ".join(result.errors),
            )
        if ctx.external_probe:
            self.probe_externally(ctx)
        return "Validation succeeded"

    def validate(self, ctx) -> ValidationResult:
        logger = ctx.logger
        channel = ctx.channel
        app = ctx.app
        result = ValidationResult(is_valid=True)

        # (a) container runtime
        if channel.run_operation(CheckService(service="docker")).is_success:
            logger.log("Docker is running")
        else:
            result.add_error("Docker is NOT running")

        # (b) application container
        check = channel.run_operation(CheckApplicationRunning())
        if check.is_success:
            logger.log(f"Container {app.container_name} is running")
        else:
            result.add_error(f"Container {app.container_name} not found")
            logger.detail(check.without_markers())

        # (c) proxy
        if channel.run_operation(CheckService(service="nginx")).is_success:
            logger.log("Nginx running")
        else:
            result.add_error("Nginx not running")

        # (d) HTTP through the proxy
        probe = channel.run_operation(HttpProbe())
        code = probe.markers().get("http_code", "000")
        if probe.is_success:
            logger.log(f"Local HTTP test via Nginx succeeded ({code})")
        else:
            result.add_error(f"Local HTTP test via Nginx returned {code}, expected {EXPECTED_HTTP_STATUS}")
            self.capture_logs(ctx)

        for error in result.errors:
            logger.log(error, "ERROR")
        return result

    def capture_logs(self, ctx) -> None:
        """Dump recent application logs for diagnosis."""
        logger = ctx.logger
        logger.log("Capturing recent application logs")
        try:
            logs = ctx.channel.run_operation(application_logs())
        except (OSError, RuntimeError) as e:
            logger.warning(f"Could not capture application logs: {e}")
            return
        logger.log_output(logs.stdout, "app")
        logger.detail(logs.without_markers())

    def probe_externally(self, ctx) -> None:
        """Request the app from this machine; firewalls make failure non-fatal."""
        url = f"http://{ctx.config.server_address}/"
        try:
            response = requests.get(url, timeout=EXTERNAL_PROBE_TIMEOUT)
        except requests.RequestException as e:
            ctx.logger.warning(f"External check of {url} failed: {type(e).__name__}")
            return
        if response.status_code == EXPECTED_HTTP_STATUS:
            ctx.logger.log(f"External check of {url} returned {response.status_code}")
        else:
            ctx.logger.warning(f"External check of {url} returned {response.status_code}")
