"""
Remote Operations

Typed command objects for everything the pipeline runs on the target host.
Each operation renders one self-contained bash script; the SSH service sends
it over a single channel and returns an SSHResult. Scripts report what they
did with ``STATUS key=value`` lines (see SSHResult.markers).
"""

from dataclasses import dataclass
from typing import Optional

from hostdeploy.constants import (
    DEPLOY_LOG_TAIL,
    EXPECTED_HTTP_STATUS,
    NGINX_DEFAULT_SITE,
    SSH_SENTINEL,
    VALIDATION_LOG_TAIL,
)
from hostdeploy.models.deployment import DeployMode, RemoteApplicationState
from hostdeploy.remote.templates import render_template

DOCKER_GPG_URL = "https://download.docker.com/linux/ubuntu/gpg"
DOCKER_REPO_URL = "https://download.docker.com/linux/ubuntu"
COMPOSE_RELEASE_URL = "https://github.com/docker/compose/releases/latest/download"

# Exit status the proxy script uses when `nginx -t` rejects the new rule
PROXY_SYNTAX_ERROR_STATUS = 3


class RemoteOperation:
    """Base class for remote operations."""

    description = "Remote operation"
    template: Optional[str] = None

    def context(self) -> dict:
        """Template variables specific to this operation."""
        return {}

    def render(self, app: RemoteApplicationState) -> str:
        """
        Render the bash script sent to the host.

        Args:
            app: Identity of the deployed application (names, paths)
        """
        if self.template is None:
            raise NotImplementedError(f"{type(self).__name__} has no template")
        return render_template(self.template, app=app, **self.context())

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


@dataclass(repr=False)
class ShellProbe(RemoteOperation):
    """Echo a sentinel to prove authenticated, non-interactive shell access."""

    sentinel: str = SSH_SENTINEL
    description = "Authenticated shell probe"

    def render(self, app: RemoteApplicationState) -> str:
        return f"echo {self.sentinel}\n"


@dataclass(repr=False)
class ProvisionHost(RemoteOperation):
    """Install docker, a compose tool and nginx when missing."""

    description = "Provision remote host"
    template = "remote/provision.sh.j2"

    def context(self) -> dict:
        return {
            "docker_gpg_url": DOCKER_GPG_URL,
            "docker_repo_url": DOCKER_REPO_URL,
            "compose_release_url": COMPOSE_RELEASE_URL,
        }


@dataclass(repr=False)
class DeployApplication(RemoteOperation):
    """Replace the fixed-name application with a fresh build."""

    mode: DeployMode
    port: int
    manifest: str
    description = "Build and start application"
    template = "remote/deploy.sh.j2"

    def context(self) -> dict:
        return {"mode": self.mode.value, "port": int(self.port), "manifest": self.manifest}

    def __repr__(self) -> str:
        return f"DeployApplication(mode={self.mode.value}, port={self.port})"


@dataclass(repr=False)
class InspectApplication(RemoteOperation):
    """Show container status and recent logs (never fails)."""

    tail: int = DEPLOY_LOG_TAIL
    show_status: bool = True
    description = "Inspect application containers"
    template = "remote/inspect.sh.j2"

    def context(self) -> dict:
        return {"tail": int(self.tail), "show_status": self.show_status}


def application_logs(tail: int = VALIDATION_LOG_TAIL) -> InspectApplication:
    """Recent application logs without the status table."""
    return InspectApplication(tail=tail, show_status=False)


@dataclass(repr=False)
class ConfigureProxy(RemoteOperation):
    """Install the nginx rule routing port 80 to the application port."""

    port: int
    description = "Configure nginx reverse proxy"
    template = "remote/proxy.sh.j2"

    def rule(self) -> str:
        return render_template("nginx/site.conf.j2", port=int(self.port))

    def context(self) -> dict:
        return {
            "rule": self.rule().rstrip("\n"),
            "default_site": NGINX_DEFAULT_SITE,
            "syntax_error_status": PROXY_SYNTAX_ERROR_STATUS,
        }

    def __repr__(self) -> str:
        return f"ConfigureProxy(port={self.port})"


@dataclass(repr=False)
class CheckService(RemoteOperation):
    """Check that a systemd service is active."""

    service: str
    description = "Check service"
    template = "remote/check_service.sh.j2"

    def context(self) -> dict:
        return {"service": self.service}

    def __repr__(self) -> str:
        return f"CheckService(service={self.service})"


@dataclass(repr=False)
class CheckApplicationRunning(RemoteOperation):
    """Check that the application container (or compose stack) is running."""

    description = "Check application container"
    template = "remote/check_container.sh.j2"


@dataclass(repr=False)
class HttpProbe(RemoteOperation):
    """Request the proxy on the host itself and report the status code."""

    url: str = "http://127.0.0.1"
    expected_status: int = EXPECTED_HTTP_STATUS
    timeout: int = 10
    description = "HTTP probe through proxy"
    template = "remote/http_probe.sh.j2"

    def context(self) -> dict:
        return {
            "url": self.url,
            "expected_status": int(self.expected_status),
            "timeout": int(self.timeout),
        }


@dataclass(repr=False)
class CleanupApplication(RemoteOperation):
    """Remove everything a deployment created; tolerant of absence."""

    description = "Remove deployed resources"
    template = "remote/cleanup.sh.j2"
