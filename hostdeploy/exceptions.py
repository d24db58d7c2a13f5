"""
hostdeploy Exception Hierarchy

Each pipeline failure maps to exactly one exit class.
"""

from typing import Optional

from hostdeploy.models.results import ExitClass


class HostDeployError(Exception):
    """Base exception for all hostdeploy errors."""

    exit_class = ExitClass.GENERAL

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message

    @property
    def exit_code(self) -> int:
        return int(self.exit_class)


class SetupError(HostDeployError):
    """Raised when local setup fails (git, missing deploy artifacts)."""

    exit_class = ExitClass.GENERAL


class ProxyConfigError(HostDeployError):
    """Raised when the reverse proxy rule cannot be installed."""

    exit_class = ExitClass.GENERAL


class InputValidationError(HostDeployError):
    """Raised when a deployment parameter is rejected."""

    exit_class = ExitClass.INPUT_VALIDATION


class ConnectivityError(HostDeployError):
    """Raised when the target host cannot be reached over SSH."""

    exit_class = ExitClass.CONNECTIVITY


class ProvisioningError(HostDeployError):
    """Raised when remote host preparation fails."""

    exit_class = ExitClass.REMOTE_PREP


class DeploymentError(HostDeployError):
    """Raised when transfer, build or run of the application fails."""

    exit_class = ExitClass.DEPLOY


class ValidationError(HostDeployError):
    """Raised when post-deploy validation fails."""

    exit_class = ExitClass.VALIDATION


class MissingDeployArtifactError(SetupError):
    """Raised when the staged source has neither a Dockerfile nor a compose file."""

    def __init__(self, path: str, candidates: list[str]):
        self.path = path
        self.candidates = candidates
        message = "No Dockerfile or docker-compose file found in project root"
        context = f"Looked in {path} for: {', '.join(candidates)}"
        super().__init__(message, context)
