"""
hostdeploy Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .results import (
    ExitClass,
    StageResult,
    ValidationResult,
    ExecutionResult,
    SSHResult,
)
from .deployment import (
    DeployMode,
    DeploymentConfig,
    ConnectionConfig,
    StagedSource,
    RemoteApplicationState,
    DeploymentSummary,
)
from .ssh import (
    SSHConfig,
    SSHConnection,
)

__all__ = [
    # Results
    "ExitClass",
    "StageResult",
    "ValidationResult",
    "ExecutionResult",
    "SSHResult",
    # Deployment
    "DeployMode",
    "DeploymentConfig",
    "ConnectionConfig",
    "StagedSource",
    "RemoteApplicationState",
    "DeploymentSummary",
    # SSH
    "SSHConfig",
    "SSHConnection",
]
