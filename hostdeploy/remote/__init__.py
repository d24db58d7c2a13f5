"""Remote operations executed on the target host."""

from .operations import (
    RemoteOperation,
    ShellProbe,
    ProvisionHost,
    DeployApplication,
    InspectApplication,
    ConfigureProxy,
    CheckService,
    CheckApplicationRunning,
    HttpProbe,
    CleanupApplication,
    application_logs,
)

__all__ = [
    "RemoteOperation",
    "ShellProbe",
    "ProvisionHost",
    "DeployApplication",
    "InspectApplication",
    "ConfigureProxy",
    "CheckService",
    "CheckApplicationRunning",
    "HttpProbe",
    "CleanupApplication",
    "application_logs",
]
