"""hostdeploy commands."""

from hostdeploy.commands.cleanup import CleanupCommand
from hostdeploy.commands.deploy import DeployCommand, DeployOptions

__all__ = ["DeployCommand", "DeployOptions", "CleanupCommand"]
