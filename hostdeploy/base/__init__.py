"""Base classes for hostdeploy commands."""

from hostdeploy.base.base_command import BaseCommand

__all__ = ["BaseCommand"]
