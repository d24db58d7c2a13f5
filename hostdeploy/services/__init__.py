"""
hostdeploy Services Layer

Collaborators the pipeline drives: git locally, ssh/rsync remotely.
"""

from .git_service import GitClient
from .ssh_service import SSHService

__all__ = [
    "GitClient",
    "SSHService",
]
