"""hostdeploy - deploy a containerized application to a single remote host."""

__version__ = "1.0.0"
