"""
Input validators for deployment parameters.

Each validator takes the raw string a user typed and returns accept/reject.
"""

import os
import re
from pathlib import Path

from hostdeploy.constants import ALLOWED_REPO_PREFIXES, MAX_PORT

# Four dot-separated groups of 1-3 digits. Octet values are not range-checked.
_DOTTED_QUAD = re.compile(r"([0-9]{1,3}\.){3}[0-9]{1,3}")
_DIGITS = re.compile(r"[0-9]+")


def is_valid_repo_url(value: str) -> bool:
    return bool(value) and value.startswith(ALLOWED_REPO_PREFIXES)


def is_valid_ip(value: str) -> bool:
    return bool(_DOTTED_QUAD.fullmatch(value or ""))


def is_valid_port(value: str) -> bool:
    value = (value or "").strip()
    if not _DIGITS.fullmatch(value):
        return False
    return 0 < int(value) <= MAX_PORT


def expand_key_path(value: str) -> Path:
    """Expand ~ in an SSH key path."""
    return Path(value).expanduser()


def is_readable_file(value: str) -> bool:
    if not value:
        return False
    path = expand_key_path(value)
    return path.is_file() and os.access(path, os.R_OK)


def is_present(value: str) -> bool:
    return bool(value and value.strip())


# Field name -> (validator, message shown on rejection)
VALIDATORS = {
    "repository_url": (
        is_valid_repo_url,
        "Invalid repo URL (must start with https://, git@ or ssh://)",
    ),
    "server_address": (
        is_valid_ip,
        "Invalid IP (expected four dot-separated groups of digits)",
    ),
    "application_port": (
        is_valid_port,
        f"Invalid port (expected an integer between 1 and {MAX_PORT})",
    ),
    "ssh_key_path": (is_readable_file, "SSH key not found or not readable"),
    "access_token": (is_present, "Access token is required"),
    "branch": (is_present, "Branch name must not be empty"),
    "ssh_user": (is_present, "SSH username must not be empty"),
}
