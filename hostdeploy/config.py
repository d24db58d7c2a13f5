"""
Deployment parameter collection

Values come from CLI options, then an optional YAML file, then interactive
prompts. Every value passes through its validator; rejected values are
re-prompted until the attempt budget runs out.
"""

import os
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional

import yaml
from rich.prompt import Prompt

from hostdeploy.constants import (
    DEFAULT_APP_PORT,
    DEFAULT_BRANCH,
    DEFAULT_SSH_KEY_PATH,
    DEFAULT_SSH_USER,
    MAX_INPUT_ATTEMPTS,
    TOKEN_ENV_VAR,
)
from hostdeploy.exceptions import InputValidationError
from hostdeploy.models.deployment import ConnectionConfig, DeploymentConfig
from hostdeploy.validators import VALIDATORS, expand_key_path

CONFIG_FILE_KEYS = {
    "repository_url",
    "branch",
    "ssh_user",
    "server_address",
    "ssh_key_path",
    "application_port",
}
SECRET_FILE_KEYS = {"access_token", "token", "pat"}

# Field name -> (prompt text, default)
PROMPTS = {
    "repository_url": ("Git repository URL (HTTPS recommended)", None),
    "access_token": ("Personal Access Token for the repository (input hidden)", None),
    "branch": ("Branch name", DEFAULT_BRANCH),
    "ssh_user": ("Remote SSH username", DEFAULT_SSH_USER),
    "server_address": ("Remote server IP address", None),
    "ssh_key_path": ("Path to SSH private key", DEFAULT_SSH_KEY_PATH),
    "application_port": ("Application internal container port", str(DEFAULT_APP_PORT)),
}


def load_config_file(path: Path, logger=None) -> Dict[str, str]:
    """
    Load deployment parameters from a YAML file.

    Args:
        path: YAML file path
        logger: Optional DeployLogger for warnings

    Returns:
        Mapping of known parameter names to string values

    Raises:
        InputValidationError: If the file is missing or not a YAML mapping
    """
    path = Path(path).expanduser()
    if not path.is_file():
        raise InputValidationError(f"Config file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise InputValidationError(f"Invalid YAML in config file: {path}", context=str(e))

    if not isinstance(data, dict):
        raise InputValidationError(
            f"Config file must contain a mapping: {path}",
            context=f"Got {type(data).__name__}",
        )

    values: Dict[str, str] = {}
    for key, value in data.items():
        key = str(key)
        if key in SECRET_FILE_KEYS:
            if logger:
                logger.warning(
                    f"Ignoring '{key}' in {path.name}: pass the token via "
                    f"{TOKEN_ENV_VAR} or the prompt"
                )
            continue
        if key not in CONFIG_FILE_KEYS:
            if logger:
                logger.warning(f"Unknown key '{key}' in {path.name} ignored")
            continue
        if value is not None:
            values[key] = str(value)
    return values


class ParameterCollector:
    """Resolves and validates deployment parameters."""

    def __init__(
        self,
        overrides: Optional[Mapping[str, Optional[str]]] = None,
        config_file: Optional[Path] = None,
        interactive: bool = True,
        environ: Optional[Mapping[str, str]] = None,
        prompt: Optional[Callable[..., str]] = None,
        max_attempts: int = MAX_INPUT_ATTEMPTS,
    ):
        """
        Args:
            overrides: Values given on the command line (None means unset)
            config_file: Optional YAML file with parameters
            interactive: Prompt for missing or rejected values
            environ: Environment used for the token (os.environ if None)
            prompt: Prompt function (rich Prompt.ask if None)
            max_attempts: Attempts per value before giving up
        """
        self.overrides = {k: v for k, v in (overrides or {}).items() if v not in (None, "")}
        self.config_file = config_file
        self.interactive = interactive
        self.environ = os.environ if environ is None else environ
        self.prompt = prompt or self._rich_prompt
        self.max_attempts = max_attempts
        self.logger = None
        self._sources: Dict[str, str] = {}

    def _rich_prompt(self, text: str, default: Optional[str] = None, password: bool = False) -> str:
        console = self.logger.console if self.logger else None
        if default is None:
            return Prompt.ask(text, password=password, console=console)
        return Prompt.ask(text, default=default, password=password, console=console)

    def _load_sources(self, logger) -> None:
        self.logger = logger
        sources: Dict[str, str] = {}
        if self.config_file:
            sources.update(load_config_file(self.config_file, logger))
            logger.log(f"Loaded parameters from {self.config_file}")
        token = self.environ.get(TOKEN_ENV_VAR)
        if token:
            sources["access_token"] = token
        sources.update(self.overrides)
        self._sources = sources

    def resolve(self, field: str) -> str:
        """
        Resolve one parameter, prompting and re-prompting as allowed.

        Raises:
            InputValidationError: When no acceptable value is obtained
        """
        validator, rejection = VALIDATORS[field]
        prompt_text, default = PROMPTS[field]
        secret = field == "access_token"
        value = self._sources.get(field)
        attempts = 0

        while True:
            if value is None:
                if self.interactive:
                    value = self.prompt(prompt_text, default=default, password=secret)
                elif default is not None:
                    value = default
                else:
                    raise InputValidationError(
                        f"Missing required parameter: {field}",
                        context="Provide it as an option, in the config file, or drop --no-input",
                    )

            value = (value or "").strip()
            if validator(value):
                return value

            attempts += 1
            shown = "<hidden>" if secret else repr(value)
            if self.logger:
                self.logger.warning(f"{rejection}: {shown}")
            if not self.interactive or attempts >= self.max_attempts:
                raise InputValidationError(
                    rejection,
                    context=f"Parameter '{field}' rejected after {attempts} attempt(s)",
                )
            value = None

    def collect_deployment(self, logger) -> DeploymentConfig:
        """Collect every parameter needed for a full deployment."""
        self._load_sources(logger)
        logger.log("Collecting parameters")

        repository_url = self.resolve("repository_url")
        access_token = self.resolve("access_token")
        logger.add_secret(access_token)
        branch = self.resolve("branch")
        ssh_user = self.resolve("ssh_user")
        server_address = self.resolve("server_address")
        ssh_key_path = str(expand_key_path(self.resolve("ssh_key_path")))
        application_port = int(self.resolve("application_port"))

        logger.log("Parameters collected (token not logged)")
        return DeploymentConfig(
            repository_url=repository_url,
            access_token=access_token,
            branch=branch,
            ssh_user=ssh_user,
            server_address=server_address,
            ssh_key_path=ssh_key_path,
            application_port=application_port,
        )

    def collect_connection(self, logger) -> ConnectionConfig:
        """Collect only what is needed to reach the host (cleanup mode)."""
        self._load_sources(logger)
        logger.log("Collecting connection parameters")

        ssh_user = self.resolve("ssh_user")
        server_address = self.resolve("server_address")
        ssh_key_path = str(expand_key_path(self.resolve("ssh_key_path")))

        logger.log("Connection parameters collected")
        return ConnectionConfig(
            server_address=server_address,
            ssh_key_path=ssh_key_path,
            ssh_user=ssh_user,
        )
