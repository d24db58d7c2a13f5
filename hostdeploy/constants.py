"""
hostdeploy Constants

Centralized constants for the fixed application identity, remote paths,
timeouts and defaults.
"""

# Application identity (fixed name makes re-deployment idempotent)
APP_NAME = "deployed_app"
APP_IMAGE = f"{APP_NAME}:latest"
APP_NETWORK = f"{APP_NAME}_net"
COMPOSE_PROJECT = APP_NAME

# Remote paths
REMOTE_APP_DIRNAME = APP_NAME  # relative to the remote user's home
NGINX_SITES_AVAILABLE = "/etc/nginx/sites-available"
NGINX_SITES_ENABLED = "/etc/nginx/sites-enabled"
NGINX_DEFAULT_SITE = f"{NGINX_SITES_ENABLED}/default"

# Deploy artifacts
DOCKERFILE_NAME = "Dockerfile"
COMPOSE_FILE_NAMES = ("docker-compose.yml", "docker-compose.yaml")

# Repository URL schemes accepted by the validator
ALLOWED_REPO_PREFIXES = ("https://", "git@", "ssh://")

# Default parameter values
DEFAULT_BRANCH = "main"
DEFAULT_SSH_USER = "ubuntu"
DEFAULT_SSH_KEY_PATH = "~/.ssh/id_ed25519"
DEFAULT_APP_PORT = 8080
DEFAULT_WORKDIR = "/tmp/deploy_repo"
DEFAULT_LOG_DIR = "logs"

# Environment variable holding the repository access token
TOKEN_ENV_VAR = "HOSTDEPLOY_TOKEN"

# Input validation
MAX_INPUT_ATTEMPTS = 3
MAX_PORT = 65535

# SSH Timeout Configuration
SSH_CONNECTION_TIMEOUT = 10
SSH_SENTINEL = "SSH_OK"
SSH_CHANNEL_FAILURE = 255  # ssh exit status when the connection itself fails

# Ping Configuration
PING_COUNT = 2
PING_WAIT = 2

# Deploy Configuration
SETTLE_SECONDS = 8
DEPLOY_LOG_TAIL = 20
VALIDATION_LOG_TAIL = 30
RSYNC_EXCLUDES = (".git",)

# HTTP validation
EXPECTED_HTTP_STATUS = 200
EXTERNAL_PROBE_TIMEOUT = 5

# Log Configuration
LOG_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

# Redaction placeholder for secrets
REDACTED = "****"
