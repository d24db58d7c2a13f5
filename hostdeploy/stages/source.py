"""Local Source Stager: clone or update the working copy and detect deploy mode."""

from pathlib import Path

from hostdeploy.constants import COMPOSE_FILE_NAMES, DOCKERFILE_NAME
from hostdeploy.exceptions import MissingDeployArtifactError, SetupError
from hostdeploy.models.deployment import DeploymentConfig, DeployMode, StagedSource
from hostdeploy.services.git_service import authenticated_url
from hostdeploy.stages.base import Stage


def detect_deploy_mode(path: Path) -> tuple[DeployMode, str]:
    """
    Decide how the application is built.

    A Dockerfile wins over a compose manifest; neither is fatal.

    Returns:
        (mode, manifest file name)

    Raises:
        MissingDeployArtifactError: If no deploy artifact is present
    """
    if (path / DOCKERFILE_NAME).is_file():
        return DeployMode.DOCKERFILE, DOCKERFILE_NAME
    for name in COMPOSE_FILE_NAMES:
        if (path / name).is_file():
            return DeployMode.COMPOSE, name
    raise MissingDeployArtifactError(str(path), [DOCKERFILE_NAME, *COMPOSE_FILE_NAMES])


class LocalSourceStager(Stage):
    """Clone-or-update the repository into the run's workdir."""

    name = "stage_source"
    title = "Staging Source"

    def execute(self, ctx):
        staged = self.stage(ctx)
        ctx.staged = staged
        return f"Deploy mode: {staged.mode.value} ({staged.manifest})"

    def stage(self, ctx) -> StagedSource:
        config: DeploymentConfig = ctx.config
        git = ctx.git
        logger = ctx.logger

        ctx.workdir.mkdir(parents=True, exist_ok=True)
        repo_path = ctx.workdir / config.repository_name
        one_time_url = authenticated_url(config.repository_url, config.access_token)

        if (repo_path / ".git").is_dir():
            logger.log(f"Repository already exists locally at {repo_path}, pulling latest")
            result = git.fetch(repo_path, one_time_url, config.branch)
            if result.is_failure:
                raise SetupError(f"Failed to fetch branch '{config.branch}'", context=result.stderr.strip())
            # Scrub before anything else can fail
            self._scrub_remote(ctx, repo_path)
            result = git.checkout(repo_path, config.branch)
            if result.is_failure:
                raise SetupError(f"Failed to check out branch '{config.branch}'", context=result.stderr.strip())
            result = git.fast_forward(repo_path, config.branch)
            if result.is_failure:
                raise SetupError("Failed to pull latest (not a fast-forward)", context=result.stderr.strip())
        else:
            if repo_path.exists():
                raise SetupError(
                    f"Workdir path exists but is not a git repository: {repo_path}",
                    context="Remove it or choose another --workdir",
                )
            logger.log(f"Cloning repository into {repo_path}")
            result = git.clone(one_time_url, config.branch, repo_path)
            if result.is_failure:
                raise SetupError("Git clone failed", context=result.stderr.strip())
            self._scrub_remote(ctx, repo_path)

        logger.log(f"Checked out branch '{config.branch}' in {repo_path}")

        mode, manifest = detect_deploy_mode(repo_path)
        logger.log(f"Found {manifest}")
        return StagedSource(path=repo_path, mode=mode, manifest=manifest)

    def _scrub_remote(self, ctx, repo_path: Path) -> None:
        """Reset origin to the clean URL and verify no secret was persisted."""
        config: DeploymentConfig = ctx.config
        result = ctx.git.set_remote_url(repo_path, config.repository_url)
        if result.is_failure:
            raise SetupError("Failed to reset remote URL", context=result.stderr.strip())
        if config.access_token and config.access_token in ctx.git.get_remote_url(repo_path):
            raise SetupError("Stored remote URL still contains the access token")
