"""
Stage Base Class

A stage is one gated step of the pipeline. Subclasses implement execute()
and raise HostDeployError subclasses on failure; run() turns the outcome
into a StageResult carrying the matching exit class.
"""

from abc import ABC, abstractmethod
from typing import Optional

from hostdeploy.exceptions import HostDeployError
from hostdeploy.models.results import ExitClass, StageResult


class Stage(ABC):
    """Abstract pipeline stage."""

    name = "stage"
    title = "Stage"

    @abstractmethod
    def execute(self, ctx) -> Optional[str]:
        """
        Run the stage.

        Returns:
            Optional success message

        Raises:
            HostDeployError: On failure (exit class taken from the error)
        """

    def run(self, ctx) -> StageResult:
        """
        Run the stage and report its outcome.

        Args:
            ctx: RunContext

        Returns:
            StageResult (never raises for ordinary errors)
        """
        ctx.logger.step(self.title)
        try:
            message = self.execute(ctx) or ""
        except HostDeployError as e:
            ctx.logger.log_error(e.message, context=self._context(e.context))
            return StageResult.failed(self.name, e.exit_code, e.message)
        except (OSError, RuntimeError) as e:
            error_type = type(e).__name__
            ctx.logger.log_error(f"{error_type}: {e}", context=self._context(None))
            return StageResult.failed(self.name, ExitClass.GENERAL, str(e))

        if message:
            ctx.logger.success(message)
        return StageResult.ok(self.name, message)

    def _context(self, detail: Optional[str]) -> str:
        if detail:
            return f"Stage: {self.name} | {detail}"
        return f"Stage: {self.name}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name})"
