"""
Base Command Class

Abstract base for hostdeploy commands. Owns the console, the run logger and
the translation of unexpected errors into exit codes.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from rich.console import Console

from hostdeploy.constants import DEFAULT_LOG_DIR
from hostdeploy.logger import DeployLogger
from hostdeploy.models.results import ExitClass
from hostdeploy.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Logger initialization
    - Header display
    - Error handling
    """

    def __init__(
        self,
        verbose: bool = False,
        log_dir: Path = Path(DEFAULT_LOG_DIR),
        console: Optional[Console] = None,
    ):
        self.verbose = verbose
        self.log_dir = Path(log_dir)
        self.console = console or Console()
        self.logger: Optional[DeployLogger] = None

    def init_logger(self, command_name: str) -> DeployLogger:
        """
        Initialize the run logger.

        Args:
            command_name: Command name (log file prefix)

        Returns:
            DeployLogger instance
        """
        self.logger = DeployLogger(
            command_name, self.log_dir, verbose=self.verbose, console=self.console
        )
        return self.logger

    def show_header(
        self,
        title: str,
        subtitle: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in verbose mode)."""
        if not self.verbose:
            show_header(title=title, subtitle=subtitle, details=details, console=self.console)

    def _print_log_path(self) -> None:
        if self.logger:
            self.console.print(f"[dim]Logs saved to:[/dim] {self.logger.log_path}\n")

    @abstractmethod
    def execute(self) -> int:
        """
        Execute command logic.

        Returns:
            Process exit code
        """

    def run(self) -> None:
        """
        Run command with error handling.

        Always ends with SystemExit carrying the command's exit code.
        """
        try:
            code = self.execute()
        except KeyboardInterrupt:
            self.console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            if self.logger:
                self.logger.close(130)
            self._print_log_path()
            raise SystemExit(130)
        except SystemExit:
            raise
        except PermissionError as e:
            self.console.print(f"\n[bold red]✗ Permission denied:[/bold red] {e}\n")
            if self.logger:
                self.logger.log_error(f"Permission error: {e}")
                self.logger.close(int(ExitClass.GENERAL))
            self._print_log_path()
            raise SystemExit(int(ExitClass.GENERAL))
        except Exception as e:
            error_type = type(e).__name__
            message = self.logger.redact(str(e)) if self.logger else str(e)
            self.console.print(f"\n[bold red]✗ {error_type}:[/bold red] {message}\n")
            if self.logger:
                self.logger.log_error(f"{error_type}: {message}")
                self.logger.close(int(ExitClass.GENERAL))
            self._print_log_path()
            raise SystemExit(int(ExitClass.GENERAL))
        raise SystemExit(code)
