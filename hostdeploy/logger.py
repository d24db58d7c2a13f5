"""
Logging system for hostdeploy
Provides real-time logging to a per-run file with clean console output
"""

import re
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional, TextIO
from urllib.parse import quote

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.padding import Padding
from rich.spinner import Spinner
from rich.text import Text

from hostdeploy.constants import (
    LOG_DATETIME_FORMAT,
    LOG_FILE_TIMESTAMP_FORMAT,
    REDACTED,
)


ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


class DeployLogger:
    """
    Manages logging for deployment operations
    - Writes every message to a timestamped log file in real-time
    - Shows clean progress UI in console (unless verbose)
    - Redacts registered secrets from file and console output
    """

    def __init__(
        self,
        operation: str,
        log_dir: Path,
        verbose: bool = False,
        console: Optional[Console] = None,
    ):
        """
        Initialize logger

        Args:
            operation: Operation name (e.g., 'deploy', 'cleanup')
            log_dir: Directory that receives the log file
            verbose: If True, show all output in console
            console: Rich console (creates new if None)
        """
        self.operation = operation
        self.verbose = verbose
        self.console = console or Console()
        self.log_file: Optional[TextIO] = None
        self.current_step = ""
        self.has_errors = False
        self.exit_code: Optional[int] = None
        self._secrets: list[str] = []

        log_dir = Path(log_dir).expanduser()
        log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime(LOG_FILE_TIMESTAMP_FORMAT)
        self.log_path = log_dir / f"{operation}_{timestamp}.log"

        # Line buffered for real-time tailing
        self.log_file = open(self.log_path, "a", buffering=1, encoding="utf-8")

        self._write_log_header()

    def _write_log_header(self):
        """Write log file header"""
        header = f"""
{"=" * 80}
hostdeploy Log
{"=" * 80}
Operation: {self.operation}
Started: {datetime.now().isoformat()}
{"=" * 80}

"""
        self._write(header)

    def add_secret(self, value: Optional[str]) -> None:
        """
        Register a value that must never appear in any output.

        The percent-encoded form is registered too, since secrets embedded
        in URLs (one-time clone URLs) are logged in that form.
        """
        if not value:
            return
        for form in (value, quote(value, safe="")):
            if form not in self._secrets:
                self._secrets.append(form)
        # Longest first so overlapping secrets are fully masked
        self._secrets.sort(key=len, reverse=True)

    def redact(self, text: str) -> str:
        """Replace every registered secret in text."""
        for secret in self._secrets:
            text = text.replace(secret, REDACTED)
        return text

    def _write(self, text: str) -> None:
        if self.log_file:
            self.log_file.write(self.redact(text))
            self.log_file.flush()

    def _print(self, markup: str) -> None:
        self.console.print(self.redact(markup))

    def log(self, message: str, level: str = "INFO"):
        """
        Log a message to file and optionally console

        Args:
            message: Message to log
            level: Log level (INFO, WARNING, ERROR, DEBUG)
        """
        timestamp = datetime.now().strftime(LOG_DATETIME_FORMAT)
        self._write(f"[{timestamp}] [{level}] {message}\n")

        if self.verbose:
            safe = escape(message)
            if level == "ERROR":
                self._print(f"[red]{safe}[/red]")
            elif level == "WARNING":
                self._print(f"[yellow]{safe}[/yellow]")
            elif level == "DEBUG":
                self._print(f"[dim]{safe}[/dim]")
            else:
                self._print(safe)

    def log_command(self, command: str):
        """Log a command being executed"""
        self.log(f"Executing: {command}", "DEBUG")

    def log_output(self, output: str, stream: str = "stdout"):
        """
        Log command output

        Always written to the log file; shown in console only if verbose.

        Args:
            output: Command output (single line or multiline)
            stream: Stream name (stdout, stderr)
        """
        if not output:
            return

        clean_output = ANSI_ESCAPE.sub("", output)
        for line in clean_output.splitlines():
            self._write(f"  [{stream}] {line}\n")

        if self.verbose:
            self._print(f"[dim]{escape(clean_output.rstrip())}[/dim]")

    def log_error(self, error: str, context: Optional[str] = None):
        """
        Log an error with context

        Args:
            error: Error message
            context: Additional context (e.g., stage that failed)
        """
        self.has_errors = True
        self.log(error, "ERROR")
        if context:
            self.log(f"Context: {context}", "ERROR")

        if not self.verbose:
            self.console.print()

        self._print(f"[bold red]✗ {escape(error)}[/bold red]")
        if context:
            self._print(f"  [color(208)]{escape(context)}[/color(208)]")

    def step(self, step_name: str):
        """
        Start a new step

        Args:
            step_name: Name of the step
        """
        if self.current_step and not self.verbose:
            self.console.print()

        self.current_step = step_name
        self.log(f"Step: {step_name}", "INFO")

        if not self.verbose:
            self._print(f"[color(214)]▶[/color(214)] [white]{escape(step_name)}[/white]")

    def success(self, message: str):
        """Log a success message"""
        self.log(message, "INFO")

        if not self.verbose:
            self._print(f"  [dim]✓ {escape(message)}[/dim]")

    def warning(self, message: str):
        """Log a warning message"""
        self.log(message, "WARNING")

        if not self.verbose:
            self._print(f"  [yellow]⚠[/yellow] [dim]{escape(message)}[/dim]")

    def detail(self, output: str):
        """Show command output in the console (it is already in the log file)."""
        if self.verbose or not output.strip():
            return
        for line in ANSI_ESCAPE.sub("", output).rstrip().splitlines():
            self._print(f"    [dim]{escape(line)}[/dim]")

    @contextmanager
    def progress(self, description: str) -> Iterator[None]:
        """
        Show a spinner while a blocking operation runs.

        Verbose mode streams log lines instead, so no spinner is drawn.
        """
        if self.verbose or not self.console.is_terminal:
            yield
            return

        spinner = Spinner("dots", text=f"[cyan]{escape(description)}...[/cyan]")
        with Live(
            Padding(spinner, (0, 0, 0, 2)),
            console=self.console,
            refresh_per_second=10,
            transient=True,
        ):
            yield

    def close(self, exit_code: Optional[int] = None):
        """Write footer with final status and close log file"""
        if exit_code is not None:
            self.exit_code = exit_code
        if self.exit_code is None:
            self.exit_code = 1 if self.has_errors else 0

        if self.log_file:
            status = "SUCCESS" if self.exit_code == 0 else "FAILED"
            footer = f"""
{"=" * 80}
Completed: {datetime.now().isoformat()}
Status: {status}
Exit code: {self.exit_code}
Log file: {self.log_path}
{"=" * 80}
"""
            self._write(footer)
            self.log_file.close()
            self.log_file = None

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb):
        """Context manager exit"""
        if exc_type is SystemExit:
            code = exc_val.code if isinstance(exc_val.code, int) else 1
            self.close(code)
        elif exc_type is KeyboardInterrupt:
            self.log("Operation cancelled by user", "WARNING")
            self.close(130)
        elif exc_type is not None:
            self.log_error(
                str(exc_val) if exc_val else "Operation failed",
                context=f"{exc_type.__name__}",
            )
            self.close(1)
        else:
            self.close()
        return False  # Don't suppress exceptions


def run_with_progress(logger: DeployLogger, description: str, func, *args, **kwargs):
    """
    Run a blocking callable under the logger's spinner.

    Args:
        logger: DeployLogger instance
        description: Description for progress indicator
        func: Callable to run

    Returns:
        Whatever func returns
    """
    with logger.progress(description):
        result = func(*args, **kwargs)

    if not logger.verbose and logger.console.is_terminal:
        ok = getattr(result, "is_success", True)
        mark = Text("  ✓ " if ok else "  ✗ ", style="dim" if ok else "red")
        mark.append(description, style="dim")
        logger.console.print(mark)
    return result
