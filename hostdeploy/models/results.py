"""
Result Models

Dataclass models for stage outcomes and command outputs.
"""

from dataclasses import dataclass, field
from enum import IntEnum


class ExitClass(IntEnum):
    """Process exit codes, one per category of pipeline-terminating failure."""

    SUCCESS = 0
    GENERAL = 1
    INPUT_VALIDATION = 2
    CONNECTIVITY = 3
    REMOTE_PREP = 4
    DEPLOY = 5
    VALIDATION = 6


@dataclass
class StageResult:
    """Outcome of a single pipeline stage."""

    stage_name: str
    succeeded: bool
    exit_code: int = ExitClass.SUCCESS
    message: str = ""

    @classmethod
    def ok(cls, stage_name: str, message: str = "") -> "StageResult":
        return cls(stage_name, True, int(ExitClass.SUCCESS), message)

    @classmethod
    def failed(cls, stage_name: str, exit_code: int, message: str) -> "StageResult":
        return cls(stage_name, False, int(exit_code), message)

    def __repr__(self) -> str:
        return f"StageResult(stage={self.stage_name}, succeeded={self.succeeded}, exit_code={self.exit_code})"


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if validation has errors."""
        return len(self.errors) > 0

    def add_error(self, error: str) -> None:
        """Add an error to the validation result."""
        self.errors.append(error)
        self.is_valid = False

    def __repr__(self) -> str:
        return f"ValidationResult(valid={self.is_valid}, errors={len(self.errors)})"


@dataclass
class ExecutionResult:
    """Result of a local command execution (git, rsync, ping)."""

    returncode: int
    stdout: str = ""
    stderr: str = ""
    command: str = ""

    @property
    def is_success(self) -> bool:
        """Check if execution succeeded."""
        return self.returncode == 0

    @property
    def is_failure(self) -> bool:
        """Check if execution failed."""
        return self.returncode != 0

    @property
    def output(self) -> str:
        """Get combined output (stdout + stderr)."""
        return f"{self.stdout}\n{self.stderr}".strip()

    def __repr__(self) -> str:
        return f"ExecutionResult(returncode={self.returncode}, command='{self.command[:50]}...')"


@dataclass
class SSHResult:
    """Result of an SSH command execution."""

    returncode: int
    stdout: str = ""
    stderr: str = ""
    host: str = ""
    command: str = ""
    duration_seconds: float = 0.0

    @property
    def is_success(self) -> bool:
        """Check if SSH command succeeded."""
        return self.returncode == 0

    @property
    def is_failure(self) -> bool:
        """Check if SSH command failed."""
        return self.returncode != 0

    @property
    def output(self) -> str:
        """Get combined output (stdout + stderr)."""
        return f"{self.stdout}\n{self.stderr}".strip()

    def markers(self, prefix: str = "STATUS") -> dict[str, str]:
        """
        Parse ``STATUS key=value`` lines emitted by remote scripts.

        Later lines win when a key repeats.
        """
        found: dict[str, str] = {}
        for line in self.stdout.splitlines():
            parts = line.strip().split(None, 1)
            if len(parts) != 2 or parts[0] != prefix or "=" not in parts[1]:
                continue
            key, value = parts[1].split("=", 1)
            found[key.strip()] = value.strip()
        return found

    def without_markers(self, prefix: str = "STATUS") -> str:
        """stdout with marker lines removed (for display)."""
        return "\n".join(
            line for line in self.stdout.splitlines() if not line.startswith(f"{prefix} ")
        )

    def __repr__(self) -> str:
        return f"SSHResult(host={self.host}, returncode={self.returncode}, duration={self.duration_seconds:.2f}s)"
