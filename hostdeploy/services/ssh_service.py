"""SSH service for executing commands on the target host."""

import shlex
import subprocess
import time
from pathlib import Path
from typing import Optional, Sequence

from hostdeploy.constants import PING_COUNT, PING_WAIT, RSYNC_EXCLUDES, SSH_CONNECTION_TIMEOUT
from hostdeploy.models.deployment import RemoteApplicationState
from hostdeploy.models.results import ExecutionResult, SSHResult
from hostdeploy.models.ssh import SSHConnection
from hostdeploy.remote.operations import RemoteOperation


class SSHService:
    """
    Remote execution channel for one host.

    Every remote interaction of the pipeline goes through this class:
    - run_operation: render a typed operation and run it with bash
    - mirror: rsync a local tree to a remote directory
    - ping: best-effort ICMP reachability check
    """

    def __init__(
        self,
        connection: SSHConnection,
        logger=None,
        app: Optional[RemoteApplicationState] = None,
    ):
        """
        Initialize SSH service.

        Args:
            connection: Target host and credentials
            logger: Optional DeployLogger receiving commands and output
            app: Application identity operations are rendered for
        """
        self.connection = connection
        self.logger = logger
        self.app = app if app is not None else RemoteApplicationState()

    @property
    def host(self) -> str:
        return self.connection.host

    def execute_command(
        self,
        command: str,
        timeout: Optional[int] = None,
        connect_timeout: int = SSH_CONNECTION_TIMEOUT,
    ) -> SSHResult:
        """
        Execute command on remote host via SSH.

        Args:
            command: Command to execute
            timeout: Overall timeout in seconds (None blocks until done)
            connect_timeout: SSH connect timeout in seconds

        Returns:
            SSHResult with execution details

        Raises:
            TimeoutError: If the command exceeds timeout
            RuntimeError: If ssh cannot be started
        """
        ssh_cmd = self.connection.ssh_command_prefix(connect_timeout) + [command]
        start_time = time.time()

        try:
            result = subprocess.run(
                ssh_cmd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            raise TimeoutError(
                f"SSH command timed out after {timeout}s\nContext: Host: {self.host}"
            )
        except OSError as e:
            raise RuntimeError(f"SSH command failed: {e}\nContext: Host: {self.host}")

        ssh_result = SSHResult(
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            host=self.host,
            command=command,
            duration_seconds=time.time() - start_time,
        )
        self._log_result(ssh_result.stdout, ssh_result.stderr, ssh_result.returncode)
        return ssh_result

    def run_operation(
        self,
        operation: RemoteOperation,
        timeout: Optional[int] = None,
        connect_timeout: int = SSH_CONNECTION_TIMEOUT,
    ) -> SSHResult:
        """
        Run a typed remote operation.

        Args:
            operation: Operation to render and execute
            timeout: Overall timeout in seconds
            connect_timeout: SSH connect timeout in seconds

        Returns:
            SSHResult with the script's output
        """
        if self.logger:
            self.logger.log_command(f"{operation!r} on {self.connection.connection_string}")
        script = operation.render(self.app)
        return self.execute_command(
            f"bash -c {shlex.quote(script)}",
            timeout=timeout,
            connect_timeout=connect_timeout,
        )

    def mirror(
        self,
        local_path: Path,
        remote_dir: str,
        excludes: Sequence[str] = RSYNC_EXCLUDES,
    ) -> ExecutionResult:
        """
        Mirror a local directory to the host, deleting extraneous remote files.

        Args:
            local_path: Source directory
            remote_dir: Destination directory (relative paths are under $HOME)
            excludes: Patterns never transferred

        Returns:
            ExecutionResult of the rsync run
        """
        transport = " ".join(shlex.quote(part) for part in ["ssh", *self.connection.ssh_options])
        cmd = ["rsync", "-az", "--delete"]
        for pattern in excludes:
            cmd.extend(["--exclude", pattern])
        cmd.extend(
            [
                "-e",
                transport,
                f"{str(local_path).rstrip('/')}/",
                f"{self.connection.connection_string}:{remote_dir.rstrip('/')}/",
            ]
        )
        return self._run_local(cmd)

    def ping(self, count: int = PING_COUNT, wait: int = PING_WAIT) -> ExecutionResult:
        """ICMP reachability check. Failure is informational only."""
        return self._run_local(["ping", "-c", str(count), "-W", str(wait), self.host])

    def _run_local(self, cmd: list[str]) -> ExecutionResult:
        command = " ".join(shlex.quote(part) for part in cmd)
        if self.logger:
            self.logger.log_command(command)
        try:
            result = subprocess.run(
                cmd, stdin=subprocess.DEVNULL, capture_output=True, text=True
            )
        except OSError as e:
            # Missing binary (rsync/ping not installed)
            return ExecutionResult(returncode=127, stderr=str(e), command=command)
        self._log_result(result.stdout, result.stderr, result.returncode)
        return ExecutionResult(
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            command=command,
        )

    def _log_result(self, stdout: str, stderr: str, returncode: int) -> None:
        if not self.logger:
            return
        self.logger.log_output(stdout, "stdout")
        self.logger.log_output(stderr, "stderr")
        if returncode != 0:
            self.logger.log(f"Exit status: {returncode}", "DEBUG")
