"""
Command execution engine.

Every package-manager operation goes through a single ``CommandRunner.run``
call, which makes the runner the seam tests replace with a scripted fake.
"""

import subprocess
import time
from typing import List, Optional

from loguru import logger
from pydantic import BaseModel


class CommandResult(BaseModel):
    """Result of a command execution."""

    command: str
    return_code: int
    stdout: str
    stderr: str
    duration: float
    success: bool

    @property
    def errored(self) -> bool:
        """True when the process could not be run or timed out."""
        return self.return_code == -1


class CommandRunner:
    """Execute external commands."""

    def __init__(self, app_logger=None, timeout: int = 120):
        self.logger = app_logger or logger
        self.timeout = timeout

    def run(
        self,
        command: List[str],
        timeout: Optional[int] = None,
    ) -> CommandResult:
        """
        Execute a system command.

        Args:
            command: Command and arguments as a list
            timeout: Timeout in seconds (defaults to the runner's timeout)

        Returns:
            CommandResult object. Timeouts and spawn errors are returned as
            failed results with return_code -1, never raised.
        """
        timeout = timeout or self.timeout
        start_time = time.time()
        cmd_str = " ".join(command)

        self.logger.debug(f"Executing command: {cmd_str}")

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                encoding="utf-8",
                errors="replace",  # manager output is not always valid UTF-8
                timeout=timeout,
                stdin=subprocess.DEVNULL,
            )

            duration = time.time() - start_time

            self.logger.debug(
                f"Command completed: {cmd_str} "
                f"(return code: {result.returncode}, duration: {duration:.2f}s)"
            )

            return CommandResult(
                command=cmd_str,
                return_code=result.returncode,
                stdout=result.stdout or "",
                stderr=result.stderr or "",
                duration=duration,
                success=(result.returncode == 0),
            )

        except subprocess.TimeoutExpired:
            duration = time.time() - start_time
            self.logger.error(f"Command timed out after {timeout}s: {cmd_str}")

            return CommandResult(
                command=cmd_str,
                return_code=-1,
                stdout="",
                stderr=f"Command timed out after {timeout} seconds",
                duration=duration,
                success=False,
            )

        except OSError as e:
            duration = time.time() - start_time
            self.logger.error(f"Command failed: {cmd_str} - {e}")

            return CommandResult(
                command=cmd_str,
                return_code=-1,
                stdout="",
                stderr=str(e),
                duration=duration,
                success=False,
            )
