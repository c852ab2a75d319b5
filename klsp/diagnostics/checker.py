"""
Runs the external K checker against a file on disk.

The checker is invoked with the file path as its only argument. Exit code 0
means the file is valid; anything else means stderr describes the error as an
echo of the offending source line followed by a line with a ``^`` under the
failing column.
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import List, Optional

from klsp.core.constants import DEFAULT_CHECKER
from klsp.core.exceptions import ExternalToolFailure
from klsp.utils.subprocess import run_shell_command

# Configure logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckerResult:
    """Outcome of a checker run."""
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        """True if the checker accepted the file."""
        return self.returncode == 0


class Checker:
    """Wrapper around the checker executable."""

    def __init__(self, command: Optional[List[str]] = None, timeout: Optional[float] = None):
        """
        Initialize the checker.

        Args:
            command: Command prefix; the file path is appended as the last argument
            timeout: Seconds to wait for the checker, None to wait indefinitely
        """
        self.command = list(command) if command else [DEFAULT_CHECKER]
        self.timeout = timeout

    def check(self, path: str) -> CheckerResult:
        """
        Run the checker on a file.

        Args:
            path: Filesystem path of the document

        Returns:
            The checker's exit code and decoded output

        Raises:
            ExternalToolFailure: If the checker could not be run to completion
        """
        cmd = self.command + [path]
        logger.info(f"Checking {path} with {self.command[0]}")

        try:
            process = run_shell_command(cmd, timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            raise ExternalToolFailure(cmd, f"timed out after {self.timeout}s", e) from e
        except OSError as e:
            raise ExternalToolFailure(cmd, f"could not be started: {e}", e) from e
        except subprocess.SubprocessError as e:
            raise ExternalToolFailure(cmd, str(e), e) from e

        result = CheckerResult(
            returncode=process.returncode,
            stdout=process.stdout or "",
            stderr=process.stderr or "",
        )
        if result.ok:
            logger.info(f"Checker accepted {path}")
        else:
            logger.info(f"Checker rejected {path} with exit code {result.returncode}")
        return result
