"""
Subprocess utility functions for executing external commands.
"""

import subprocess
import logging
from typing import List, Dict, Optional

# Configure logging
logger = logging.getLogger(__name__)


def run_shell_command(
    cmd: List[str],
    cwd: Optional[str] = None,
    check: bool = False,
    capture_output: bool = True,
    text: bool = True,
    env: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
) -> subprocess.CompletedProcess:
    """
    Run a command and handle logging consistently.

    Output is decoded as UTF-8; invalid bytes are replaced rather than raising.

    Args:
        cmd: List of command line arguments
        cwd: Current working directory for the command
        check: If True, raise an exception if the command fails
        capture_output: If True, capture stdout and stderr
        text: If True, decode stdout and stderr as text
        env: Environment variables to set for the command
        timeout: Seconds to wait before killing the command, None to wait forever

    Returns:
        CompletedProcess instance with return code, stdout, and stderr

    Raises:
        OSError: If the command cannot be started
        subprocess.TimeoutExpired: If the command outlives the timeout
        subprocess.CalledProcessError: If check is set and the command fails
    """
    cmd_str = ' '.join(cmd)
    logger.debug(f"Executing command: {cmd_str}")

    try:
        process = subprocess.run(
            cmd,
            capture_output=capture_output,
            text=text,
            encoding="utf-8" if text else None,
            errors="replace" if text else None,
            check=check,
            cwd=cwd,
            env=env,
            timeout=timeout,
        )

        logger.debug(f"Command return code: {process.returncode}")

        if process.stdout and capture_output:
            log_output = process.stdout[:200] + "..." if len(process.stdout) > 200 else process.stdout
            logger.debug(f"Command stdout: {log_output}")

        if process.stderr and capture_output:
            log_error = process.stderr[:200] + "..." if len(process.stderr) > 200 else process.stderr
            logger.debug(f"Command stderr: {log_error}")

        return process
    except subprocess.CalledProcessError as e:
        logger.error(f"Command failed with return code {e.returncode}: {e.stderr}")
        raise
    except subprocess.TimeoutExpired:
        logger.error(f"Command timed out after {timeout}s: {cmd_str}")
        raise
    except Exception as e:
        logger.error(f"Error executing command: {str(e)}")
        raise
