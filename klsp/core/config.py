"""
Server configuration.

Settings come from the environment (a .env file is loaded on package import)
and may be overridden by command-line flags.
"""

import logging
import os
import shlex
from dataclasses import dataclass, field
from typing import List, Optional

from klsp import __version__
from klsp.core.constants import DEFAULT_CHECKER, DEFAULT_CHECKER_TIMEOUT, SERVER_NAME

# Configure logging
logger = logging.getLogger(__name__)


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    """Parse a timeout in seconds; empty, zero or negative disables it."""
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid checker timeout {raw!r}, using {DEFAULT_CHECKER_TIMEOUT}s")
        return DEFAULT_CHECKER_TIMEOUT
    return value if value > 0 else None


@dataclass
class ServerConfig:
    """
    Runtime settings for the language server.

    Attributes:
        checker_command: Command prefix for the checker; the document path is appended
        checker_timeout: Seconds to wait for the checker, or None to wait indefinitely
        server_name: Name reported to the editor on initialize
        server_version: Version reported to the editor on initialize
    """

    checker_command: List[str] = field(default_factory=lambda: [DEFAULT_CHECKER])
    checker_timeout: Optional[float] = DEFAULT_CHECKER_TIMEOUT
    server_name: str = SERVER_NAME
    server_version: str = __version__

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Build a config from KLSP_CHECKER and KLSP_CHECKER_TIMEOUT."""
        checker = os.environ.get("KLSP_CHECKER", "").strip()
        command = shlex.split(checker) if checker else [DEFAULT_CHECKER]

        if "KLSP_CHECKER_TIMEOUT" in os.environ:
            timeout = _parse_timeout(os.environ["KLSP_CHECKER_TIMEOUT"])
        else:
            timeout = DEFAULT_CHECKER_TIMEOUT

        config = cls(checker_command=command, checker_timeout=timeout)
        logger.debug(f"Loaded server config: {config}")
        return config

    def with_overrides(
        self,
        checker: Optional[str] = None,
        checker_timeout: Optional[str] = None,
    ) -> "ServerConfig":
        """Return a copy with command-line overrides applied."""
        command = shlex.split(checker) if checker else list(self.checker_command)
        timeout = _parse_timeout(checker_timeout) if checker_timeout is not None else self.checker_timeout
        return ServerConfig(
            checker_command=command,
            checker_timeout=timeout,
            server_name=self.server_name,
            server_version=self.server_version,
        )
