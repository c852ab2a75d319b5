"""
klsp - Language server for the K notation.

This package provides go-to-definition, rename and checker-backed
diagnostics for K documents over the Language Server Protocol.
"""

import logging
import logging.handlers
import os
import sys
from dotenv import load_dotenv

# Configure logger for this module
logger = logging.getLogger(__name__)

# Load environment variables from .env file if present
load_dotenv()

if "pytest" not in sys.modules:
    KLSP_HOME = os.environ.get("KLSP_HOME", os.path.expanduser("~/.klsp"))
else:
    KLSP_HOME = "/tmp/.klsp"

__version__ = "0.1.0"


def setup_logging() -> None:
    """
    Configure centralized logging for the entire application.

    This function sets up:
    - File logging for all messages in {KLSP_HOME}/logs/stdout.log
    - File logging for warnings and above in {KLSP_HOME}/logs/stderr.log
    - Console logging to stderr only if LOG_TO_CONSOLE=1 is set (disabled by default)
    - Conservative logging levels for noisy third-party libraries

    Stdout is never used since it carries the protocol stream when the
    server runs over stdio.
    """
    # Get log level from environment or use INFO as default
    log_level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_name, logging.INFO)

    # Create log directory if it doesn't exist
    log_dir = os.path.join(KLSP_HOME, "logs")
    os.makedirs(log_dir, exist_ok=True)

    # Define log file paths
    stdout_log_file = os.path.join(log_dir, "stdout.log")
    stderr_log_file = os.path.join(log_dir, "stderr.log")

    # Create a formatter for all handlers
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Configure root logger and remove any existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.setLevel(log_level)

    stdout_handler = logging.handlers.RotatingFileHandler(
        stdout_log_file,
        maxBytes=10485760,  # 10MB
        backupCount=3,
    )
    stdout_handler.setFormatter(formatter)
    stdout_handler.setLevel(log_level)

    stderr_handler = logging.handlers.RotatingFileHandler(
        stderr_log_file,
        maxBytes=10485760,  # 10MB
        backupCount=3,
    )
    stderr_handler.setFormatter(formatter)
    stderr_handler.setLevel(logging.WARNING)

    root_logger.addHandler(stdout_handler)
    root_logger.addHandler(stderr_handler)

    if os.environ.get("LOG_TO_CONSOLE", "0") == "1":
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(log_level)
        root_logger.addHandler(console_handler)
        logger.debug("Console logging enabled")

    # pygls logs every message it frames at DEBUG
    logging.getLogger("pygls").setLevel(logging.WARNING)

    logger.debug("Logging configured successfully")
    logger.debug(f"Standard output logs will be saved to {stdout_log_file}")
    logger.debug(f"Standard error logs will be saved to {stderr_log_file}")


setup_logging()
