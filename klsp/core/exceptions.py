"""
Core exceptions module.

This module defines custom exceptions used throughout the klsp package.
"""

from typing import List, Optional


class KlspError(Exception):
    """Base class for all klsp errors."""
    pass


class UnknownDocument(KlspError):
    """
    A request addressed a document that is not open.

    The language service lets this propagate so the protocol layer can answer
    the request with an error response; it is never allowed to stop the server.
    """

    def __init__(self, uri: str):
        self.uri = uri
        super().__init__(f"Unknown document: {uri}")


class ExternalToolFailure(KlspError):
    """
    The checker process could not be spawned, awaited or finished in time.

    Fatal for the diagnostics pass that hit it: the publish step is skipped
    for that cycle.
    """

    def __init__(self, command: List[str], reason: str, cause: Optional[BaseException] = None):
        self.command = command
        self.reason = reason
        self.cause = cause
        super().__init__(f"Checker {' '.join(command)!r} failed: {reason}")
