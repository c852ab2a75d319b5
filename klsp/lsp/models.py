#!/usr/bin/env python3
"""
Data models for language features.

This module contains dataclasses representing the protocol-neutral values the
analysis code produces: positions, ranges, locations, text edits and
diagnostics. The server converts them to lsprotocol types at the edge.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List


@dataclass(frozen=True)
class LspPosition:
    """Position in a document expressed as zero-based line and character offset."""
    line: int
    character: int


@dataclass(frozen=True)
class LspRange:
    """Range in a document expressed as start and end positions (end exclusive)."""
    start: LspPosition
    end: LspPosition

    @classmethod
    def on_line(cls, line: int, start: int, end: int) -> "LspRange":
        """Build a range that starts and ends on the same line."""
        return cls(LspPosition(line, start), LspPosition(line, end))


@dataclass(frozen=True)
class LspLocation:
    """Location in a document expressed as a URI and a range."""
    uri: str
    range: LspRange


@dataclass(frozen=True)
class LspTextEdit:
    """Replacement of the text inside a range."""
    range: LspRange
    new_text: str


class DiagnosticSeverity(IntEnum):
    """Severity levels, numbered as on the wire."""
    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


@dataclass(frozen=True)
class LspDiagnostic:
    """A problem reported against a range of a document."""
    range: LspRange
    severity: DiagnosticSeverity
    source: str
    message: str


# Edits keyed by document URI, in discovery order
EditSet = Dict[str, List[LspTextEdit]]
