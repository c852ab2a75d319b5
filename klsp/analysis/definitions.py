"""
Definition scanning.

A definition line starts at column 0 with an identifier, optionally followed
by spaces or tabs, then a colon. Indented ``key: value`` lines are nested
entries, not top-level definitions, and are skipped.
"""

import logging
from typing import Dict, Iterator, Optional, Tuple

from klsp.analysis.tokens import is_identifier_char
from klsp.lsp.models import LspRange

# Configure logging
logger = logging.getLogger(__name__)


def definition_name(line: str) -> Optional[str]:
    """
    Return the name defined on a line, or None if it is not a definition line.

    >>> definition_name("total: a + b")
    'total'
    >>> definition_name("  nested: 1") is None
    True
    """
    end = 0
    while end < len(line) and is_identifier_char(line[end]):
        end += 1
    if end == 0:
        return None

    cursor = end
    while cursor < len(line) and line[cursor] in " \t":
        cursor += 1
    if cursor < len(line) and line[cursor] == ":":
        return line[:end]
    return None


def iter_definitions(text: str) -> Iterator[Tuple[str, LspRange]]:
    """Yield (name, range) for every definition line, top to bottom."""
    for line_number, line in enumerate(text.split("\n")):
        name = definition_name(line)
        if name is not None:
            yield name, LspRange.on_line(line_number, 0, len(name))


def scan_definitions(text: str) -> Dict[str, LspRange]:
    """
    Build the definition index of a document.

    When a name is defined more than once the later definition wins.

    Args:
        text: Full document text

    Returns:
        Mapping from symbol name to the range of the name on its defining line
    """
    definitions: Dict[str, LspRange] = {}
    for name, name_range in iter_definitions(text):
        definitions[name] = name_range
    logger.debug(f"Scanned {len(definitions)} definitions")
    return definitions
