"""
Turns checker stderr into diagnostics.

The checker reports a syntax error by echoing the offending source line and
printing a caret under the failing column::

    total: a +
              ^

The line number is recovered by looking the echoed text up among the
document's lines. Only one diagnostic is produced per run: when the output
holds several echoes or carets, the last of each wins.
"""

import logging
from typing import List, Sequence

from klsp.core.constants import CARET_MARKER, DIAGNOSTIC_SOURCE, PARSE_MARKER, SYNTAX_ERROR_PREFIX
from klsp.lsp.models import DiagnosticSeverity, LspDiagnostic, LspRange

# Configure logging
logger = logging.getLogger(__name__)


def _find_source_line(echo: str, document_lines: Sequence[str]) -> int:
    """Index of the first document line equal to the echo after stripping, else 0."""
    wanted = echo.strip()
    for index, line in enumerate(document_lines):
        if line.strip() == wanted:
            return index
    return 0


def translate_checker_output(output: str, document_lines: Sequence[str]) -> List[LspDiagnostic]:
    """
    Translate the checker's stderr into a single diagnostic.

    Args:
        output: Raw stderr text of a failed checker run
        document_lines: The document's lines, already stripped

    Returns:
        A one-element list with an ERROR diagnostic one character wide. Output
        that does not follow the echo/caret convention lands on line 0,
        character 0.
    """
    logger.debug(f"Translating checker output: {output!r}")
    line_number = 0
    character = 0

    for line in output.splitlines():
        stripped = line.strip()
        if stripped.startswith(CARET_MARKER):
            character = line.find(CARET_MARKER)
        elif not stripped.startswith(PARSE_MARKER):
            line_number = _find_source_line(line, document_lines)

    diagnostic = LspDiagnostic(
        range=LspRange.on_line(line_number, character, character + 1),
        severity=DiagnosticSeverity.ERROR,
        source=DIAGNOSTIC_SOURCE,
        message=f"{SYNTAX_ERROR_PREFIX}{output}",
    )
    logger.debug(f"Checker error anchored at {line_number}:{character}")
    return [diagnostic]
