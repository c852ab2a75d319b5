"""
Whole-token rename within a single document.

Renaming is a pure computation over a snapshot: it returns the edits and
leaves applying them to the editor.
"""

import logging
from typing import Iterator, List

from klsp.analysis.resolver import resolve_in_document, symbol_at
from klsp.analysis.tokens import is_identifier_char
from klsp.documents.store import DocumentStore
from klsp.lsp.models import EditSet, LspPosition, LspRange, LspTextEdit

# Configure logging
logger = logging.getLogger(__name__)


def _is_whole_token(line: str, start: int, end: int) -> bool:
    """Check that the match is not embedded in a longer identifier."""
    if start > 0 and is_identifier_char(line[start - 1]):
        return False
    if end < len(line) and is_identifier_char(line[end]):
        return False
    return True


def find_token_occurrences(text: str, symbol: str) -> Iterator[LspRange]:
    """
    Yield the range of every whole-token occurrence of a symbol.

    Lines are scanned top to bottom and each line left to right. After every
    match the search resumes at the end of that match.
    """
    if not symbol:
        return
    for line_number, line in enumerate(text.split("\n")):
        search_from = 0
        while True:
            start = line.find(symbol, search_from)
            if start == -1:
                break
            end = start + len(symbol)
            if _is_whole_token(line, start, end):
                yield LspRange.on_line(line_number, start, end)
            search_from = end


def rename_symbol(store: DocumentStore, uri: str, position: LspPosition, new_name: str) -> EditSet:
    """
    Compute the edits that rename the symbol under the cursor.

    Args:
        store: Store holding the open documents
        uri: Document to rename in
        position: Cursor position on a use or definition of the symbol
        new_name: Replacement text for every occurrence

    Returns:
        Edits keyed by uri; empty when the cursor is not on a defined symbol

    Raises:
        UnknownDocument: If the document is not open
    """
    document = store.get(uri)
    if resolve_in_document(document, position) is None:
        return {}

    symbol = symbol_at(document, position)
    edits: List[LspTextEdit] = [
        LspTextEdit(range=occurrence, new_text=new_name)
        for occurrence in find_token_occurrences(document.text, symbol)
    ]
    logger.info(f"Renaming {symbol!r} to {new_name!r} in {uri}: {len(edits)} edits")

    if not edits:
        return {}
    return {uri: edits}
