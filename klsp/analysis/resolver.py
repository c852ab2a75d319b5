"""
Go-to-definition resolution.
"""

import logging
from typing import Optional

from klsp.analysis.definitions import scan_definitions
from klsp.analysis.tokens import extract_token
from klsp.documents.store import Document, DocumentStore
from klsp.lsp.models import LspPosition, LspRange

# Configure logging
logger = logging.getLogger(__name__)


def symbol_at(document: Document, position: LspPosition) -> str:
    """Return the token under a position, or "" if there is none."""
    return extract_token(document.line(position.line), position.character)


def resolve_in_document(document: Document, position: LspPosition) -> Optional[LspRange]:
    """Resolve the symbol under a position against the document's definitions."""
    symbol = symbol_at(document, position)
    if not symbol:
        logger.debug(f"No symbol at {position.line}:{position.character} in {document.uri}")
        return None

    definition = scan_definitions(document.text).get(symbol)
    if definition is None:
        logger.debug(f"Symbol {symbol!r} has no definition in {document.uri}")
    return definition


def resolve_definition(store: DocumentStore, uri: str, position: LspPosition) -> Optional[LspRange]:
    """
    Find where the symbol under the cursor is defined.

    Args:
        store: Store holding the open documents
        uri: Document to search
        position: Cursor position

    Returns:
        Range of the defining name, or None if the cursor is not on a defined symbol

    Raises:
        UnknownDocument: If the document is not open
    """
    return resolve_in_document(store.get(uri), position)
