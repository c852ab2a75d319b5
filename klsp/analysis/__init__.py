"""
Symbol analysis for K documents.

Provides the building blocks behind go-to-definition and rename: token
extraction, definition scanning, resolution and whole-token rename.
"""

from klsp.analysis.definitions import scan_definitions
from klsp.analysis.rename import find_token_occurrences, rename_symbol
from klsp.analysis.resolver import resolve_definition
from klsp.analysis.tokens import extract_token, is_identifier_char

__all__ = [
    'extract_token',
    'find_token_occurrences',
    'is_identifier_char',
    'rename_symbol',
    'resolve_definition',
    'scan_definitions',
]
