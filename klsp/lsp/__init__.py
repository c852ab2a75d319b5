"""
Language Server Protocol (LSP) implementation.

The models here are protocol-neutral; ``klsp.lsp.server`` adapts them to
pygls and lsprotocol.
"""

from klsp.lsp.models import (
    DiagnosticSeverity,
    EditSet,
    LspDiagnostic,
    LspLocation,
    LspPosition,
    LspRange,
    LspTextEdit,
)

__all__ = [
    'DiagnosticSeverity',
    'EditSet',
    'LspDiagnostic',
    'LspLocation',
    'LspPosition',
    'LspRange',
    'LspTextEdit',
]
