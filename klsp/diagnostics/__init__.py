"""Checker-backed diagnostics."""

from klsp.diagnostics.checker import Checker, CheckerResult
from klsp.diagnostics.translator import translate_checker_output

__all__ = [
    'Checker',
    'CheckerResult',
    'translate_checker_output',
]
