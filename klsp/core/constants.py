"""
Constants used throughout the klsp package.
"""

# Server identity reported to the editor
SERVER_NAME = "K Language Server"

# Source tag attached to every diagnostic
DIAGNOSTIC_SOURCE = "k-language-server"

# Checker invoked with the document path when nothing else is configured
DEFAULT_CHECKER = "/usr/local/bin/k"
DEFAULT_CHECKER_TIMEOUT = 30.0

# Markers in the checker's stderr
CARET_MARKER = "^"
PARSE_MARKER = "'parse"
SYNTAX_ERROR_PREFIX = "Syntax error at: "
