"""
Token extraction for cursor positions.

A token is a maximal run of identifier characters (letters, digits and
underscores). Offsets are Python string indices, i.e. characters, never bytes.
"""


def is_identifier_char(ch: str) -> bool:
    """Check whether a single character can be part of a symbol name."""
    return ch.isalnum() or ch == "_"


def extract_token(line: str, position: int) -> str:
    """
    Return the token touched by a cursor at the given character offset.

    The cursor may sit on the token or directly after its last character
    (including at the end of the line). When the character under the cursor is
    not an identifier character the result is the empty string, which callers
    treat as "no symbol here".

    Args:
        line: A single line of text without its line terminator
        position: Character offset of the cursor, clamped to the line

    Returns:
        The token text, or "" when the cursor is not on a token
    """
    position = max(0, min(position, len(line)))

    if position < len(line) and not is_identifier_char(line[position]):
        return ""

    start = position
    while start > 0 and is_identifier_char(line[start - 1]):
        start -= 1

    end = position
    while end < len(line) and is_identifier_char(line[end]):
        end += 1

    return line[start:end]
