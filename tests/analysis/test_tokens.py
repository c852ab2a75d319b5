"""
Tests for token extraction in klsp/analysis/tokens.py.
"""

import pytest
from dataclasses import dataclass

from klsp.analysis.tokens import extract_token, is_identifier_char


@dataclass
class TokenTestCase:
    """Data class representing a test case for extract_token."""
    name: str
    line: str
    position: int
    expected: str


test_cases = [
    TokenTestCase(name="middle_of_token", line="alpha beta", position=7, expected="beta"),
    TokenTestCase(name="start_of_token", line="alpha beta", position=6, expected="beta"),
    TokenTestCase(name="position_zero", line="x: 1", position=0, expected="x"),
    TokenTestCase(name="end_of_line", line="y: x", position=4, expected="x"),
    TokenTestCase(name="on_space_after_token", line="x + 2", position=1, expected=""),
    TokenTestCase(name="on_operator", line="a + b", position=2, expected=""),
    TokenTestCase(name="on_colon", line="total: 1", position=5, expected=""),
    TokenTestCase(name="underscore_and_digits", line="foo_bar2: 1", position=4, expected="foo_bar2"),
    TokenTestCase(name="multibyte_letters", line="größe: 1", position=3, expected="größe"),
    TokenTestCase(name="empty_line", line="", position=0, expected=""),
    TokenTestCase(name="position_past_end", line="abc", position=10, expected="abc"),
    TokenTestCase(name="negative_position", line="abc def", position=-3, expected="abc"),
    TokenTestCase(name="line_ending_in_space", line="abc ", position=4, expected=""),
]


@pytest.mark.parametrize("test_case", test_cases, ids=[tc.name for tc in test_cases])
def test_extract_token(test_case):
    """Test extract_token against the table of cases."""
    assert extract_token(test_case.line, test_case.position) == test_case.expected


def test_identifier_characters():
    """Letters, digits and underscore are identifier characters; punctuation is not."""
    for ch in "aZ9_ßé":
        assert is_identifier_char(ch), ch
    for ch in " :+-^'\t(":
        assert not is_identifier_char(ch), ch


@pytest.mark.parametrize("line", [
    "x: 1",
    "y: x + 2",
    "  nested_key: value_1 * (a+b)",
    "größe: maß_2 ^ 3",
    "__a__ :: b",
])
def test_token_is_maximal_identifier_substring(line):
    """For every cursor position the token is a maximal identifier run of the line."""
    for position in range(len(line) + 1):
        token = extract_token(line, position)
        if not token:
            continue

        assert token in line
        assert all(is_identifier_char(ch) for ch in token)

        # Some occurrence must cover the cursor and be bounded by non-identifiers
        covering = [
            start
            for start in range(max(0, position - len(token)), position + 1)
            if line[start:start + len(token)] == token
        ]
        assert any(
            (start == 0 or not is_identifier_char(line[start - 1]))
            and (start + len(token) == len(line) or not is_identifier_char(line[start + len(token)]))
            for start in covering
        ), (line, position, token)
