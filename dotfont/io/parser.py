"""
ArrayTextParser - Numbers from Array Literals
=============================================
Extracts the integers of a C or Python array literal pasted as text:

    const unsigned char font[] = {
      0x7C, 0x12, /* 'A' */ 0b0111, 'B', '\\n', -1
    };

Comments and declarations are ignored. The parser is deliberately
lenient: a character literal with an unknown escape decodes to the
escaped character itself, and a token that cannot be decoded at all is
dropped rather than reported. Callers decide whether an empty result
is an error.
"""

import re
from typing import List, Optional

_COMMENT_RE = re.compile(r'/\*[\s\S]*?\*/|(?://|#).*$', re.MULTILINE)

# Priority order: hex, binary, signed decimal, character literal
_TOKEN_RE = re.compile(
    r"0[xX][0-9a-fA-F]+"
    r"|0[bB][01]+"
    r"|-?\d+"
    r"|'(\\[xX][0-9a-fA-F]+|\\.|[^'\\])'"
)

_ESCAPES = {
    'n': 10,
    'r': 13,
    't': 9,
    "'": 39,
    '"': 34,
    '\\': 92,
    '0': 0,
}


def strip_comments(text: str) -> str:
    """Remove /* block */, // line and # line comments."""
    return _COMMENT_RE.sub('', text)


def literal_body(text: str) -> str:
    """
    Return the text between the first opening and the last closing
    bracket ({ or [ / } or ]), or the whole text if there is no pair.
    """
    opens = [i for i in (text.find('{'), text.find('[')) if i != -1]
    start = min(opens) if opens else -1
    end = max(text.rfind('}'), text.rfind(']'))
    if start != -1 and end != -1 and start < end:
        return text[start + 1:end]
    return text


def decode_char_literal(content: str) -> Optional[int]:
    """
    Decode the inside of a quoted character literal.

    Returns:
        Character code, or None if the literal cannot be decoded
    """
    if not content:
        return None
    if content[0] != '\\' or len(content) == 1:
        return ord(content[0])

    kind = content[1]
    if kind in ('x', 'X'):
        digits = content[2:]
        if not digits:
            return ord(kind)
        try:
            return int(digits, 16)
        except ValueError:
            return ord(kind)
    if kind in _ESCAPES:
        return _ESCAPES[kind]
    # Unknown escape: fall back to the escaped character
    return ord(kind)


def parse_number(token: str) -> Optional[int]:
    """Evaluate a hex, binary or decimal token. None if invalid."""
    try:
        lowered = token.lower()
        if lowered.startswith('0x'):
            return int(lowered[2:], 16)
        if lowered.startswith('0b'):
            return int(lowered[2:], 2)
        return int(token, 10)
    except ValueError:
        return None


def parse_array(text: str) -> List[int]:
    """
    Parse the integers of an array literal.

    Args:
        text: Raw text containing an array literal (or bare numbers)

    Returns:
        Integers in source order; empty if nothing matched
    """
    if not text:
        return []

    body = literal_body(strip_comments(text))

    numbers = []
    for match in _TOKEN_RE.finditer(body):
        char_content = match.group(1)
        if char_content is not None:
            value = decode_char_literal(char_content)
        else:
            value = parse_number(match.group(0))
        if value is not None:
            numbers.append(value)
    return numbers
