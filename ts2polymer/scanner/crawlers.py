"""
Bracket- and string-aware character crawlers.

These primitives replace a full TypeScript lexer: they walk source text one
character at a time and jump over bracketed regions, string literals,
template literals, regex literals and comments, so that callers can search
or split on top-level characters only.
"""

import re
from typing import Callable, List, NamedTuple, Optional, Pattern, Union

from ..errors import UnclosedBracketError


# =============================================================================
# CONSTANTS
# =============================================================================

# Returned by locate() when the term does not occur at the top level
NOT_FOUND = -1

# Opening character -> bracket pair handed to match_bracket()
BRACKET_PAIRS = {
    '{': '{}',
    '[': '[]',
    '(': '()',
    '<': '<>',
}

QUOTES = ('"', "'", '`')

COMMENT_STARTS = ('//', '/*')

# A '/' after one of these characters or keywords opens a regex literal
REGEX_PRECEDERS = '(,=:[!&|?{};+-*%<>~^'
REGEX_KEYWORDS = (
    'return', 'typeof', 'case', 'do', 'else', 'in', 'of',
    'new', 'delete', 'void', 'throw', 'yield', 'await',
)

Term = Union[str, Pattern[str], Callable[[str], bool]]


class ClosestMatch(NamedTuple):
    """Result of closest_index_of(): index of the match and the matched text."""
    index: int
    found: Optional[str]


# =============================================================================
# LOW-LEVEL HELPERS
# =============================================================================

def _term_matcher(term: Term) -> Callable[[str], bool]:
    """Normalize a search term into a single-character predicate."""
    if isinstance(term, str):
        return lambda char: char == term
    if hasattr(term, 'match'):
        return lambda char: term.match(char) is not None
    return term


def is_escaped(text: str, index: int) -> bool:
    """Check whether the character at index follows an odd run of backslashes."""
    backslashes = 0
    pos = index - 1
    while pos >= 0 and text[pos] == '\\':
        backslashes += 1
        pos -= 1
    return backslashes % 2 == 1


def skip_string(text: str, offset: int) -> int:
    """Return the index of the quote closing the string opened at offset.

    Returns NOT_FOUND if the string is never closed.
    """
    quote = text[offset]
    pos = offset + 1
    while pos < len(text):
        if text[pos] == quote and not is_escaped(text, pos):
            return pos
        pos += 1
    return NOT_FOUND


def skip_comment(text: str, offset: int) -> int:
    """Return the index just past the comment starting at offset.

    Line comments stop before their newline so the newline stays visible.
    """
    if text.startswith('//', offset):
        end = text.find('\n', offset)
        return len(text) if end == -1 else end
    end = text.find('*/', offset + 2)
    return len(text) if end == -1 else end + 2


def starts_regex(text: str, offset: int) -> bool:
    """Check whether the '/' at offset opens a regex literal rather than a division."""
    pos = offset - 1
    while pos >= 0 and text[pos].isspace():
        pos -= 1
    if pos < 0 or text[pos] in REGEX_PRECEDERS:
        return True
    end = pos + 1
    while pos >= 0 and (text[pos].isalnum() or text[pos] in '_$'):
        pos -= 1
    return text[pos + 1:end] in REGEX_KEYWORDS


def skip_regex(text: str, offset: int) -> int:
    """Return the index of the '/' closing the regex literal opened at offset.

    A regex literal never spans lines; NOT_FOUND means the '/' is not one.
    """
    in_class = False
    pos = offset + 1
    while pos < len(text):
        char = text[pos]
        if char == '\\':
            pos += 2
            continue
        if char == '\n':
            return NOT_FOUND
        if in_class:
            in_class = char != ']'
        elif char == '[':
            in_class = True
        elif char == '/':
            return pos
        pos += 1
    return NOT_FOUND


def line_of(text: str, offset: int) -> int:
    """1-based line number of offset."""
    return text.count('\n', 0, offset) + 1


# =============================================================================
# CRAWLERS
# =============================================================================

def match_bracket(text: str, offset: int, pair: str) -> int:
    """
    Find the index of the bracket closing the one at offset.

    Only the given bracket type is counted. String, template and regex
    literals and comments inside the region are skipped, and the '>' of an
    arrow ('=>') never closes an angle bracket.

    Args:
        text: Source text
        offset: Index of the opening bracket (pair[0])
        pair: Bracket pair to match, e.g. '{}', '[]', '()' or '<>'

    Returns:
        Index of the matching closing bracket

    Raises:
        UnclosedBracketError: The text ends before the bracket is closed
    """
    opening, closing = pair[0], pair[1]
    depth = 1
    pos = offset + 1
    length = len(text)

    while pos < length:
        char = text[pos]
        if char in QUOTES and not is_escaped(text, pos):
            end = skip_string(text, pos)
            if end == NOT_FOUND:
                break
            pos = end + 1
            continue
        if char == '/' and text.startswith(COMMENT_STARTS, pos):
            pos = skip_comment(text, pos)
            continue
        if char == '/' and starts_regex(text, pos):
            end = skip_regex(text, pos)
            if end != NOT_FOUND:
                pos = end + 1
                continue
        if char == opening:
            depth += 1
        elif char == closing and not (closing == '>' and text[pos - 1] == '='):
            depth -= 1
            if depth == 0:
                return pos
        pos += 1

    raise UnclosedBracketError(line_of(text, offset), pair)


def locate(text: str, term: Term, offset: int = 0) -> int:
    """
    Works like str.find, but skips all kinds of brackets, strings and comments.

    The term is tested before a bracket or quote is entered, so searching
    for an opening bracket or a quote finds the first top-level one.

    Args:
        text: Text to search
        term: A single character, a compiled pattern tested against one
            character, or a predicate taking one character
        offset: Index to start searching from

    Returns:
        Index of the first top-level match, or NOT_FOUND
    """
    matches = _term_matcher(term)
    length = len(text)

    while offset < length:
        char = text[offset]
        if matches(char):
            return offset
        if char in BRACKET_PAIRS:
            offset = match_bracket(text, offset, BRACKET_PAIRS[char])
        elif char in QUOTES and not is_escaped(text, offset):
            offset = skip_string(text, offset)
            if offset == NOT_FOUND:
                return NOT_FOUND
        elif char == '/' and text.startswith(COMMENT_STARTS, offset):
            offset = skip_comment(text, offset)
            continue
        elif char == '/' and starts_regex(text, offset):
            end = skip_regex(text, offset)
            if end != NOT_FOUND:
                offset = end
        offset += 1

    return NOT_FOUND


def strip_comments(text: str) -> str:
    """Remove comments that lie outside string, template and regex literals."""
    chunks = []
    start = pos = 0
    length = len(text)

    while pos < length:
        char = text[pos]
        if char in QUOTES and not is_escaped(text, pos):
            end = skip_string(text, pos)
            if end == NOT_FOUND:
                break
            pos = end + 1
        elif char == '/' and text.startswith(COMMENT_STARTS, pos):
            chunks.append(text[start:pos])
            pos = start = skip_comment(text, pos)
        elif char == '/' and starts_regex(text, pos):
            end = skip_regex(text, pos)
            pos = pos + 1 if end == NOT_FOUND else end + 1
        else:
            pos += 1

    chunks.append(text[start:])
    return ''.join(chunks)


def split(text: str, term: Term, trim: bool = False) -> List[str]:
    """
    Split text on every top-level occurrence of term.

    Args:
        text: Text to split
        term: Separator, see locate()
        trim: Strip surrounding whitespace from every chunk

    Returns:
        Chunks between successive separators; the last chunk is the remainder
    """
    chunks = []
    start = 0
    while True:
        index = locate(text, term, start)
        chunk = text[start:] if index == NOT_FOUND else text[start:index]
        chunks.append(chunk.strip() if trim else chunk)
        if index == NOT_FOUND:
            return chunks
        start = index + 1


def closest_index_of(text: str, pattern: Union[str, Pattern[str]], offset: int = 0) -> ClosestMatch:
    """
    Find the first character matching pattern, with no bracket or string awareness.

    Args:
        text: Text to search
        pattern: Regular expression (string or compiled) tested per character
        offset: Index to start searching from

    Returns:
        ClosestMatch(index, found), or ClosestMatch(NOT_FOUND, None)
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    for index in range(offset, len(text)):
        match = regex.search(text[index])
        if match:
            return ClosestMatch(index, match.group(0))
    return ClosestMatch(NOT_FOUND, None)
