"""
Scanner module for the TypeScript to Polymer transpiler.

This module provides the bracket- and string-aware character crawlers
used instead of a full TypeScript lexer.
"""

from .crawlers import (
    NOT_FOUND,
    BRACKET_PAIRS,
    ClosestMatch,
    locate,
    match_bracket,
    split,
    closest_index_of,
    skip_string,
    skip_comment,
    skip_regex,
    starts_regex,
    strip_comments,
    is_escaped,
    line_of,
)

__all__ = [
    'NOT_FOUND',
    'BRACKET_PAIRS',
    'ClosestMatch',
    'locate',
    'match_bracket',
    'split',
    'closest_index_of',
    'skip_string',
    'skip_comment',
    'skip_regex',
    'starts_regex',
    'strip_comments',
    'is_escaped',
    'line_of',
]
