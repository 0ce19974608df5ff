"""
Type mappings and literal utilities for TypeScript to Polymer.

This module contains the mappings used to turn TypeScript type annotations
and initializers into Polymer property types, the naming remap between
custom-element lifecycle callbacks and Polymer v1 callbacks, and small
helpers for classifying and unquoting literal text.
"""

import re
from typing import Optional

from ..scanner import split


# =============================================================================
# TYPE MAPPING CONSTANTS
# =============================================================================

# Type names Polymer v1 accepts natively as a property `type`
POLYMER_TYPES = ('Boolean', 'Date', 'Number', 'String', 'Array', 'Object')

DEFAULT_POLYMER_TYPE = 'Object'

# TypeScript type keyword -> Polymer type
TS_TO_POLYMER_MAP = {
    'string': 'String',
    'String': 'String',
    'number': 'Number',
    'Number': 'Number',
    'boolean': 'Boolean',
    'Boolean': 'Boolean',
    'Date': 'Date',
    'Array': 'Array',
    'ReadonlyArray': 'Array',
    'any': 'Object',
    'object': 'Object',
    'Object': 'Object',
    'unknown': 'Object',
    'Function': 'Object',
}

# Union members that only make a type nullable
NULLABLE_TYPES = ('null', 'undefined', 'void')

# Custom elements v1 callback -> Polymer v1 callback
LIFECYCLE_REMAP = {
    'constructor': 'created',
    'connectedCallback': 'attached',
    'disconnectedCallback': 'detached',
    'attributeChangedCallback': 'attributeChanged',
}


# =============================================================================
# PRECOMPILED REGEX PATTERNS
# =============================================================================

STRING_LITERAL_PATTERN = re.compile(r'''^(?:"(?:[^"\\\n]|\\.)*"|'(?:[^'\\\n]|\\.)*')$''', re.DOTALL)
TEMPLATE_LITERAL_PATTERN = re.compile(r'^`(?:[^`\\]|\\.)*`$', re.DOTALL)
NUMBER_LITERAL_PATTERN = re.compile(
    r'^[-+]?(?:0[xX][0-9a-fA-F_]+|0[bB][01_]+|0[oO][0-7_]+|(?:\d[\d_]*\.?[\d_]*|\.\d[\d_]*)(?:[eE][-+]?\d+)?)n?$'
)
KEYWORD_LITERALS = ('true', 'false', 'null', 'undefined')
GENERIC_ARRAY_PATTERN = re.compile(r'^(?:Readonly)?Array\s*<')
QUALIFIED_NAME_PATTERN = re.compile(r'^[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*$')


# =============================================================================
# LITERAL CLASSIFICATION
# =============================================================================

def is_string_literal(text: str) -> bool:
    """Check if text is a single- or double-quoted string literal."""
    return bool(STRING_LITERAL_PATTERN.match(text))


def is_primitive_literal(text: Optional[str]) -> bool:
    """
    Check if an initializer is a primitive literal.

    Primitive initializers can be shared between instances; anything else
    must be produced fresh for every instance.
    """
    if not text:
        return False
    text = text.strip()
    if text in KEYWORD_LITERALS:
        return True
    if is_string_literal(text) or NUMBER_LITERAL_PATTERN.match(text):
        return True
    return bool(TEMPLATE_LITERAL_PATTERN.match(text)) and '${' not in text


def literal_type(text: Optional[str]) -> Optional[str]:
    """Infer the Polymer type of an initializer from its literal kind."""
    if not text:
        return None
    text = text.strip()
    if text in ('true', 'false'):
        return 'Boolean'
    if is_string_literal(text) or TEMPLATE_LITERAL_PATTERN.match(text):
        return 'String'
    if NUMBER_LITERAL_PATTERN.match(text):
        return 'Number'
    if text.startswith('['):
        return 'Array'
    if text.startswith('new Date'):
        return 'Date'
    return None


def unquote(text: str, unescape: bool = True) -> str:
    """
    Strip the quotes from a string literal.

    Args:
        text: Literal text, e.g. '"value"'
        unescape: Resolve \\n, \\t and escaped quotes

    Returns:
        The literal's content, or the text unchanged if it is not quoted
    """
    text = text.strip()
    if len(text) < 2 or text[0] not in '"\'`' or text[-1] != text[0]:
        return text
    quote = text[0]
    content = text[1:-1]
    if unescape:
        content = (content
                   .replace('\\n', '\n')
                   .replace('\\t', '\t')
                   .replace('\\' + quote, quote))
    return content


# =============================================================================
# TYPE CONVERSION FUNCTIONS
# =============================================================================

def _single_type_to_polymer(type_text: str) -> str:
    """Convert one (non-union) TypeScript type to a Polymer type name."""
    type_text = type_text.strip()

    while type_text.startswith('(') and type_text.endswith(')') and '=>' not in type_text:
        type_text = type_text[1:-1].strip()

    if '=>' in type_text:
        return DEFAULT_POLYMER_TYPE
    if type_text.endswith('[]') or type_text.startswith('[') or GENERIC_ARRAY_PATTERN.match(type_text):
        return 'Array'
    if type_text.startswith('{'):
        return DEFAULT_POLYMER_TYPE
    if is_string_literal(type_text) or TEMPLATE_LITERAL_PATTERN.match(type_text):
        return 'String'
    if type_text in ('true', 'false'):
        return 'Boolean'
    if NUMBER_LITERAL_PATTERN.match(type_text):
        return 'Number'

    base_name = type_text.split('<', 1)[0].strip()
    if base_name in TS_TO_POLYMER_MAP:
        return TS_TO_POLYMER_MAP[base_name]
    if QUALIFIED_NAME_PATTERN.match(base_name):
        return base_name
    return DEFAULT_POLYMER_TYPE


def resolve_polymer_type(type_text: Optional[str], initializer: Optional[str] = None) -> str:
    """
    Resolve the Polymer type for a property declaration.

    Nullable union members are ignored; a union of different types resolves
    to Object. Unknown type names (interfaces, classes) are returned as
    written, to be coerced by the emitter.

    Args:
        type_text: Declared TypeScript type, if any
        initializer: Initializer text, used when no type is declared

    Returns:
        A Polymer type name
    """
    if not type_text or not type_text.strip():
        return literal_type(initializer) or DEFAULT_POLYMER_TYPE

    members = [m for m in split(type_text, '|', trim=True) if m and m not in NULLABLE_TYPES]
    if not members:
        return DEFAULT_POLYMER_TYPE

    resolved = {_single_type_to_polymer(member) for member in members}
    if len(resolved) == 1:
        return resolved.pop()
    return DEFAULT_POLYMER_TYPE


def coerce_polymer_type(type_name: Optional[str]) -> str:
    """Coerce a type name into the Polymer vocabulary."""
    if type_name in POLYMER_TYPES:
        return type_name
    return DEFAULT_POLYMER_TYPE
