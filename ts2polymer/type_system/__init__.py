"""
Types module for the TypeScript to Polymer transpiler.

This module provides the Polymer type vocabulary and type conversion utilities.
"""

from .mappings import (
    resolve_polymer_type,
    coerce_polymer_type,
    is_primitive_literal,
    is_string_literal,
    literal_type,
    unquote,
    POLYMER_TYPES,
    DEFAULT_POLYMER_TYPE,
    TS_TO_POLYMER_MAP,
    LIFECYCLE_REMAP,
)

__all__ = [
    'resolve_polymer_type',
    'coerce_polymer_type',
    'is_primitive_literal',
    'is_string_literal',
    'literal_type',
    'unquote',
    'POLYMER_TYPES',
    'DEFAULT_POLYMER_TYPE',
    'TS_TO_POLYMER_MAP',
    'LIFECYCLE_REMAP',
]
