"""
Parser module for the TypeScript to Polymer transpiler.

This module provides the source model definitions and the builder that
extracts them from TypeScript component modules.
"""

from .model import (
    Span,
    AnnotationInvocation,
    FieldConfig,
    FieldConfigMap,
    SourceModule,
    PROPERTY,
    METHOD,
)
from .builder import SourceModelBuilder, split_params, strip_param_types, locate_assignment

__all__ = [
    'Span',
    'AnnotationInvocation',
    'FieldConfig',
    'FieldConfigMap',
    'SourceModule',
    'PROPERTY',
    'METHOD',
    'SourceModelBuilder',
    'split_params',
    'strip_param_types',
    'locate_assignment',
]
