"""
Annotation module for the TypeScript to Polymer transpiler.

This module provides the name-dispatched annotation registry and the
built-in Polymer v1 annotations.
"""

from .registry import AnnotationHandler, FunctionHandler, AnnotationRegistry
from .polymer import default_registry, js_string, BUILTIN_HANDLERS

__all__ = [
    'AnnotationHandler',
    'FunctionHandler',
    'AnnotationRegistry',
    'default_registry',
    'js_string',
    'BUILTIN_HANDLERS',
]
