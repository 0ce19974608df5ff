"""
Code generation module for the TypeScript to Polymer transpiler.

This module provides config assembly and Polymer v1 output generation.
"""

from .context import (
    PropertyDescriptor,
    MethodDescriptor,
    BuildState,
    StyleRef,
    AnnotationContext,
)
from .assembler import (
    build_properties_map,
    build_methods_map,
    deferred_value,
    ConfigAssembler,
    AssemblyResult,
)
from .emitter import (
    PolymerEmitter,
    build_property,
    kebab_case,
    non_empty,
    remap_lifecycle,
    specialize_constructor,
)
from .module import PolymerModule, ModuleBuild, read_file, identity_formatter

__all__ = [
    'PropertyDescriptor',
    'MethodDescriptor',
    'BuildState',
    'StyleRef',
    'AnnotationContext',
    'build_properties_map',
    'build_methods_map',
    'deferred_value',
    'ConfigAssembler',
    'AssemblyResult',
    'PolymerEmitter',
    'build_property',
    'kebab_case',
    'non_empty',
    'remap_lifecycle',
    'specialize_constructor',
    'PolymerModule',
    'ModuleBuild',
    'read_file',
    'identity_formatter',
]
