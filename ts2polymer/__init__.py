"""
TypeScript to Polymer Transpiler

This package converts TypeScript component classes into Polymer v1
element declarations.

Module Structure:
- scanner/: Bracket- and string-aware crawlers (locate, split, match_bracket)
- parser/: Source model and its builder (SourceModelBuilder, FieldConfig)
- type_system/: Polymer type vocabulary and lifecycle mappings
- annotations/: Annotation registry and built-in Polymer annotations
- codegen/: Config assembly, declaration emitter and <dom-module> output
- ts2polymer.py: Main transpiler and command line interface

Usage:
    from ts2polymer import TypeScriptToPolymerTranspiler

    html = TypeScriptToPolymerTranspiler().transpile_file('src/input-math.ts')
"""

# Re-export main classes for convenience
from .ts2polymer import TypeScriptToPolymerTranspiler
from .config import TranspilerOptions
from .parser import SourceModelBuilder
from .annotations import AnnotationRegistry, default_registry
from .codegen import ConfigAssembler, PolymerEmitter, PolymerModule

__all__ = [
    'TypeScriptToPolymerTranspiler',
    'TranspilerOptions',
    'SourceModelBuilder',
    'AnnotationRegistry',
    'default_registry',
    'ConfigAssembler',
    'PolymerEmitter',
    'PolymerModule',
]
