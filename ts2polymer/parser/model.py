"""
Source model definitions for TypeScript class parsing.

This module contains the dataclasses produced by the source model builder:
spans, annotation invocations, field configs and the parsed module.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import List, Optional


# =============================================================================
# BASE TYPES
# =============================================================================

@dataclass(frozen=True)
class Span:
    """Offsets (start inclusive, end exclusive) into the module source."""
    start: int
    end: int

    def slice(self, source: str) -> str:
        return source[self.start:self.end]


@dataclass
class AnnotationInvocation:
    """A decorator-like call site, e.g. @observe("value")."""
    name: str
    params: List[str] = field(default_factory=list)  # raw expression text
    span: Optional[Span] = None


# =============================================================================
# FIELD CONFIGS
# =============================================================================

PROPERTY = 'property'
METHOD = 'method'


@dataclass
class FieldConfig:
    """Parsed representation of one property or method declaration."""
    name: str
    kind: str = PROPERTY  # 'property' or 'method'
    type: str = 'Object'  # Polymer-facing type name (may need coercion)
    type_text: str = ''  # declared TypeScript type, as written
    static: bool = False
    private: bool = False
    readonly: bool = False
    is_async: bool = False
    accessor: Optional[str] = None  # 'get', 'set' or None
    value: Optional[str] = None  # initializer text (properties)
    params: str = ''  # raw parameter list text (methods)
    body: str = ''  # raw '{...}' text (methods)
    is_primitive: bool = False
    annotations: List[AnnotationInvocation] = field(default_factory=list)
    span: Optional[Span] = None
    body_span: Optional[Span] = None

    @property
    def is_method(self) -> bool:
        return self.kind == METHOD


class FieldConfigMap(OrderedDict):
    """Ordered mapping of field name -> FieldConfig, in declaration order."""
    pass


# =============================================================================
# MODULE
# =============================================================================

@dataclass
class SourceModule:
    """A TypeScript module reduced to the component class and its surroundings."""
    class_name: str
    base_class: Optional[str] = None
    annotations: List[AnnotationInvocation] = field(default_factory=list)
    properties: FieldConfigMap = field(default_factory=FieldConfigMap)
    methods: FieldConfigMap = field(default_factory=FieldConfigMap)
    links: List[str] = field(default_factory=list)  # import "link!..."
    scripts: List[str] = field(default_factory=list)  # import "script!..."
    prelude: str = ''  # JS statements before the class
    epilogue: str = ''  # JS statements after the class
    class_span: Optional[Span] = None
    es6: bool = False
