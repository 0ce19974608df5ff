"""
Assembly state for the Polymer code generator.

This module provides the structures shared during one assembly pass: the
target-facing property and method descriptors, the BuildState aggregate
that annotation handlers fill in, and the context value handed to every
annotation handler.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..parser.model import AnnotationInvocation, FieldConfig, FieldConfigMap
from ..parser.builder import strip_param_types


# =============================================================================
# DESCRIPTORS
# =============================================================================

@dataclass
class PropertyDescriptor:
    """Polymer property config built from a property FieldConfig."""
    type: str
    value: Optional[str] = None
    read_only: bool = False
    # Fields added by annotations (notify, reflectToAttribute, observer, ...)
    options: Dict[str, Any] = field(default_factory=OrderedDict)

    def set_option(self, key: str, value: Any) -> None:
        self.options[key] = value

    def items(self) -> Iterator[Tuple[str, Any]]:
        """Yield (key, value) pairs in emission order."""
        yield 'type', self.type
        yield 'value', self.value
        yield 'readOnly', self.read_only
        yield from self.options.items()


@dataclass
class MethodDescriptor:
    """Polymer method built from a method FieldConfig."""
    name: str
    params: str = ''  # JavaScript parameter list, TypeScript types removed
    body: str = '{}'
    static: bool = False
    is_async: bool = False
    accessor: Optional[str] = None
    annotations: List[AnnotationInvocation] = field(default_factory=list)

    @property
    def function_source(self) -> str:
        """Parameter list and body, as written after the 'function' keyword."""
        return f'({self.params}) {self.body}'

    @classmethod
    def from_config(cls, config: FieldConfig) -> 'MethodDescriptor':
        return cls(
            name=config.name,
            params=strip_param_types(config.params),
            body=config.body,
            static=config.static,
            is_async=config.is_async,
            accessor=config.accessor,
            annotations=list(config.annotations),
        )


PropertiesMap = Dict[str, PropertyDescriptor]
MethodsMap = Dict[str, MethodDescriptor]


# =============================================================================
# BUILD STATE
# =============================================================================

@dataclass(frozen=True)
class StyleRef:
    """A style attached to the element template."""
    type: str  # 'link', 'shared' or 'inline'
    style: str


@dataclass
class BuildState:
    """
    Transient state shared across one assembly pass.

    Annotation handlers append to these collections; the emitter renders
    each collection only when it is non-empty. A BuildState belongs to
    exactly one pass and is discarded after emission.
    """
    observers: List[str] = field(default_factory=list)
    behaviors: List[str] = field(default_factory=list)
    styles: List[StyleRef] = field(default_factory=list)
    listeners: Dict[str, str] = field(default_factory=OrderedDict)  # event -> method name
    extras: Dict[str, Any] = field(default_factory=OrderedDict)  # annotation name -> result


# =============================================================================
# ANNOTATION CONTEXT
# =============================================================================

@dataclass
class AnnotationContext:
    """
    Everything an annotation handler may read or mutate.

    Field-scoped invocations receive `config` and either `prop` or
    `method`; class-scoped invocations receive neither and record their
    effects on `state`.
    """
    properties: FieldConfigMap
    methods: FieldConfigMap
    params: List[str]
    state: BuildState
    config: Optional[FieldConfig] = None
    prop: Optional[PropertyDescriptor] = None
    method: Optional[MethodDescriptor] = None
    properties_map: Optional[PropertiesMap] = None
    methods_map: Optional[MethodsMap] = None

    @property
    def is_class_scope(self) -> bool:
        return self.config is None
