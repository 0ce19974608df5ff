"""
Config assembly for Polymer code generation.

This module turns the source model into target-facing property and method
descriptors, running every annotation handler in source order, followed
by the class-level annotation pass.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..annotations import AnnotationRegistry

from ..parser.model import FieldConfigMap, SourceModule
from .context import (
    AnnotationContext,
    BuildState,
    MethodDescriptor,
    MethodsMap,
    PropertiesMap,
    PropertyDescriptor,
)


def deferred_value(value: str, es6: bool = False) -> str:
    """Wrap an initializer in a factory so every instance gets its own copy."""
    if es6:
        return f'() => {value}'
    return f'function() {{ return {value}; }}'


def build_properties_map(
    properties: FieldConfigMap,
    methods: FieldConfigMap,
    registry: 'AnnotationRegistry',
    state: BuildState,
    es6: bool = False,
) -> PropertiesMap:
    """
    Build Polymer property descriptors in declaration order.

    Static and private fields are skipped. Primitive initializers are copied
    as written; other initializers are wrapped in a factory function.

    Args:
        properties: Property field configs
        methods: Method field configs (passed to annotation handlers)
        registry: Annotation handlers
        state: BuildState of the current pass
        es6: Use arrow functions for value factories

    Returns:
        Ordered mapping of property name -> PropertyDescriptor
    """
    properties_map: PropertiesMap = OrderedDict()

    for prop_name, config in properties.items():
        if config.static or config.private:
            continue

        prop = PropertyDescriptor(type=config.type)
        if config.value:
            prop.value = config.value if config.is_primitive else deferred_value(config.value, es6)
        if config.readonly:
            prop.read_only = True

        for invocation in config.annotations:
            registry.invoke(invocation, AnnotationContext(
                properties=properties,
                methods=methods,
                params=invocation.params,
                state=state,
                config=config,
                prop=prop,
            ))

        properties_map[prop_name] = prop

    return properties_map


def build_methods_map(
    methods: FieldConfigMap,
    properties: FieldConfigMap,
    properties_map: PropertiesMap,
    registry: 'AnnotationRegistry',
    state: BuildState,
) -> MethodsMap:
    """
    Build Polymer method descriptors in declaration order.

    Every method, static ones included, gets a fresh descriptor; its
    annotations may change the descriptor, the properties map or the
    observers of the BuildState.

    Returns:
        Ordered mapping of method key -> MethodDescriptor
    """
    methods_map: MethodsMap = OrderedDict()

    for method_key, config in methods.items():
        method = MethodDescriptor.from_config(config)

        for invocation in config.annotations:
            registry.invoke(invocation, AnnotationContext(
                properties=properties,
                methods=methods,
                params=invocation.params,
                state=state,
                config=config,
                method=method,
                properties_map=properties_map,
            ))

        methods_map[method_key] = method

    return methods_map


@dataclass
class AssemblyResult:
    """Output of one assembly pass."""
    properties_map: PropertiesMap
    methods_map: MethodsMap
    state: BuildState = field(default_factory=BuildState)


class ConfigAssembler:
    """
    Runs one assembly pass over a SourceModule.

    Each call to assemble() creates its own BuildState, so passes never
    share mutable state.
    """

    def __init__(self, registry: Optional['AnnotationRegistry'] = None):
        if registry is None:
            # Import here to avoid circular imports
            from ..annotations import default_registry
            registry = default_registry()
        self.registry = registry

    def assemble(self, module: SourceModule, state: Optional[BuildState] = None) -> AssemblyResult:
        """
        Build descriptors and run the class-level annotation pass.

        Args:
            module: Parsed source module
            state: BuildState to fill; a new one is created when omitted

        Returns:
            AssemblyResult with the properties map, methods map and state
        """
        state = state if state is not None else BuildState()

        properties_map = build_properties_map(
            module.properties, module.methods, self.registry, state, module.es6
        )
        methods_map = build_methods_map(
            module.methods, module.properties, properties_map, self.registry, state
        )

        for invocation in module.annotations:
            result = self.registry.invoke(invocation, AnnotationContext(
                properties=module.properties,
                methods=module.methods,
                params=invocation.params,
                state=state,
                properties_map=properties_map,
                methods_map=methods_map,
            ))
            if result is not None:
                state.extras[invocation.name] = result

        state.extras['styles'] = state.styles
        return AssemblyResult(properties_map, methods_map, state)
