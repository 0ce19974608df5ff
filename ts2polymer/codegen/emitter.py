"""
Polymer v1 declaration emitter.

This module renders assembled descriptors into a `Polymer({...})`
registration call followed by static member assignments. Output is a
single line per section; pretty-printing is left to the formatter.
"""

import json
import re
from collections import OrderedDict
from typing import Any, Dict, Iterable, List

from ..parser.model import SourceModule
from ..type_system import LIFECYCLE_REMAP, coerce_polymer_type
from .assembler import AssemblyResult
from .context import MethodDescriptor, PropertyDescriptor


# =============================================================================
# PRECOMPILED REGEX PATTERNS
# =============================================================================

KEBAB_BOUNDARY_PATTERNS = [
    (re.compile(r'([a-z\d])([A-Z])'), r'\1-\2'),  # "fooBar" -> "foo-Bar"
    (re.compile(r'([A-Z]+)([A-Z][a-z\d])'), r'\1-\2'),  # "HTMLElement" -> "HTML-Element"
    (re.compile(r'[^A-Za-z\d]+'), '-'),  # separators
]

SUPER_CALL_PATTERN = re.compile(r'(?:\n[\s]*)?(?<![\w.$])super\(.*?\);')
SUPER_RESULT_PATTERN = re.compile(r'\b(var|let|const)\s+(\w+)\s*=\s*_super\.call\(this(?:.*?)\)\s*\|\|\s*this;')


# =============================================================================
# HELPERS
# =============================================================================

def kebab_case(name: str) -> str:
    """Derive a dashed tag-like identifier, e.g. 'InputMath' -> 'input-math'."""
    for pattern, replacement in KEBAB_BOUNDARY_PATTERNS:
        name = pattern.sub(replacement, name)
    return name.strip('-').lower()


def non_empty(template: str, *chunks: Any) -> str:
    """Format template with chunks, or return '' if any chunk is empty."""
    if not all(chunks):
        return ''
    return template.format(*chunks)


def remap_lifecycle(name: str) -> str:
    """Rename custom-element lifecycle callbacks to their Polymer v1 names."""
    return LIFECYCLE_REMAP.get(name, name)


def render_value(value: Any) -> str:
    if value is True:
        return 'true'
    return str(value)


def build_property(name: str, descriptor: PropertyDescriptor) -> str:
    """
    Build a Polymer property config.

    Falsy fields are left out; a type outside the Polymer vocabulary is
    written as Object.

    Returns:
        String representation of the property config object
    """
    fields = []
    for key, value in descriptor.items():
        if not value:
            continue
        if key == 'type':
            value = coerce_polymer_type(value)
        fields.append(f'{key}:{render_value(value)}')
    return f'{name}:{{{",".join(fields)}}}'


def specialize_constructor(body: str) -> str:
    """Drop the base-class super() call; Polymer v1 has no superclass to call."""
    body = SUPER_CALL_PATTERN.sub('', body, count=1)
    return SUPER_RESULT_PATTERN.sub(r'\1 \2 = this;', body, count=1)


class PolymerEmitter:
    """
    Renders a Polymer v1 element declaration.

    emit() is a pure function of its inputs: the same module and assembly
    result always produce the same text.
    """

    def __init__(self, es6: bool = False):
        self.es6 = es6

    # =========================================================================
    # SECTIONS
    # =========================================================================

    def registration_key(self, module: SourceModule, result: AssemblyResult) -> str:
        return result.state.extras.get('component') or kebab_case(module.class_name)

    def build_properties(self, result: AssemblyResult) -> str:
        chunks = [build_property(name, prop) for name, prop in result.properties_map.items()]
        return non_empty('properties:{{{}}}', ','.join(chunks))

    def build_observers(self, result: AssemblyResult) -> str:
        return non_empty('observers:[{}]', ','.join(result.state.observers))

    def build_behaviors(self, result: AssemblyResult) -> str:
        return non_empty('behaviors:[{}]', ','.join(result.state.behaviors))

    def build_listeners(self, result: AssemblyResult) -> str:
        chunks = [
            f'{json.dumps(event, ensure_ascii=False)}:{json.dumps(handler, ensure_ascii=False)}'
            for event, handler in result.state.listeners.items()
        ]
        return non_empty('listeners:{{{}}}', ','.join(chunks))

    def build_method(self, method: MethodDescriptor) -> str:
        """Render an instance method as an object literal member."""
        name = remap_lifecycle(method.name)
        source = method.function_source
        if method.name == 'constructor':
            source = f'({method.params}) {specialize_constructor(method.body)}'
        if method.accessor:
            return f'{method.accessor} {name}{source}'
        keyword = 'async function' if method.is_async else 'function'
        return f'{name}:{keyword}{source}'

    def build_static_assignments(self, module: SourceModule, result: AssemblyResult) -> List[str]:
        """
        Static properties and methods, assigned after the declaration.

        Static accessors are grouped by name into one Object.defineProperty()
        call, so a getter and setter pair share a single descriptor.
        """
        assignments = []
        accessors: Dict[str, List[MethodDescriptor]] = OrderedDict()
        for name, config in module.properties.items():
            if config.static and config.value:
                assignments.append(f'{module.class_name}.{name} = {config.value};')
        for method in result.methods_map.values():
            if not method.static:
                continue
            if method.accessor:
                accessors.setdefault(method.name, []).append(method)
                continue
            keyword = 'async function' if method.is_async else 'function'
            assignments.append(
                f'{module.class_name}.{remap_lifecycle(method.name)} = {keyword}{method.function_source};'
            )
        for name, methods in accessors.items():
            members = ', '.join(f'{m.accessor}: function{m.function_source}' for m in methods)
            assignments.append(
                f'Object.defineProperty({module.class_name}, {json.dumps(name, ensure_ascii=False)}, '
                f'{{ {members}, configurable: true }});'
            )
        return assignments

    # =========================================================================
    # ASSEMBLY
    # =========================================================================

    def _sections(self, module: SourceModule, result: AssemblyResult) -> Iterable[str]:
        yield f'is:{json.dumps(self.registration_key(module, result), ensure_ascii=False)}'
        yield self.build_properties(result)
        yield self.build_observers(result)
        yield self.build_behaviors(result)
        yield self.build_listeners(result)
        for method in result.methods_map.values():
            if not method.static:
                yield self.build_method(method)

    def emit(self, module: SourceModule, result: AssemblyResult) -> str:
        """
        Render the declaration.

        Args:
            module: Parsed source module
            result: Assembled descriptors and build state

        Returns:
            The Polymer({...}) call followed by static assignments
        """
        keyword = 'const' if self.es6 else 'var'
        body = ','.join(chunk for chunk in self._sections(module, result) if chunk)
        lines: List[str] = [
            f'{keyword} {module.class_name} = Polymer({{',
            body,
            '});',
        ]
        lines.extend(self.build_static_assignments(module, result))
        return '\n'.join(line for line in lines if line)
