"""
Built-in Polymer v1 annotations.

Field-scoped annotations (@attr, @notify, @computed, @observe, @listen)
adjust the descriptor of the member they decorate; class-scoped ones
(@template, @style, @behavior, @component) record their effect on the
BuildState or return a value for BuildState.extras.
"""

import json
from typing import Any, Dict, Optional

from ..errors import InvalidAnnotationError
from ..type_system import unquote
from ..codegen.context import AnnotationContext, PropertyDescriptor, StyleRef
from .registry import AnnotationHandler, AnnotationRegistry


def js_string(text: str) -> str:
    """Render text as a double-quoted JavaScript string literal."""
    return json.dumps(text, ensure_ascii=False)


class PropertyAnnotation(AnnotationHandler):
    """Base class for annotations that only apply to properties."""

    def handle(self, ctx: AnnotationContext) -> Optional[Any]:
        if ctx.prop is None:
            raise InvalidAnnotationError(self.name, 'can only decorate a property')
        return self.apply(ctx, ctx.prop)

    def apply(self, ctx: AnnotationContext, prop: PropertyDescriptor) -> Optional[Any]:
        raise NotImplementedError


class MethodAnnotation(AnnotationHandler):
    """Base class for annotations that only apply to methods."""

    def handle(self, ctx: AnnotationContext) -> Optional[Any]:
        if ctx.method is None:
            raise InvalidAnnotationError(self.name, 'can only decorate a method')
        if not ctx.params:
            raise InvalidAnnotationError(self.name, 'expects at least one argument')
        return self.apply(ctx)

    def apply(self, ctx: AnnotationContext) -> Optional[Any]:
        raise NotImplementedError


class ClassAnnotation(AnnotationHandler):
    """Base class for annotations that only apply to the class."""

    def handle(self, ctx: AnnotationContext) -> Optional[Any]:
        if not ctx.is_class_scope:
            raise InvalidAnnotationError(self.name, 'can only decorate a class')
        return self.apply(ctx)

    def apply(self, ctx: AnnotationContext) -> Optional[Any]:
        raise NotImplementedError


# =============================================================================
# PROPERTY ANNOTATIONS
# =============================================================================

class Attr(PropertyAnnotation):
    """@attr: reflect the property to an attribute."""
    name = 'attr'

    def apply(self, ctx, prop):
        prop.set_option('reflectToAttribute', True)


class Notify(PropertyAnnotation):
    """@notify: fire <name>-changed events."""
    name = 'notify'

    def apply(self, ctx, prop):
        prop.set_option('notify', True)


class Computed(PropertyAnnotation):
    """@computed("method(dep, ...)"): make the property computed."""
    name = 'computed'

    def apply(self, ctx, prop):
        if len(ctx.params) != 1:
            raise InvalidAnnotationError(self.name, 'expects exactly one argument')
        prop.set_option('computed', js_string(unquote(ctx.params[0])))


# =============================================================================
# METHOD ANNOTATIONS
# =============================================================================

class Observe(MethodAnnotation):
    """
    @observe("path", ...): call the method when the paths change.

    A single path naming a declared property becomes that property's
    `observer`; anything else becomes a complex observer.
    """
    name = 'observe'

    def apply(self, ctx):
        paths = [unquote(param) for param in ctx.params]
        method_name = ctx.method.name
        properties_map = ctx.properties_map or {}

        if len(paths) == 1 and paths[0] in properties_map:
            properties_map[paths[0]].set_option('observer', js_string(method_name))
        else:
            ctx.state.observers.append(js_string(f'{method_name}({", ".join(paths)})'))


class Listen(MethodAnnotation):
    """@listen("event"): add the method to the element's listeners."""
    name = 'listen'

    def apply(self, ctx):
        for event in ctx.params:
            ctx.state.listeners[unquote(event)] = ctx.method.name


# =============================================================================
# CLASS ANNOTATIONS
# =============================================================================

class Template(ClassAnnotation):
    """@template("<markup>") or @template("file.html"): the element template."""
    name = 'template'

    def apply(self, ctx) -> Dict[str, str]:
        if len(ctx.params) != 1:
            raise InvalidAnnotationError(self.name, 'expects exactly one argument')
        template = unquote(ctx.params[0])
        template_type = 'link' if template.strip().endswith('.html') else 'inline'
        return {'template': template, 'type': template_type}


class Style(ClassAnnotation):
    """@style(...): stylesheet files, inline CSS or shared style module names."""
    name = 'style'

    def apply(self, ctx):
        for param in ctx.params:
            style = unquote(param)
            if style.strip().endswith('.css'):
                style_type = 'link'
            elif '{' in style:
                style_type = 'inline'
            else:
                style_type = 'shared'
            ctx.state.styles.append(StyleRef(style_type, style))


class Behavior(ClassAnnotation):
    """@behavior(...): append behavior references as written."""
    name = 'behavior'

    def apply(self, ctx):
        ctx.state.behaviors.extend(ctx.params)


class Component(ClassAnnotation):
    """@component("tag-name"): explicit registration key."""
    name = 'component'

    def apply(self, ctx) -> str:
        if len(ctx.params) != 1:
            raise InvalidAnnotationError(self.name, 'expects exactly one argument')
        return unquote(ctx.params[0])


BUILTIN_HANDLERS = (Attr, Notify, Computed, Observe, Listen, Template, Style, Behavior, Component)


def default_registry() -> AnnotationRegistry:
    """Create a registry with all built-in Polymer annotations."""
    registry = AnnotationRegistry()
    for handler_cls in BUILTIN_HANDLERS:
        registry.register(handler_cls())
    return registry
