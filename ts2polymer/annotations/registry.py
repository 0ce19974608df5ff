"""
Annotation registry for name-dispatched annotation handlers.

Every annotation written in the source (e.g. @notify, @observe("value"))
is dispatched by name to a handler object. The core only guarantees the
invocation order and the shape of the context; what a handler does with
it is up to the handler.
"""

from typing import Any, Callable, Dict, List, Optional

from ..errors import UnknownAnnotationError
from ..parser.model import AnnotationInvocation
from ..codegen.context import AnnotationContext


class AnnotationHandler:
    """
    Base class for annotation handlers.

    Subclasses set `name` and implement handle(). A non-None return value
    of a class-scoped invocation is recorded in BuildState.extras.
    """

    name: str = ''

    def handle(self, ctx: AnnotationContext) -> Optional[Any]:
        raise NotImplementedError


class FunctionHandler(AnnotationHandler):
    """Adapts a plain function to the AnnotationHandler interface."""

    def __init__(self, name: str, func: Callable[[AnnotationContext], Optional[Any]]):
        self.name = name
        self._func = func

    def handle(self, ctx: AnnotationContext) -> Optional[Any]:
        return self._func(ctx)

    def __repr__(self) -> str:
        return f'FunctionHandler({self.name!r})'


class AnnotationRegistry:
    """
    Mapping of annotation name -> handler.

    Usage:
        registry = AnnotationRegistry()

        @registry.handler('notify')
        def notify(ctx):
            ctx.prop.set_option('notify', True)
    """

    def __init__(self):
        self._handlers: Dict[str, AnnotationHandler] = {}

    def register(self, handler: AnnotationHandler) -> AnnotationHandler:
        """Register a handler under its name, replacing any previous one."""
        if not handler.name:
            raise ValueError('Annotation handlers must have a name')
        self._handlers[handler.name] = handler
        return handler

    def handler(self, name: str) -> Callable:
        """Decorator registering a plain function as the handler for name."""
        def decorator(func: Callable[[AnnotationContext], Optional[Any]]) -> Callable:
            self.register(FunctionHandler(name, func))
            return func
        return decorator

    def get(self, name: str) -> AnnotationHandler:
        try:
            return self._handlers[name]
        except KeyError:
            raise UnknownAnnotationError(name) from None

    def names(self) -> List[str]:
        return list(self._handlers)

    def __contains__(self, name: str) -> bool:
        return name in self._handlers

    def invoke(self, invocation: AnnotationInvocation, ctx: AnnotationContext) -> Optional[Any]:
        """
        Run the handler registered for an invocation.

        Handler errors propagate unchanged to the caller.
        """
        return self.get(invocation.name).handle(ctx)
