"""
Error types raised by the TypeScript to Polymer transpiler.

Scan failures subclass SyntaxError, the same way the parser reports
malformed input. Every error here is fatal for the current pass: no
partial output is produced.
"""

from typing import Optional


class Ts2PolymerError(Exception):
    """Base class for transpiler errors that are not syntax errors."""
    pass


class UnclosedBracketError(SyntaxError):
    """Raised when an opening bracket has no matching closing bracket."""

    def __init__(self, line: int, pair: str = ''):
        self.line = line
        self.pair = pair
        super().__init__(f'Bracket has no closing at line {line}.')


class ClassNotFoundError(SyntaxError):
    """Raised when a module contains no class declaration."""

    def __init__(self, message: str = 'No class declaration found in module source.'):
        super().__init__(message)


class UnknownAnnotationError(Ts2PolymerError, LookupError):
    """Raised when an annotation has no registered handler."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'No handler registered for annotation "@{name}".')


class NotImplementedFeatureError(Ts2PolymerError, NotImplementedError):
    """Raised when an unsupported output target is requested."""

    def __init__(self, feature: str, detail: Optional[str] = None):
        self.feature = feature
        message = f'{feature} is not yet implemented.'
        if detail:
            message = f'{message} {detail}'
        super().__init__(message)


class InvalidAnnotationError(Ts2PolymerError, ValueError):
    """Raised when an annotation is applied where its handler cannot act."""

    def __init__(self, name: str, reason: str):
        self.name = name
        super().__init__(f'@{name}: {reason}')
