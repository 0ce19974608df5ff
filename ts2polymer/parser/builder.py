"""
Source model builder for TypeScript component modules.

The builder walks TypeScript source with the scanner crawlers instead of a
full grammar: it delimits one top-level statement or class member at a
time, keeps method bodies and initializers as raw text, and records the
decorator-style annotations written before each member.
"""

import logging
import re
from typing import List, Optional, Set, Tuple

from ..errors import ClassNotFoundError, UnclosedBracketError
from ..scanner import NOT_FOUND, locate, match_bracket, split, skip_comment, strip_comments, line_of
from ..type_system import resolve_polymer_type, is_primitive_literal, unquote
from .model import (
    Span,
    AnnotationInvocation,
    FieldConfig,
    FieldConfigMap,
    SourceModule,
    PROPERTY,
    METHOD,
)

logger = logging.getLogger(__name__)


# =============================================================================
# PRECOMPILED REGEX PATTERNS
# =============================================================================

ANNOTATION_NAME_PATTERN = re.compile(r'@([A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*)')

MODIFIERS = r'public|private|protected|static|readonly|abstract|declare|override|async|get|set'

# A modifier only counts as one when another name follows it
MODIFIER_PATTERN = re.compile(r'(' + MODIFIERS + r')\s+(?=[A-Za-z_$#"\'])')
MEMBER_NAME_PATTERN = re.compile(r'''#?[A-Za-z_$][\w$]*|"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*\'''')

CLASS_HEAD_PATTERN = re.compile(
    r'^(?:export\s+)?(?:default\s+)?(?:abstract\s+)?class\s+([A-Za-z_$][\w$]*)'
    r'(?:\s*<.*?>)?(?:\s+extends\s+(.+?))?(?:\s+implements\s+.+?)?\s*$',
    re.DOTALL
)
IMPORT_PATTERN = re.compile(r'^import\b')
RESOURCE_IMPORT_PATTERN = re.compile(r'''^import\s+(['"])(link|script)!(.+?)\1\s*;?$''', re.DOTALL)
REEXPORT_PATTERN = re.compile(r'^export\s*(?:\{|\*)')
TS_ONLY_PATTERN = re.compile(
    r'^(?:export\s+)?(?:default\s+)?'
    r'(?:declare\b|interface\b|type\s+[A-Za-z_$][\w$]*\s*(?:<[^=]*>)?\s*=)'
)
EXPORT_PREFIX_PATTERN = re.compile(r'^export\s+(?:default\s+)?')

STATEMENT_END_PATTERN = re.compile(r'[;{]')
METHOD_BODY_PATTERN = re.compile(r'[{;]')
TYPE_END_PATTERN = re.compile(r'[=;\n]')
VALUE_END_PATTERN = re.compile(r'[;\n]')

# Start of the next class member on the line after a semicolon-less initializer
MEMBER_START_PATTERN = re.compile(
    r'\s*(?:$|@|(?:' + MODIFIERS + r')\s+[A-Za-z_$#"\']'
    r'|#?[A-Za-z_$][\w$]*\s*(?:[?!]\s*)?(?:[:=(<;]|$))'
)
# An initializer ending in one of these continues on the next line
CONTINUATION_ENDINGS = tuple('=+-*/%&|^!<>?:,.(~')

# TypeScript-only parts of a parameter declaration
PARAM_MODIFIER_PATTERN = re.compile(r'^(?:(?:public|private|protected|readonly|override)\s+)+')
PARAM_NAME_PATTERN = re.compile(r'^(\.\.\.)?\s*([A-Za-z_$][\w$]*|\{.*\}|\[.*\])\s*\??', re.DOTALL)


# =============================================================================
# PARAMETER HELPERS
# =============================================================================

def locate_assignment(text: str, start: int = 0) -> int:
    """Locate the first top-level '=' that is an assignment, not '=>', '==' or '>='."""
    pos = start
    while True:
        index = locate(text, '=', pos)
        if index == NOT_FOUND:
            return NOT_FOUND
        after = text[index + 1:index + 2]
        before = text[index - 1:index] if index > 0 else ''
        if after not in ('>', '=') and before not in ('=', '!', '<', '>'):
            return index
        pos = index + 2 if after else index + 1


def split_params(text: str) -> List[str]:
    """Split a parameter list on top-level commas, dropping empty chunks."""
    if not text.strip():
        return []
    return [chunk for chunk in split(text, ',', trim=True) if chunk]


def strip_param_types(params: str) -> str:
    """
    Remove TypeScript annotations from a parameter list.

    Access modifiers, optional markers and ': type' suffixes are dropped;
    default values are kept, e.g. 'public a: string, b = 2' -> 'a, b = 2'.
    """
    stripped = []
    for param in split_params(params):
        param = PARAM_MODIFIER_PATTERN.sub('', param)
        default = ''
        eq = locate_assignment(param)
        if eq != NOT_FOUND:
            default = ' = ' + param[eq + 1:].strip()
            param = param[:eq]
        colon = locate(param, ':')
        if colon != NOT_FOUND:
            param = param[:colon]
        match = PARAM_NAME_PATTERN.match(param.strip())
        name = param.strip().rstrip('?').strip()
        if match:
            name = (match.group(1) or '') + match.group(2)
        if name == 'this':
            continue
        stripped.append(name + default)
    return ', '.join(stripped)


class SourceModelBuilder:
    """
    Builds the source model of a TypeScript component module.

    Usage:
        builder = SourceModelBuilder(es6=True)
        module = builder.parse_module(source)
        module.properties['value'].type  # 'String'
    """

    def __init__(self, es6: bool = False):
        self.es6 = es6

    # =========================================================================
    # CURSOR HELPERS
    # =========================================================================

    @staticmethod
    def _skip_whitespace(text: str, pos: int) -> int:
        while pos < len(text) and text[pos].isspace():
            pos += 1
        return pos

    @staticmethod
    def _skip_trivia(text: str, pos: int) -> int:
        """Skip whitespace, comments and stray semicolons."""
        length = len(text)
        while pos < length:
            char = text[pos]
            if char.isspace() or char == ';':
                pos += 1
            elif text.startswith(('//', '/*'), pos):
                pos = skip_comment(text, pos)
            else:
                break
        return pos

    # =========================================================================
    # ANNOTATIONS
    # =========================================================================

    def _parse_annotations(
        self, text: str, pos: int, offset: int
    ) -> Tuple[List[AnnotationInvocation], int]:
        """Parse consecutive '@name' / '@name(params)' call sites starting at pos."""
        annotations = []
        pos = self._skip_trivia(text, pos)
        while pos < len(text) and text[pos] == '@':
            match = ANNOTATION_NAME_PATTERN.match(text, pos)
            if not match:
                raise SyntaxError(f'Invalid annotation at line {line_of(text, pos)}.')
            end = match.end()
            params: List[str] = []
            if end < len(text) and text[end] == '(':
                close = match_bracket(text, end, '()')
                params = split_params(text[end + 1:close])
                end = close + 1
            annotations.append(AnnotationInvocation(
                name=match.group(1),
                params=params,
                span=Span(offset + pos, offset + end),
            ))
            pos = self._skip_trivia(text, end)
        return annotations, pos

    # =========================================================================
    # CLASS BODY
    # =========================================================================

    def parse_class_body(self, body: str, offset: int = 0) -> Tuple[FieldConfigMap, FieldConfigMap]:
        """
        Parse the members of a class body.

        Args:
            body: Text between the class braces
            offset: Position of body within the module source, added to spans

        Returns:
            (properties, methods) field config maps in declaration order

        Raises:
            UnclosedBracketError: A bracket or string region never closes
            SyntaxError: A member declaration cannot be delimited
        """
        properties = FieldConfigMap()
        methods = FieldConfigMap()
        pos = 0

        while True:
            annotations, pos = self._parse_annotations(body, pos, offset)
            if pos >= len(body):
                if annotations:
                    raise SyntaxError(
                        f'Annotation @{annotations[-1].name} is not followed by a member.'
                    )
                break

            config, pos = self._parse_member(body, pos, offset, annotations)
            if config is None:
                continue
            if config.is_method:
                key = f'{config.accessor} {config.name}' if config.accessor else config.name
                methods[key] = config
            else:
                properties[config.name] = config

        return properties, methods

    def _parse_member(
        self, text: str, pos: int, offset: int, annotations: List[AnnotationInvocation]
    ) -> Tuple[Optional[FieldConfig], int]:
        """Parse one member declaration; returns (config or None, next position)."""
        start = pos
        modifiers: Set[str] = set()
        while True:
            match = MODIFIER_PATTERN.match(text, pos)
            if not match:
                break
            modifiers.add(match.group(1))
            pos = match.end()

        name_match = MEMBER_NAME_PATTERN.match(text, pos)
        if not name_match:
            raise SyntaxError(f'Unexpected member declaration at line {line_of(text, pos)}.')
        name = unquote(name_match.group(0), unescape=False)
        pos = name_match.end()
        if pos < len(text) and text[pos] in '?!':
            pos += 1

        next_pos = self._skip_whitespace(text, pos)
        if next_pos < len(text) and text[next_pos] in '(<':
            return self._parse_method(text, next_pos, start, offset, name, modifiers, annotations)
        if next_pos < len(text) and text[next_pos] in ':=':
            pos = next_pos
        return self._parse_property(text, pos, start, offset, name, modifiers, annotations)

    def _parse_method(
        self,
        text: str,
        pos: int,
        start: int,
        offset: int,
        name: str,
        modifiers: Set[str],
        annotations: List[AnnotationInvocation],
    ) -> Tuple[Optional[FieldConfig], int]:
        """Parse a method from its parameter list (or generic parameters) onwards."""
        if text[pos] == '<':
            pos = self._skip_whitespace(text, match_bracket(text, pos, '<>') + 1)
        if pos >= len(text) or text[pos] != '(':
            raise SyntaxError(f'Expected parameter list of "{name}" at line {line_of(text, pos)}.')

        params_end = match_bracket(text, pos, '()')
        params = text[pos + 1:params_end]
        pos = self._skip_whitespace(text, params_end + 1)

        return_type = ''
        if pos < len(text) and text[pos] == ':':
            type_start = self._skip_whitespace(text, pos + 1)
            type_pos = type_start
            if type_pos < len(text) and text[type_pos] == '{':
                type_pos = match_bracket(text, type_pos, '{}') + 1
            pos = locate(text, METHOD_BODY_PATTERN, type_pos)
            return_type = text[type_start:len(text) if pos == NOT_FOUND else pos].strip()

        if pos == NOT_FOUND or pos >= len(text) or text[pos] != '{':
            # Overload or abstract signature without a body
            end = len(text) if pos == NOT_FOUND else pos + 1
            logger.debug('Skipping bodiless signature of "%s"', name)
            return None, end

        body_end = match_bracket(text, pos, '{}')
        config = FieldConfig(
            name=name,
            kind=METHOD,
            type_text=return_type,
            static='static' in modifiers,
            private='private' in modifiers or name.startswith('#'),
            readonly='readonly' in modifiers,
            is_async='async' in modifiers,
            accessor='get' if 'get' in modifiers else ('set' if 'set' in modifiers else None),
            params=params,
            body=text[pos:body_end + 1],
            annotations=annotations,
            span=Span(offset + start, offset + body_end + 1),
            body_span=Span(offset + pos, offset + body_end + 1),
        )
        return config, body_end + 1

    def _find_type_end(self, text: str, start: int) -> int:
        """Find where a property type annotation ends (top-level '=', ';' or newline)."""
        pos = start
        while True:
            index = locate(text, TYPE_END_PATTERN, pos)
            if index == NOT_FOUND:
                return len(text)
            if text[index] == '=' and text[index + 1:index + 2] in ('>', '='):
                pos = index + 2
                continue
            return index

    def _find_value_end(self, text: str, start: int) -> int:
        """
        Find where a property initializer ends.

        The initializer ends at the next top-level ';'. Without a semicolon it
        ends at a top-level newline once the expression is complete and the
        next line starts another member.
        """
        pos = start
        while True:
            index = locate(text, VALUE_END_PATTERN, pos)
            if index == NOT_FOUND:
                return len(text)
            if text[index] == ';':
                return index
            value = strip_comments(text[start:index]).strip()
            if (value and not value.endswith(CONTINUATION_ENDINGS)
                    and MEMBER_START_PATTERN.match(text, index + 1)):
                return index
            pos = index + 1

    def _parse_property(
        self,
        text: str,
        pos: int,
        start: int,
        offset: int,
        name: str,
        modifiers: Set[str],
        annotations: List[AnnotationInvocation],
    ) -> Tuple[FieldConfig, int]:
        """Parse a property from its optional type annotation onwards."""
        type_text = ''
        if pos < len(text) and text[pos] == ':':
            type_start = self._skip_whitespace(text, pos + 1)
            pos = self._find_type_end(text, type_start)
            type_text = strip_comments(text[type_start:pos]).strip()
            if pos < len(text) and text[pos] == '\n':
                next_pos = self._skip_whitespace(text, pos)
                if next_pos < len(text) and text[next_pos] == '=':
                    pos = next_pos

        value = None
        if pos < len(text) and text[pos] == '=':
            value_end = self._find_value_end(text, pos + 1)
            value = strip_comments(text[pos + 1:value_end]).strip()
            pos = value_end

        config = FieldConfig(
            name=name,
            kind=PROPERTY,
            type=resolve_polymer_type(type_text, value),
            type_text=type_text,
            static='static' in modifiers,
            private='private' in modifiers or name.startswith('#'),
            readonly='readonly' in modifiers,
            value=value,
            is_primitive=is_primitive_literal(value),
            annotations=annotations,
            span=Span(offset + start, offset + pos),
        )
        return config, pos + 1

    # =========================================================================
    # MODULE
    # =========================================================================

    def _next_statement(self, source: str, pos: int) -> Tuple[int, Optional[int]]:
        """
        Delimit the top-level statement starting at pos.

        Returns:
            (end, brace) where end is exclusive and brace is the index of the
            statement's top-level '{' block, or None for simple statements
        """
        head = source[pos:pos + 32]
        if IMPORT_PATTERN.match(head) or REEXPORT_PATTERN.match(head):
            index = locate(source, ';', pos)
            return (len(source) if index == NOT_FOUND else index + 1), None

        index = locate(source, STATEMENT_END_PATTERN, pos)
        if index == NOT_FOUND:
            return len(source), None
        if source[index] == ';':
            return index + 1, None

        end = match_bracket(source, index, '{}') + 1
        next_pos = self._skip_whitespace(source, end)
        if next_pos < len(source) and source[next_pos] == ';':
            end = next_pos + 1
        return end, index

    def parse_module(self, source: str) -> SourceModule:
        """
        Parse a TypeScript module containing one component class.

        Args:
            source: Module source text

        Returns:
            The SourceModule for the first class in the module

        Raises:
            ClassNotFoundError: The module declares no class
            UnclosedBracketError: A bracket or string region never closes
        """
        module: Optional[SourceModule] = None
        links: List[str] = []
        scripts: List[str] = []
        prelude: List[str] = []
        epilogue: List[str] = []

        pos = self._skip_trivia(source, 0)
        while pos < len(source):
            end, brace = self._next_statement(source, pos)
            statement = source[pos:end].strip()

            resource = RESOURCE_IMPORT_PATTERN.match(statement)
            if resource:
                (links if resource.group(2) == 'link' else scripts).append(resource.group(3))
            elif IMPORT_PATTERN.match(statement) or REEXPORT_PATTERN.match(statement):
                logger.debug('Dropping module import: %s', statement.splitlines()[0])
            elif TS_ONLY_PATTERN.match(statement):
                logger.debug('Dropping TypeScript-only statement: %s', statement.splitlines()[0])
            elif module is None and brace is not None and self._is_class_head(source[pos:brace]):
                module = self._parse_class(source, pos, brace)
            else:
                kept = EXPORT_PREFIX_PATTERN.sub('', statement)
                (prelude if module is None else epilogue).append(kept)

            pos = self._skip_trivia(source, end)

        if module is None:
            raise ClassNotFoundError()

        module.links = links
        module.scripts = scripts
        module.prelude = '\n'.join(prelude)
        module.epilogue = '\n'.join(epilogue)
        logger.debug(
            'Parsed class %s: %d properties, %d methods, %d class annotations',
            module.class_name, len(module.properties), len(module.methods), len(module.annotations),
        )
        return module

    def _is_class_head(self, head: str) -> bool:
        _, pos = self._parse_annotations(head, 0, 0)
        return bool(CLASS_HEAD_PATTERN.match(head[pos:].strip()))

    def _parse_class(self, source: str, start: int, brace: int) -> SourceModule:
        """Parse a class statement whose body opens at brace."""
        head = source[start:brace]
        annotations, pos = self._parse_annotations(head, 0, start)
        match = CLASS_HEAD_PATTERN.match(head[pos:].strip())

        close = match_bracket(source, brace, '{}')
        body_start = brace + 1
        try:
            properties, methods = self.parse_class_body(source[body_start:close], body_start)
        except UnclosedBracketError as e:
            raise UnclosedBracketError(e.line + line_of(source, body_start) - 1, e.pair) from e

        base_class = match.group(2).strip() if match.group(2) else None
        return SourceModule(
            class_name=match.group(1),
            base_class=base_class,
            annotations=annotations,
            properties=properties,
            methods=methods,
            class_span=Span(start, close + 1),
            es6=self.es6,
        )
