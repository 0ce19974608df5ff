"""
Polymer element module generation.

This module wraps a parsed component into a complete `<dom-module>`
document: HTML imports, the element template with its styles, and the
script that registers the element. Template and style files are read
through an injected reader; formatting is delegated to an injected
formatter.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..annotations import AnnotationRegistry

from ..errors import NotImplementedFeatureError
from ..parser.model import SourceModule
from .assembler import ConfigAssembler
from .context import MethodsMap, PropertiesMap
from .emitter import PolymerEmitter, kebab_case, non_empty

logger = logging.getLogger(__name__)

Reader = Callable[[str, str], str]
Formatter = Callable[[str, str], str]

SUPPORTED_POLYMER_VERSIONS = (1,)


def read_file(base_path: str, relative_path: str) -> str:
    """Read a whole file relative to base_path; raises FileNotFoundError if missing."""
    path = Path(base_path) / relative_path
    logger.debug('Reading %s', path)
    return path.read_text(encoding='utf-8')


def identity_formatter(text: str, format: str) -> str:
    return text


@dataclass
class ModuleBuild:
    """Result of build_polymer_v1()."""
    methods_map: MethodsMap
    properties_map: PropertiesMap
    extras_map: Dict[str, Any]
    module_src: str


class PolymerModule:
    """
    A component module rendered as a Polymer element.

    Usage:
        module = PolymerModule(SourceModelBuilder().parse_module(source), 'src/')
        html = module.to_string()
    """

    def __init__(
        self,
        source: SourceModule,
        base_path: str = '.',
        registry: Optional['AnnotationRegistry'] = None,
        reader: Reader = read_file,
        formatter: Formatter = identity_formatter,
    ):
        self.source = source
        self.base_path = base_path
        self._assembler = ConfigAssembler(registry)
        self._emitter = PolymerEmitter(es6=source.es6)
        self._reader = reader
        self._formatter = formatter

    @property
    def tag_name(self) -> str:
        return kebab_case(self.source.class_name)

    def build_polymer_v1(self) -> ModuleBuild:
        """Assemble and emit the Polymer v1 declaration."""
        result = self._assembler.assemble(self.source)
        module_src = self._emitter.emit(self.source, result)
        return ModuleBuild(
            methods_map=result.methods_map,
            properties_map=result.properties_map,
            extras_map=result.state.extras,
            module_src=module_src,
        )

    # =========================================================================
    # TEMPLATE AND STYLES
    # =========================================================================

    def _render_template(self, template: Optional[Dict[str, str]]) -> str:
        if not template:
            return ''
        if template.get('type') == 'link':
            return self._reader(self.base_path, template['template'])
        if template.get('type') == 'inline':
            return template['template']
        return ''

    def _render_styles(self, styles) -> List[str]:
        rendered = []
        for style in styles:
            if style.type == 'link':
                rendered.append(f'<style>{self._reader(self.base_path, style.style)}</style>')
            elif style.type == 'inline':
                rendered.append(f'<style>{style.style}</style>')
            elif style.type == 'shared':
                rendered.append(f'<style include="{style.style}"></style>')
        return rendered

    # =========================================================================
    # OUTPUT
    # =========================================================================

    def to_string(self, polymer_version: int = 1) -> str:
        """
        Render the full <dom-module> document.

        Raises:
            NotImplementedFeatureError: polymer_version is not supported
            FileNotFoundError: A linked template or style file is missing
        """
        if polymer_version not in SUPPORTED_POLYMER_VERSIONS:
            raise NotImplementedFeatureError(
                f'Polymer {polymer_version} output',
                'Only Polymer 1 declarations can be generated.',
            )

        build = self.build_polymer_v1()
        extras = build.extras_map
        tag_name = extras.get('component') or self.tag_name

        template_chunks = self._render_styles(extras.get('styles', []))
        template_chunks.append(self._render_template(extras.get('template')))
        template = '\n'.join(chunk for chunk in template_chunks if chunk)

        script = self._formatter('\n'.join(chunk for chunk in [
            '(function () {',
            self.source.prelude,
            build.module_src,
            self.source.epilogue,
            '}());',
        ] if chunk), 'js')

        document = [
            *[f'<link rel="import" href="{link}">' for link in self.source.links],
            *[f'<script src="{script_src}"></script>' for script_src in self.source.scripts],
            f'<dom-module id="{tag_name}">' + '\n'.join(chunk for chunk in [
                non_empty('<template>{}</template>', template),
                f'<script>{script}</script>',
            ] if chunk) + '</dom-module>',
        ]
        return self._formatter('\n'.join(document), 'html')

    def to_bytes(self, polymer_version: int = 1) -> bytes:
        return self.to_string(polymer_version).encode('utf-8')
