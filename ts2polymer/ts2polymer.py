#!/usr/bin/env python3
"""
TypeScript to Polymer Transpiler

This transpiler converts a TypeScript component class into a Polymer v1
element module (a <dom-module> with its template and registration script).

Key features:
- Bracket- and string-aware scanning instead of a full TypeScript grammar
- Decorator-style annotations dispatched to pluggable handlers
- Declaration order preserved from source to output
- Lifecycle callbacks renamed to their Polymer v1 equivalents

Usage:
    python -m ts2polymer.ts2polymer src/input-math.ts -o build/

The pipeline is split into packages:
- scanner: bracket- and string-aware crawlers
- parser: source model and its builder
- annotations: annotation registry and built-in Polymer annotations
- codegen: config assembly, declaration emitter and module output
"""

import logging
from pathlib import Path
from typing import Optional

from .config import TranspilerOptions, load_options, options_from_tsconfig
from .parser import SourceModelBuilder, SourceModule
from .codegen import PolymerModule
from .annotations import AnnotationRegistry, default_registry

logger = logging.getLogger(__name__)


class TypeScriptToPolymerTranspiler:
    """Main transpiler class that orchestrates the conversion process."""

    def __init__(
        self,
        options: Optional[TranspilerOptions] = None,
        registry: Optional[AnnotationRegistry] = None,
        formatter=None,
    ):
        self.options = options or TranspilerOptions()
        self.registry = registry or default_registry()
        self.formatter = formatter

    def parse(self, source: str) -> SourceModule:
        """Build the source model of a module."""
        return SourceModelBuilder(es6=self.options.es6).parse_module(source)

    def _module(self, source: str, base_path: str) -> PolymerModule:
        kwargs = {}
        if self.formatter is not None:
            kwargs['formatter'] = self.formatter
        return PolymerModule(self.parse(source), base_path, self.registry, **kwargs)

    def transpile_source(self, source: str, base_path: Optional[str] = None) -> str:
        """Transpile module source to a Polymer element document."""
        module = self._module(source, base_path or self.options.base_path)
        return module.to_string(self.options.polymer_version)

    def transpile_declaration(self, source: str) -> str:
        """Transpile module source to the bare Polymer({...}) declaration."""
        return self._module(source, self.options.base_path).build_polymer_v1().module_src

    def transpile_file(self, filepath: str) -> str:
        """Transpile a single TypeScript file; linked files resolve next to it."""
        with open(filepath, 'r', encoding='utf-8') as f:
            source = f.read()
        logger.info('Transpiling %s', filepath)
        return self.transpile_source(source, str(Path(filepath).parent))

    def write_output(self, filepath: str, content: str) -> None:
        """Write a transpiled document to disk."""
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        logger.info('Written: %s', filepath)


# =============================================================================
# CLI INTERFACE
# =============================================================================

def main():
    import argparse

    parser = argparse.ArgumentParser(description='TypeScript to Polymer Transpiler')
    parser.add_argument('input', help='Input TypeScript file')
    parser.add_argument('-o', '--output', default='.', help='Output directory')
    parser.add_argument('--stdout', action='store_true', help='Print to stdout instead of file')
    parser.add_argument('-c', '--config', metavar='FILE', help='JSON options file')
    parser.add_argument('--tsconfig', metavar='FILE', help='tsconfig.json to read the target from')
    parser.add_argument('--es6', action='store_true', default=None, help='Emit ES6 output')
    parser.add_argument('--polymer-version', type=int, default=None, help='Polymer version to target')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose logging')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    options = load_options(args.config) if args.config else TranspilerOptions()
    if args.tsconfig:
        options = options_from_tsconfig(args.tsconfig, options)
    if args.es6 is not None:
        options.es6 = args.es6
    if args.polymer_version is not None:
        options.polymer_version = args.polymer_version

    input_path = Path(args.input)
    if not input_path.is_file():
        logger.error('%s is not a valid file', args.input)
        raise SystemExit(1)

    transpiler = TypeScriptToPolymerTranspiler(options)
    output = transpiler.transpile_file(str(input_path))

    if args.stdout:
        print(output)
    else:
        transpiler.write_output(str(Path(args.output) / input_path.with_suffix('.html').name), output)


if __name__ == '__main__':
    main()
