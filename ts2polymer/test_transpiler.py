#!/usr/bin/env python3
"""
Unit tests for the TypeScript to Polymer transpiler.

Run with: python3 -m pytest ts2polymer/test_transpiler.py
   or: python3 -m unittest ts2polymer.test_transpiler
"""

import sys
import os
# Add parent directory to path so the package imports without installation
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import json
import tempfile
import unittest
from collections import OrderedDict

from ts2polymer import TypeScriptToPolymerTranspiler, TranspilerOptions
from ts2polymer.errors import (
    ClassNotFoundError,
    InvalidAnnotationError,
    NotImplementedFeatureError,
    UnclosedBracketError,
    UnknownAnnotationError,
)
from ts2polymer.parser import SourceModelBuilder, SourceModule, strip_param_types
from ts2polymer.type_system import resolve_polymer_type, is_primitive_literal, unquote
from ts2polymer.annotations import AnnotationRegistry, default_registry
from ts2polymer.codegen import (
    AssemblyResult,
    BuildState,
    ConfigAssembler,
    PolymerEmitter,
    PolymerModule,
    PropertyDescriptor,
    build_properties_map,
    build_property,
    kebab_case,
    non_empty,
    read_file,
    specialize_constructor,
)
from ts2polymer.config import load_options, options_from_tsconfig


def transpile(source, es6=False, registry=None):
    """Run the builder, assembler and emitter over module source."""
    module = SourceModelBuilder(es6=es6).parse_module(source)
    result = ConfigAssembler(registry).assemble(module)
    return PolymerEmitter(es6=es6).emit(module, result)


class TestSourceModelBuilder(unittest.TestCase):
    """Test parsing of class bodies into field configs."""

    def test_properties_and_methods(self):
        body = 'a: string = "x";\n@notify b = [1, 2];\nfoo(x: number): void { return; }\n'
        properties, methods = SourceModelBuilder().parse_class_body(body)

        self.assertEqual(list(properties), ['a', 'b'])
        self.assertEqual(properties['a'].type, 'String')
        self.assertEqual(properties['a'].value, '"x"')
        self.assertTrue(properties['a'].is_primitive)

        self.assertEqual(properties['b'].type, 'Array')
        self.assertFalse(properties['b'].is_primitive)
        self.assertEqual([a.name for a in properties['b'].annotations], ['notify'])

        foo = methods['foo']
        self.assertTrue(foo.is_method)
        self.assertEqual(foo.params, 'x: number')
        self.assertEqual(foo.type_text, 'void')
        self.assertEqual(foo.body, '{ return; }')
        self.assertEqual(foo.body_span.slice(body), '{ return; }')

    def test_modifiers(self):
        body = (
            'public static readonly MAX = 3;\n'
            'private async load() {}\n'
            'get label(): string { return "}"; }\n'
        )
        properties, methods = SourceModelBuilder().parse_class_body(body)

        self.assertTrue(properties['MAX'].static)
        self.assertTrue(properties['MAX'].readonly)
        self.assertFalse(properties['MAX'].private)

        self.assertTrue(methods['load'].private)
        self.assertTrue(methods['load'].is_async)

        self.assertEqual(methods['get label'].accessor, 'get')
        self.assertEqual(methods['get label'].body, '{ return "}"; }')

    def test_overload_signature_is_skipped(self):
        body = 'foo(a: string): void;\nfoo(a: any) {}\n'
        _, methods = SourceModelBuilder().parse_class_body(body)
        self.assertEqual(list(methods), ['foo'])
        self.assertEqual(methods['foo'].params, 'a: any')

    def test_generic_method(self):
        body = 'map<T>(fn: (x: T) => T): T[] { return []; }'
        _, methods = SourceModelBuilder().parse_class_body(body)
        self.assertEqual(methods['map'].params, 'fn: (x: T) => T')
        self.assertEqual(methods['map'].type_text, 'T[]')

    def test_annotation_params_split_on_top_level_commas(self):
        body = '@observe("a, b", fn(c, d))\nm() {}\n'
        _, methods = SourceModelBuilder().parse_class_body(body)
        invocation = methods['m'].annotations[0]
        self.assertEqual(invocation.name, 'observe')
        self.assertEqual(invocation.params, ['"a, b"', 'fn(c, d)'])

    def test_dangling_annotation(self):
        with self.assertRaises(SyntaxError):
            SourceModelBuilder().parse_class_body('foo: string;\n@notify\n')

    def test_regex_literal_in_method_body(self):
        body = '\n  esc(s: string): string {\n    return s.replace(/"/g, \'&quot;\');\n  }\n'
        _, methods = SourceModelBuilder().parse_class_body(body)
        self.assertEqual(methods['esc'].body, '{\n    return s.replace(/"/g, \'&quot;\');\n  }')

    def test_regex_literal_value(self):
        properties, _ = SourceModelBuilder().parse_class_body('pattern = /ab+c/g\nnext = 1\n')
        self.assertEqual(properties['pattern'].value, '/ab+c/g')
        self.assertEqual(properties['next'].value, '1')

    def test_members_without_semicolons(self):
        body = 'a: number = 1\n  b: string = "x"\n  go() { return 1 }'
        properties, methods = SourceModelBuilder().parse_class_body(body)
        self.assertEqual(list(properties), ['a', 'b'])
        self.assertEqual(properties['a'].value, '1')
        self.assertEqual(properties['b'].value, '"x"')
        self.assertEqual(list(methods), ['go'])

    def test_initializer_continues_on_next_line(self):
        properties, _ = SourceModelBuilder().parse_class_body('total = base +\n  extra\nnext = 2\n')
        self.assertEqual(properties['total'].value, 'base +\n  extra')
        self.assertEqual(properties['next'].value, '2')

        properties, _ = SourceModelBuilder().parse_class_body('items = list\n  .filter(x => x)\nflag = true\n')
        self.assertEqual(properties['items'].value, 'list\n  .filter(x => x)')
        self.assertEqual(properties['flag'].value, 'true')

    def test_trailing_comments_ignored(self):
        body = 'label: string // shown to the user\ncount = 1 // items\nnext: number;\n'
        properties, _ = SourceModelBuilder().parse_class_body(body)
        self.assertEqual(properties['label'].type_text, 'string')
        self.assertEqual(properties['label'].type, 'String')
        self.assertEqual(properties['count'].value, '1')
        self.assertTrue(properties['count'].is_primitive)
        self.assertIn('next', properties)


class TestModuleParsing(unittest.TestCase):
    """Test parsing of whole modules."""

    SOURCE = '''
import "link!../polymer/polymer.html";
import "script!../vendor/lib.js";
import { attr } from "./annotations";
export interface IPoint {
    x: number;
}
export type Mode = "a" | "b";
const helper = 1;
@component("x-point")
export class Point extends Polymer.Element {
    x: number = 0;
}
Point.register();
'''

    def test_module_parts(self):
        module = SourceModelBuilder().parse_module(self.SOURCE)

        self.assertEqual(module.class_name, 'Point')
        self.assertEqual(module.base_class, 'Polymer.Element')
        self.assertEqual([a.name for a in module.annotations], ['component'])
        self.assertEqual(module.links, ['../polymer/polymer.html'])
        self.assertEqual(module.scripts, ['../vendor/lib.js'])
        self.assertEqual(module.prelude, 'const helper = 1;')
        self.assertEqual(module.epilogue, 'Point.register();')
        self.assertEqual(list(module.properties), ['x'])

    def test_es6_flag_recorded(self):
        module = SourceModelBuilder(es6=True).parse_module(self.SOURCE)
        self.assertTrue(module.es6)

    def test_module_without_class(self):
        with self.assertRaises(ClassNotFoundError):
            SourceModelBuilder().parse_module('const a = 1;\n')

    def test_unclosed_bracket_reports_module_line(self):
        source = 'class A {\n  a = 1;\n  b = foo(;\n}\n'
        with self.assertRaises(UnclosedBracketError) as cm:
            SourceModelBuilder().parse_module(source)
        self.assertEqual(cm.exception.line, 3)


class TestTypeResolution(unittest.TestCase):
    """Test TypeScript type -> Polymer type resolution."""

    def test_declared_types(self):
        self.assertEqual(resolve_polymer_type('string'), 'String')
        self.assertEqual(resolve_polymer_type('boolean'), 'Boolean')
        self.assertEqual(resolve_polymer_type('Date'), 'Date')
        self.assertEqual(resolve_polymer_type('ICmd[][]'), 'Array')
        self.assertEqual(resolve_polymer_type('Array<{test: boolean}>'), 'Array')
        self.assertEqual(resolve_polymer_type('{a: string}'), 'Object')
        self.assertEqual(resolve_polymer_type('() => void'), 'Object')

    def test_unions(self):
        self.assertEqual(resolve_polymer_type('string|null'), 'String')
        self.assertEqual(resolve_polymer_type('string | undefined'), 'String')
        self.assertEqual(resolve_polymer_type('"yep"|"nope"'), 'String')
        self.assertEqual(resolve_polymer_type('number|string'), 'Object')
        self.assertEqual(resolve_polymer_type('null'), 'Object')

    def test_unknown_names_kept_for_coercion(self):
        self.assertEqual(resolve_polymer_type('HTMLElement'), 'HTMLElement')
        self.assertEqual(resolve_polymer_type('Polymer.Base'), 'Polymer.Base')

    def test_initializer_types(self):
        self.assertEqual(resolve_polymer_type(None, '"x"'), 'String')
        self.assertEqual(resolve_polymer_type(None, '[1]'), 'Array')
        self.assertEqual(resolve_polymer_type('', 'new Date()'), 'Date')
        self.assertEqual(resolve_polymer_type(None, 'foo()'), 'Object')
        self.assertEqual(resolve_polymer_type(None, None), 'Object')

    def test_primitive_literals(self):
        for text in ('"a"', "'a'", '42', '-1.5', 'true', 'null', '`x`'):
            self.assertTrue(is_primitive_literal(text), text)
        for text in ('`${a}`', '[]', '{}', 'new Date()', 'foo()', None):
            self.assertFalse(is_primitive_literal(text), text)

    def test_unquote(self):
        self.assertEqual(unquote('"a\\nb"'), 'a\nb')
        self.assertEqual(unquote("'it\\'s'"), "it's")
        self.assertEqual(unquote('plain'), 'plain')

    def test_strip_param_types(self):
        self.assertEqual(
            strip_param_types('public a: string, b = 2, ...rest: any[]'),
            'a, b = 2, ...rest'
        )
        self.assertEqual(strip_param_types('cb: (x: string) => void'), 'cb')
        self.assertEqual(strip_param_types('this: Foo, x?: number'), 'x')
        self.assertEqual(strip_param_types(''), '')


class TestPropertiesMap(unittest.TestCase):
    """Test property descriptor assembly."""

    def _build(self, body, es6=False):
        properties, methods = SourceModelBuilder().parse_class_body(body)
        return build_properties_map(properties, methods, default_registry(), BuildState(), es6)

    def test_static_and_private_excluded(self):
        properties_map = self._build(
            'static COUNT: number = 1;\nprivate secret: string = "x";\nname: string = "a";\n'
        )
        self.assertEqual(list(properties_map), ['name'])
        self.assertEqual(properties_map['name'].value, '"a"')

    def test_non_primitive_value_is_deferred(self):
        properties_map = self._build('items: string[] = [];\ncount = 0;\n')
        self.assertEqual(properties_map['items'].value, 'function() { return []; }')
        self.assertEqual(properties_map['count'].value, '0')

    def test_es6_value_factory(self):
        properties_map = self._build('items: string[] = [];\n', es6=True)
        self.assertEqual(properties_map['items'].value, '() => []')

    def test_readonly(self):
        properties_map = self._build('readonly id: number = 5;\n')
        self.assertTrue(properties_map['id'].read_only)


class TestEmitter(unittest.TestCase):
    """Test Polymer v1 declaration rendering."""

    def test_behaviors_without_observers(self):
        result = AssemblyResult(OrderedDict(), OrderedDict(), BuildState(behaviors=['"Foo"']))
        output = PolymerEmitter().emit(SourceModule(class_name='MyElement'), result)
        self.assertEqual(output, 'var MyElement = Polymer({\nis:"my-element",behaviors:["Foo"]\n});')

    def test_es6_declaration_keyword(self):
        result = AssemblyResult(OrderedDict(), OrderedDict())
        output = PolymerEmitter(es6=True).emit(SourceModule(class_name='MyElement'), result)
        self.assertTrue(output.startswith('const MyElement = Polymer({'))

    def test_build_property(self):
        self.assertEqual(build_property('x', PropertyDescriptor(type='Foo')), 'x:{type:Object}')
        prop = PropertyDescriptor(type='String', value='"a"', read_only=True)
        prop.set_option('notify', True)
        self.assertEqual(build_property('x', prop), 'x:{type:String,value:"a",readOnly:true,notify:true}')

    def test_kebab_case(self):
        self.assertEqual(kebab_case('InputMath'), 'input-math')
        self.assertEqual(kebab_case('HTMLViewer'), 'html-viewer')
        self.assertEqual(kebab_case('MyElement2'), 'my-element2')

    def test_non_empty(self):
        self.assertEqual(non_empty('[{}]', ''), '')
        self.assertEqual(non_empty('[{}]', 'x'), '[x]')

    def test_specialize_constructor(self):
        self.assertEqual(
            specialize_constructor('{\n    super();\n    this.x = 1;\n}'),
            '{\n    this.x = 1;\n}'
        )
        self.assertEqual(
            specialize_constructor('{ var _this = _super.call(this) || this; return _this; }'),
            '{ var _this = this; return _this; }'
        )

    def test_specialize_constructor_only_bare_super(self):
        self.assertEqual(
            specialize_constructor('{ obj.super(x); _super(y); super(); }'),
            '{ obj.super(x); _super(y);  }'
        )


class TestPolymerDeclaration(unittest.TestCase):
    """Test the declaration produced from TypeScript source."""

    def test_property_exclusion_and_static_assignment(self):
        output = transpile('''
class MyElement {
    static COUNT: number = 1;
    private secret: string = "x";
    name: string = "a";
}
''')
        self.assertIn('properties:{name:{type:String,value:"a"}}', output)
        self.assertNotIn('secret', output)
        self.assertNotIn('COUNT:', output)
        self.assertTrue(output.endswith('MyElement.COUNT = 1;'))

    def test_unknown_type_coerced_to_object(self):
        output = transpile('class MyElement {\n    editor: HTMLElement;\n}\n')
        self.assertIn('editor:{type:Object}', output)

    def test_lifecycle_callbacks(self):
        output = transpile('''
class MyElement extends Polymer.Element {
    constructor() {
        super();
        this.x = 1;
    }
    connectedCallback() {
        super.connectedCallback();
    }
    disconnectedCallback() {}
}
''')
        self.assertIn('created:function() {\n        this.x = 1;\n    }', output)
        self.assertIn('attached:function() {', output)
        self.assertIn('detached:function() {}', output)
        self.assertNotIn('super();', output)
        self.assertNotIn('constructor', output)

    def test_static_async_and_accessor_methods(self):
        output = transpile('''
class MyElement {
    static create(a: string): MyElement { return null; }
    async load(url: string) { await fetch(url); }
    get label(): string { return "x"; }
}
''')
        self.assertIn('MyElement.create = function(a) { return null; };', output)
        self.assertNotIn('create:function', output)
        self.assertIn('load:async function(url) { await fetch(url); }', output)
        self.assertIn('get label() { return "x"; }', output)

    def test_static_accessors_define_property(self):
        output = transpile('''
class MyElement {
    static get count(): number { return 1; }
    static set count(v: number) {}
}
''')
        self.assertIn(
            'Object.defineProperty(MyElement, "count", '
            '{ get: function() { return 1; }, set: function(v) {}, configurable: true });',
            output
        )
        self.assertNotIn('MyElement.count =', output)

    def test_regex_literal_with_quote_in_method(self):
        output = TypeScriptToPolymerTranspiler().transpile_declaration(
            'class XFoo {\n  esc(s: string): string {\n    return s.replace(/"/g, \'&quot;\');\n  }\n}'
        )
        self.assertIn('esc:function(s) {\n    return s.replace(/"/g, \'&quot;\');\n  }', output)

    def test_behavior_only(self):
        output = transpile('@behavior("Foo")\nclass MyElement {}\n')
        self.assertIn('behaviors:["Foo"]', output)
        self.assertNotIn('observers:', output)
        self.assertNotIn('properties:', output)

    def test_attr_notify_computed(self):
        output = transpile('''
class MyElement {
    @attr @notify name: string;
    @computed("sum(a, b)") total: number;
}
''')
        self.assertIn('name:{type:String,reflectToAttribute:true,notify:true}', output)
        self.assertIn('total:{type:Number,computed:"sum(a, b)"}', output)

    def test_observers(self):
        output = transpile('''
class MyElement {
    value: string = "";
    other: number = 0;
    @observe("value")
    valueChanged(value: string) {}
    @observe("value", "other")
    bothChanged(value: string, other: number) {}
}
''')
        self.assertIn('value:{type:String,value:"",observer:"valueChanged"}', output)
        self.assertIn('other:{type:Number,value:0}', output)
        self.assertIn('observers:["bothChanged(value, other)"]', output)
        self.assertIn('valueChanged:function(value) {}', output)

    def test_listeners(self):
        output = transpile('''
class MyElement {
    @listen("keydown")
    onKey(ev: KeyboardEvent): void {}
}
''')
        self.assertIn('listeners:{"keydown":"onKey"}', output)

    def test_component_overrides_tag(self):
        output = transpile('@component("x-custom")\nclass MyElement {}\n')
        self.assertIn('is:"x-custom"', output)

    def test_declaration_order_preserved(self):
        output = transpile('''
class MyElement {
    b: string;
    a: string;
    second() {}
    first() {}
}
''')
        self.assertLess(output.index('b:{'), output.index('a:{'))
        self.assertLess(output.index('second:'), output.index('first:'))

    def test_annotation_on_wrong_member(self):
        with self.assertRaises(InvalidAnnotationError):
            transpile('@attr\nclass MyElement {}\n')
        with self.assertRaises(InvalidAnnotationError):
            transpile('class MyElement {\n    @observe("x") foo: string;\n}\n')
        with self.assertRaises(InvalidAnnotationError):
            transpile('class MyElement {\n    @template("<p></p>") foo: string;\n}\n')

    def test_unknown_annotation(self):
        with self.assertRaises(UnknownAnnotationError):
            transpile('class A {\n    @frobnicate foo: string;\n}\n')


class TestAnnotationRegistry(unittest.TestCase):
    """Test handler registration and invocation order."""

    def test_invocation_order(self):
        registry = default_registry()
        calls = []

        @registry.handler('mark')
        def mark(ctx):
            calls.append(unquote(ctx.params[0]))

        transpile('''
@mark("5")
class A {
    @mark("1") @mark("2") p1: string;
    @mark("3") p2: string;
    @mark("4") m() {}
}
''', registry=registry)
        self.assertEqual(calls, ['1', '2', '3', '4', '5'])

    def test_class_scope_result_recorded(self):
        registry = default_registry()
        registry.handler('tag')(lambda ctx: 'x')
        module = SourceModelBuilder().parse_module('@tag\nclass A {}\n')
        result = ConfigAssembler(registry).assemble(module)
        self.assertEqual(result.state.extras['tag'], 'x')

    def test_handler_error_propagates(self):
        registry = default_registry()

        @registry.handler('boom')
        def boom(ctx):
            raise RuntimeError('boom')

        with self.assertRaises(RuntimeError):
            transpile('class A {\n    @boom foo: string;\n}\n', registry=registry)

    def test_registry_lookup(self):
        registry = default_registry()
        for name in ('attr', 'notify', 'computed', 'observe', 'listen',
                     'template', 'style', 'behavior', 'component'):
            self.assertIn(name, registry)
        with self.assertRaises(UnknownAnnotationError):
            AnnotationRegistry().get('notify')

    def test_unnamed_handler_rejected(self):
        from ts2polymer.annotations import AnnotationHandler
        with self.assertRaises(ValueError):
            AnnotationRegistry().register(AnnotationHandler())

    def test_passes_do_not_share_state(self):
        module = SourceModelBuilder().parse_module(
            'class A {\n    a: string;\n    @observe("a", "b") m() {}\n}\n'
        )
        assembler = ConfigAssembler()
        first = assembler.assemble(module)
        second = assembler.assemble(module)
        self.assertIsNot(first.state, second.state)
        self.assertEqual(second.state.observers, ['"m(a, b)"'])


class TestPolymerModule(unittest.TestCase):
    """Test <dom-module> document rendering."""

    def _module(self, source, **kwargs):
        return PolymerModule(SourceModelBuilder().parse_module(source), **kwargs)

    def test_template_and_styles(self):
        reads = []

        def reader(base, rel):
            reads.append((base, rel))
            return f'[{rel}]'

        module = self._module(
            '@template("my-el.html")\n'
            '@style("my-el.css", "shared-styles", ":host { display: block; }")\n'
            'class MyEl {}\n',
            base_path='src',
            reader=reader,
        )
        self.assertEqual(
            module.to_string(),
            '<dom-module id="my-el"><template><style>[my-el.css]</style>\n'
            '<style include="shared-styles"></style>\n'
            '<style>:host { display: block; }</style>\n'
            '[my-el.html]</template>\n'
            '<script>(function () {\n'
            'var MyEl = Polymer({\n'
            'is:"my-el"\n'
            '});\n'
            '}());</script></dom-module>'
        )
        self.assertIn(('src', 'my-el.html'), reads)
        self.assertIn(('src', 'my-el.css'), reads)

    def test_links_scripts_and_prelude(self):
        output = self._module(TestModuleParsing.SOURCE).to_string()
        self.assertTrue(output.startswith(
            '<link rel="import" href="../polymer/polymer.html">\n'
            '<script src="../vendor/lib.js"></script>\n'
            '<dom-module id="x-point">'
        ))
        self.assertIn('(function () {\nconst helper = 1;\nvar Point = Polymer({', output)
        self.assertIn('Point.register();\n}());</script>', output)
        self.assertNotIn('IPoint', output)
        self.assertNotIn('<template>', output)

    def test_idempotent(self):
        module = self._module('class A {\n    @observe("x", "y") m() {}\n}\n')
        self.assertEqual(module.to_string(), module.to_string())

    def test_formatter_called_for_js_and_html(self):
        formats = []

        def formatter(text, format):
            formats.append(format)
            return text

        self._module('class A {}\n', formatter=formatter).to_string()
        self.assertEqual(formats, ['js', 'html'])

    def test_polymer_2_not_implemented(self):
        module = self._module('class A {}\n')
        with self.assertRaises(NotImplementedFeatureError):
            module.to_string(2)
        with self.assertRaises(NotImplementedError):
            module.to_string(2)

    def test_to_bytes(self):
        self.assertIsInstance(self._module('class A {}\n').to_bytes(), bytes)

    def test_read_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with open(os.path.join(tmpdir, 'a.html'), 'w') as f:
                f.write('<p>hi</p>')
            self.assertEqual(read_file(tmpdir, 'a.html'), '<p>hi</p>')
            with self.assertRaises(FileNotFoundError):
                read_file(tmpdir, 'missing.html')

    def test_missing_linked_template(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            module = self._module('@template("missing.html")\nclass A {}\n', base_path=tmpdir)
            with self.assertRaises(FileNotFoundError):
                module.to_string()


class TestConfig(unittest.TestCase):
    """Test option loading."""

    def test_from_dict(self):
        options = TranspilerOptions.from_dict({'es6': True, 'polymerVersion': 2, 'basePath': 'src'})
        self.assertTrue(options.es6)
        self.assertEqual(options.polymer_version, 2)
        self.assertEqual(options.base_path, 'src')

    def test_missing_config_uses_defaults(self):
        options = load_options('/nonexistent/ts2polymer.json')
        self.assertEqual(options, TranspilerOptions())

    def test_malformed_config_logs_warning(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, 'ts2polymer.json')
            with open(path, 'w') as f:
                f.write('{not json')
            with self.assertLogs('ts2polymer.config', level='WARNING'):
                options = load_options(path)
        self.assertEqual(options, TranspilerOptions())

    def test_tsconfig_target(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, 'tsconfig.json')
            with open(path, 'w') as f:
                json.dump({'compilerOptions': {'target': 'ES2015'}}, f)
            options = options_from_tsconfig(path)
            self.assertTrue(options.es6)
            self.assertEqual(options.base_path, tmpdir)

            with open(path, 'w') as f:
                json.dump({'compilerOptions': {'target': 'es5'}}, f)
            self.assertFalse(options_from_tsconfig(path).es6)


class TestTranspiler(unittest.TestCase):
    """Test the end-to-end transpiler."""

    INPUT_MATH = r'''
import "./types";
import { template, attr, notify, observe, listen } from "../../annotations/polymer";
import "script!bower_components/mathquill/mathquill.js";

export interface ICmd {
  cmd: string;
  name: string;
}

@template("<input>")
export class InputMath extends Polymer.Element {
  static HISTORY_SIZE: number = 20;
  static SYMBOLS_BASIC: ICmd[] = [
    { cmd: "\\sqrt", name: "√" },
    { cmd: "^", name: "n" }
  ];

  testValue: "yep"|"nope";
  @attr value: string|null = "";
  @notify symbols: ICmd[][] = [
    InputMath.SYMBOLS_BASIC
  ];
  private _history: string[];
  private _editor: HTMLElement = document.createElement("div");

  constructor() {
    super();
    this._editor.id = "editor";
  }

  @observe("value")
  valueChanged(value: string, prevValue: string): Array<{test: boolean}> {
    if (value === "}") {
      return;
    }
  }

  @listen("keydown")
  keyShortcuts(ev: KeyboardEvent): void {
    // don't undo twice
    this.undo();
  }

  static create(): InputMath {
    return document.createElement("input-math") as InputMath;
  }
}
'''

    def test_input_math_component(self):
        output = TypeScriptToPolymerTranspiler().transpile_source(self.INPUT_MATH)

        self.assertTrue(output.startswith(
            '<script src="bower_components/mathquill/mathquill.js"></script>\n'
            '<dom-module id="input-math"><template><input></template>'
        ))
        self.assertIn(
            'properties:{testValue:{type:String},'
            'value:{type:String,value:"",reflectToAttribute:true,observer:"valueChanged"},'
            'symbols:{type:Array,value:function() { return [',
            output
        )
        self.assertIn('notify:true}}', output)
        self.assertIn('listeners:{"keydown":"keyShortcuts"}', output)
        self.assertIn('created:function() {\n    this._editor.id = "editor";\n  }', output)
        self.assertIn('valueChanged:function(value, prevValue) {', output)
        self.assertIn('InputMath.HISTORY_SIZE = 20;', output)
        self.assertIn('InputMath.create = function() {', output)
        self.assertNotIn('_editor:{', output)
        self.assertNotIn('_history', output)
        self.assertNotIn('super();', output)
        self.assertNotIn('ICmd', output)
        self.assertLess(output.index('created:'), output.index('valueChanged:'))
        self.assertLess(output.index('valueChanged:'), output.index('keyShortcuts:'))

    def test_transpile_declaration_es6(self):
        transpiler = TypeScriptToPolymerTranspiler(TranspilerOptions(es6=True))
        self.assertEqual(
            transpiler.transpile_declaration('class A { items = [1]; }'),
            'const A = Polymer({\nis:"a",properties:{items:{type:Array,value:() => [1]}}\n});'
        )

    def test_polymer_version_option(self):
        transpiler = TypeScriptToPolymerTranspiler(TranspilerOptions(polymer_version=2))
        with self.assertRaises(NotImplementedFeatureError):
            transpiler.transpile_source('class A {}\n')

    def test_transpile_file_resolves_links_next_to_source(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with open(os.path.join(tmpdir, 'my-el.html'), 'w') as f:
                f.write('<p>hi</p>')
            path = os.path.join(tmpdir, 'my-el.ts')
            with open(path, 'w') as f:
                f.write('@template("my-el.html")\nclass MyEl {}\n')

            transpiler = TypeScriptToPolymerTranspiler()
            output = transpiler.transpile_file(path)
            self.assertIn('<template><p>hi</p></template>', output)

            out_path = os.path.join(tmpdir, 'build', 'my-el.html')
            transpiler.write_output(out_path, output)
            with open(out_path) as f:
                self.assertEqual(f.read(), output)


if __name__ == '__main__':
    unittest.main(verbosity=2)
