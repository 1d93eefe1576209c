import os

from routelens.ingestion.loader import (
    collect_specifiers,
    find_binding_module,
    import_bindings,
    load_source_graph,
    parse_file,
    resolve_module,
)


def test_source_graph_is_depth_first_and_deduplicated(write_project, ctx):
    root = write_project({
        'app.js': """
            const a = require('./a');
            const b = require('./b');
            const express = require('express');
        """,
        'a.js': "const shared = require('./shared');\n",
        'b.js': "const shared = require('./shared');\n",
        'shared.js': "module.exports = {};\n",
    })

    files = load_source_graph(str(root / 'app.js'), ctx)

    names = [os.path.basename(f.path) for f in files]
    assert names == ['app.js', 'a.js', 'shared.js', 'b.js']


def test_unparsable_file_is_dropped(write_project, ctx, caplog):
    root = write_project({
        'app.js': "require('./broken');\nrequire('./ok');\n",
        'broken.js': "this is not javascript {{{\n",
        'ok.js': "module.exports = 1;\n",
    })

    files = load_source_graph(str(root / 'app.js'), ctx)

    names = [os.path.basename(f.path) for f in files]
    assert names == ['app.js', 'ok.js']
    assert 'broken.js' in caplog.text


def test_node_modules_are_never_followed(write_project, ctx):
    root = write_project({
        'app.js': "require('./node_modules/lib/index');\n",
        'node_modules/lib/index.js': "module.exports = 1;\n",
    })

    files = load_source_graph(str(root / 'app.js'), ctx)

    assert [os.path.basename(f.path) for f in files] == ['app.js']


def test_resolve_module_tries_extensions_and_index(write_project, ctx):
    root = write_project({
        'app.ts': "",
        'routes/index.ts': "",
        'service.ts': "",
    })
    from_file = str(root / 'app.ts')

    assert resolve_module('./routes', from_file, ctx) == str(root / 'routes' / 'index.ts')
    # ESM-style TypeScript import of the compiled name
    assert resolve_module('./service.js', from_file, ctx) == str(root / 'service.ts')
    assert resolve_module('express', from_file, ctx) is None
    assert resolve_module('./missing', from_file, ctx) is None


def test_shebang_is_stripped(write_project, ctx):
    root = write_project({'cli.js': "#!/usr/bin/env node\nconst x = 1;\n"})

    parsed = parse_file(str(root / 'cli.js'), ctx)

    assert parsed is not None
    assert parsed.language == 'js'


def test_parse_file_is_memoized(write_project, ctx):
    root = write_project({'a.js': "const x = 1;\n"})

    first = parse_file(str(root / 'a.js'), ctx)
    second = parse_file(str(root / 'a.js'), ctx)

    assert first is second


def test_newer_javascript_falls_back_to_tree_sitter(write_project, ctx):
    root = write_project({'a.js': "const v = obj?.deep?.value ?? 1;\n"})

    parsed = parse_file(str(root / 'a.js'), ctx)

    assert parsed is not None
    assert parsed.ast.type == 'Program'


def test_collect_specifiers_covers_import_forms(write_project, ctx):
    root = write_project({
        'a.js': """
            import x from './x';
            export { y } from './y';
            const z = require('./z');
            async function load() { return import('./lazy'); }
        """,
    })
    parsed = parse_file(str(root / 'a.js'), ctx)

    assert collect_specifiers(parsed) == ['./x', './y', './z', './lazy']


def test_import_bindings(write_project, ctx):
    root = write_project({
        'a.js': """
            import def, { named as alias } from './m1';
            import * as ns from './m2';
            const whole = require('./m3');
            const { picked } = require('./m4');
            const member = require('./m5').thing;
        """,
    })
    parsed = parse_file(str(root / 'a.js'), ctx)

    bindings = import_bindings(parsed)

    assert bindings['def'] == ('./m1', 'default')
    assert bindings['alias'] == ('./m1', 'named')
    assert bindings['ns'] == ('./m2', '*')
    assert bindings['whole'] == ('./m3', '*')
    assert bindings['picked'] == ('./m4', 'picked')
    assert bindings['member'] == ('./m5', 'thing')


def test_find_binding_module(write_project, ctx):
    root = write_project({
        'a.js': "const { handler } = require('./lib');\n",
        'lib.js': "exports.handler = function () {};\n",
    })
    parsed = parse_file(str(root / 'a.js'), ctx)

    target, imported = find_binding_module('handler', parsed, ctx)

    assert target.path == str(root / 'lib.js')
    assert imported == 'handler'
    assert find_binding_module('nothing', parsed, ctx) is None
